from loguru import logger

from daily_summary.domain.order import Order
from daily_summary.domain.report import AggregationResult

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_FOOD = "Unknown Item"
MULTIPLE_COMPANIES = "Multiple Companies"
NO_COMPANY = "N/A"


def resolve_company_label(orders: list[Order]) -> str:
    """Pick the company name shown in the summary header.

    The first order's company wins only when every order shares it. When the
    first order has no company, more than one distinct name still yields
    ``MULTIPLE_COMPANIES``; otherwise no representative is assumed.
    """
    if not orders:
        return NO_COMPANY

    first = orders[0].company_name
    if first:
        if all(order.company_name == first for order in orders):
            return first
        return MULTIPLE_COMPANIES

    distinct = {order.company_name for order in orders if order.company_name}
    if len(distinct) > 1:
        return MULTIPLE_COMPANIES
    return NO_COMPANY


def aggregate_orders(orders: list[Order]) -> AggregationResult:
    """Sum order-line quantities by ``(company, food)``, keeping first-seen order."""
    companies: dict[str, dict[str, int]] = {}
    items: dict[str, int] = {}
    company_totals: dict[str, int] = {}
    total = 0

    for order in orders:
        company = order.company_name or UNKNOWN_COMPANY
        foods = companies.setdefault(company, {})
        company_totals.setdefault(company, 0)

        for item in order.items:
            food = item.food_name or UNKNOWN_FOOD
            foods[food] = foods.get(food, 0) + item.quantity
            items[food] = items.get(food, 0) + item.quantity
            company_totals[company] += item.quantity
            total += item.quantity

    label = resolve_company_label(orders)
    if label == MULTIPLE_COMPANIES:
        logger.warning(
            f"[Aggregator] Orders span {len(companies)} companies: {list(companies)}"
        )

    return AggregationResult(
        companies=companies,
        items=items,
        company_totals=company_totals,
        total=total,
        order_count=len(orders),
        company_label=label,
    )
