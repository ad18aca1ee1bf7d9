"""Plain-text rendering of an aggregated order summary.

Output is a pure function of its inputs so that the same aggregation always
produces byte-identical text.
"""

from datetime import datetime

from daily_summary.domain.report import AggregationResult, ReportingWindow

TITLE = "Daily Order Summary"
SEPARATOR = "-" * 36
NO_ORDERS_LINE = "No 'sent' orders for this period."
DEFAULT_FLOOR_NUMBER = "06"


def format_quantity(quantity: int) -> str:
    """Zero-pad to at least two digits, never truncate."""
    return f"{quantity:02d}"


def format_local_timestamp(moment: datetime) -> str:
    """Short display form, e.g. ``Jun 5 (03:31 PM)``."""
    return f"{moment:%b} {moment.day} ({moment:%I:%M %p})"


def render_summary(
    result: AggregationResult,
    window: ReportingWindow,
    floor_number: str = DEFAULT_FLOOR_NUMBER,
) -> str:
    lines = [
        TITLE,
        f"Period (EAT): {format_local_timestamp(window.local_start)}"
        f" - {format_local_timestamp(window.local_end)}",
        SEPARATOR,
        f"{result.company_label} - floors ya {floor_number}",
        "",
    ]

    if result.order_count == 0:
        lines.append(NO_ORDERS_LINE)
        lines.append(f"Jumla: {format_quantity(0)}")
        return "\n".join(lines)

    for name, quantity in result.items.items():
        lines.append(f"- {name} - {format_quantity(quantity)}")

    lines.append(f"Jumla: {format_quantity(result.total)}")
    return "\n".join(lines)


def render_company_breakdown(result: AggregationResult) -> str:
    """One block per company listing its foods and a company total."""
    if result.order_count == 0:
        return NO_ORDERS_LINE

    blocks = []
    for company, foods in result.companies.items():
        block = [company]
        block.extend(f"{food} {quantity}" for food, quantity in foods.items())
        block.append(f"jumla {result.company_totals.get(company, 0)}")
        blocks.append("\n".join(block))

    return "\n\n".join(blocks)


def build_subject(window: ReportingWindow) -> str:
    """Email subject keyed to the local start date of the cycle."""
    return f"{TITLE} - {window.local_start:%Y-%m-%d}"
