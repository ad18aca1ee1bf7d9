from datetime import UTC, datetime

from loguru import logger

from daily_summary.domain.order import Order, OrderItem, OrderStatus
from daily_summary.domain.report import ReportingWindow
from daily_summary.infrastructure.supabase_client import SupabaseRestClient


class OrderRepository:
    """Fetches orders with their company and food names from Supabase."""

    TABLE = "orders"
    # PostgREST caps responses at 1000 rows by default
    PAGE_SIZE = 1000

    SELECT = (
        "id,order_time,status,"
        "companies(name),"
        "order_items(id,quantity,foods(id,name))"
    )

    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    def fetch_orders(self, status: OrderStatus, window: ReportingWindow) -> list[Order]:
        """Return orders with ``status`` placed in ``[window.start, window.end)``.

        Filters applied via PostgREST query parameters:
        - status=eq.<status>
        - order_time >= window.start (inclusive)
        - order_time <  window.end   (exclusive)
        Rows come back newest first.
        """
        params = [
            ("select", self.SELECT),
            ("status", f"eq.{status}"),
            ("order_time", f"gte.{_iso(window.start)}"),
            ("order_time", f"lt.{_iso(window.end)}"),
            # id breaks timestamp ties so offset pages never overlap
            ("order", "order_time.desc,id.desc"),
        ]
        logger.debug(
            f"Querying '{status}' orders in [{_iso(window.start)}, {_iso(window.end)})"
        )

        orders: list[Order] = []
        offset = 0

        # Page until a short page signals the end of the result set
        while True:
            rows = self._client.select(
                self.TABLE, params, limit=self.PAGE_SIZE, offset=offset
            )
            orders.extend(self._map(row) for row in rows)

            if len(rows) < self.PAGE_SIZE:
                break
            offset += self.PAGE_SIZE

        logger.info(f"Fetched {len(orders)} '{status}' order(s)")
        return orders

    @staticmethod
    def _map(row: dict) -> Order:
        """Map a raw PostgREST row to an ``Order`` domain object."""
        company = row.get("companies") or {}

        items = [
            OrderItem(
                id=_optional_str(item.get("id")),
                quantity=item["quantity"],
                food_name=(item.get("foods") or {}).get("name"),
            )
            for item in row.get("order_items") or []
        ]

        return Order(
            id=str(row["id"]),
            order_time=row["order_time"],
            status=row.get("status") or "",
            company_name=company.get("name"),
            items=items,
        )


def _iso(moment: datetime) -> str:
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
