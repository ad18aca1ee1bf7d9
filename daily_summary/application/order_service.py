from daily_summary.domain.interfaces import IOrderRepository
from daily_summary.domain.order import Order, OrderStatus
from daily_summary.domain.report import ReportingWindow


class OrderService:
    """Application service for order-related operations."""

    REPORTABLE_STATUS = OrderStatus.sent

    def __init__(self, repository: IOrderRepository) -> None:
        self._repository = repository

    def get_finalized_orders(self, window: ReportingWindow) -> list[Order]:
        """Return ``sent`` orders placed inside ``window``, newest first."""
        return self._repository.fetch_orders(self.REPORTABLE_STATUS, window)
