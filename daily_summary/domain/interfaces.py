from typing import Protocol

from .order import Order, OrderStatus
from .report import EmailMessage, ReportingWindow


class IOrderService(Protocol):
    def get_finalized_orders(self, window: ReportingWindow) -> list[Order]: ...


class IOrderRepository(Protocol):
    def fetch_orders(
        self, status: OrderStatus, window: ReportingWindow
    ) -> list[Order]: ...


class IEmailService(Protocol):
    def send(self, message: EmailMessage) -> str:
        """Deliver ``message`` and return the provider's message id."""
        ...
