from collections.abc import Callable
from datetime import UTC, datetime
from typing import Literal

from loguru import logger

from daily_summary.application.aggregator import aggregate_orders
from daily_summary.application.period import compute_reporting_window
from daily_summary.application.summary_renderer import (
    DEFAULT_FLOOR_NUMBER,
    build_subject,
    render_company_breakdown,
    render_summary,
)
from daily_summary.domain.errors import ConfigurationError, DispatchError, FetchError
from daily_summary.domain.interfaces import IEmailService, IOrderService
from daily_summary.domain.report import (
    AggregationResult,
    EmailMessage,
    OutcomeKind,
    ReportingWindow,
    ReportOutcome,
    ReportState,
)
from daily_summary.shared.events import emit_state

ReportLayout = Literal["summary", "by_company"]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ReportExecutor:
    """Computes the current cycle's order summary and emails it.

    One call to ``run`` is one stateless invocation; nothing is retried.
    """

    def __init__(
        self,
        order_service: IOrderService,
        email_service: IEmailService,
        recipients: list[str],
        floor_number: str = DEFAULT_FLOOR_NUMBER,
        layout: ReportLayout = "summary",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not recipients:
            raise ConfigurationError("at least one recipient is required")
        self._order_service = order_service
        self._email_service = email_service
        self._recipients = list(recipients)
        self._floor_number = floor_number
        self._layout = layout
        self._clock = clock

    def run(self, now: datetime | None = None) -> ReportOutcome:
        transitions: list[ReportState] = []

        def advance(state: ReportState, level: str = "INFO", **fields: object) -> None:
            transitions.append(state)
            emit_state(state, level, **fields)

        advance(ReportState.start)
        window: ReportingWindow | None = None
        summary: str | None = None

        try:
            window = compute_reporting_window(now or self._clock())
            advance(
                ReportState.window_computed,
                start=window.start.isoformat(),
                end=window.end.isoformat(),
            )

            try:
                orders = self._order_service.get_finalized_orders(window)
            except FetchError as exc:
                advance(ReportState.failed, "ERROR", kind=OutcomeKind.fetch_error)
                return ReportOutcome(
                    kind=OutcomeKind.fetch_error,
                    error=str(exc),
                    window=window,
                    transitions=transitions,
                )
            advance(ReportState.orders_fetched, count=len(orders))

            for order in orders:
                logger.debug(
                    f"{order.id} | {order.order_time.isoformat()} | {order.status} | "
                    f"{order.company_name} | {len(order.items)} item(s)"
                )

            if not orders:
                advance(ReportState.empty_exit)
                advance(ReportState.done)
                return ReportOutcome(
                    kind=OutcomeKind.empty,
                    message="No orders to summarize. Email not sent.",
                    window=window,
                    transitions=transitions,
                )

            result = aggregate_orders(orders)
            advance(
                ReportState.aggregated,
                total=result.total,
                company=result.company_label,
            )

            summary = self._render(result, window)
            advance(ReportState.rendered, lines=summary.count("\n") + 1)
            logger.info(f"Generated summary text:\n{summary}")

            message = EmailMessage(
                subject=build_subject(window),
                body=summary,
                recipients=self._recipients,
            )
            try:
                message_id = self._email_service.send(message)
            except DispatchError as exc:
                advance(ReportState.failed, "ERROR", kind=OutcomeKind.dispatch_error)
                return ReportOutcome(
                    kind=OutcomeKind.dispatch_error,
                    message="Summary processed, but email sending failed.",
                    error=str(exc),
                    summary=summary,
                    order_count=result.order_count,
                    window=window,
                    transitions=transitions,
                )
            advance(ReportState.dispatched, message_id=message_id)

            advance(ReportState.done)
            return ReportOutcome(
                kind=OutcomeKind.sent,
                message="Summary processed and email sent.",
                summary=summary,
                message_id=message_id,
                order_count=result.order_count,
                window=window,
                transitions=transitions,
            )

        except Exception as exc:
            logger.exception(f"Unexpected failure while building summary: {exc}")
            advance(ReportState.failed, "ERROR", kind=OutcomeKind.unexpected_error)
            return ReportOutcome(
                kind=OutcomeKind.unexpected_error,
                error=str(exc) or type(exc).__name__,
                summary=summary,
                window=window,
                transitions=transitions,
            )

    def _render(self, result: AggregationResult, window: ReportingWindow) -> str:
        if self._layout == "by_company":
            return render_company_breakdown(result)
        return render_summary(result, window, self._floor_number)
