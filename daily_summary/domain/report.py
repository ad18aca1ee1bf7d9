"""Value objects produced and consumed by the order-summary pipeline."""

from datetime import datetime, timedelta, timezone
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ReportingWindow(BaseModel):
    """Half-open ``[start, end)`` interval of absolute (UTC) instants."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    utc_offset: timedelta

    @property
    def local_start(self) -> datetime:
        return self.start.astimezone(timezone(self.utc_offset))

    @property
    def local_end(self) -> datetime:
        return self.end.astimezone(timezone(self.utc_offset))

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


class AggregationResult(BaseModel):
    """Per-company, per-food quantity totals for one reporting window."""

    companies: dict[str, dict[str, int]] = Field(default_factory=dict)
    items: dict[str, int] = Field(default_factory=dict)
    company_totals: dict[str, int] = Field(default_factory=dict)
    total: int = 0
    order_count: int = 0
    company_label: str


class EmailMessage(BaseModel):
    subject: str
    body: str
    recipients: list[str]


class ReportState(StrEnum):
    start = "start"
    window_computed = "window_computed"
    orders_fetched = "orders_fetched"
    empty_exit = "empty_exit"
    aggregated = "aggregated"
    rendered = "rendered"
    dispatched = "dispatched"
    failed = "failed"
    done = "done"


class OutcomeKind(StrEnum):
    sent = "sent"
    empty = "empty"
    configuration_error = "configuration_error"
    fetch_error = "fetch_error"
    dispatch_error = "dispatch_error"
    unexpected_error = "unexpected_error"


_SERVER_ERRORS = {
    OutcomeKind.configuration_error,
    OutcomeKind.fetch_error,
    OutcomeKind.dispatch_error,
    OutcomeKind.unexpected_error,
}


class ReportOutcome(BaseModel):
    """Terminal result of one pipeline invocation."""

    kind: OutcomeKind
    message: str | None = None
    error: str | None = None
    summary: str | None = None
    message_id: str | None = None
    order_count: int = 0
    window: ReportingWindow | None = None
    transitions: list[ReportState] = Field(default_factory=list)

    @property
    def http_status(self) -> int:
        return 500 if self.kind in _SERVER_ERRORS else 200

    def response_body(self) -> dict:
        """JSON body returned to the invoking scheduler."""
        if self.kind in (OutcomeKind.sent, OutcomeKind.empty):
            body: dict = {"message": self.message}
            if self.summary is not None:
                body["summary"] = self.summary
            return body
        if self.kind is OutcomeKind.dispatch_error:
            return {
                "message": self.message,
                "error": self.error,
                "summary": self.summary,
            }
        return {"error": self.error}
