import json
import sys
from collections.abc import Callable
from datetime import datetime

import httpx
from loguru import logger

from daily_summary.application.email_service import ResendEmailService
from daily_summary.application.order_service import OrderService
from daily_summary.domain.errors import ConfigurationError
from daily_summary.domain.report import OutcomeKind, ReportOutcome
from daily_summary.entrypoints.executor import ReportExecutor
from daily_summary.entrypoints.settings import Config, load_config
from daily_summary.infrastructure.order_repository import OrderRepository
from daily_summary.infrastructure.supabase_client import SupabaseRestClient

ALLOWED_METHODS = {"POST", "GET"}


def _mock_resend_handler(request: httpx.Request) -> httpx.Response:
    """Mock transport handler, logs what would be sent and returns a 200."""
    logger.info(f"[Resend] MOCK POST {request.url}\n{request.content.decode()}")
    return httpx.Response(200, json={"id": "dry-run"})


def run_report(config: Config, now: datetime | None = None) -> ReportOutcome:
    timeout = httpx.Timeout(config.HTTP_TIMEOUT_SECONDS)

    # --- Supabase layer ---
    store_http = httpx.Client(timeout=timeout)
    order_service = OrderService(
        OrderRepository(
            SupabaseRestClient(
                client=store_http,
                base_url=config.SUPABASE_URL,
                service_role_key=config.SUPABASE_SERVICE_ROLE_KEY,
            )
        )
    )

    # --- Resend layer ---
    if config.EMAIL_DRY_RUN:
        email_http = httpx.Client(
            timeout=timeout, transport=httpx.MockTransport(_mock_resend_handler)
        )
    else:
        email_http = httpx.Client(timeout=timeout)
    email_service = ResendEmailService(
        client=email_http,
        base_url=config.RESEND_BASE_URL,
        api_key=config.RESEND_API_KEY,
        sender=config.EMAIL_FROM_ADDRESS,
    )

    # --- Run pipeline ---
    with store_http, email_http:
        executor = ReportExecutor(
            order_service=order_service,
            email_service=email_service,
            recipients=config.EMAIL_RECIPIENTS,
            floor_number=config.FLOOR_NUMBER,
            layout=config.REPORT_LAYOUT,
        )
        return executor.run(now)


def handle_request(
    method: str,
    config_loader: Callable[[], Config] = load_config,
    now: datetime | None = None,
) -> tuple[int, dict | str]:
    """Serve one trigger of the summary job and return ``(status, body)``."""
    method = method.upper()
    if method == "OPTIONS":
        return 200, "ok"
    if method not in ALLOWED_METHODS:
        return 405, {"error": f"Method {method} not allowed"}

    try:
        config = config_loader()
    except ConfigurationError as exc:
        logger.error(f"Configuration error: {exc}")
        outcome = ReportOutcome(kind=OutcomeKind.configuration_error, error=str(exc))
        return outcome.http_status, outcome.response_body()

    try:
        outcome = run_report(config, now)
    except Exception as exc:
        logger.exception(f"Unexpected failure while wiring the report: {exc}")
        outcome = ReportOutcome(
            kind=OutcomeKind.unexpected_error, error=str(exc) or type(exc).__name__
        )
    logger.info(f"Done. Outcome: {outcome.kind} ({outcome.http_status})")
    return outcome.http_status, outcome.response_body()


def main() -> None:
    try:
        config = load_config()
    except ConfigurationError as exc:
        logger.error(f"Configuration error: {exc}")
        print(json.dumps({"error": str(exc)}))
        sys.exit(1)

    logger.remove()
    logger.add(sys.stderr, level=config.LOG_LEVEL.upper())

    status, body = handle_request("POST", config_loader=lambda: config)
    print(json.dumps(body, indent=2))
    sys.exit(0 if status < 300 else 1)


if __name__ == "__main__":
    main()
