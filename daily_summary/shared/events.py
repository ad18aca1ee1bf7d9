from loguru import logger

from daily_summary.domain.report import ReportState

STATE_EVENT = "report.state"


def emit_state(state: ReportState, level: str = "INFO", **fields: object) -> None:
    """Log a pipeline state transition as a structured loguru record.

    ``state`` and every keyword in ``fields`` land in ``record["extra"]``.
    """
    details = " ".join(f"{key}={value}" for key, value in fields.items())
    logger.bind(event=STATE_EVENT, state=str(state), **fields).log(
        level, f"[Report] {state}" + (f" | {details}" if details else "")
    )
