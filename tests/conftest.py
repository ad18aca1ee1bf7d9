import pytest
from loguru import logger


@pytest.fixture
def log_records() -> list[dict]:
    """Collect loguru records emitted during the test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
