from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def log_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Catch, log, and re-raise any exception raised by the decorated I/O method.

    The record is bound with ``event="io.error"`` and the fully-qualified
    function name so failures can be filtered without parsing the message.

    Usage::

        @log_errors
        def send(self, message: EmailMessage) -> str: ...
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            logger.bind(event="io.error", component=func.__qualname__).error(
                f"[{func.__qualname__}] {type(exc).__name__}: {exc}"
            )
            raise

    return wrapper
