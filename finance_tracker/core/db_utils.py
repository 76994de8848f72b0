"""
Database helpers for the read-heavy aggregation entry points.
"""
import asyncio
import functools
import logging
from typing import Callable, Any, List, TypeVar, cast, Awaitable

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Exception class names that signal a dropped or refused connection
TRANSIENT_ERROR_NAMES = (
    "ConnectionError",
    "OperationalError",
    "ConnectionDoesNotExistError",
    "ConnectionRefusedError",
    "InterfaceError",
)


def is_transient_error(exc: BaseException) -> bool:
    error_name = type(exc).__name__
    return any(name in error_name for name in TRANSIENT_ERROR_NAMES)


def _sessions_in(args: tuple, kwargs: dict) -> List[AsyncSession]:
    return [a for a in (*args, *kwargs.values()) if isinstance(a, AsyncSession)]


def with_db_retry(
    max_retries: int = 3,
    retry_delay: float = 0.5
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Retry a read-only coroutine when the database connection drops.

    Only use this on operations that do not write: a retried write could
    be applied twice. Any AsyncSession argument is rolled back before the
    next attempt, since a dropped connection leaves it unusable until then.

    Args:
        max_retries: Maximum number of retries before giving up
        retry_delay: Base delay in seconds, doubled on each attempt
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not is_transient_error(e) or attempt >= max_retries:
                        if attempt:
                            logger.error(
                                f"{func.__name__} failed after {attempt} retries: {e}"
                            )
                        raise
                    attempt += 1
                    delay = retry_delay * (2 ** (attempt - 1))
                    logger.warning(
                        f"Database connection error in {func.__name__}: {str(e)}. "
                        f"Retrying in {delay:.2f}s... (Attempt {attempt}/{max_retries})"
                    )
                    await asyncio.sleep(delay)
                    for session in _sessions_in(args, kwargs):
                        await session.rollback()

        return cast(Callable[..., Awaitable[T]], wrapper)

    return decorator
