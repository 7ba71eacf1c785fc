"""Persistence layer error translation."""

import asyncio
import functools
from typing import Any, Awaitable, Callable, TypeVar

import logfire
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from margin.domain.error import StorageError

T = TypeVar("T")


def _is_retryable(error: BaseException) -> bool:
    if isinstance(error, (asyncio.TimeoutError, PoolTimeoutError, OperationalError)):
        return True
    return isinstance(error, DBAPIError) and error.connection_invalidated


def storage_operation(
    name: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Translate database failures of a repository method into StorageError.

    Timeouts and connection failures are marked retryable.

    Args:
        name: Operation name used in logs
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except (asyncio.TimeoutError, SQLAlchemyError) as e:
                retryable = _is_retryable(e)
                logfire.error(
                    "Storage operation failed",
                    operation=name,
                    error=str(e),
                    error_type=type(e).__name__,
                    retryable=retryable,
                )
                raise StorageError(
                    f"Storage operation {name} failed", retryable=retryable
                ) from e

        return wrapper

    return decorator
