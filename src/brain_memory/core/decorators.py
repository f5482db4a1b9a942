"""Error handling and resource decorators"""

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

from .base import ApplicationError, ErrorLevel
from .error_context import ErrorContextManager
from .logging import get_logger

logger = get_logger(__name__)
P = ParamSpec("P")
T = TypeVar("T")


def with_error_handling(
    error_level: ErrorLevel = ErrorLevel.ERROR,
    reraise: bool = True,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator for logging errors raised by a function.

    Args:
        error_level: Severity level for non-application errors
        reraise: Whether to re-raise the error after logging

    Returns:
        Decorated function with error handling
    """

    def _log(func: Callable[..., Any], error: Exception, level: ErrorLevel, context: dict[str, Any]) -> None:
        logger.log(
            level.to_logging_level(),
            f"Error in {func.__name__}: {error!s}",
            function=func.__name__,
            error_context=context,
            exc_info=True,
        )

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        original_signature = inspect.signature(func)

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
                try:
                    return await cast("Callable[P, Awaitable[T]]", func)(*args, **kwargs)
                except Exception as e:
                    level = e.level if isinstance(e, ApplicationError) else error_level
                    async with ErrorContextManager(e) as ctx:
                        _log(func, e, level, ctx.to_dict())
                    if reraise:
                        raise
                    return cast("T", None)

            async_wrapper.__signature__ = original_signature  # type: ignore[attr-defined]
            return cast("Callable[P, T]", async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                level = e.level if isinstance(e, ApplicationError) else error_level
                with ErrorContextManager(e) as ctx:
                    _log(func, e, level, ctx.to_dict())
                if reraise:
                    raise
                return cast("T", None)

        sync_wrapper.__signature__ = original_signature  # type: ignore[attr-defined]
        return sync_wrapper

    return decorator


def with_connection(factory_attr: str = "connections") -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator that scopes a store connection to a single method call.

    The connection is acquired from ``getattr(self, factory_attr).connection()``
    and injected as the first argument after ``self``. It is released on every
    exit path.

    Usage:
        @with_connection()
        async def ping(self, conn):
            return await conn.ping()
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            if not args:
                raise ValueError(f"{func.__name__} requires at least 'self' argument")

            self_obj = args[0]
            factory = getattr(self_obj, factory_attr, None)
            if factory is None:
                raise AttributeError(
                    f"Object {self_obj.__class__.__name__} has no attribute '{factory_attr}'. "
                    f"Either provide the correct factory_attr or ensure the object has a connection factory."
                )

            async with factory.connection() as conn:
                return await func(args[0], conn, *args[1:], **kwargs)

        return wrapper

    return decorator
