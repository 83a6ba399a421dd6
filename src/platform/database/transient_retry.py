from functools import wraps
from typing import Any, Awaitable, Callable, ParamSpec, TypeVar

from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError

from src.platform.exception.exceptions import TransientError
from src.platform.logging.loguru_io import Logger


_P = ParamSpec('_P')
_T = TypeVar('_T')

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (OperationalError, PoolTimeoutError, TransientError)


def transient_retry(
    func: Callable[_P, Awaitable[_T]] | None = None, *, max_attempts: int = 2
) -> Any:
    """Retry a use case once on datastore hiccups, then surface TransientError.

    Domain errors (validation, conflicts, not found) are never retried.
    """

    def decorator(target: Callable[_P, Awaitable[_T]]) -> Callable[_P, Awaitable[_T]]:
        @wraps(target)
        async def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _T:
            for attempt in range(1, max_attempts + 1):
                try:
                    return await target(*args, **kwargs)
                except TRANSIENT_ERRORS as e:
                    if attempt < max_attempts:
                        Logger.base.warning(
                            f'⏳ [RETRY] {target.__qualname__} attempt {attempt}/{max_attempts} | {e}'
                        )
                        continue
                    Logger.base.error(f'❌ [RETRY] {target.__qualname__} gave up | {e}')
                    if isinstance(e, TransientError):
                        raise
                    raise TransientError() from e
            raise TransientError()

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
