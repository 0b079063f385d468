import functools
import logging

from libs.result import Error, Return
from src.app.errors import PERSISTENCE_ERROR
from src.app.services.unit_of_work import PersistenceError

logger = logging.getLogger(__name__)


def persistence_guard(func):
    """Turn a PersistenceError escaping a use case method into a PERSISTENCE_ERROR result."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PersistenceError as exc:
            logger.exception("Storage failure in %s", func.__qualname__)
            return Return.err(
                Error(
                    PERSISTENCE_ERROR,
                    "Storage unavailable, nothing was changed",
                    reason=str(exc),
                )
            )

    return wrapper
