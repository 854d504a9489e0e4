import logging
from contextlib import contextmanager

from sqlalchemy import exc as sa_exc

logger = logging.getLogger(__name__)


class MovieNightError(Exception):
    """Base class for every failure surfaced by the services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MovieNightError):
    pass


class ValidationFailure(MovieNightError):
    pass


class ConstraintViolation(MovieNightError):
    """Foreign-key or uniqueness violation reported by the store."""


class ResourceExhaustion(MovieNightError):
    """No pooled connection became available in time."""


class ConsistencyViolation(MovieNightError):
    """An internal invariant broke. Always a bug, never a user error."""


class TransientStoreFailure(MovieNightError):
    pass


def translate_store_error(error: sa_exc.SQLAlchemyError) -> MovieNightError:
    if isinstance(error, sa_exc.IntegrityError):
        return ConstraintViolation(f"Store rejected the write: {error.orig}")
    # Pool checkout timeout
    if isinstance(error, sa_exc.TimeoutError):
        return ResourceExhaustion("Timed out waiting for a database connection")
    return TransientStoreFailure(f"Database failure: {error.__class__.__name__}")


@contextmanager
def store_errors():
    """Re-raise SQLAlchemy errors from the wrapped block as service errors."""
    try:
        yield
    except sa_exc.SQLAlchemyError as e:
        translated = translate_store_error(e)
        logger.warning("Store error %s: %s", type(translated).__name__, e)
        raise translated from e
