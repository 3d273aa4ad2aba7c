"""
Freshrack Backend — Store Access Helpers
==========================================

What:  Identifier parsing and store-failure translation shared by the services.
How:   parse_id() turns a path string into the store's UUID type;
       store_errors() wraps a block of store calls and converts any driver
       failure into DatabaseError carrying the driver's own message.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

from freshrack.exceptions import DatabaseError, FreshrackError, InvalidIdentifierError

logger = logging.getLogger(__name__)


def parse_id(raw_id: str) -> uuid.UUID:
    """
    Parse a path parameter into a record Id.

    Raises:
        InvalidIdentifierError: with the UUID parser's message (→ 500)
    """
    try:
        return uuid.UUID(raw_id)
    except ValueError as e:
        raise InvalidIdentifierError(message=str(e), raw_id=raw_id) from e


def _failure_message(exc: BaseException) -> str:
    # SQLAlchemy's DBAPIError keeps the driver exception on `.orig`
    cause = getattr(exc, "orig", None) or exc
    return str(cause) or type(cause).__name__


@contextmanager
def store_errors(operation: str, **context: Any) -> Iterator[None]:
    """
    Translate failures raised inside the block into DatabaseError.

    Application errors (NotFoundError, InvalidIdentifierError) pass through
    untouched.

    Example:
        with store_errors("get_food", food_id=food_id):
            result = await db.execute(...)
    """
    try:
        yield
    except FreshrackError:
        raise
    except Exception as e:
        message = _failure_message(e)
        logger.error("Database error during %s: %s", operation, message, exc_info=True)
        raise DatabaseError(
            message=message,
            context={"operation": operation, "error_type": type(e).__name__, **context},
        ) from e
