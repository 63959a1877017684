"""Helpers shared by the services that talk to MongoDB.

Every service call that touches the store runs inside
``translate_store_errors`` so that callers only ever see ``JobBoardError``
subclasses with a readable message.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Optional

from bson import ObjectId
from pymongo.errors import ConnectionFailure, OperationFailure, PyMongoError

from .exceptions import (
    InternalServiceError,
    JobBoardError,
    PermissionDeniedError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

# Unauthorized, AuthenticationFailed
_AUTH_ERROR_CODES = {13, 18}


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the driver hands back on reads."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a client supplied id, returning None when it cannot be an ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if not value or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Turn a raw Mongo document into a plain record with a string ``id``."""
    record = dict(doc)
    record["id"] = str(record.pop("_id"))
    return record


@asynccontextmanager
async def translate_store_errors(action: str) -> AsyncIterator[None]:
    try:
        yield
    except JobBoardError:
        raise
    except ConnectionFailure as e:
        logger.error(f"MongoDB unreachable while trying to {action}: {e}", exc_info=True)
        raise ServiceUnavailableError(
            f"Could not reach the database while trying to {action}. Please try again later."
        ) from e
    except OperationFailure as e:
        logger.error(f"MongoDB rejected {action}: {e.details}", exc_info=True)
        if e.code in _AUTH_ERROR_CODES:
            raise PermissionDeniedError(
                f"Permission denied. The database refused to {action}; check the configured credentials."
            ) from e
        raise InternalServiceError(str(e) or f"Failed to {action}", details=e.details) from e
    except PyMongoError as e:
        logger.error(f"MongoDB error while trying to {action}: {e}", exc_info=True)
        raise InternalServiceError(str(e) or f"Failed to {action}", details=repr(e)) from e
