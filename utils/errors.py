# utils/errors.py
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    NOT_FOUND = "NotFound"
    DATASTORE_UNAVAILABLE = "DatastoreUnavailable"
    PERSISTENCE = "PersistenceError"


HTTP_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DATASTORE_UNAVAILABLE: 500,
    ErrorKind.PERSISTENCE: 500,
}


class DatastoreError(Exception):
    """Base for failures talking to MongoDB. `detail` is the driver's message."""

    kind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or message


class DatastoreUnavailable(DatastoreError):
    kind = ErrorKind.DATASTORE_UNAVAILABLE


class PersistenceError(DatastoreError):
    kind = ErrorKind.PERSISTENCE
