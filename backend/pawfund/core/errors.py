"""Module: errors."""

from enum import Enum


# Failure kinds surfaced by the core; the HTTP layer maps each to a status code.
class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORAGE_FAILURE = "storage_failure"


class PawFundError(Exception):
    """Base class for every failure raised by the ledger and association services."""

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(PawFundError):
    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFound(PawFundError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, key: object):
        super().__init__(f"{entity.capitalize()} {key} not found")
        self.entity = entity
        self.key = key


class Conflict(PawFundError):
    kind = ErrorKind.CONFLICT


class StorageFailure(PawFundError):
    kind = ErrorKind.STORAGE_FAILURE
