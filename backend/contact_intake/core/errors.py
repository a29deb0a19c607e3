"""
Error types raised by the contact intake flow.

Storage failures are classified from the driver's error code (PostgreSQL
SQLSTATE, or SQLite's extended error name) instead of the message text, which
differs between backends and driver versions.
"""
from __future__ import annotations

import enum

from sqlalchemy.exc import SQLAlchemyError


class ContactValidationError(ValueError):
    """Submission is missing required fields. Raised before any storage access."""


class StorageErrorKind(str, enum.Enum):
    VALUE_TOO_LONG = "VALUE_TOO_LONG"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    NOT_NULL = "NOT_NULL"
    UNKNOWN = "UNKNOWN"


# PostgreSQL SQLSTATE codes
_SQLSTATE_KINDS = {
    "22001": StorageErrorKind.VALUE_TOO_LONG,  # string_data_right_truncation
    "23505": StorageErrorKind.DUPLICATE_KEY,  # unique_violation
    "23502": StorageErrorKind.NOT_NULL,  # not_null_violation
}

_SQLITE_ERROR_KINDS = {
    "SQLITE_TOOBIG": StorageErrorKind.VALUE_TOO_LONG,
    "SQLITE_CONSTRAINT_UNIQUE": StorageErrorKind.DUPLICATE_KEY,
    "SQLITE_CONSTRAINT_PRIMARYKEY": StorageErrorKind.DUPLICATE_KEY,
    "SQLITE_CONSTRAINT_NOTNULL": StorageErrorKind.NOT_NULL,
}


class ContactStorageError(Exception):
    """A storage step failed and the intake transaction was rolled back."""

    def __init__(self, kind: StorageErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError) -> "ContactStorageError":
        orig = getattr(exc, "orig", None)
        raw = str(orig) if orig is not None else str(exc)
        return cls(classify_storage_error(exc), raw.strip())


def classify_storage_error(exc: BaseException) -> StorageErrorKind:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return StorageErrorKind.UNKNOWN

    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[code]

    sqlite_name = getattr(orig, "sqlite_errorname", None)
    if sqlite_name in _SQLITE_ERROR_KINDS:
        return _SQLITE_ERROR_KINDS[sqlite_name]

    return StorageErrorKind.UNKNOWN
