# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Custom exception hierarchy for groupdelta.

Provides specific exception types for the precondition failures the
reconciler can surface. The computation itself has no error taxonomy;
everything here is raised before reconciliation starts.
"""

from __future__ import annotations

from typing import Any


class GroupDeltaException(Exception):  # noqa: N818
    """Base exception for all groupdelta errors.

    All groupdelta-specific exceptions should inherit from this class.
    """

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(GroupDeltaException):
    """Exception for validation errors.

    Raised when:
    - Input validation fails
    - Data integrity constraints are violated
    - Field values are out of range
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class DuplicateKeyError(ValidationException):
    """Raised when an index is built over records that repeat a key."""

    def __init__(self, key: Any):
        shown = key.hex() if isinstance(key, bytes) else key
        super().__init__(f"Duplicate key: {shown}", field="key", value=shown)
        self.key = key


class InvalidSnapshotError(ValidationException):
    """A group snapshot violates its well-formedness invariants.

    Raised when:
    - An identity appears twice within one membership collection
    - The revision is outside the unsigned 32-bit range
    """

    def __init__(
        self,
        message: str,
        collection: str,
        identity: bytes | None = None,
        snapshot: str | None = None,
    ):
        super().__init__(message, field=collection, value=identity.hex() if identity is not None else None)
        self.details["collection"] = collection
        if identity is not None:
            self.details["identity"] = identity.hex()
        if snapshot:
            self.details["snapshot"] = snapshot
        self.collection = collection
        self.identity = identity
        self.snapshot = snapshot
