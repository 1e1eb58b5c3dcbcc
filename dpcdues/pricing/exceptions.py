"""Exceptions for the dues engine."""

from typing import Any, Optional


class DuesError(Exception):
    """Base class for dues calculation errors."""
    pass


class ValidationError(DuesError, ValueError):
    """Raised when a member record cannot be priced as given."""

    def __init__(self, message: str, member_index: Optional[int] = None,
                 field: Optional[str] = None, value: Any = None):
        self.member_index = member_index
        self.field = field
        self.value = value
        if member_index is not None:
            message = f"Member {member_index}: {message}"
        super().__init__(message)
