"""
Result classes for UserService operations to provide consistent return types.
"""

from dataclasses import dataclass, field
from typing import Optional

from starter.exceptions import UserRecordError
from starter.schemas.user import UserRecord


@dataclass
class UserResult:
    """Result of a single-row user operation: exactly one of data/error is set."""

    data: Optional[UserRecord] = None
    error: Optional[UserRecordError] = None

    def __bool__(self) -> bool:
        """Allow using the result in boolean contexts."""
        return self.error is None

    @classmethod
    def ok(cls, data: UserRecord):
        return cls(data=data)

    @classmethod
    def failed(cls, error: UserRecordError):
        return cls(error=error)


@dataclass
class UserListResult:
    """Result of listing the users table."""

    data: Optional[list[UserRecord]] = None
    error: Optional[UserRecordError] = None

    def __bool__(self) -> bool:
        return self.error is None


@dataclass
class DeleteResult:
    """
    Result of a delete.

    ``data`` holds the rows the database reported as removed and
    ``deleted_count`` their number, so a delete that matched nothing is a
    success with a count of zero.
    """

    data: Optional[list[dict]] = field(default=None)
    error: Optional[UserRecordError] = None
    deleted_count: int = 0

    def __bool__(self) -> bool:
        return self.error is None
