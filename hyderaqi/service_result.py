"""
Service result module for the HyderAQI dashboard core.

Both remote operations report their outcome as a ServiceResult: a value, an
explicit not-found, or a failure carrying the exception. Each public entry
point then projects the result into its own policy (raise for insights,
return None for discovery).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultStatus(Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Tagged outcome of a remote operation.

    Attributes:
        status: Which of the three outcomes this is
        value: The produced value, set only on SUCCESS
        error: The exception, set only on FAILURE
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(ResultStatus.SUCCESS, value=value)

    @classmethod
    def not_found(cls) -> "ServiceResult[T]":
        return cls(ResultStatus.NOT_FOUND)

    @classmethod
    def failure(cls, error: Exception) -> "ServiceResult[T]":
        return cls(ResultStatus.FAILURE, error=error)

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    def unwrap(self) -> Optional[T]:
        """
        Returns the value, or raises the stored error on failure.

        A NOT_FOUND result unwraps to None.
        """
        if self.status is ResultStatus.FAILURE:
            raise self.error
        return self.value

    def value_or_none(self) -> Optional[T]:
        return self.value if self.ok else None
