"""
Result<T> pattern for step-level error handling.

Every browser operation and every workflow step returns a Result so that
a failure anywhere in the invoice sequence can be turned into a reported
error instead of an unhandled exception.
"""

from dataclasses import dataclass
from typing import Optional, Generic, TypeVar, Callable
from enum import Enum


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of a single operation that may succeed or fail.

    Attributes:
        status: SUCCESS or FAILURE
        value: The value produced on success (None on failure)
        error: The exception behind a failure, if there was one
        message: Human-readable description of what happened

    Examples:
        >>> result = browser.navigate("https://www.inv24.com/bg/")
        >>> if result.is_failure:
        ...     print(f"Navigation failed: {result.message}")

        >>> number = Result.success("100000000023").unwrap_or("unknown")
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        """Create a successful result carrying ``value``."""
        return cls(
            status=ResultStatus.SUCCESS,
            value=value,
            message=message
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        """
        Create a failed result.

        Args:
            message: What went wrong, phrased for the end user
            error: Optional underlying exception (timeouts, driver errors)
        """
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            error=error
        )

    def unwrap(self) -> T:
        """
        Return the value of a successful result.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(
                f"Cannot unwrap failure result: {self.message}"
            )
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the value, or ``default`` when the result is a failure."""
        return self.value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Apply ``func`` to the success value.

        Failures pass through untouched; an exception raised by ``func``
        becomes a failure.

        Examples:
            >>> Result.success("  1119419 ").map(str.strip).value
            '1119419'
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)

        try:
            return Result.success(func(self.value), self.message)
        except Exception as e:
            return Result.failure(str(e), e)

    def and_then(self, func: Callable[[T], 'Result[U]']) -> 'Result[U]':
        """
        Chain another Result-returning step after a success.

        The first failure short-circuits the chain, which is how a sequence
        of form steps stops at the step that broke.

        Examples:
            >>> result = browser.navigate(url).and_then(
            ...     lambda _: browser.wait_for_network_idle()
            ... )
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)
        return func(self.value)
