"""
Unit tests for Result<T> pattern.
"""

import pytest

from inv24_automation.models.result import Result, ResultStatus


class TestResult:
    """Test cases for Result class."""

    def test_success_creation(self):
        """Test creating a successful result."""
        result = Result.success("100000000023", "Invoice created")

        assert result.is_success
        assert not result.is_failure
        assert result.status == ResultStatus.SUCCESS
        assert result.value == "100000000023"
        assert result.message == "Invoice created"
        assert result.error is None

    def test_failure_creation(self):
        """Test creating a failure result."""
        error = TimeoutError("no redirect")
        result = Result.failure("Login failed", error)

        assert result.is_failure
        assert not result.is_success
        assert result.status == ResultStatus.FAILURE
        assert result.value is None
        assert result.message == "Login failed"
        assert result.error is error

    def test_unwrap_success(self):
        assert Result.success("data").unwrap() == "data"

    def test_unwrap_failure_raises(self):
        """Test unwrapping a failure raises ValueError."""
        result = Result.failure("Element not found")

        with pytest.raises(ValueError) as exc_info:
            result.unwrap()

        assert "Element not found" in str(exc_info.value)

    def test_unwrap_or(self):
        assert Result.success(5).unwrap_or(0) == 5
        assert Result.failure("nope").unwrap_or(0) == 0

    def test_map_success(self):
        result = Result.success("  1119419 ").map(str.strip)

        assert result.is_success
        assert result.value == "1119419"

    def test_map_failure_passes_through(self):
        result = Result.failure("Timed out").map(str.strip)

        assert result.is_failure
        assert result.message == "Timed out"

    def test_map_exception_becomes_failure(self):
        result = Result.success("abc").map(int)

        assert result.is_failure
        assert isinstance(result.error, ValueError)


class TestAndThen:
    """Test cases for chaining with and_then."""

    def test_chain_runs_next_step(self):
        result = Result.success(None).and_then(lambda _: Result.success("page"))

        assert result.is_success
        assert result.value == "page"

    def test_first_failure_short_circuits(self):
        calls = []

        def next_step(_):
            calls.append("called")
            return Result.success("page")

        error = RuntimeError("driver gone")
        result = Result.failure("Navigation failed", error).and_then(next_step)

        assert result.is_failure
        assert result.message == "Navigation failed"
        assert result.error is error
        assert calls == []

    def test_failure_from_later_step(self):
        result = Result.success(None).and_then(lambda _: Result.failure("Network busy"))

        assert result.is_failure
        assert result.message == "Network busy"
