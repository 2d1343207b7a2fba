"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult for consistent validation reporting
- Shared checks used by the concrete validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ValidationResult:
    """
    Result of data validation.

    Attributes:
        is_valid: Whether validation passed
        errors: List of error messages
        warnings: List of warning messages (non-fatal)
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """
        Add an error message.

        Returns:
            Self for method chaining

        Examples:
            >>> result = ValidationResult(is_valid=True)
            >>> result.add_error("Error 1").add_error("Error 2")
        """
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """Add a warning message; warnings never affect validity."""
        self.warnings.append(message)
        return self

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def get_summary(self) -> str:
        """
        Get validation summary.

        Returns:
            Human-readable summary of validation results
        """
        if self.is_valid and not self.has_warnings:
            return "Validation passed"

        parts = []

        if self.has_errors:
            parts.append(f"Errors ({len(self.errors)}):")
            for error in self.errors:
                parts.append(f"  - {error}")

        if self.has_warnings:
            parts.append(f"Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                parts.append(f"  - {warning}")

        return "\n".join(parts)


class Validator(ABC):
    """
    Abstract base class for validators.

    Subclasses implement validate() for one kind of input.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: dict,
        required_fields: List[str]
    ) -> List[str]:
        """
        Validate that required fields are present and non-empty.

        Returns:
            List of error messages for missing fields
        """
        errors = []
        for name in required_fields:
            value = data.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors.append(f"Missing required field: {name}")
        return errors

    def validate_email_format(
        self,
        email: str,
        field_name: str = "email"
    ) -> Optional[str]:
        """
        Validate email format.

        Returns:
            Error message if invalid, None if valid
        """
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        if not re.match(pattern, email):
            return f"Invalid {field_name} format: {email}"
        return None

    def validate_digits(
        self,
        value: str,
        field_name: str
    ) -> Optional[str]:
        """
        Validate that a value consists of digits only.

        Returns:
            Error message if invalid, None if valid
        """
        if not re.fullmatch(r'\d+', value):
            return f"{field_name} should contain digits only, got: {value}"
        return None
