"""
Invoice workflow models.

This module provides the invoice type codes understood by INV24, the
per-invocation workflow options and the structured result every workflow
run produces.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, Union
from enum import Enum


class InvoiceType(Enum):
    """
    Document categories of the INV24 "add invoice" form.

    The value is the code passed as ``invoice_type`` in the form URL.
    """

    INVOICE = "0"       # Фактура
    PROFORMA = "1"      # Проформа
    OFFER = "2"         # Оферта
    CREDIT_NOTE = "3"   # Кредитно известие
    DEBIT_NOTE = "4"    # Дебитно известие

    @classmethod
    def parse(cls, value: Union[str, int, "InvoiceType"]) -> "InvoiceType":
        """
        Parse a numeric code or a member name.

        Args:
            value: ``1``, ``"1"``, ``"proforma"``, ``"credit-note"`` or a member

        Returns:
            Matching InvoiceType

        Raises:
            ValueError: If the value names no known type

        Examples:
            >>> InvoiceType.parse("0")
            <InvoiceType.INVOICE: '0'>
            >>> InvoiceType.parse("credit-note")
            <InvoiceType.CREDIT_NOTE: '3'>
        """
        if isinstance(value, cls):
            return value

        text = str(value).strip()
        for member in cls:
            if member.value == text:
                return member

        key = text.upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls.__members__[key]

        choices = ", ".join(f"{m.value}={m.name.lower()}" for m in cls)
        raise ValueError(f"Unknown invoice type '{value}' (expected one of: {choices})")


DEFAULT_INVOICE_TYPE = InvoiceType.PROFORMA


@dataclass(frozen=True)
class WorkflowOptions:
    """
    Per-invocation options.

    Attributes:
        invoice_type: Explicit document type; None falls back to configuration
        send_email: Send the invoice to the client right after creation
        debug: Run a visible (non-headless) browser
    """

    invoice_type: Optional[InvoiceType] = None
    send_email: bool = False
    debug: bool = False


@dataclass
class InvoiceRunResult:
    """
    Result of one workflow run.

    This is the single machine-readable artifact of an invocation. Optional
    fields that were never set are left out of ``to_dict()``.

    Attributes:
        success: Whether the remote system accepted the action
        invoice_number: Human-readable invoice number found in the page
        url: Final URL after the action
        error: Diagnostic message for failures
        email_pending: Send-after-create was requested but not completed
        invoice_id: INV24 internal invoice id
        email_sent: Send-after-create completed
        email_error: Why send-after-create did not complete
        needs_review: URL and page content disagreed about the outcome
        confirmed: A send was confirmed by a success phrase on the page

    Examples:
        >>> result = InvoiceRunResult(success=True, invoice_number="1000000000023")
        >>> result.to_dict()
        {'success': True, 'invoice_number': '1000000000023'}
    """

    success: bool = False
    invoice_number: Optional[str] = None
    url: Optional[str] = None
    error: Optional[str] = None
    email_pending: Optional[bool] = None
    invoice_id: Optional[str] = None
    email_sent: Optional[bool] = None
    email_error: Optional[str] = None
    needs_review: Optional[bool] = None
    confirmed: Optional[bool] = None

    @classmethod
    def failed(cls, error: str, url: Optional[str] = None) -> "InvoiceRunResult":
        """Create a failed result with a diagnostic message."""
        return cls(success=False, error=error, url=url)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary with ``success`` and every optional field that is set
        """
        data: Dict[str, Any] = {"success": self.success}
        for key in (
            "invoice_number",
            "url",
            "error",
            "email_pending",
            "invoice_id",
            "email_sent",
            "email_error",
            "needs_review",
            "confirmed",
        ):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @property
    def exit_code(self) -> int:
        """Process exit status mirroring ``success``."""
        return 0 if self.success else 1
