"""
Invoice dispatch workflow.

Sends an existing INV24 invoice to its client, addressed either by the
internal invoice id or by the human-readable invoice number.
"""

import logging
from typing import Optional

from .base import BaseWorkflow
from ..automation.inv24.client import Inv24Client
from ..errors import UsageError
from ..models.invoice import InvoiceRunResult
from ..validation.request_validator import SendRequestValidator


logger = logging.getLogger(__name__)


class InvoiceDispatchWorkflow(BaseWorkflow):
    """
    Log in and trigger the send action of one invoice.

    Examples:
        >>> workflow = InvoiceDispatchWorkflow(AppConfig.load())
        >>> result = workflow.run(invoice_id="1119419")
        >>> result.to_dict()
        {'success': True, 'invoice_id': '1119419', 'confirmed': True}
    """

    def run(
        self,
        invoice_id: Optional[str] = None,
        invoice_number: Optional[str] = None,
        debug: bool = False
    ) -> InvoiceRunResult:
        """
        Send an invoice.

        Args:
            invoice_id: INV24 internal id (direct send action)
            invoice_number: Invoice number to look up in the invoice list
            debug: Use a visible browser

        Returns:
            InvoiceRunResult

        Raises:
            UsageError: Unless exactly one of invoice_id/invoice_number is given
            ConfigurationError: If credentials are missing
        """
        validation = SendRequestValidator().validate({
            "invoice_id": invoice_id,
            "invoice_number": invoice_number,
        })
        if not validation.is_valid:
            raise UsageError("; ".join(validation.errors))
        for warning in validation.warnings:
            logger.warning(warning)

        credentials = self.config.credentials()

        logger.info("Starting INV24 invoice send")
        browser = self.open_browser(debug)
        try:
            client = self.new_client(browser)

            login = client.login(credentials)
            if login.is_failure:
                return InvoiceRunResult.failed(login.message)

            if invoice_id:
                return self.send_by_id(client, invoice_id)
            return self.send_by_number(client, invoice_number)

        except Exception as e:
            logger.error(f"Invoice send aborted: {e}", exc_info=True)
            return InvoiceRunResult.failed(str(e))

        finally:
            browser.close()

    def send_by_id(self, client: Inv24Client, invoice_id: str) -> InvoiceRunResult:
        """
        Send through the direct action URL on an already logged-in client.

        Success requires a success phrase on the resulting page.
        """
        sent = client.send_by_id(invoice_id)
        if sent.is_failure:
            return InvoiceRunResult(success=False, invoice_id=invoice_id, error=sent.message)

        outcome = sent.value
        if not outcome.success:
            logger.error(f"Send of invoice ID {invoice_id} may have failed (signals: {outcome.signals})")
            client.save_screenshot("send_failed")
            return InvoiceRunResult(success=False, invoice_id=invoice_id, error=outcome.error)

        logger.info("Invoice sent")
        return InvoiceRunResult(success=True, invoice_id=invoice_id, confirmed=True)

    def send_by_number(self, client: Inv24Client, invoice_number: str) -> InvoiceRunResult:
        """
        Send by clicking the send icon in the invoice's list row.

        The page is read again after the click. An error phrase makes the
        send a failure; a success phrase confirms it. With neither the click
        is reported as a success with ``confirmed=False``: INV24 does not
        always show a message for this action.
        """
        sent = client.send_by_number(invoice_number)
        if sent.is_failure:
            logger.error(sent.message)
            return InvoiceRunResult(success=False, invoice_number=invoice_number, error=sent.message)

        outcome = sent.value
        if outcome.signals.get("error_marker"):
            logger.error(f"INV24 reported an error after sending invoice #{invoice_number}")
            client.save_screenshot("send_failed")
            return InvoiceRunResult(success=False, invoice_number=invoice_number, error=outcome.error)

        if outcome.success:
            logger.info("Invoice sent")
        else:
            logger.warning(
                f"Send icon for invoice #{invoice_number} clicked but no confirmation "
                f"message was shown; check INV24 if delivery matters"
            )

        return InvoiceRunResult(success=True, invoice_number=invoice_number, confirmed=outcome.success)
