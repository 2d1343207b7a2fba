"""
Invoice creation workflow.

Drives the INV24 "add invoice" form from a canonical Order:

    login -> open form -> client -> line items -> save -> classify -> [send]

Every step runs in order and the first failure ends the run. The browser
is closed on every exit path.
"""

import logging
from typing import Optional

from .base import BaseWorkflow, BrowserFactory
from .send_invoice import InvoiceDispatchWorkflow
from ..automation.browser import create_browser
from ..automation.inv24.client import Inv24Client, ResultPage
from ..errors import ConfigurationError
from ..models.invoice import (
    DEFAULT_INVOICE_TYPE,
    InvoiceRunResult,
    InvoiceType,
    WorkflowOptions,
)
from ..models.order import Client, Order
from ..utils.config import AppConfig, Credentials


logger = logging.getLogger(__name__)


class InvoiceCreationWorkflow(BaseWorkflow):
    """
    Create one invoice in INV24.

    Examples:
        >>> config = AppConfig.load()
        >>> order = map_order(payload, MappingDefaults.from_config(config))
        >>> result = InvoiceCreationWorkflow(config).run(order, WorkflowOptions(send_email=True))
        >>> print(result.to_dict())
    """

    def __init__(self, config: AppConfig, browser_factory: BrowserFactory = create_browser):
        super().__init__(config, browser_factory)
        self.dispatch = InvoiceDispatchWorkflow(config, browser_factory)

    def resolve_invoice_type(self, options: WorkflowOptions) -> InvoiceType:
        """
        Effective document type: option > configuration > proforma.

        Raises:
            ConfigurationError: If the configured type is not a known code
        """
        if options.invoice_type is not None:
            return options.invoice_type

        if self.config.invoice_type:
            try:
                return InvoiceType.parse(self.config.invoice_type)
            except ValueError as e:
                raise ConfigurationError(f"Invalid invoice_type in configuration: {e}")

        return DEFAULT_INVOICE_TYPE

    def run(self, order: Order, options: Optional[WorkflowOptions] = None) -> InvoiceRunResult:
        """
        Create the invoice described by ``order``.

        Args:
            order: Canonical order
            options: Invoice type override, send-after-create, debug browser

        Returns:
            InvoiceRunResult; step failures are reported in ``error``

        Raises:
            ConfigurationError: Missing credentials or invalid invoice type,
                raised before a browser is started
        """
        options = options or WorkflowOptions()
        credentials = self.config.credentials()
        invoice_type = self.resolve_invoice_type(options)

        logger.info("Starting INV24 invoice creation")
        browser = self.open_browser(options.debug)
        try:
            client = self.new_client(browser)
            return self._create(client, credentials, order, options, invoice_type)

        except Exception as e:
            logger.error(f"Invoice creation aborted: {e}", exc_info=True)
            return InvoiceRunResult.failed(str(e))

        finally:
            browser.close()

    def _create(
        self,
        client: Inv24Client,
        credentials: Credentials,
        order: Order,
        options: WorkflowOptions,
        invoice_type: InvoiceType
    ) -> InvoiceRunResult:
        logger.info("Logging in to INV24")
        step = client.login(credentials)
        if step.is_failure:
            return InvoiceRunResult.failed(step.message)

        step = client.open_invoice_form(invoice_type)
        if step.is_failure:
            return InvoiceRunResult.failed(step.message)

        logger.info("Filling client info")
        step = client.fill_client(order.client)
        if step.is_failure:
            return InvoiceRunResult.failed(step.message)

        logger.info(f"Adding {len(order.items)} product(s)")
        for item in order.items:
            step = client.add_line_item(item)
            if step.is_failure:
                return InvoiceRunResult.failed(step.message)

        logger.info("Submitting invoice")
        step = client.submit_invoice()
        if step.is_failure:
            return InvoiceRunResult.failed(step.message)

        page_result = client.read_creation_outcome()
        if page_result.is_failure:
            return InvoiceRunResult.failed(page_result.message)

        page = page_result.value
        result = self._classify(client, page)

        if result.success and options.send_email:
            self._send_after_create(client, page, result, order.client)

        return result

    def _classify(self, client: Inv24Client, page: ResultPage) -> InvoiceRunResult:
        outcome = page.outcome
        result = InvoiceRunResult(
            success=outcome.success,
            invoice_number=outcome.invoice_number,
            url=page.url,
            error=outcome.error,
        )

        if outcome.is_indeterminate:
            logger.warning(
                f"URL and page content disagree about the save (url={page.url}, "
                f"signals={outcome.signals}); review the invoice in INV24"
            )
            client.save_screenshot("outcome_indeterminate")
            result.needs_review = True
            if self.config.strict_classification:
                result.success = False
                result.error = "Invoice save outcome is ambiguous - check INV24"

        if not result.success:
            logger.error(f"Invoice creation may have failed (final URL: {page.url})")
            if not outcome.is_indeterminate:
                client.save_screenshot("submit_rejected")
            return result

        logger.info("Invoice created successfully")
        if result.invoice_number:
            logger.info(f"Invoice number: {result.invoice_number}")
        return result

    def _send_after_create(
        self,
        client: Inv24Client,
        page: ResultPage,
        result: InvoiceRunResult,
        customer: Client
    ) -> None:
        """
        Send the new invoice in the same session.

        Updates ``result`` in place; the invoice stays created whatever
        happens here.
        """
        if not customer.email:
            logger.warning("Send requested but the client has no email address; skipping")
            return

        logger.info("Sending invoice email")
        invoice_id = client.resolve_invoice_id(page.url, page.content, result.invoice_number)
        if not invoice_id:
            result.email_pending = True
            result.email_error = "Could not determine the new invoice's id - send it from INV24"
            logger.warning(result.email_error)
            return

        result.invoice_id = invoice_id
        sent = self.dispatch.send_by_id(client, invoice_id)
        result.email_sent = sent.success
        if not sent.success:
            result.email_pending = True
            result.email_error = sent.error
            logger.warning(f"Invoice created but not sent: {sent.error}")
