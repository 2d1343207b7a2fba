"""
INV24 automation client.

This module provides Inv24Client, the session-level operations on the
INV24 UI: opening the add form, filling client and product rows, saving,
reading the outcome, resolving invoice ids and triggering sends.

The client never opens or closes the browser; the workflows own that.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from selenium.webdriver.common.by import By

from ..interfaces import WebBrowser
from .outcome import (
    Outcome,
    classify_creation,
    classify_send,
    extract_invoice_id,
)
from .scraper import ListingScraper
from .selectors import Inv24Pages, Inv24Selectors
from .session import SessionManager
from .timings import Timings
from ...models.invoice import InvoiceType
from ...models.order import Client, LineItem, to_form_value
from ...models.result import Result
from ...utils.config import Credentials


logger = logging.getLogger(__name__)


@dataclass
class ResultPage:
    """Page reached after saving, with its classification."""

    url: str
    content: str
    outcome: Outcome


class Inv24Client:
    """
    Client for the INV24 invoice UI.

    Examples:
        >>> client = Inv24Client(browser, pages=Inv24Pages(config.base_url))
        >>> client.login(config.credentials())
        >>> client.open_invoice_form(InvoiceType.PROFORMA)
        >>> client.fill_client(order.client)
        >>> for item in order.items:
        ...     client.add_line_item(item)
        >>> client.submit_invoice()
        >>> outcome = client.read_creation_outcome().value.outcome
    """

    def __init__(
        self,
        browser: WebBrowser,
        pages: Optional[Inv24Pages] = None,
        timings: Optional[Timings] = None,
        screenshot_dir: Optional[Path] = None
    ):
        """
        Initialize Inv24Client.

        Args:
            browser: Browser for this session
            pages: URL builder (defaults to www.inv24.com)
            timings: Named waits
            screenshot_dir: Where failure screenshots go (None disables them)
        """
        self.browser = browser
        self.pages = pages or Inv24Pages()
        self.timings = timings or Timings()
        self.screenshot_dir = screenshot_dir
        self.selectors = Inv24Selectors()
        self.session = SessionManager(browser, self.pages, self.selectors, self.timings)

    def save_screenshot(self, name: str) -> None:
        """Save a timestamped screenshot, if a screenshot directory is set."""
        if self.screenshot_dir is None:
            return
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        result = self.browser.screenshot(str(self.screenshot_dir / f"{name}_{timestamp}.png"))
        if result.is_failure:
            logger.warning(f"Screenshot '{name}' not saved: {result.message}")

    def _fill(self, selector: str, value) -> Result[None]:
        return self.browser.input_text(
            By.CSS_SELECTOR, selector, to_form_value(value), timeout=self.timings.element
        )

    def _click(self, selector: str) -> Result[None]:
        return self.browser.click(By.CSS_SELECTOR, selector, timeout=self.timings.element)

    def login(self, credentials: Credentials) -> Result[None]:
        result = self.session.login(credentials)
        if result.is_failure:
            self.save_screenshot("login_failed")
        return result

    def open_invoice_form(self, invoice_type: InvoiceType) -> Result[None]:
        """
        Open the add form with the document type preselected.

        Waits for the page to go quiet because client-side scripts finish
        building the form after load.
        """
        login_check = self.session.require_login()
        if login_check.is_failure:
            return login_check

        logger.info(f"Opening new {invoice_type.name.lower()} form")
        result = self.browser.navigate(self.pages.add_invoice(invoice_type.value)).and_then(
            lambda _: self.browser.wait_for_network_idle(self.timings.network_idle)
        )
        if result.is_failure:
            return Result.failure(f"Could not open invoice form: {result.message}", result.error)
        return Result.success(None, "Invoice form opened")

    def fill_client(self, client: Client) -> Result[None]:
        """
        Fill the client block.

        Only fields with a value are typed; the rest keep the form default.
        """
        form = self.selectors.form
        fields = (
            (form.receiver_input, client.name),
            (form.client_name_input, client.company),
            (form.client_personal_code_input, client.tax_id),
            (form.client_vat_number_input, client.vat_number),
            (form.client_address_textarea, client.address),
            (form.client_email_input, client.email),
        )

        filled = 0
        for selector, value in fields:
            if not value:
                continue
            result = self._fill(selector, value)
            if result.is_failure:
                self.save_screenshot("client_fill_failed")
                return Result.failure(f"Could not fill client field: {result.message}", result.error)
            filled += 1

        logger.info(f"Filled {filled} client field(s)")
        return Result.success(None, f"Filled {filled} client fields")

    def add_line_item(self, item: LineItem) -> Result[None]:
        """
        Fill the product row and commit it.

        The form has one editable row, so the pause after committing lets
        INV24 register the row before the fields are reused.
        """
        form = self.selectors.form
        fields = (
            (form.item_name_input, item.name),
            (form.item_price_input, item.price),
            (form.item_quantity_input, item.quantity),
            (form.item_vat_input, item.vat),
            (form.item_measurement_input, item.unit),
        )

        for selector, value in fields:
            result = self._fill(selector, value)
            if result.is_failure:
                self.save_screenshot("item_fill_failed")
                return Result.failure(
                    f"Could not fill line item '{item.name}': {result.message}", result.error
                )

        result = self._click(form.add_item_button)
        if result.is_failure:
            self.save_screenshot("item_add_failed")
            return Result.failure(f"Could not add line item '{item.name}': {result.message}", result.error)

        self.browser.pause(self.timings.row_settle)
        logger.info(
            f"Added: {to_form_value(item.quantity)}x {item.name} @ {to_form_value(item.price)}"
        )
        return Result.success(None, f"Added {item.name}")

    def submit_invoice(self) -> Result[None]:
        """Save the form and give INV24 time to process and redirect."""
        result = self._click(self.selectors.form.save_button)
        if result.is_failure:
            self.save_screenshot("submit_failed")
            return Result.failure(f"Could not submit invoice: {result.message}", result.error)

        self.browser.pause(self.timings.submit_settle)
        return Result.success(None, "Invoice submitted")

    def _read_page(self) -> Result[tuple]:
        url_result = self.browser.get_current_url()
        if url_result.is_failure:
            return Result.failure(url_result.message, url_result.error)
        content_result = self.browser.get_page_source()
        if content_result.is_failure:
            return Result.failure(content_result.message, content_result.error)
        return Result.success((url_result.value, content_result.value))

    def read_creation_outcome(self) -> Result[ResultPage]:
        """Classify the page reached after saving."""
        page = self._read_page()
        if page.is_failure:
            return Result.failure(f"Could not read result page: {page.message}", page.error)

        url, content = page.value
        return Result.success(ResultPage(url, content, classify_creation(url, content)))

    def resolve_invoice_id(
        self,
        url: Optional[str],
        content: Optional[str],
        invoice_number: Optional[str] = None
    ) -> Optional[str]:
        """
        Find the internal id of a freshly created invoice.

        Tries the result URL and page first, then opens the invoice list
        and reads the row holding ``invoice_number`` (or the newest row).
        """
        invoice_id = extract_invoice_id(url, content)
        if invoice_id:
            return invoice_id

        logger.info("Invoice id not on result page, looking it up in the invoice list")
        listing = self.browser.navigate(self.pages.listing()).and_then(
            lambda _: self.browser.wait_for_network_idle(self.timings.network_idle)
        ).and_then(
            lambda _: self.browser.get_page_source()
        )
        if listing.is_failure:
            logger.warning(f"Could not open invoice list: {listing.message}")
            return None

        return ListingScraper(listing.value).find_invoice_id(invoice_number)

    def send_by_id(self, invoice_id: str) -> Result[Outcome]:
        """
        Trigger the direct send action for an invoice id.

        Returns:
            Result wrapping the send Outcome; failure only when the page
            could not be reached or read
        """
        logger.info(f"Sending invoice ID {invoice_id}")
        navigation = self.browser.navigate(self.pages.send(invoice_id))
        if navigation.is_failure:
            return Result.failure(f"Could not open send action: {navigation.message}", navigation.error)

        self.browser.pause(self.timings.send_settle)

        content = self.browser.get_page_source()
        if content.is_failure:
            return Result.failure(f"Could not read send result: {content.message}", content.error)

        return Result.success(classify_send(content.value))

    def send_by_number(self, invoice_number: str) -> Result[Outcome]:
        """
        Find an invoice in the list by its number and click its send icon.

        Nothing is clicked unless both the row and the icon are found. After
        the click the page is read once more; see ``InvoiceDispatchWorkflow``
        for how that confirmation is interpreted.

        Returns:
            Result wrapping the send Outcome read after the click; failure
            with a "not found" message when the row or icon is missing
        """
        logger.info(f"Finding invoice #{invoice_number}")
        listing = self.browser.navigate(self.pages.listing()).and_then(
            lambda _: self.browser.wait_for_network_idle(self.timings.network_idle)
        )
        if listing.is_failure:
            return Result.failure(f"Could not open invoice list: {listing.message}", listing.error)

        row = self.browser.find_element(
            By.XPATH,
            self.selectors.listing.row_containing(invoice_number),
            timeout=self.timings.listing_lookup
        )
        if row.is_failure:
            return Result.failure(f"Invoice {invoice_number} not found")

        button = self.browser.find_element_within(
            row.value,
            By.CSS_SELECTOR,
            self.selectors.listing.send_icon,
            timeout=self.timings.listing_lookup
        )
        if button.is_failure:
            return Result.failure("Could not find send button")

        click = self.browser.click_element(button.value)
        if click.is_failure:
            return Result.failure(f"Could not click send button: {click.message}", click.error)

        self.browser.pause(self.timings.send_settle)

        content = self.browser.get_page_source()
        if content.is_failure:
            return Result.failure(f"Could not read send result: {content.message}", content.error)

        return Result.success(classify_send(content.value))
