"""
Unit tests for Inv24Client.

Tests form filling, outcome reading and send actions against FakeBrowser.
"""

import pytest

from inv24_automation.automation.inv24.client import Inv24Client
from inv24_automation.automation.inv24.selectors import Inv24Pages
from inv24_automation.automation.inv24.timings import Timings
from inv24_automation.models.invoice import InvoiceType
from inv24_automation.models.order import Client, LineItem
from inv24_automation.utils.config import Credentials, SecureString

from conftest import (
    LISTING_HTML,
    LISTING_URL,
    SAVE_BUTTON,
    SEND_ICON,
    FakeBrowser,
)


@pytest.fixture
def browser():
    return FakeBrowser()


@pytest.fixture
def client(browser, tmp_path):
    return Inv24Client(
        browser,
        pages=Inv24Pages("https://www.inv24.com"),
        timings=Timings.instant(),
        screenshot_dir=tmp_path / "screens",
    )


@pytest.fixture
def logged_in(client):
    client.login(Credentials(login="owner@example.com", secret=SecureString("s3cret")))
    return client


class TestInvoiceForm:
    """Test suite for the add form."""

    def test_open_form_requires_login(self, client, browser):
        result = client.open_invoice_form(InvoiceType.PROFORMA)

        assert result.is_failure
        assert browser.navigations == []

    def test_open_form_url(self, logged_in, browser):
        result = logged_in.open_invoice_form(InvoiceType.OFFER)

        assert result.is_success
        assert browser.navigations[-1] == (
            "https://www.inv24.com/index.php?lang=bg&class=invoices&action=viewAdd&invoice_type=2"
        )
        assert browser.calls[-1][0] == "wait_for_network_idle"

    def test_fill_client_skips_absent_fields(self, logged_in, browser):
        result = logged_in.fill_client(Client(name="Ivan Petrov", email="ivan@example.com"))

        assert result.is_success
        assert browser.inputs[-2:] == [
            ('input[name="receiver"]', "Ivan Petrov"),
            ('input[name="client_email"]', "ivan@example.com"),
        ]

    def test_fill_client_all_fields(self, logged_in, browser):
        logged_in.fill_client(Client(
            name="Test Customer",
            company="Test Company Ltd",
            tax_id="123456789",
            vat_number="BG123456789",
            address="Test Street 1, Sofia",
            email="test@example.com",
        ))

        assert browser.inputs_for('input[name="client_name"]') == ["Test Company Ltd"]
        assert browser.inputs_for('input[name="client_personal_code"]') == ["123456789"]
        assert browser.inputs_for('input[name="client_vat_number"]') == ["BG123456789"]
        assert browser.inputs_for('textarea[name="client_address"]') == ["Test Street 1, Sofia"]

    def test_add_line_item(self, logged_in, browser):
        result = logged_in.add_line_item(
            LineItem(name="CBD Oil 10%", price=45.0, quantity=2, vat="20", unit="бр")
        )

        assert result.is_success
        assert browser.inputs[-5:] == [
            ('input[name="g_name"]', "CBD Oil 10%"),
            ('input[name="g_price"]', "45"),
            ('input[name="g_quantity"]', "2"),
            ('input[name="g_vat"]', "20"),
            ('input[name="g_measurement"]', "бр"),
        ]
        assert browser.clicks[-1] == "input.lisaToote"
        assert browser.pauses == [0.0]

    def test_add_line_item_missing_field(self, logged_in, browser):
        browser.missing.add('input[name="g_price"]')

        result = logged_in.add_line_item(
            LineItem(name="Tea", price=3, quantity=1, vat="20", unit="бр")
        )

        assert result.is_failure
        assert "Tea" in result.message
        assert "input.lisaToote" not in browser.clicks
        assert len(browser.screenshots) == 1

    def test_submit(self, logged_in, browser):
        browser.redirects[SAVE_BUTTON] = LISTING_URL

        assert logged_in.submit_invoice().is_success
        assert browser.current_url == LISTING_URL

    def test_read_creation_outcome(self, logged_in, browser):
        browser.current_url = LISTING_URL
        browser.sources["viewManage"] = LISTING_HTML

        page = logged_in.read_creation_outcome().unwrap()

        assert page.url == LISTING_URL
        assert page.content == LISTING_HTML
        assert page.outcome.success


class TestResolveInvoiceId:
    """Test suite for invoice id lookup."""

    def test_from_url(self, logged_in, browser):
        url = "https://www.inv24.com/index.php?lang=bg&class=invoices&action=view&id=77"

        assert logged_in.resolve_invoice_id(url, "") == "77"
        assert browser.navigations == ["https://www.inv24.com/bg/"]

    def test_from_listing(self, logged_in, browser):
        browser.sources["viewManage"] = LISTING_HTML
        url = "https://www.inv24.com/index.php?lang=bg&class=invoices&action=saved"

        invoice_id = logged_in.resolve_invoice_id(url, "Записано успешно", "100000000023")

        assert invoice_id == "1119419"
        assert browser.navigations[-1] == LISTING_URL

    def test_listing_unreachable(self, logged_in, browser):
        browser.fail_navigation.add("viewManage")

        assert logged_in.resolve_invoice_id(None, None, "100000000023") is None


class TestSend:
    """Test suite for send actions."""

    def test_send_by_id(self, logged_in, browser):
        browser.sources["action=send"] = "Фактурата е изпратена успешно"

        outcome = logged_in.send_by_id("1119419").unwrap()

        assert outcome.success
        assert browser.navigations[-1] == (
            "https://www.inv24.com/index.php?lang=bg&class=invoices&action=send&id=1119419"
        )

    def test_send_by_id_failure_phrase(self, logged_in, browser):
        browser.sources["action=send"] = "Фактурата не е изпратена"

        outcome = logged_in.send_by_id("1119419").unwrap()

        assert not outcome.success
        assert outcome.error == "Send may have failed - check INV24"

    def test_send_by_number_clicks_icon(self, logged_in, browser):
        result = logged_in.send_by_number("100000000023")

        assert result.is_success
        assert ("find_element", "//tr[contains(normalize-space(.), '100000000023')]") in browser.calls
        assert browser.clicks[-1] == SEND_ICON

    def test_send_by_number_row_missing(self, logged_in, browser):
        browser.missing.add("//tr[contains(normalize-space(.), '100000000099')]")
        clicks_before = list(browser.clicks)

        result = logged_in.send_by_number("100000000099")

        assert result.is_failure
        assert result.message == "Invoice 100000000099 not found"
        assert browser.clicks == clicks_before

    def test_send_by_number_icon_missing(self, logged_in, browser):
        browser.missing.add(SEND_ICON)
        clicks_before = list(browser.clicks)

        result = logged_in.send_by_number("100000000023")

        assert result.is_failure
        assert result.message == "Could not find send button"
        assert browser.clicks == clicks_before
