"""
Tests for InvoiceDispatchWorkflow.
"""

import pytest

from inv24_automation.errors import ConfigurationError, UsageError
from inv24_automation.workflows import InvoiceDispatchWorkflow

from conftest import BASE_URL, SEND_ICON, make_config


SEND_URL = f"{BASE_URL}/index.php?lang=bg&class=invoices&action=send&id=1119419"
ROW_XPATH = "//tr[contains(normalize-space(.), '100000000023')]"


@pytest.fixture
def workflow(config, browser_factory):
    return InvoiceDispatchWorkflow(config, browser_factory)


class TestRequestValidation:
    """Test suite for checks made before a browser is opened."""

    def test_neither_selector(self, workflow, browser_factory):
        with pytest.raises(UsageError):
            workflow.run()

        assert browser_factory.call_count == 0

    def test_both_selectors(self, workflow, browser_factory):
        with pytest.raises(UsageError):
            workflow.run(invoice_id="1119419", invoice_number="100000000023")

        assert browser_factory.call_count == 0

    def test_missing_credentials(self, tmp_path, browser_factory):
        workflow = InvoiceDispatchWorkflow(make_config(tmp_path, inv24_email=""), browser_factory)

        with pytest.raises(ConfigurationError):
            workflow.run(invoice_id="1119419")

        assert browser_factory.call_count == 0


class TestSendById:
    """Test suite for the direct send action."""

    def test_sent(self, workflow, fake_browser):
        fake_browser.sources["action=send"] = "Фактурата е изпратена успешно"

        result = workflow.run(invoice_id="1119419")

        assert result.success
        assert result.confirmed is True
        assert result.invoice_id == "1119419"
        assert fake_browser.navigations[-1] == SEND_URL
        assert fake_browser.close_count == 1

    def test_failure_marker(self, workflow, fake_browser):
        fake_browser.sources["action=send"] = "Грешка: фактурата не е изпратена"

        result = workflow.run(invoice_id="1119419")

        assert result.to_dict() == {
            "success": False,
            "invoice_id": "1119419",
            "error": "Send may have failed - check INV24",
        }
        assert fake_browser.close_count == 1

    def test_no_phrase_is_failure(self, workflow, fake_browser):
        result = workflow.run(invoice_id="1119419")

        assert not result.success
        assert result.error == "Send may have failed - check INV24"

    def test_login_failure(self, workflow, fake_browser):
        fake_browser.login_confirms = False

        result = workflow.run(invoice_id="1119419")

        assert not result.success
        assert "check INV24 credentials" in result.error
        assert SEND_URL not in fake_browser.navigations
        assert fake_browser.close_count == 1

    def test_debug_browser(self, workflow, fake_browser, browser_factory):
        fake_browser.sources["action=send"] = "изпратена успешно"

        workflow.run(invoice_id="1119419", debug=True)

        assert browser_factory.configs[0].headless is False


class TestSendByNumber:
    """Test suite for sending from the invoice list."""

    def test_clicked_without_message(self, workflow, fake_browser):
        result = workflow.run(invoice_number="100000000023")

        assert result.success
        assert result.confirmed is False
        assert result.invoice_number == "100000000023"
        assert fake_browser.clicks[-1] == SEND_ICON
        assert ("find_element", ROW_XPATH) in fake_browser.calls

    def test_clicked_and_confirmed(self, workflow, fake_browser):
        fake_browser.sources["viewManage"] = "Фактурата е изпратена успешно"

        result = workflow.run(invoice_number="100000000023")

        assert result.success
        assert result.confirmed is True

    def test_error_after_click(self, workflow, fake_browser):
        fake_browser.sources["viewManage"] = "Грешка при изпращане"

        result = workflow.run(invoice_number="100000000023")

        assert not result.success
        assert result.error == "Send may have failed - check INV24"

    def test_row_not_found(self, workflow, fake_browser):
        fake_browser.missing.add(ROW_XPATH)

        result = workflow.run(invoice_number="100000000023")

        assert not result.success
        assert result.error == "Invoice 100000000023 not found"
        assert SEND_ICON not in fake_browser.clicks
        assert fake_browser.close_count == 1

    def test_button_not_found(self, workflow, fake_browser):
        fake_browser.missing.add(SEND_ICON)

        result = workflow.run(invoice_number="100000000023")

        assert not result.success
        assert result.error == "Could not find send button"
        assert SEND_ICON not in fake_browser.clicks
