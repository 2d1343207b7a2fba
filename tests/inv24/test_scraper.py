"""
Unit tests for ListingScraper.
"""

from inv24_automation.automation.inv24.scraper import ListingScraper

from conftest import LISTING_HTML


class TestListingScraper:
    """Test suite for the invoice list parser."""

    def test_invoice_rows_skip_header_and_layout(self):
        rows = ListingScraper(LISTING_HTML).invoice_rows()

        assert len(rows) == 2

    def test_find_by_number(self):
        assert ListingScraper(LISTING_HTML).find_invoice_id("100000000023") == "1119419"

    def test_first_row_without_number(self):
        assert ListingScraper(LISTING_HTML).find_invoice_id() == "1119420"

    def test_unknown_number(self):
        assert ListingScraper(LISTING_HTML).find_invoice_id("100000000099") is None

    def test_row_without_link(self):
        html = "<table><tr><td>100000000023</td><td>Draft</td></tr></table>"

        assert ListingScraper(html).find_invoice_id("100000000023") is None

    def test_empty_html(self):
        assert ListingScraper("").find_invoice_id() is None
