"""
HTML scraping of the INV24 invoice list.

The list page is parsed with BeautifulSoup to recover the internal id of
an invoice (needed by the direct send action) from its table row.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .outcome import INVOICE_ID_LINK_PATTERN, INVOICE_NUMBER_PATTERN


logger = logging.getLogger(__name__)


class ListingScraper:
    """
    Parser for the invoice list HTML.

    Examples:
        >>> html = browser.get_page_source().value
        >>> scraper = ListingScraper(html)
        >>> scraper.find_invoice_id("100000000023")
        '1119419'
    """

    def __init__(self, html: str, parser: str = "lxml"):
        """
        Initialize scraper with HTML content.

        Args:
            html: HTML string to parse
            parser: Parser to use (default: "lxml")
        """
        self.html = html or ""
        self.soup = BeautifulSoup(self.html, parser)

        logger.debug(f"ListingScraper initialized with {len(self.html)} bytes of HTML")

    def invoice_rows(self) -> List[Tag]:
        """
        Table rows that belong to an invoice.

        A row counts when it holds an invoice number or an id-bearing
        invoice link; header and footer rows hold neither.
        """
        rows = []
        for row in self.soup.find_all("tr"):
            if row.find("tr"):
                # Layout tables wrap the list; only innermost rows count
                continue
            markup = str(row)
            if INVOICE_ID_LINK_PATTERN.search(markup) or INVOICE_NUMBER_PATTERN.search(row.get_text(" ")):
                rows.append(row)
        return rows

    @staticmethod
    def _row_invoice_id(row: Tag) -> Optional[str]:
        match = INVOICE_ID_LINK_PATTERN.search(str(row))
        return match.group(1) if match else None

    def find_invoice_id(self, invoice_number: Optional[str] = None) -> Optional[str]:
        """
        Return the internal id of an invoice in the list.

        Args:
            invoice_number: Number to look for; None picks the first
                (most recent) invoice row

        Returns:
            Invoice id, or None if no matching row carries one
        """
        rows = self.invoice_rows()

        if invoice_number:
            rows = [row for row in rows if invoice_number in row.get_text(" ")]
            if not rows:
                logger.warning(f"Invoice {invoice_number} not found in listing")
                return None

        for row in rows:
            invoice_id = self._row_invoice_id(row)
            if invoice_id:
                return invoice_id

        logger.warning("No invoice id found in listing rows")
        return None
