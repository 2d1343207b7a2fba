"""
INV24 website selectors and page addresses.

This module centralizes all CSS/XPath selectors and URLs for INV24.
Centralizing them makes it easier to update when the site structure changes.

Usage:
    >>> from inv24_automation.automation.inv24.selectors import Inv24Selectors
    >>> selectors = Inv24Selectors()
    >>> browser.input_text(By.CSS_SELECTOR, selectors.login.email_input, email)
"""

from dataclasses import dataclass
from urllib.parse import urlencode


@dataclass(frozen=True)
class LoginSelectors:
    """Selectors for the public entry page."""

    email_input: str = 'input[name="userLogin"]'
    password_input: str = 'input[name="userPassword"]'
    login_button: str = 'input[name="submit"]'


@dataclass(frozen=True)
class InvoiceFormSelectors:
    """
    Selectors for the "add invoice" form.

    The form has a single editable product row: the ``g_*`` fields are
    filled and committed with the add button, then reused for the next item.
    """

    # Client block
    receiver_input: str = 'input[name="receiver"]'
    client_name_input: str = 'input[name="client_name"]'
    client_personal_code_input: str = 'input[name="client_personal_code"]'
    client_vat_number_input: str = 'input[name="client_vat_number"]'
    client_address_textarea: str = 'textarea[name="client_address"]'
    client_email_input: str = 'input[name="client_email"]'

    # Product row
    item_name_input: str = 'input[name="g_name"]'
    item_price_input: str = 'input[name="g_price"]'
    item_quantity_input: str = 'input[name="g_quantity"]'
    item_vat_input: str = 'input[name="g_vat"]'
    item_measurement_input: str = 'input[name="g_measurement"]'
    add_item_button: str = 'input.lisaToote'

    save_button: str = 'input[name="save_button"]'


@dataclass(frozen=True)
class ListingSelectors:
    """Selectors for the invoice list (viewManage)."""

    send_icon: str = 'img.sendInvImg'

    @staticmethod
    def row_containing(text: str) -> str:
        """
        XPath of the first table row whose text contains ``text``.

        Examples:
            >>> ListingSelectors.row_containing("100000000023")
            "//tr[contains(normalize-space(.), '100000000023')]"
        """
        if "'" in text:
            quoted = "concat('" + "', \"'\", '".join(text.split("'")) + "')"
        else:
            quoted = f"'{text}'"
        return f"//tr[contains(normalize-space(.), {quoted})]"


class Inv24Selectors:
    """
    Centralized selectors for INV24.

    Examples:
        >>> selectors = Inv24Selectors()
        >>> selectors.form.add_item_button
        'input.lisaToote'
    """

    def __init__(self):
        self.login = LoginSelectors()
        self.form = InvoiceFormSelectors()
        self.listing = ListingSelectors()


# URL reached after a successful login (list or any invoices page)
LOGIN_SUCCESS_URL_PATTERN = r"viewManage|invoices"

# URL of the invoice list; a redirect here after saving means success
LISTING_URL_PATTERN = r"viewManage"

# URL of the add form; still being here after saving means the save bounced
ADD_FORM_URL_PATTERN = r"action=viewAdd"


class Inv24Pages:
    """
    Builds INV24 page URLs.

    Examples:
        >>> pages = Inv24Pages("https://www.inv24.com")
        >>> pages.add_invoice("1")
        'https://www.inv24.com/index.php?lang=bg&class=invoices&action=viewAdd&invoice_type=1'
    """

    def __init__(self, base_url: str = "https://www.inv24.com", lang: str = "bg"):
        self.base_url = base_url.rstrip("/")
        self.lang = lang

    def _invoices(self, action: str, **params) -> str:
        query = {"lang": self.lang, "class": "invoices", "action": action}
        query.update(params)
        return f"{self.base_url}/index.php?{urlencode(query)}"

    def entry(self) -> str:
        """Public entry page holding the login form."""
        return f"{self.base_url}/{self.lang}/"

    def add_invoice(self, invoice_type: str) -> str:
        """Add form with the document type preselected."""
        return self._invoices("viewAdd", invoice_type=invoice_type)

    def listing(self) -> str:
        return self._invoices("viewManage")

    def send(self, invoice_id: str) -> str:
        """Direct "send by email" action for an invoice id."""
        return self._invoices("send", id=invoice_id)

