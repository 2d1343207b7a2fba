"""
Outcome classification for INV24 pages.

INV24 exposes no API, so whether a save or a send worked is inferred from
the URL the browser lands on and from phrases in the rendered page. These
rules are heuristics: the classification is advisory and ``INDETERMINATE``
marks the cases where URL and content disagree.

Everything here is a pure function of (url, content).
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional
from urllib.parse import parse_qs, urlparse

from .selectors import ADD_FORM_URL_PATTERN, LISTING_URL_PATTERN


class OutcomeStatus(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    INDETERMINATE = "indeterminate"


# "успешно" (successfully) but not "неуспешно" (unsuccessfully)
CREATE_SUCCESS_MARKER = re.compile(r"(?<!не)успешно", re.IGNORECASE)

# Explicit error phrases; any of them contradicts a success-shaped URL
ERROR_MARKERS = re.compile(r"неуспешно|грешка|не е изпратен", re.IGNORECASE)

# "успешно" / "изпратен" (sent), excluding their negated forms
SEND_SUCCESS_MARKER = re.compile(r"(?<!не)успешно|(?<!не е )изпратен", re.IGNORECASE)

# Invoice numbers are zero-padded and start with 100 (e.g. 100000000023)
INVOICE_NUMBER_PATTERN = re.compile(r"(?<!\d)100\d{9,10}(?!\d)")

# Links carrying the internal invoice id, e.g. ...&action=send&id=1119419
INVOICE_ID_LINK_PATTERN = re.compile(
    r"class=invoices[^\"'\s>]*?(?:&|&amp;)id=(\d+)", re.IGNORECASE
)

CREATE_FAILURE_MESSAGE = "Form submission did not redirect to success page"
SEND_FAILURE_MESSAGE = "Send may have failed - check INV24"


@dataclass
class Outcome:
    """
    Classification of a page after an action.

    Attributes:
        status: SUCCESS, FAILURE or INDETERMINATE
        success: Verdict of the rules (an INDETERMINATE outcome can be True)
        invoice_number: Invoice number found in the content, if any
        error: Diagnostic message for failures
        signals: The individual signals, for logging and manual review
    """

    status: OutcomeStatus
    success: bool
    invoice_number: Optional[str] = None
    error: Optional[str] = None
    signals: Dict[str, bool] = field(default_factory=dict)

    @property
    def is_indeterminate(self) -> bool:
        return self.status == OutcomeStatus.INDETERMINATE


def extract_invoice_number(content: str) -> Optional[str]:
    """
    Find the first invoice number in page content.

    Examples:
        >>> extract_invoice_number("Фактура № 100000000023 е създадена")
        '100000000023'
        >>> extract_invoice_number("no number here") is None
        True
    """
    match = INVOICE_NUMBER_PATTERN.search(content or "")
    return match.group(0) if match else None


def extract_invoice_id(url: Optional[str], content: Optional[str] = None) -> Optional[str]:
    """
    Find the internal invoice id in a URL or in invoice links of a page.

    The URL's ``id`` query parameter wins over links in the content.

    Examples:
        >>> extract_invoice_id("https://www.inv24.com/index.php?class=invoices&action=view&id=77")
        '77'
        >>> extract_invoice_id(None, '<a href="index.php?class=invoices&amp;action=send&amp;id=1119419">')
        '1119419'
    """
    if url:
        ids = parse_qs(urlparse(url).query).get("id")
        if ids and ids[0].isdigit():
            return ids[0]

    if content:
        match = INVOICE_ID_LINK_PATTERN.search(content)
        if match:
            return match.group(1)

    return None


def classify_creation(url: Optional[str], content: Optional[str]) -> Outcome:
    """
    Classify the page reached after saving the invoice form.

    Rules:
    - Success when the URL is the invoice list OR the content carries the
      success marker. Otherwise failure with a generic message.
    - Indeterminate when the signals disagree: a list URL with an error
      phrase on the page, or the success marker while still on the add form.
    - The invoice number is extracted regardless of the verdict.

    Examples:
        >>> classify_creation("https://x/index.php?action=viewAdd", "").success
        False
        >>> classify_creation("https://x/index.php?action=viewManage", "").status
        <OutcomeStatus.SUCCESS: 'success'>
    """
    url = url or ""
    content = content or ""

    signals = {
        "listing_url": bool(re.search(LISTING_URL_PATTERN, url)),
        "success_marker": bool(CREATE_SUCCESS_MARKER.search(content)),
        "error_marker": bool(ERROR_MARKERS.search(content)),
        "add_form_url": bool(re.search(ADD_FORM_URL_PATTERN, url)),
    }

    success = signals["listing_url"] or signals["success_marker"]
    conflicting = (
        (signals["listing_url"] and signals["error_marker"])
        or (signals["success_marker"] and signals["add_form_url"])
    )

    if success and conflicting:
        status = OutcomeStatus.INDETERMINATE
    elif success:
        status = OutcomeStatus.SUCCESS
    else:
        status = OutcomeStatus.FAILURE

    return Outcome(
        status=status,
        success=success,
        invoice_number=extract_invoice_number(content),
        error=None if success else CREATE_FAILURE_MESSAGE,
        signals=signals,
    )


def classify_send(content: Optional[str]) -> Outcome:
    """
    Classify the page reached after triggering a send.

    An error phrase wins over any success phrase; with neither the send is
    treated as failed.

    Examples:
        >>> classify_send("Фактурата е изпратена успешно").success
        True
        >>> classify_send("Фактурата не е изпратена").error
        'Send may have failed - check INV24'
    """
    content = content or ""

    signals = {
        "success_marker": bool(SEND_SUCCESS_MARKER.search(content)),
        "error_marker": bool(ERROR_MARKERS.search(content)),
    }

    if signals["error_marker"] or not signals["success_marker"]:
        return Outcome(
            status=OutcomeStatus.FAILURE,
            success=False,
            error=SEND_FAILURE_MESSAGE,
            signals=signals,
        )

    return Outcome(status=OutcomeStatus.SUCCESS, success=True, signals=signals)
