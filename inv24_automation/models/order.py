"""
Canonical order models.

An Order is what the field mapper produces from a loosely shaped payload.
Values are kept exactly as they arrived (numbers stay numbers) and are only
turned into form strings when they are typed into the INV24 form.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Tuple, Union


FormValue = Union[str, int, float]


@dataclass(frozen=True)
class Client:
    """
    Invoice recipient.

    Every field is optional; ``None`` means the matching form field is
    left at whatever default the remote form shows.

    Attributes:
        name: Receiver (contact person) name
        company: Legal/company name shown on the invoice
        tax_id: Local company identifier (EIK) or personal code
        vat_number: VAT registration number
        address: Postal address
        email: Address the invoice can be sent to
    """

    name: Optional[str] = None
    company: Optional[str] = None
    tax_id: Optional[str] = None
    vat_number: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class LineItem:
    """
    One invoice row.

    Attributes:
        name: Product or service name
        price: Unit price, as given in the payload
        quantity: Quantity, as given in the payload
        vat: VAT rate in percent
        unit: Unit of measure (e.g. "бр")
    """

    name: str
    price: FormValue
    quantity: FormValue
    vat: FormValue
    unit: str


@dataclass(frozen=True)
class Order:
    """Client plus line items, in submission order."""

    client: Client = field(default_factory=Client)
    items: Tuple[LineItem, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary with ``client`` and ``items`` keys
        """
        return {
            "client": asdict(self.client),
            "items": [asdict(item) for item in self.items],
        }


def to_form_value(value: FormValue) -> str:
    """
    Render a payload value the way it should be typed into the form.

    Integral floats lose their ``.0`` so that ``45.0`` is entered as ``45``.

    Examples:
        >>> to_form_value(45)
        '45'
        >>> to_form_value(45.0)
        '45'
        >>> to_form_value("12.50")
        '12.50'
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
