"""
Order payload normalisation.

Orders arrive from shop exports, hand-written JSON and other scripts, so the
same logical field can appear under several keys. The precedence of those
keys is declared once in the tables below and applied by ``map_order``.

A scalar value wins when it is truthy: empty strings, ``0`` and ``false``
fall through to the next alias. A list or object wins whenever it is
present, even when empty, so ``{"items": [], "products": [...]}`` has no
line items.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..errors import UsageError
from ..models.order import Client, LineItem, Order


logger = logging.getLogger(__name__)


class _ConfigDefault:
    """Marker for an item field whose fallback comes from configuration."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<configured {self.name}>"


# Block keys, highest precedence first
CLIENT_BLOCK_KEYS: Tuple[str, ...] = ("client", "customer")
ITEMS_BLOCK_KEYS: Tuple[str, ...] = ("items", "products", "line_items")

# Canonical client field -> payload keys, highest precedence first.
# No fallback: a field missing under every alias is omitted.
CLIENT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "name": ("name",),
    "company": ("company", "name"),
    "tax_id": ("eik", "personal_code"),
    "vat_number": ("vat_number",),
    "address": ("address",),
    "email": ("email",),
}

# Canonical item field -> (payload keys, fallback)
ITEM_FIELDS: Dict[str, Tuple[Tuple[str, ...], Any]] = {
    "name": (("name", "title"), "Product"),
    "price": (("price", "unit_price"), "0"),
    "quantity": (("quantity", "qty"), "1"),
    "unit": (("measurement", "unit"), _ConfigDefault("unit")),
    "vat": (("vat",), _ConfigDefault("vat")),
}


@dataclass(frozen=True)
class MappingDefaults:
    """
    Configured fallbacks for line items.

    Attributes:
        vat: VAT rate used when an item has none
        unit: Unit of measure used when an item has none
    """

    vat: Any = "20"
    unit: str = "бр"

    @classmethod
    def from_config(cls, config) -> "MappingDefaults":
        """Take the defaults from an AppConfig."""
        return cls(vat=config.default_vat, unit=config.default_measurement)


def _is_set(value: Any) -> bool:
    if isinstance(value, (Mapping, list, tuple)):
        return True
    return bool(value)


def _first_present(source: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = source.get(key)
        if _is_set(value):
            return value
    return None


def _map_client(block: Mapping[str, Any]) -> Client:
    values = {
        field_name: _first_present(block, keys)
        for field_name, keys in CLIENT_FIELDS.items()
    }
    return Client(**values)


def _map_item(raw: Mapping[str, Any], defaults: MappingDefaults) -> LineItem:
    values = {}
    for field_name, (keys, fallback) in ITEM_FIELDS.items():
        value = _first_present(raw, keys)
        if value is None:
            if isinstance(fallback, _ConfigDefault):
                fallback = getattr(defaults, fallback.name)
            value = fallback
        values[field_name] = value
    return LineItem(**values)


def map_order(
    payload: Mapping[str, Any],
    defaults: Optional[MappingDefaults] = None
) -> Order:
    """
    Map a loosely shaped order payload onto the canonical Order.

    No range or business validation happens here: odd values are passed
    through and only surface as a rejection by INV24.

    Args:
        payload: Order dictionary (see module docstring for aliases)
        defaults: Configured VAT/unit fallbacks

    Returns:
        Canonical Order

    Raises:
        UsageError: If the payload or a line item is not a JSON object

    Examples:
        >>> order = map_order({
        ...     "customer": {"name": "Ivan Petrov"},
        ...     "products": [{"title": "CBD Oil 10%", "unit_price": 45}],
        ... })
        >>> order.client.company
        'Ivan Petrov'
        >>> order.items[0].quantity
        '1'
    """
    if not isinstance(payload, Mapping):
        raise UsageError(f"Order must be a JSON object, got {type(payload).__name__}")

    defaults = defaults or MappingDefaults()

    client_block = _first_present(payload, CLIENT_BLOCK_KEYS)
    if client_block is None:
        client_block = {}
    if not isinstance(client_block, Mapping):
        raise UsageError("Order client/customer must be a JSON object")

    raw_items = _first_present(payload, ITEMS_BLOCK_KEYS)
    if raw_items is None:
        raw_items = []
    if isinstance(raw_items, (str, bytes)) or not isinstance(raw_items, Sequence):
        raise UsageError("Order items/products/line_items must be a JSON array")

    items = []
    for position, raw in enumerate(raw_items, 1):
        if not isinstance(raw, Mapping):
            raise UsageError(f"Line item {position} must be a JSON object")
        items.append(_map_item(raw, defaults))

    order = Order(client=_map_client(client_block), items=tuple(items))
    logger.debug(f"Mapped order with {len(order.items)} line item(s)")
    return order


def load_order_payload(
    order_json: Optional[str] = None,
    order_file: Optional[Union[str, Path]] = None
) -> Dict[str, Any]:
    """
    Read an order payload from an inline JSON string or a JSON file.

    Raises:
        UsageError: If neither is given, or the JSON cannot be read
    """
    if order_json:
        try:
            return json.loads(order_json)
        except json.JSONDecodeError as e:
            raise UsageError(f"Invalid --order-json: {e}")

    if order_file:
        path = Path(order_file)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise UsageError(f"Cannot read order file {path}: {e}")
        except json.JSONDecodeError as e:
            raise UsageError(f"Invalid JSON in order file {path}: {e}")

    raise UsageError("No order data: use --order-json, --order-file or --demo")


DEMO_ORDER: Dict[str, Any] = {
    "client": {
        "name": "Test Customer",
        "company": "Test Company Ltd",
        "eik": "123456789",
        "address": "Test Street 1, Sofia",
        "email": "test@example.com",
    },
    "items": [
        {"name": "CBD Oil 10%", "price": 45, "quantity": 1},
    ],
}
