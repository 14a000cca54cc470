"""
Resolution of external order lines to catalog items.

An external line carries some subset of an id, a sku, a barcode and a name.
It is resolved through an ordered fallback chain; the first hit wins:

    1. catalog id
    2. sku
    3. barcode
    4. case-insensitive exact name
    5. the hidden placeholder item

so resolution never fails. Lookup tables are built once per batch.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from orders.drafts import ResolvedLine, ResolvedModifier
from payments.money import parse_amount

logger = logging.getLogger(__name__)

DEFAULT_LINE_NAME = "Online Item"
MAX_LINE_QUANTITY = 999

LINE_FIELD_KEYS = {
    "reference": ("merchant_supplied_id", "merchantSuppliedId", "id", "external_id"),
    "sku": ("sku",),
    "barcode": ("barcode", "upc"),
    "name": ("name", "title", "item_name"),
    "price": ("price", "unit_price", "base_price", "item_price"),
    "quantity": ("quantity", "qty"),
    "notes": ("special_instructions", "instructions", "notes"),
}

OPTION_LIST_KEYS = ("options", "extras", "modifiers")


@dataclass(frozen=True)
class ExternalLine:
    name: str
    reference: Optional[str] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    price: Optional[Decimal] = None
    quantity: Any = None
    notes: str = ""
    options: tuple = ()


def _first(entry: Dict[str, Any], keys) -> Any:
    for key in keys:
        value = entry.get(key)
        if value not in (None, ""):
            return value
    return None


def _text(value) -> Optional[str]:
    return None if value is None else str(value)


def normalize_quantity(value) -> int:
    """
    Positive whole quantity. Anything missing, non-finite, not positive or
    above MAX_LINE_QUANTITY is treated as malformed and becomes 1.
    """
    if value is None or isinstance(value, bool):
        return 1
    try:
        quantity = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return 1
    if not quantity.is_finite() or quantity <= 0 or quantity > MAX_LINE_QUANTITY:
        return 1
    return max(int(quantity), 1)


def parse_external_line(entry: Dict[str, Any]) -> ExternalLine:
    """Pull the fields the matcher needs out of one raw marketplace line."""
    options = []
    for key in OPTION_LIST_KEYS:
        value = entry.get(key)
        if isinstance(value, list):
            options.extend(option for option in value if isinstance(option, dict))

    return ExternalLine(
        name=str(_first(entry, LINE_FIELD_KEYS["name"]) or DEFAULT_LINE_NAME),
        reference=_text(_first(entry, LINE_FIELD_KEYS["reference"])),
        sku=_text(_first(entry, LINE_FIELD_KEYS["sku"])),
        barcode=_text(_first(entry, LINE_FIELD_KEYS["barcode"])),
        price=parse_amount(_first(entry, LINE_FIELD_KEYS["price"])),
        quantity=_first(entry, LINE_FIELD_KEYS["quantity"]),
        notes=str(_first(entry, LINE_FIELD_KEYS["notes"]) or ""),
        options=tuple(options),
    )


class ItemMatcher:
    """
    Resolves a batch of external lines against a catalog snapshot.

    ``catalog_items`` is any iterable of objects exposing ``id``, ``sku``,
    ``barcode``, ``name`` and ``price``; the placeholder is used when nothing
    else matches.
    """

    def __init__(self, catalog_items: Iterable[Any], placeholder: Any):
        self.placeholder = placeholder
        self.by_id: Dict[str, Any] = {}
        self.by_sku: Dict[str, Any] = {}
        self.by_barcode: Dict[str, Any] = {}
        self.by_name: Dict[str, Any] = {}
        for item in catalog_items:
            self.by_id.setdefault(str(item.id), item)
            if item.sku:
                self.by_sku.setdefault(str(item.sku), item)
            if item.barcode:
                self.by_barcode.setdefault(str(item.barcode), item)
            if item.name:
                self.by_name.setdefault(item.name.lower(), item)

    def match(self, line: ExternalLine):
        """Return ``(catalog_item, matched_by)`` for one line."""
        chain = (
            ("id", self.by_id, (line.reference,)),
            ("sku", self.by_sku, (line.sku, line.reference)),
            ("barcode", self.by_barcode, (line.barcode, line.reference)),
            ("name", self.by_name, (line.name.lower() if line.name else None,)),
        )
        for matched_by, table, candidates in chain:
            for candidate in candidates:
                if candidate is not None and candidate in table:
                    return table[candidate], matched_by
        return self.placeholder, "placeholder"

    def resolve(self, line: ExternalLine) -> ResolvedLine:
        item, matched_by = self.match(line)
        if line.price is not None and line.price > 0:
            unit_price = line.price
        else:
            unit_price = item.price

        modifiers = [
            ResolvedModifier(
                name=str(_first(option, ("name", "title")) or "Option"),
                price=parse_amount(_first(option, ("price", "unit_price"))) or Decimal("0.00"),
                quantity=normalize_quantity(_first(option, ("quantity", "qty"))),
            )
            for option in line.options
        ]

        if matched_by == "placeholder":
            logger.debug(f"External line '{line.name}' unresolved, using placeholder item")

        return ResolvedLine(
            menu_item_id=item.id,
            name=line.name,
            unit_price=unit_price,
            quantity=normalize_quantity(line.quantity),
            modifiers=modifiers,
            notes=line.notes,
            matched_by=matched_by,
        )

    def resolve_all(self, entries: Iterable[Dict[str, Any]]) -> List[ResolvedLine]:
        return [
            self.resolve(parse_external_line(entry))
            for entry in entries
            if isinstance(entry, dict)
        ]
