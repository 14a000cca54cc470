"""
Canonical, source-independent description of an order to be created.

External order payloads are normalized into an ``OrderDraft`` before any
database write happens; ``OrderService.create_from_draft`` turns a draft into
a POS order in one transaction.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class ResolvedModifier:
    name: str
    price: Decimal = Decimal("0.00")
    quantity: int = 1


@dataclass(frozen=True)
class ResolvedLine:
    """An external line already matched to a catalog item."""

    menu_item_id: int
    name: str
    unit_price: Decimal
    quantity: int = 1
    modifiers: List[ResolvedModifier] = field(default_factory=list)
    notes: str = ""
    matched_by: str = "placeholder"


@dataclass(frozen=True)
class OrderDraft:
    external_id: str
    order_type: str
    status: str = "NEW"
    synthetic_id: bool = False
    display_id: Optional[str] = None
    store_reference: Optional[str] = None
    customer_name: str = ""
    notes: str = ""
    delivery_charge: Decimal = Decimal("0.00")
    service_charge: Decimal = Decimal("0.00")
    items: List[ResolvedLine] = field(default_factory=list)
