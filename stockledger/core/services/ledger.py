"""
Stock ledger rules.

Every write path (create, direct update, stock adjustment, import) funnels
through these functions so that ``stock_in``, ``stock_out``, ``total_stock``
and ``history`` stay mutually consistent:

    total_stock == max(0, stock_in - stock_out)

``recompute`` is called explicitly by each operation before the item is
handed to a store; stores never derive fields on their own.

Pure service -- no infrastructure imports, no I/O.
"""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from stockledger.core.entities.item import (
    Category,
    HistoryRecord,
    Item,
    MovementType,
    utcnow,
)
from stockledger.core.exceptions import InsufficientStockError, ValidationError

# Note attached to history records written by spreadsheet imports
IMPORT_NOTE = "Imported from Excel"

# Fields a direct update may overwrite. total_stock and history are never
# taken from callers.
UPDATABLE_FIELDS = frozenset(
    {"description", "unit", "category", "stock_in", "stock_out", "min_stock"}
)

_COUNTER_FIELDS = ("stock_in", "stock_out", "min_stock")


def compute_total_stock(stock_in: float, stock_out: float) -> float:
    """Current stock, clamped at zero."""
    return max(0.0, stock_in - stock_out)


def recompute(item: Item, now: datetime | None = None) -> Item:
    """Derive ``total_stock`` from the counters and refresh ``updated_at``."""
    item.total_stock = compute_total_stock(item.stock_in, item.stock_out)
    item.updated_at = now or utcnow()
    return item


def parse_movement_type(value: Any) -> MovementType:
    """Accept only ``in`` or ``out``."""
    try:
        return MovementType(value)
    except ValueError:
        raise ValidationError("type", 'Type must be "in" or "out"', value) from None


def parse_quantity(value: Any) -> float:
    """
    Parse an adjustment quantity.

    Accepts numbers and numeric strings. Missing, non-numeric, non-finite,
    zero or negative values raise ValidationError.
    """
    message = "Quantity must be a positive number"
    if value is None or isinstance(value, bool):
        raise ValidationError("quantity", message, value)

    if isinstance(value, (int, float)):
        quantity = float(value)
    elif isinstance(value, str):
        try:
            quantity = float(value.strip())
        except ValueError:
            raise ValidationError("quantity", message, value) from None
    else:
        raise ValidationError("quantity", message, value)

    if not math.isfinite(quantity) or quantity <= 0:
        raise ValidationError("quantity", message, value)
    return quantity


def default_notes(movement_type: MovementType) -> str:
    return f"{movement_type.value.upper()} adjustment"


def ensure_available(item: Item, movement_type: MovementType, quantity: float) -> None:
    """Reject a stock-out larger than what is currently on hand."""
    if movement_type != MovementType.OUT:
        return
    available = compute_total_stock(item.stock_in, item.stock_out)
    if quantity > available:
        raise InsufficientStockError(item.id, available=available, requested=quantity)


def ensure_in_range(item: Item, stock_in: float = 0.0, stock_out: float = 0.0) -> None:
    """Reject additions that would push a counter past the float range."""
    for name, current, added in (
        ("stock_in", item.stock_in, stock_in),
        ("stock_out", item.stock_out, stock_out),
    ):
        if not math.isfinite(current + added):
            raise ValidationError(name, "Quantity is too large", added)


def record_movement(
    item: Item,
    movement_type: MovementType,
    quantity: float,
    notes: str | None = None,
    occurred_at: datetime | None = None,
) -> HistoryRecord:
    """Bump the matching counter and append one history record.

    Does not recompute; callers finish with ``recompute``.
    """
    if movement_type == MovementType.IN:
        item.stock_in += quantity
    else:
        item.stock_out += quantity

    record = HistoryRecord(
        quantity=quantity,
        movement_type=movement_type,
        notes=notes,
        occurred_at=occurred_at or utcnow(),
    )
    item.history.append(record)
    return record


def adjust_stock(
    item: Item,
    movement_type: MovementType,
    quantity: float,
    notes: str | None = None,
) -> HistoryRecord:
    """Apply one stock adjustment. Nothing is mutated when the adjustment is refused."""
    ensure_available(item, movement_type, quantity)
    if movement_type == MovementType.IN:
        ensure_in_range(item, stock_in=quantity)
    else:
        ensure_in_range(item, stock_out=quantity)
    notes = notes.strip() if notes else None
    record = record_movement(
        item, movement_type, quantity, notes or default_notes(movement_type)
    )
    recompute(item, record.occurred_at)
    return record


def merge_import(item: Item, stock_in: float, stock_out: float) -> list[HistoryRecord]:
    """Add imported quantities onto an existing item.

    Imports are additive and write one history record per non-zero direction.
    """
    ensure_in_range(item, stock_in=stock_in, stock_out=stock_out)
    now = utcnow()
    records = []
    if stock_in > 0:
        records.append(
            record_movement(item, MovementType.IN, stock_in, IMPORT_NOTE, now)
        )
    if stock_out > 0:
        records.append(
            record_movement(item, MovementType.OUT, stock_out, IMPORT_NOTE, now)
        )
    recompute(item, now)
    return records


def open_item(
    description: str,
    unit: str,
    category: Category,
    stock_in: float = 0.0,
    stock_out: float = 0.0,
    min_stock: float = 0.0,
) -> Item:
    """Build a new item with an empty history."""
    now = utcnow()
    item = Item(
        description=description.strip(),
        unit=unit.strip(),
        category=category,
        stock_in=stock_in,
        stock_out=stock_out,
        min_stock=min_stock,
        created_at=now,
        updated_at=now,
    )
    return recompute(item, now)


def open_imported_item(
    description: str,
    unit: str,
    category: Category,
    stock_in: float,
    stock_out: float,
) -> Item:
    """Build an item first seen in an import.

    Only the initial stock-in is logged as a movement.
    """
    item = open_item(description, unit, category, stock_in, stock_out)
    if stock_in > 0:
        item.history.append(
            HistoryRecord(
                quantity=stock_in,
                movement_type=MovementType.IN,
                notes=IMPORT_NOTE,
                occurred_at=item.created_at,
            )
        )
    return item


def apply_field_update(item: Item, changes: Mapping[str, Any]) -> Item:
    """
    Overwrite fields from a corrective edit, then recompute.

    Unknown keys (including ``total_stock`` and ``history``) are ignored.
    No history record is written: this path is a correction, not a movement.
    """
    accepted = {name: value for name, value in changes.items() if name in UPDATABLE_FIELDS}

    for name in _COUNTER_FIELDS:
        value = accepted.get(name)
        if name in accepted and (value is None or not math.isfinite(value) or value < 0):
            raise ValidationError(name, f"{name} must be a non-negative number", value)
    for name in ("description", "unit"):
        if name in accepted:
            accepted[name] = (accepted[name] or "").strip()
            if not accepted[name]:
                raise ValidationError(name, f"{name} is required")
    if "category" in accepted:
        try:
            accepted["category"] = Category(accepted["category"])
        except ValueError:
            raise ValidationError(
                "category", 'Category must be "accessory" or "tool"', accepted["category"]
            ) from None

    for name, value in accepted.items():
        setattr(item, name, value)
    return recompute(item)
