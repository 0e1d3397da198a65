"""Tests for the stock ledger rules."""

from datetime import timedelta

import pytest

from stockledger.core.entities.item import Category, Item, MovementType, utcnow
from stockledger.core.exceptions import InsufficientStockError, ValidationError
from stockledger.core.services import ledger


def _consistent(item: Item) -> bool:
    return item.total_stock == max(0.0, item.stock_in - item.stock_out)


@pytest.fixture
def item() -> Item:
    return ledger.open_item("Hammer", "pcs", Category.TOOL, stock_in=10)


class TestComputeTotalStock:
    def test_difference(self):
        assert ledger.compute_total_stock(10, 4) == 6

    def test_clamped_at_zero(self):
        assert ledger.compute_total_stock(3, 8) == 0


class TestOpenItem:
    """Tests for building new items."""

    def test_strips_text_and_derives_total(self):
        item = ledger.open_item("  Hammer ", " pcs ", Category.TOOL, 10, 4, 2)
        assert item.description == "Hammer"
        assert item.unit == "pcs"
        assert item.total_stock == 6
        assert item.min_stock == 2
        assert item.history == []
        assert item.created_at == item.updated_at

    def test_out_exceeding_in_clamps_total(self):
        item = ledger.open_item("Tape", "roll", Category.ACCESSORY, 2, 5)
        assert item.total_stock == 0
        assert _consistent(item)

    def test_imported_item_logs_initial_stock_in_only(self):
        item = ledger.open_imported_item("Drill", "pcs", Category.TOOL, 5, 2)
        assert item.total_stock == 3
        assert len(item.history) == 1
        record = item.history[0]
        assert record.movement_type == MovementType.IN
        assert record.quantity == 5
        assert record.notes == ledger.IMPORT_NOTE

    def test_imported_item_without_stock_in_has_no_history(self):
        item = ledger.open_imported_item("Drill", "pcs", Category.TOOL, 0, 0)
        assert item.history == []


class TestParseMovementType:
    @pytest.mark.parametrize("value", ["in", "out"])
    def test_valid(self, value):
        assert ledger.parse_movement_type(value).value == value

    @pytest.mark.parametrize("value", ["IN", "sideways", None, 1])
    def test_invalid(self, value):
        with pytest.raises(ValidationError, match='Type must be "in" or "out"'):
            ledger.parse_movement_type(value)


class TestParseQuantity:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(5, 5.0), (2.5, 2.5), ("7", 7.0), (" 1.25 ", 1.25)],
    )
    def test_valid(self, value, expected):
        assert ledger.parse_quantity(value) == expected

    @pytest.mark.parametrize(
        "value", [None, 0, -3, "abc", "", float("nan"), float("inf"), True, [1]]
    )
    def test_invalid(self, value):
        with pytest.raises(ValidationError, match="Quantity must be a positive number"):
            ledger.parse_quantity(value)


class TestAdjustStock:
    """Tests for single stock adjustments."""

    def test_stock_in(self, item):
        record = ledger.adjust_stock(item, MovementType.IN, 5, "Restock")
        assert item.stock_in == 15
        assert item.total_stock == 15
        assert item.history == [record]
        assert record.notes == "Restock"
        assert item.updated_at == record.occurred_at

    def test_stock_out(self, item):
        ledger.adjust_stock(item, MovementType.OUT, 4)
        assert item.stock_out == 4
        assert item.total_stock == 6
        assert _consistent(item)

    def test_stock_out_of_everything_on_hand(self, item):
        ledger.adjust_stock(item, MovementType.OUT, 10)
        assert item.total_stock == 0

    def test_insufficient_stock_leaves_item_untouched(self, item):
        before = item.model_copy(deep=True)
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.adjust_stock(item, MovementType.OUT, 11)
        assert exc_info.value.message == "Insufficient stock. Available: 10, Requested: 11"
        assert item == before

    def test_default_notes(self, item):
        assert ledger.adjust_stock(item, MovementType.IN, 1).notes == "IN adjustment"
        assert ledger.adjust_stock(item, MovementType.OUT, 1, "   ").notes == "OUT adjustment"

    def test_decimal_quantities(self, item):
        ledger.adjust_stock(item, MovementType.OUT, 2.5)
        ledger.adjust_stock(item, MovementType.IN, 0.75)
        assert item.total_stock == pytest.approx(8.25)
        assert _consistent(item)

    def test_sequence_keeps_invariant(self, item):
        for movement_type, quantity in [
            (MovementType.OUT, 3),
            (MovementType.IN, 7),
            (MovementType.OUT, 14),
        ]:
            ledger.adjust_stock(item, movement_type, quantity)
            assert _consistent(item)
        assert item.total_stock == 0
        assert len(item.history) == 3

    def test_overflowing_counter_rejected(self, item):
        ledger.adjust_stock(item, MovementType.IN, 1e308)
        before = item.model_copy(deep=True)

        with pytest.raises(ValidationError, match="Quantity is too large") as exc_info:
            ledger.adjust_stock(item, MovementType.IN, 1e308)

        assert exc_info.value.field == "stock_in"
        assert item == before


class TestMergeImport:
    """Tests for additive imports onto existing items."""

    def test_adds_both_directions(self, item):
        records = ledger.merge_import(item, 5, 3)
        assert item.stock_in == 15
        assert item.stock_out == 3
        assert item.total_stock == 12
        assert [r.movement_type for r in records] == [MovementType.IN, MovementType.OUT]
        assert all(r.notes == ledger.IMPORT_NOTE for r in records)

    def test_zero_quantities_write_no_history(self, item):
        assert ledger.merge_import(item, 0, 0) == []
        assert item.history == []

    def test_import_out_is_not_limited_by_stock(self, item):
        ledger.merge_import(item, 0, 25)
        assert item.total_stock == 0
        assert _consistent(item)

    def test_overflow_leaves_item_untouched(self, item):
        ledger.merge_import(item, 0, 1e308)
        before = item.model_copy(deep=True)

        with pytest.raises(ValidationError, match="Quantity is too large"):
            ledger.merge_import(item, 5, 1e308)

        assert item == before
        assert item.stock_in == 10


class TestApplyFieldUpdate:
    """Tests for corrective edits."""

    def test_recomputes_total(self, item):
        ledger.apply_field_update(item, {"stock_out": 4})
        assert item.total_stock == 6
        assert item.history == []

    def test_ignores_derived_and_unknown_fields(self, item):
        ledger.apply_field_update(item, {"total_stock": 999, "history": [], "colour": "red"})
        assert item.total_stock == 10

    def test_refreshes_updated_at(self, item):
        item.updated_at = utcnow() - timedelta(days=1)
        stale = item.updated_at
        ledger.apply_field_update(item, {"min_stock": 3})
        assert item.updated_at > stale

    def test_strips_text(self, item):
        ledger.apply_field_update(item, {"description": "  Claw hammer  ", "unit": " box"})
        assert item.description == "Claw hammer"
        assert item.unit == "box"

    def test_blank_description_rejected(self, item):
        with pytest.raises(ValidationError, match="description is required"):
            ledger.apply_field_update(item, {"description": "   "})

    def test_negative_counter_rejected(self, item):
        with pytest.raises(ValidationError):
            ledger.apply_field_update(item, {"stock_in": -1})

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_counter_rejected(self, item, value):
        with pytest.raises(ValidationError, match="must be a non-negative number"):
            ledger.apply_field_update(item, {"stock_in": value})
        assert item.stock_in == 10

    def test_category(self, item):
        ledger.apply_field_update(item, {"category": "accessory"})
        assert item.category == Category.ACCESSORY
        with pytest.raises(ValidationError, match="Category must be"):
            ledger.apply_field_update(item, {"category": "machine"})
