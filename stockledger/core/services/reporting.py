"""Reporting helpers over item history."""

from datetime import UTC, date, datetime, time, timedelta

from stockledger.core.entities.item import Item, MovementType
from stockledger.core.entities.report import DailyMovement


def day_window(day: date) -> tuple[datetime, datetime]:
    """Half-open UTC window [day 00:00, next day 00:00)."""
    start = datetime.combine(day, time.min, tzinfo=UTC)
    return start, start + timedelta(days=1)


def summarize_movements(item: Item, start: datetime, end: datetime) -> DailyMovement | None:
    """Total the item's movements inside [start, end).

    Returns None when nothing moved in either direction.
    """
    movements = [r for r in item.history if start <= r.occurred_at < end]
    daily_in = sum(r.quantity for r in movements if r.movement_type == MovementType.IN)
    daily_out = sum(r.quantity for r in movements if r.movement_type == MovementType.OUT)
    if daily_in <= 0 and daily_out <= 0:
        return None
    return DailyMovement(
        item=item,
        daily_in=daily_in,
        daily_out=daily_out,
        movements=movements,
    )
