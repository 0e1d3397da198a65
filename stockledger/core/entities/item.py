"""Item and stock history domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(UTC)


class Category(str, Enum):
    """Kinds of inventory lines."""

    ACCESSORY = "accessory"
    TOOL = "tool"


class MovementType(str, Enum):
    """Direction of a stock movement."""

    IN = "in"
    OUT = "out"


class StockStatus(str, Enum):
    """Buckets of current stock relative to everything received."""

    CRITICAL = "critical"
    LOW = "low"
    GOOD = "good"
    OUT = "out"


class HistoryRecord(BaseModel):
    """One logged stock movement. Frozen once created."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    quantity: float = Field(gt=0, allow_inf_nan=False)
    movement_type: MovementType
    notes: str | None = None
    occurred_at: datetime = Field(default_factory=utcnow)


class Item(BaseModel):
    """One inventory line with cumulative in/out counters."""

    id: int | None = None
    description: str
    unit: str
    category: Category
    stock_in: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    stock_out: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    total_stock: float = 0.0  # derived, see core.services.ledger.recompute
    min_stock: float = 0.0  # advisory reorder threshold
    history: list[HistoryRecord] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
