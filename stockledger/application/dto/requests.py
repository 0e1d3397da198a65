"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation. JSON keys are camelCase;
snake_case names are accepted too.
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stockledger.core.entities.item import Category
from stockledger.core.entities.user import UserRole


class CamelRequest(BaseModel):
    """Base for request bodies; unknown keys are dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _required_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


RequiredText = Annotated[str, AfterValidator(_required_text)]


class CreateItemRequest(CamelRequest):
    """Request to create an item.

    ``totalStock`` and ``history`` are derived server-side; if a client sends
    them they are ignored.
    """

    description: RequiredText = Field(..., description="Item description", examples=["Hammer 500g"])
    unit: RequiredText = Field(..., description="Unit of measure", examples=["pcs"])
    category: Category = Field(..., description="accessory or tool")
    stock_in: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Cumulative quantity received"
    )
    stock_out: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Cumulative quantity dispensed"
    )
    min_stock: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Advisory reorder threshold"
    )


class UpdateItemRequest(CamelRequest):
    """Partial corrective edit of an item. Only fields that are sent are applied."""

    description: str | None = None
    unit: str | None = None
    category: Category | None = None
    stock_in: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    stock_out: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    min_stock: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class StockAdjustmentRequest(CamelRequest):
    """Stock movement request.

    ``type`` and ``quantity`` are left loosely typed here so the ledger can
    report its own validation messages, in a fixed order.
    """

    type: Any = Field(default=None, description='"in" or "out"', examples=["in"])
    quantity: Any = Field(default=None, description="Positive quantity", examples=[5])
    notes: str | None = Field(default=None, description="Free-text note")


class ImportItemsRequest(CamelRequest):
    """Bulk import of spreadsheet rows already parsed to JSON by the client."""

    category: Any = Field(default=None, description="Target category for every row")
    data: Any = Field(default=None, description="List of row objects keyed by header text")


class LoginRequest(CamelRequest):
    """Username/password sign-in."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CreateUserRequest(CamelRequest):
    """Admin request to create an account."""

    username: RequiredText = Field(..., max_length=100)
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.USER


class UpdateUserRequest(CamelRequest):
    """Admin request to edit an account. Password is only changed when sent."""

    username: str | None = Field(default=None, min_length=1, max_length=100)
    role: UserRole | None = None
    password: str | None = None
