"""Pydantic models for store-api cart requests and admin API responses."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineItemType(str, Enum):
    """Kinds of entries a cart can hold."""

    PRODUCT = "product"
    CREDIT = "credit"
    CUSTOM = "custom"
    PROMOTION = "promotion"


class PriceType(str, Enum):
    """How a price definition is applied to a line item."""

    ABSOLUTE = "absolute"
    QUANTITY = "quantity"


class _WireModel(BaseModel):
    """Accepts camelCase wire names or snake_case names, keeps unknown fields."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Price(_WireModel):
    """The calculated price of a line item."""

    unit_price: float | None = Field(default=None, alias="unitPrice")


class PriceDefinition(_WireModel):
    """Describes how the server should calculate a line item's price."""

    price: float | None = None
    tax_rules: list[dict[str, Any]] | None = Field(default=None, alias="taxRules")
    quantity: int | None = None
    type: str | None = None


class LineItem(_WireModel):
    """A cart entry as held by the application."""

    id: str | None = None
    identifier: str | None = None
    type: str = LineItemType.PRODUCT.value
    label: str | None = None
    quantity: int = 1
    description: str | None = None
    price: Price | None = None
    price_definition: PriceDefinition | None = Field(
        default=None, alias="priceDefinition"
    )
    is_new: bool = Field(default=False, alias="_isNew")

    @field_validator("type", mode="before")
    @classmethod
    def _type_value(cls, value: Any) -> Any:
        return value.value if isinstance(value, Enum) else value


class LineItemPayload(BaseModel):
    """A single line item as sent to the line-item route."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    referenced_id: str = Field(alias="referencedId")
    label: str | None = None
    quantity: int
    type: str
    description: str | None = None
    price_definition: PriceDefinition | None = Field(
        default=None, alias="priceDefinition"
    )
    stackable: bool = True
    removable: bool = True
    sales_channel_id: str = Field(alias="salesChannelId")


class ShippingCosts(_WireModel):
    """Manually set shipping costs for a cart."""

    unit_price: float = Field(alias="unitPrice")
    total_price: float = Field(alias="totalPrice")


class TokenResponse(BaseModel):
    """OAuth2 token response from the admin API."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 600
