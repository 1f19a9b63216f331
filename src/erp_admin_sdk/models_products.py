from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRODUCT_SORTABLE_FIELDS: tuple[str, ...] = ("sku", "name", "category", "stockQuantity")


class Product(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int
    sku: str | None = None
    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock_quantity: int | None = Field(default=None, alias="stockQuantity")
    category: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    is_active: bool | None = Field(default=None, alias="isActive")
    in_stock: bool | None = Field(default=None, alias="inStock")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class ProductPayload(BaseModel):
    """Create/update body for ``/products``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, str_strip_whitespace=True)

    sku: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    price: Decimal = Field(gt=0)
    stock_quantity: int = Field(alias="stockQuantity", ge=0)
    category: str = Field(min_length=1)
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("image_url")
    @classmethod
    def _image_url_is_http(cls, value: str | None) -> str | None:
        if not value:
            return None
        if not value.startswith(("http://", "https://")):
            raise ValueError("Image URL must be a valid URL")
        return value
