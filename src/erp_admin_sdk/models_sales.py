from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PaymentMethod = Literal["CASH", "CARD", "BANK_TRANSFER", "OTHER"]
SaleStatus = Literal["PENDING", "COMPLETED", "CANCELLED", "REFUNDED"]

SALE_SORTABLE_FIELDS: tuple[str, ...] = ("saleNumber", "customerName", "saleDate")


class SaleItem(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | None = None
    product_id: int | None = Field(default=None, alias="productId")
    product_name: str | None = Field(default=None, alias="productName")
    product_sku: str | None = Field(default=None, alias="productSku")
    quantity: int | None = None
    unit_price: Decimal | None = Field(default=None, alias="unitPrice")
    discount_percent: Decimal | None = Field(default=None, alias="discountPercent")
    line_total: Decimal | None = Field(default=None, alias="lineTotal")


class Sale(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int
    sale_number: str | None = Field(default=None, alias="saleNumber")
    user_id: int | None = Field(default=None, alias="userId")
    user_name: str | None = Field(default=None, alias="userName")
    customer_name: str | None = Field(default=None, alias="customerName")
    customer_phone: str | None = Field(default=None, alias="customerPhone")
    items: list[SaleItem] = Field(default_factory=list)
    subtotal: Decimal | None = None
    tax_amount: Decimal | None = Field(default=None, alias="taxAmount")
    discount_amount: Decimal | None = Field(default=None, alias="discountAmount")
    total_amount: Decimal | None = Field(default=None, alias="totalAmount")
    payment_method: str | None = Field(default=None, alias="paymentMethod")
    status: str | None = None
    sale_date: datetime | None = Field(default=None, alias="saleDate")
    notes: str | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")


class SaleItemPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    product_id: int = Field(alias="productId")
    quantity: int = Field(ge=1)
    discount_percent: Decimal | None = Field(default=None, alias="discountPercent", ge=0, le=100)


class SalePayload(BaseModel):
    """Create body for ``/sales``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, str_strip_whitespace=True)

    customer_name: str | None = Field(default=None, alias="customerName", max_length=100)
    customer_phone: str | None = Field(default=None, alias="customerPhone", max_length=20)
    items: list[SaleItemPayload] = Field(min_length=1)
    tax_amount: Decimal | None = Field(default=None, alias="taxAmount", ge=0)
    discount_amount: Decimal | None = Field(default=None, alias="discountAmount", ge=0)
    payment_method: PaymentMethod = Field(alias="paymentMethod")
    notes: str | None = Field(default=None, max_length=500)
