from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SummaryFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_date: dt.date = Field(alias="startDate")
    end_date: dt.date = Field(alias="endDate")

    @model_validator(mode="after")
    def _ordered(self) -> "SummaryFilter":
        if self.start_date > self.end_date:
            raise ValueError("startDate must be on or before endDate")
        return self


class DailySalesSummary(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    date: dt.date
    sales_count: int = Field(default=0, alias="salesCount")
    revenue: Decimal = Decimal("0")


class TopProductSummary(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    product_id: int | None = Field(default=None, alias="productId")
    product_name: str | None = Field(default=None, alias="productName")
    quantity_sold: int = Field(default=0, alias="quantitySold")
    revenue: Decimal = Decimal("0")


class PaymentMethodSummary(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    payment_method: str = Field(alias="paymentMethod")
    count: int = 0
    amount: Decimal = Decimal("0")


class SalesSummary(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    start_date: dt.date = Field(alias="startDate")
    end_date: dt.date = Field(alias="endDate")
    total_sales: int = Field(default=0, alias="totalSales")
    total_revenue: Decimal = Field(default=Decimal("0"), alias="totalRevenue")
    total_tax: Decimal = Field(default=Decimal("0"), alias="totalTax")
    total_discount: Decimal = Field(default=Decimal("0"), alias="totalDiscount")
    average_sale_amount: Decimal = Field(default=Decimal("0"), alias="averageSaleAmount")
    daily_summary: list[DailySalesSummary] = Field(default_factory=list, alias="dailySummary")
    top_products: list[TopProductSummary] = Field(default_factory=list, alias="topProducts")
    payment_method_breakdown: list[PaymentMethodSummary] = Field(default_factory=list, alias="paymentMethodBreakdown")
