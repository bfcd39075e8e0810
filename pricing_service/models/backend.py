"""Wire models for the pricing and discount backend APIs"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .cart import Money


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PricingStrategy(_CamelModel):
    name: str
    description: Optional[str] = None


class MembershipQuote(_CamelModel):
    """Response data of calculate-for-user"""
    final_price: Money = Field(alias="finalPrice")
    strategy: PricingStrategy
    original_total: Optional[Money] = Field(default=None, alias="originalTotal")
    savings: Optional[Money] = None


class DiscountDirective(_CamelModel):
    """One discount the backend should stack"""
    type: str
    value: Money
    reason: Optional[str] = None


class StackedDiscountRequest(_CamelModel):
    base_price: Money = Field(alias="basePrice")
    quantity: int
    item_name: str = Field(default="Đơn hàng", alias="itemName")
    discounts: list[DiscountDirective] = []


class StackedDiscountQuote(_CamelModel):
    """Response data of the discount calculation"""
    final_price: Money = Field(alias="finalPrice")
    original_price: Optional[Money] = Field(default=None, alias="originalPrice")
    total_discount: Optional[Money] = Field(default=None, alias="totalDiscount")
    description: Optional[str] = None
    applied_discounts: list[str] = Field(default_factory=list, alias="appliedDiscounts")
