"""Pricing result models"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .cart import Money


class PricingMode(str, Enum):
    LOCAL = "local"
    API = "api"


class DiscountKind(str, Enum):
    MEMBERSHIP = "membership"
    COUPON = "coupon"
    SEASONAL = "seasonal"


class DiscountLine(BaseModel):
    """One itemized reduction shown to the buyer"""
    kind: DiscountKind
    amount: Money = Field(ge=0)
    reason: str

    model_config = ConfigDict(frozen=True)


class PricingResult(BaseModel):
    """Price breakdown for a cart"""
    subtotal: Money
    shipping: Money
    discounts: tuple[DiscountLine, ...] = ()
    total: Money
    original_total: Money

    model_config = ConfigDict(frozen=True)

    @property
    def total_discount(self) -> Decimal:
        return sum((d.amount for d in self.discounts), Decimal(0))
