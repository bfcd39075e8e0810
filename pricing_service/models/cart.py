"""Cart and coupon models for checkout pricing"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_validator

# VND amounts; emitted as JSON numbers rather than strings
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class CartLine(BaseModel):
    """A single book in the cart"""
    unit_price: Money = Field(ge=0)
    quantity: int = Field(gt=0)
    book_id: Optional[str] = None
    title: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class CouponSpec(BaseModel):
    """Coupon supplied with a pricing request"""
    code: str
    discount_type: DiscountType
    discount_value: Money = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_percentage_range(self) -> "CouponSpec":
        if self.discount_type == DiscountType.PERCENTAGE and self.discount_value > 100:
            raise ValueError(
                f"Percentage coupon cannot exceed 100, got {self.discount_value}"
            )
        return self

    @property
    def reason(self) -> str:
        return f"Mã {self.code}"

    def amount_off(self, price: Decimal) -> Decimal:
        """Discount this coupon gives against ``price``.

        Fixed coupons are not capped at ``price``.
        """
        if self.discount_type == DiscountType.PERCENTAGE:
            return price * self.discount_value / 100
        return self.discount_value
