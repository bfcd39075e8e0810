# Pricing Service Models

from .cart import CartLine, CouponSpec, DiscountType, Money
from .pricing import DiscountKind, DiscountLine, PricingMode, PricingResult
from .backend import (
    DiscountDirective,
    MembershipQuote,
    PricingStrategy,
    StackedDiscountQuote,
    StackedDiscountRequest,
)

__all__ = [
    "CartLine",
    "CouponSpec",
    "DiscountType",
    "Money",
    "DiscountKind",
    "DiscountLine",
    "PricingMode",
    "PricingResult",
    "DiscountDirective",
    "MembershipQuote",
    "PricingStrategy",
    "StackedDiscountQuote",
    "StackedDiscountRequest",
]
