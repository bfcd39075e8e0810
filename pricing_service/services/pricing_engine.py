"""
Pricing Engine

Turns a cart, an optional coupon and an optional membership tier into a
price breakdown. In API mode the bookstore backend prices membership and
stacks coupon/seasonal discounts; in local mode only the coupon applies.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..models.backend import DiscountDirective, StackedDiscountRequest
from ..models.cart import CartLine, CouponSpec
from ..models.pricing import DiscountKind, DiscountLine, PricingMode, PricingResult
from .backend_client import BackendClient

logger = logging.getLogger(__name__)

FREE_SHIPPING_THRESHOLD = Decimal(500_000)
SHIPPING_FEE = Decimal(25_000)

SEASONAL_PERCENT = Decimal(5)
SEASONAL_REASON = "Khuyến mãi Tết"
SEASONAL_MONTHS = (1, 2)

ORDER_ITEM_NAME = "Đơn hàng"
REGULAR_TIER = "regular"


def compute_subtotal(cart: Sequence[CartLine]) -> Decimal:
    return sum((line.line_total for line in cart), Decimal(0))


def compute_shipping(subtotal: Decimal) -> Decimal:
    """Flat fee, waived strictly above the threshold"""
    return Decimal(0) if subtotal > FREE_SHIPPING_THRESHOLD else SHIPPING_FEE


class PricingEngine:
    """
    Checkout pricing calculator.

    Backend failures never reach the caller: any error from either backend
    call discards every discount and prices the cart at subtotal + shipping.
    """

    def __init__(
        self,
        mode: PricingMode = PricingMode.LOCAL,
        backend: Optional[BackendClient] = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the engine.

        Args:
            mode: LOCAL never contacts the backend; API uses it when a user is known
            backend: Client for the pricing/discount APIs (required for API mode)
            today: Clock used to decide seasonal promotions
        """
        if mode == PricingMode.API and backend is None:
            raise ValueError("API pricing mode requires a backend client")
        self.mode = mode
        self._backend = backend
        self._today = today

    async def compute_pricing(
        self,
        cart: Sequence[CartLine],
        user_id: Optional[str] = None,
        coupon: Optional[CouponSpec] = None,
        membership_tier: Optional[str] = None,
    ) -> PricingResult:
        """Price the cart"""
        subtotal = compute_subtotal(cart)
        shipping = compute_shipping(subtotal)

        if self.mode != PricingMode.API or not user_id:
            return self._compute_local(subtotal, shipping, coupon)

        try:
            return await self._compute_with_backend(
                cart, subtotal, shipping, user_id, coupon, membership_tier
            )
        except Exception:
            logger.exception(
                f"Backend pricing failed for user {user_id}, using undiscounted total"
            )
            original_total = subtotal + shipping
            return PricingResult(
                subtotal=subtotal,
                shipping=shipping,
                discounts=(),
                total=original_total,
                original_total=original_total,
            )

    def _compute_local(
        self,
        subtotal: Decimal,
        shipping: Decimal,
        coupon: Optional[CouponSpec],
    ) -> PricingResult:
        coupon_discount = coupon.amount_off(subtotal) if coupon else Decimal(0)

        discounts = ()
        if coupon_discount > 0:
            discounts = (
                DiscountLine(
                    kind=DiscountKind.COUPON,
                    amount=coupon_discount,
                    reason=coupon.reason,
                ),
            )

        # Coupons are not capped, so a large fixed coupon can push this below zero
        return PricingResult(
            subtotal=subtotal,
            shipping=shipping,
            discounts=discounts,
            total=subtotal + shipping - coupon_discount,
            original_total=subtotal + shipping,
        )

    async def _compute_with_backend(
        self,
        cart: Sequence[CartLine],
        subtotal: Decimal,
        shipping: Decimal,
        user_id: str,
        coupon: Optional[CouponSpec],
        membership_tier: Optional[str],
    ) -> PricingResult:
        discounts: list[DiscountLine] = []
        final_price = subtotal
        total_quantity = sum(line.quantity for line in cart)

        # 1. Membership strategy pricing
        if membership_tier and membership_tier != REGULAR_TIER:
            # The backend prices one item, so send the average unit price
            avg_unit_price = subtotal / total_quantity if total_quantity > 0 else subtotal
            quote = await self._backend.calculate_for_user(
                user_id, avg_unit_price, total_quantity
            )
            if quote and quote.final_price > 0:
                membership_discount = subtotal - quote.final_price
                if membership_discount > 0:
                    discounts.append(
                        DiscountLine(
                            kind=DiscountKind.MEMBERSHIP,
                            amount=membership_discount,
                            reason=f"Ưu đãi {quote.strategy.name}",
                        )
                    )
                    final_price = quote.final_price
                    logger.debug(
                        f"Membership '{membership_tier}' priced {subtotal} -> {final_price}"
                    )

        # 2. Stacked coupon/seasonal discounts
        in_season = self._today().month in SEASONAL_MONTHS
        directives = []
        if coupon:
            directives.append(
                DiscountDirective(
                    type=DiscountKind.COUPON.value,
                    value=coupon.discount_value,
                    reason=coupon.reason,
                )
            )
        if in_season:
            directives.append(
                DiscountDirective(
                    type=DiscountKind.SEASONAL.value,
                    value=SEASONAL_PERCENT,
                    reason=SEASONAL_REASON,
                )
            )

        if directives:
            stacked = await self._backend.calculate_discount(
                StackedDiscountRequest(
                    base_price=final_price,
                    quantity=total_quantity,
                    item_name=ORDER_ITEM_NAME,
                    discounts=directives,
                )
            )
            # A non-positive aggregate is treated as no discount
            if stacked and stacked.final_price > 0:
                # The backend only returns the aggregate; rebuild display lines
                # against the pre-stacking price. They need not sum to it.
                if final_price - stacked.final_price > 0:
                    if coupon:
                        discounts.append(
                            DiscountLine(
                                kind=DiscountKind.COUPON,
                                amount=coupon.amount_off(final_price),
                                reason=coupon.reason,
                            )
                        )
                    if in_season:
                        discounts.append(
                            DiscountLine(
                                kind=DiscountKind.SEASONAL,
                                amount=final_price * SEASONAL_PERCENT / 100,
                                reason=SEASONAL_REASON,
                            )
                        )
                final_price = stacked.final_price

        return PricingResult(
            subtotal=subtotal,
            shipping=shipping,
            discounts=tuple(discounts),
            total=final_price + shipping,
            original_total=subtotal + shipping,
        )
