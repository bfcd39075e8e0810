"""Checkout breakdown summary for display"""

from decimal import Decimal, ROUND_HALF_UP

from pydantic import BaseModel

from ..models.cart import Money
from ..models.pricing import PricingResult


class BreakdownSummary(BaseModel):
    """Figures the checkout page shows around a PricingResult"""
    total_discount: Money
    savings_percent: Money
    free_shipping: bool
    show_original_total: bool

    # Pre-formatted VND strings
    subtotal_display: str
    shipping_display: str
    total_discount_display: str
    total_display: str
    original_total_display: str


def format_vnd(amount: Decimal) -> str:
    """Format an amount as Vietnamese dong, e.g. ``1.000.000 ₫``"""
    rounded = Decimal(amount).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{abs(rounded):,}".replace(",", ".") + " ₫"


def summarize(result: PricingResult) -> BreakdownSummary:
    total_discount = result.total_discount
    if result.subtotal > 0:
        savings_percent = (total_discount / result.subtotal * 100).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )
    else:
        savings_percent = Decimal(0)

    return BreakdownSummary(
        total_discount=total_discount,
        savings_percent=savings_percent,
        free_shipping=result.shipping == 0,
        show_original_total=total_discount > 0,
        subtotal_display=format_vnd(result.subtotal),
        shipping_display="Miễn phí" if result.shipping == 0 else format_vnd(result.shipping),
        total_discount_display=format_vnd(total_discount),
        total_display=format_vnd(result.total),
        original_total_display=format_vnd(result.original_total),
    )
