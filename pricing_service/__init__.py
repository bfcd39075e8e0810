"""
Bookstore Pricing Service

Checkout price breakdowns: subtotal, shipping, membership, coupon and
seasonal discounts, with a full-reset fallback when the backend fails.
"""

__version__ = "1.0.0"
