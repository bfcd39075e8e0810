# Pricing Service Routes

from .pricing import router as pricing_router

__all__ = ["pricing_router"]
