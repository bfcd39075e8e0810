# Pricing Service Services

from .backend_client import BackendClient
from .breakdown import BreakdownSummary, format_vnd, summarize
from .pricing_engine import PricingEngine

__all__ = [
    "BackendClient",
    "BreakdownSummary",
    "format_vnd",
    "summarize",
    "PricingEngine",
]
