"""Checkout pricing API routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..core.config import settings
from ..models.cart import CartLine, CouponSpec
from ..models.pricing import PricingMode, PricingResult
from ..services.backend_client import BackendClient
from ..services.breakdown import BreakdownSummary, summarize
from ..services.pricing_engine import PricingEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Pricing"])

# Created lazily, closed on shutdown
backend_client: Optional[BackendClient] = None
pricing_engine: Optional[PricingEngine] = None


def get_backend_client() -> BackendClient:
    """Get or create backend client"""
    global backend_client
    if backend_client is None:
        backend_client = BackendClient(
            api_base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            api_token=settings.api_token,
        )
    return backend_client


def get_pricing_engine() -> PricingEngine:
    """Get or create pricing engine"""
    global pricing_engine
    if pricing_engine is None:
        if settings.pricing_mode == PricingMode.API:
            pricing_engine = PricingEngine(
                mode=PricingMode.API,
                backend=get_backend_client(),
            )
        else:
            pricing_engine = PricingEngine(mode=PricingMode.LOCAL)
    return pricing_engine


async def close_backend_client() -> None:
    """Close the backend client and drop the engine that holds it"""
    global backend_client, pricing_engine
    pricing_engine = None
    if backend_client is not None:
        await backend_client.close()
        backend_client = None


class PricingRequest(BaseModel):
    """Request to price a cart"""
    items: list[CartLine] = Field(default_factory=list)
    user_id: Optional[str] = None
    coupon: Optional[CouponSpec] = None
    membership_tier: Optional[str] = None


class PricingResponse(BaseModel):
    """Price breakdown with display summary"""
    pricing: PricingResult
    summary: BreakdownSummary


@router.post("/pricing", response_model=PricingResponse)
async def price_cart(
    request: PricingRequest,
    engine: PricingEngine = Depends(get_pricing_engine),
):
    """
    Price a cart.

    Always answers with a usable total: backend failures degrade to the
    undiscounted price instead of an error.
    """
    logger.debug(
        f"Pricing {len(request.items)} line(s) for user={request.user_id} "
        f"tier={request.membership_tier} coupon={request.coupon.code if request.coupon else None}"
    )
    result = await engine.compute_pricing(
        request.items,
        user_id=request.user_id,
        coupon=request.coupon,
        membership_tier=request.membership_tier,
    )
    return PricingResponse(pricing=result, summary=summarize(result))
