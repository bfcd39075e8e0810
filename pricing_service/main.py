"""
Pricing Service Application

Checkout pricing for the bookstore storefront.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .core.config import settings
from .routes import pricing_router
from .routes.pricing import close_backend_client

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Pricing service starting up...")
    logger.info(f"Pricing mode: {settings.pricing_mode.value}")
    if settings.api_enabled:
        logger.info(f"Backend URL: {settings.api_base_url} (timeout {settings.api_timeout}s)")

    yield

    logger.info("Pricing service shutting down...")
    await close_backend_client()


app = FastAPI(
    title=settings.app_name,
    description="Checkout pricing for the bookstore storefront",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "bookstore-pricing",
        "pricing_mode": settings.pricing_mode.value,
        "backend_url": settings.api_base_url if settings.api_enabled else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pricing_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
