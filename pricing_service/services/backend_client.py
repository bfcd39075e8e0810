"""
Pricing Backend Client

HTTP client for the bookstore backend's membership pricing and
stacked discount APIs.
"""

import logging
from decimal import Decimal
from typing import Optional, Any

import httpx
from pydantic import ValidationError

from ..core.exceptions import BackendServiceError
from ..models.backend import (
    MembershipQuote,
    StackedDiscountQuote,
    StackedDiscountRequest,
)

logger = logging.getLogger(__name__)


class BackendClient:
    """
    Client for the pricing backend.

    Every response is wrapped in an envelope ``{"success": ..., "data": ...}``.
    A missing or malformed ``data`` yields ``None``; transport failures and
    HTTP errors raise BackendServiceError.
    """

    def __init__(
        self,
        api_base_url: str,
        timeout: float = 10.0,
        api_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize backend client.

        Args:
            api_base_url: Base URL of the backend API
            timeout: Hard bound in seconds for each request
            api_token: Bearer token sent with every request, if any
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = api_base_url.rstrip("/")
        self._api_token = api_token
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and unwrap the response envelope"""
        url = f"{self.base_url}{path}"
        logger.debug(f"API request: {method} {url}")

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._generate_headers(),
                json=body,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request to {url} failed: {e!r}")
            raise BackendServiceError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise BackendServiceError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"Non-JSON response from {url}")
            return None

        if not isinstance(payload, dict):
            return None
        return payload.get("data")

    # ==================== Pricing APIs ====================

    async def calculate_for_user(
        self,
        user_id: str,
        base_price: Decimal,
        quantity: int,
    ) -> Optional[MembershipQuote]:
        """Price per-item ``base_price`` with the user's membership strategy"""
        data = await self._request(
            "POST",
            f"/api/pricing/calculate-for-user/{user_id}",
            body={"basePrice": float(base_price), "quantity": quantity},
        )
        if not data:
            return None

        try:
            return MembershipQuote.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Malformed membership pricing for user {user_id}: {e}")
            return None

    # ==================== Discount APIs ====================

    async def calculate_discount(
        self,
        request: StackedDiscountRequest,
    ) -> Optional[StackedDiscountQuote]:
        """Apply all discount directives in ``request`` together"""
        data = await self._request(
            "POST",
            "/api/discount/calculate",
            body=request.model_dump(mode="json", by_alias=True),
        )
        if not data:
            return None

        try:
            return StackedDiscountQuote.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Malformed discount calculation: {e}")
            return None
