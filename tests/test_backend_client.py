"""Tests for the backend HTTP client using httpx.MockTransport."""

import asyncio
import json
from decimal import Decimal

import httpx
import pytest

from pricing_service.core.exceptions import BackendServiceError
from pricing_service.models.backend import DiscountDirective, StackedDiscountRequest
from pricing_service.services.backend_client import BackendClient

BASE_URL = "http://backend.test/"


def run(coro):
    return asyncio.run(coro)


def _client(handler, api_token=None) -> BackendClient:
    return BackendClient(
        api_base_url=BASE_URL,
        timeout=2.0,
        api_token=api_token,
        transport=httpx.MockTransport(handler),
    )


def _call(client: BackendClient, coro_fn):
    async def go():
        try:
            return await coro_fn(client)
        finally:
            await client.close()
    return run(go())


class TestCalculateForUser:

    def test_posts_to_user_endpoint_and_parses_quote(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={
                "success": True,
                "data": {
                    "originalTotal": 600000,
                    "finalPrice": 540000,
                    "savings": 60000,
                    "savingsPercentage": 10,
                    "strategy": {"name": "Thành viên Vàng", "description": "10% off"},
                },
            })

        quote = _call(
            _client(handler, api_token="tok"),
            lambda c: c.calculate_for_user("u-1", Decimal(200_000), 3),
        )

        assert seen["method"] == "POST"
        assert seen["url"] == "http://backend.test/api/pricing/calculate-for-user/u-1"
        assert seen["body"] == {"basePrice": 200000.0, "quantity": 3}
        assert seen["auth"] == "Bearer tok"
        assert quote.final_price == Decimal(540_000)
        assert quote.strategy.name == "Thành viên Vàng"

    def test_no_token_no_auth_header(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"success": True, "data": None})

        quote = _call(_client(handler), lambda c: c.calculate_for_user("u-1", Decimal(1), 1))
        assert quote is None
        assert seen["auth"] is None

    def test_malformed_data_returns_none(self):
        def handler(request):
            return httpx.Response(200, json={"success": True, "data": {"strategy": {"name": "x"}}})

        quote = _call(_client(handler), lambda c: c.calculate_for_user("u-1", Decimal(1), 1))
        assert quote is None

    def test_non_json_body_returns_none(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        quote = _call(_client(handler), lambda c: c.calculate_for_user("u-1", Decimal(1), 1))
        assert quote is None

    def test_http_error_raises(self):
        def handler(request):
            return httpx.Response(503, json={"message": "down"})

        with pytest.raises(BackendServiceError) as exc_info:
            _call(_client(handler), lambda c: c.calculate_for_user("u-1", Decimal(1), 1))
        assert exc_info.value.status_code == 503

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(BackendServiceError, match="failed"):
            _call(_client(handler), lambda c: c.calculate_for_user("u-1", Decimal(1), 1))


class TestCalculateDiscount:

    def test_sends_camel_case_request(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "success": True,
                "data": {
                    "originalPrice": 540000,
                    "finalPrice": 486000,
                    "totalDiscount": 54000,
                    "discountPercentage": 10,
                    "description": "Đơn hàng - Mã SALE10",
                    "appliedDiscounts": ["Mã SALE10"],
                },
            })

        request = StackedDiscountRequest(
            base_price=Decimal(540_000),
            quantity=3,
            discounts=[DiscountDirective(type="coupon", value=Decimal(10), reason="Mã SALE10")],
        )
        quote = _call(_client(handler), lambda c: c.calculate_discount(request))

        assert seen["url"] == "http://backend.test/api/discount/calculate"
        assert seen["body"] == {
            "basePrice": 540000.0,
            "quantity": 3,
            "itemName": "Đơn hàng",
            "discounts": [{"type": "coupon", "value": 10.0, "reason": "Mã SALE10"}],
        }
        assert quote.final_price == Decimal(486_000)
        assert quote.applied_discounts == ["Mã SALE10"]

    def test_missing_data_returns_none(self):
        def handler(request):
            return httpx.Response(200, json={"success": False, "message": "no discounts"})

        request = StackedDiscountRequest(base_price=Decimal(1), quantity=1)
        assert _call(_client(handler), lambda c: c.calculate_discount(request)) is None

    def test_server_error_raises(self):
        def handler(request):
            return httpx.Response(500, text="boom")

        request = StackedDiscountRequest(base_price=Decimal(1), quantity=1)
        with pytest.raises(BackendServiceError):
            _call(_client(handler), lambda c: c.calculate_discount(request))
