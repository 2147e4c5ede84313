"""Tests for the REST API client."""

from dataclasses import replace

import httpx
import pytest

from tour_analytics.client import ApiError, TravelApiClient, create_client


def make_client(settings, handler):
    http_client = create_client(settings, transport=httpx.MockTransport(handler))
    return TravelApiClient(settings, http_client=http_client)


class TestCreateClient:
    def test_headers_and_base_url(self, settings):
        client = create_client(settings)

        assert str(client.base_url) == "http://api.test/api/"
        assert client.headers["Authorization"] == "Bearer secret"
        assert client.timeout.read == settings.http_timeout

    def test_no_token_no_authorization(self, settings):
        client = create_client(replace(settings, api_token=""))

        assert "Authorization" not in client.headers


class TestTravelApiClient:
    async def test_returns_data_member(self, settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"success": True, "data": {"hotels": [{"name": "A"}]}})

        client = make_client(settings, handler)
        data = await client.get_hotels()
        await client.aclose()

        assert data == {"hotels": [{"name": "A"}]}
        assert seen[0].url.path == "/api/hotels"
        assert seen[0].url.params["page"] == "1"
        assert seen[0].url.params["limit"] == "1000"

    @pytest.mark.parametrize("method, path", [
        ("get_admin_stats", "/api/admin/stats"),
        ("list_packages", "/api/packages"),
        ("get_places", "/api/places"),
        ("list_invoices", "/api/invoices"),
        ("list_payment_vouchers", "/api/payment-vouchers"),
    ])
    async def test_endpoints(self, settings, method, path):
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(200, json={"success": True, "data": []})

        client = make_client(settings, handler)
        await getattr(client, method)()

        assert paths == [path]

    async def test_single_voucher(self, settings):
        def handler(request):
            assert request.url.path == "/api/payment-vouchers/v1"
            return httpx.Response(200, json={"success": True, "data": {"voucherNumber": "PV-1"}})

        client = make_client(settings, handler)

        assert await client.get_payment_voucher("v1") == {"voucherNumber": "PV-1"}

    async def test_success_false_raises(self, settings):
        def handler(request):
            return httpx.Response(200, json={"success": False, "message": "Not allowed"})

        client = make_client(settings, handler)

        with pytest.raises(ApiError) as excinfo:
            await client.list_packages()

        assert excinfo.value.message == "Not allowed"
        assert excinfo.value.status == 200

    async def test_http_error_uses_body_message(self, settings):
        def handler(request):
            return httpx.Response(404, json={"success": False, "message": "Voucher not found"})

        client = make_client(settings, handler)

        with pytest.raises(ApiError) as excinfo:
            await client.get_payment_voucher("missing")

        assert excinfo.value.status == 404
        assert excinfo.value.message == "Voucher not found"

    async def test_server_error_without_body(self, settings):
        client = make_client(settings, lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(ApiError) as excinfo:
            await client.get_places()

        assert excinfo.value.status == 500
        assert excinfo.value.message == "HTTP error! status: 500"
        assert str(excinfo.value) == "[500] HTTP error! status: 500"

    @pytest.mark.parametrize("status, message", [
        (401, "Session expired. Please login again."),
        (429, "Too many requests. Please wait a moment and try again."),
    ])
    async def test_special_statuses(self, settings, status, message):
        client = make_client(settings, lambda request: httpx.Response(status, json={}))

        with pytest.raises(ApiError) as excinfo:
            await client.list_invoices()

        assert excinfo.value.message == message

    async def test_transport_error(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(settings, handler)

        with pytest.raises(ApiError) as excinfo:
            await client.get_admin_stats()

        assert excinfo.value.status is None
        assert excinfo.value.message.startswith("Unable to connect")

    async def test_invalid_json(self, settings):
        client = make_client(settings, lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ApiError) as excinfo:
            await client.list_payment_vouchers()

        assert excinfo.value.message == "Invalid JSON response"
