"""Tests for the HTTP layer."""

import asyncio
import inspect

import pytest
from fastapi.testclient import TestClient

from tour_analytics.analytics import AnalyticsService
from tour_analytics.api import get_analytics_service
from tour_analytics.api.analytics import AnalyticsSummaryResponse
from tour_analytics.client import ApiError
from tour_analytics.models import to_dict
from tour_analytics.server import create_app


@pytest.fixture
def app(settings, service):
    application = create_app(settings)
    application.dependency_overrides[get_analytics_service] = lambda: service
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


class TestAnalyticsRoutes:
    def test_summary(self, client):
        response = client.get("/api/analytics/summary", params={"period": "month"})

        assert response.status_code == 200
        body = response.json()
        assert body["keyMetrics"]["revenue"] == {"total": 20000, "change": 300, "trend": "up"}
        assert body["detailedData"]["periodInfo"]["period"] == "month"
        assert body["detailedData"]["invoices"]["totalRevenue"] == 20000
        assert "rawInvoices" not in body["detailedData"]["invoices"]
        assert body["lastUpdated"] == "2025-03-15T10:30:00"

    def test_summary_defaults_to_month(self, client):
        body = client.get("/api/analytics/summary").json()
        assert body["detailedData"]["periodInfo"]["period"] == "month"

    def test_top_performers(self, client):
        body = client.get("/api/analytics/top-performers").json()

        assert set(body) == {"topPackages", "topHotels"}
        assert {"name", "bookings", "revenue"} == set(body["topPackages"][0])

    def test_transactions(self, client):
        body = client.get("/api/analytics/transactions", params={"period": "month"}).json()

        assert [tx["type"] for tx in body] == ["revenue", "expense", "revenue"]
        assert body[0]["description"] == "Tour Invoice - INV-002"

    def test_period_info(self, client):
        body = client.get("/api/analytics/period-info", params={"period": "quarter"}).json()

        assert body["period"] == "quarter"
        assert body["description"] == "Current Quarter Q1 (01/01/2025 - 31/03/2025)"
        assert body["startDate"] == "2025-01-01T00:00:00"

    def test_refresh_clears_cache(self, client, service, api_client):
        client.get("/api/analytics/summary")

        response = client.post("/api/analytics/refresh")
        client.get("/api/analytics/summary")

        assert response.status_code == 200
        assert len(service.cache) == 6
        assert api_client.get_hotels.await_count == 2


class TestVoucherPdfRoute:
    def test_download(self, client, api_client):
        response = client.get("/api/vouchers/v1/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="PV_001.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")
        api_client.get_payment_voucher.assert_awaited_once_with("v1")

    def test_not_found(self, client, api_client):
        api_client.get_payment_voucher.side_effect = ApiError(status=404, message="Voucher not found")

        response = client.get("/api/vouchers/missing/pdf")

        assert response.status_code == 404

    def test_upstream_failure(self, client, api_client):
        api_client.get_payment_voucher.side_effect = ApiError(status=None, message="Unable to connect")

        response = client.get("/api/vouchers/v1/pdf")

        assert response.status_code == 502
        assert response.json()["detail"] == "Unable to connect"

    def test_empty_payload(self, client, api_client):
        api_client.get_payment_voucher.return_value = None

        assert client.get("/api/vouchers/v1/pdf").status_code == 404


class TestApplication:
    def test_root(self, client):
        assert client.get("/").json() == {"message": "Tour Analytics API is running"}

    def test_lifespan_builds_service(self, settings):
        app = create_app(settings)

        with TestClient(app) as client:
            service = client.app.state.analytics_service
            assert isinstance(service, AnalyticsService)
            assert not service.real_time_updates_running
            assert client.get("/api/analytics/period-info").status_code == 200


class TestEventLoopAffinity:
    def test_refresh_listeners_run_on_the_event_loop(self, app, service):
        seen = []

        def listener():
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                seen.append("no-loop")
            else:
                seen.append("loop")

        service.add_update_listener(listener)

        with TestClient(app) as client:
            response = client.post("/api/analytics/refresh")

        assert response.status_code == 200
        assert response.json() == {"message": "Analytics cache cleared"}
        assert seen == ["loop"]

    @pytest.mark.parametrize("path", [
        "/api/analytics/summary",
        "/api/analytics/top-performers",
        "/api/analytics/transactions",
        "/api/analytics/period-info",
        "/api/analytics/refresh",
    ])
    def test_route_handlers_are_coroutines(self, app, path):
        route = next(r for r in app.routes if getattr(r, "path", None) == path)
        assert inspect.iscoroutinefunction(route.endpoint)


class TestResponseModels:
    @pytest.mark.parametrize("path, method, model", [
        ("/api/analytics/summary", "get", "AnalyticsSummaryResponse"),
        ("/api/analytics/top-performers", "get", "TopPerformersResponse"),
        ("/api/analytics/period-info", "get", "PeriodInfoResponse"),
        ("/api/analytics/refresh", "post", "RefreshResponse"),
    ])
    def test_declared_in_openapi(self, app, path, method, model):
        schema = app.openapi()["paths"][path][method]["responses"]["200"]["content"]["application/json"]["schema"]
        assert f"/{model}" in schema["$ref"]

    def test_transactions_are_a_list_of_models(self, app):
        schema = app.openapi()["paths"]["/api/analytics/transactions"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
        assert schema["type"] == "array"
        assert "/TransactionModel" in schema["items"]["$ref"]

    async def test_summary_model_uses_camel_case_aliases(self, service):
        summary = await service.get_analytics_summary("month")

        model = AnalyticsSummaryResponse.model_validate(to_dict(summary))
        dumped = model.model_dump(by_alias=True, mode="json")

        assert dumped["detailedData"]["invoices"]["totalRevenue"] == 20000
        assert dumped["keyMetrics"]["profit"]["trend"] == "up"
        assert model.detailed_data.period_info.filtered_invoices_count == 2

    def test_failed_collections_are_null(self, client, api_client):
        api_client.get_hotels.side_effect = ApiError(status=500, message="down")

        body = client.get("/api/analytics/summary").json()

        assert body["detailedData"]["hotels"] is None
        assert body["detailedData"]["packages"]["totalPackages"] == 3
