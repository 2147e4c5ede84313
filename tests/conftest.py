"""Shared fixtures for the analytics test-suite."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from tour_analytics.analytics import AnalyticsService
from tour_analytics.config import Settings

NOW = datetime(2025, 3, 15, 10, 30)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def settings():
    return Settings(api_base_url="http://api.test/api", api_token="secret", real_time_updates=False)


@pytest.fixture
def invoices():
    return [
        {"_id": "i1", "invoiceNumber": "INV-001", "type": "hotel", "total": 12000,
         "advancePaid": 12000, "createdAt": "2025-03-02T09:00:00"},
        {"_id": "i2", "invoiceNumber": "INV-002", "type": "tour", "total": 8000,
         "advancePaid": 3000, "createdAt": "2025-03-10T15:00:00"},
        {"_id": "i3", "invoiceNumber": "INV-003", "type": "tour", "total": 5000,
         "advancePaid": 0, "status": "cancelled", "createdAt": "2025-02-20T12:00:00"},
    ]


@pytest.fixture
def vouchers():
    return [
        {"_id": "v1", "voucherNumber": "PV-001", "category": "hotel", "total": 4000,
         "advance": 1000, "due": 3000, "paymentMethod": "upi", "date": "2025-03-05"},
        {"_id": "v2", "voucherNumber": "PV-002", "category": "transport", "total": 1500,
         "advance": 1500, "due": 0, "paymentMethod": "cash", "date": "2025-02-11"},
    ]


@pytest.fixture
def hotels():
    return [
        {"name": "Sea View", "placeId": "p1", "placeName": "Puri", "rating": 4.5,
         "priceRange": "₹4,000 - ₹8,000", "createdAt": "2025-03-01"},
        {"name": "Hill Top", "placeId": "p2", "placeName": "Darjeeling", "rating": 4.0,
         "createdAt": "2025-01-20"},
        {"name": "Beach Inn", "placeId": "p1", "placeName": "Puri", "rating": 3.5,
         "priceRange": "₹2,500", "createdAt": "2025-03-12"},
    ]


@pytest.fixture
def packages():
    return [
        {"name": "Sikkim Explorer", "category": "adventure", "price": 30000, "rating": 4.8},
        {"name": "Goa Weekend", "category": "beach", "price": 15000, "rating": 4.2},
        {"name": "Heritage Walk", "category": "heritage", "price": 0, "rating": 3.9},
    ]


@pytest.fixture
def places():
    return [
        {"name": "Puri", "rating": 4.1, "image": "puri.jpg", "description": "Temple town"},
        {"name": "Darjeeling", "rating": 4.7, "images": ["a.jpg"], "description": "Hills"},
        {"name": "Digha", "rating": 3.8, "images": []},
    ]


@pytest.fixture
def api_client(invoices, vouchers, hotels, packages, places, settings):
    """A TravelApiClient stand-in returning the fixture collections."""
    client = MagicMock()
    client.settings = settings
    client.get_admin_stats = AsyncMock(return_value={"stats": {"totalUsers": 42}})
    client.get_hotels = AsyncMock(return_value={"hotels": hotels})
    client.list_packages = AsyncMock(return_value={"packages": packages})
    client.get_places = AsyncMock(return_value={"places": places})
    client.list_invoices = AsyncMock(return_value={"items": invoices, "total": len(invoices)})
    client.list_payment_vouchers = AsyncMock(return_value={"items": vouchers})
    client.get_payment_voucher = AsyncMock(return_value=vouchers[0])
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def service(api_client):
    return AnalyticsService(api_client, clock=lambda: NOW)
