"""Shared fixtures for booking tests."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from reservations.main import create_application
from reservations.schemas.booking import ListingType
from reservations.services.booking_service import BookingService
from reservations.services.booking_store import InMemoryBookingStore
from reservations.services.listing_titles import CatalogTitleResolver
from reservations.utils.booking_number import BookingNumberGenerator


@pytest.fixture
def store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def titles() -> CatalogTitleResolver:
    catalog = CatalogTitleResolver()
    catalog.register(ListingType.HOMESTAY, "L1", "Yurt camp by Issyk-Kul")
    catalog.register(ListingType.GUIDE, "G1", "Aidana, mountain guide")
    return catalog


@pytest.fixture
def service(store: InMemoryBookingStore, titles: CatalogTitleResolver) -> BookingService:
    return BookingService(store, title_resolver=titles, numbers=BookingNumberGenerator("JY", 1000))


@pytest.fixture
def app(service: BookingService):
    return create_application(booking_service=service)


@pytest.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
