"""Listing title lookup used to cache a title on new bookings."""

from typing import Protocol

from reservations.schemas.booking import ListingType


class ListingTitleResolver(Protocol):
    """Resolves a display title for a listing.

    Returns None when the listing is unknown; that is a normal outcome and
    must not raise.
    """

    async def resolve_title(self, listing_type: ListingType, listing_id: str) -> str | None: ...


class NullTitleResolver:
    """Resolver for deployments without a listing catalog."""

    async def resolve_title(self, listing_type: ListingType, listing_id: str) -> str | None:
        return None


class CatalogTitleResolver:
    """In-memory listing catalog keyed by (listing type, listing id).

    Homestays are registered under their title, guides under their name.
    """

    def __init__(self, titles: dict[tuple[ListingType, str], str] | None = None) -> None:
        self._titles: dict[tuple[ListingType, str], str] = dict(titles or {})

    def register(self, listing_type: ListingType, listing_id: str, title: str) -> None:
        self._titles[(ListingType(listing_type), listing_id)] = title

    async def resolve_title(self, listing_type: ListingType, listing_id: str) -> str | None:
        return self._titles.get((ListingType(listing_type), listing_id))
