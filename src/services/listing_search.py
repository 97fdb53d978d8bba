"""Listing search service: filtered listing reads and reference lookups."""

from typing import Any, Mapping, Optional, Union

from supabase import Client

from src.models.listing import Listing
from src.models.reference import City, ListingType, PropertyType, TurnoverStatus
from src.models.search_filters import SearchListingFilters
from src.services.listing_filters import apply_search_filters
from src.services.supabase_client import SupabaseClient
from src.utils.logging import get_structured_logger, sanitize_search_text, timed

logger = get_structured_logger(__name__)

CITY_LOOKUP_LIMIT = 25

# properties + inner joins on the four reference tables, names aliased
LISTING_COLUMNS = ", ".join([
    "property_id",
    "listing_title",
    "listing_url",
    "property_type:property_types!inner(name)",
    "listing_type:listing_types!inner(name)",
    "turnover_status:turnover_status!inner(name)",
    "current_price",
    "floor_area",
    "lot_area",
    "sqm",
    "bedroom",
    "bathroom",
    "parking_lot",
    "is_corner_lot",
    "studio_type",
    "building_name",
    "year_built",
    "city:cities!inner(name)",
    "address",
    "is_active",
    "is_cbd",
    "amenities",
    "images",
    "description",
    "longitude",
    "latitude",
    "lease_end",
    "created_at",
])

FiltersInput = Union[SearchListingFilters, Mapping[str, Any], None]


class ListingSearchService:
    """Read-only queries over listings and their reference tables.

    The Supabase client is shared and never mutated, so one service instance
    can serve concurrent requests. Store errors propagate unchanged.
    """

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    def _listing_query(self, client: Client):
        return client.table("properties").select(LISTING_COLUMNS)

    @timed("listing_search.search_listings")
    async def search_listings(self, filters: FiltersInput = None) -> list[Listing]:
        """
        Search listings, newest first.

        Args:
            filters: parsed filters, or a mapping validated into them

        Returns:
            At most ``page_limit`` (default 100) listings with images and a
            real price
        """
        if not isinstance(filters, SearchListingFilters):
            filters = SearchListingFilters.from_query_params(filters)

        applied = filters.model_dump(exclude_none=True, exclude={"ilike"})
        logger.info(
            "Searching listings",
            filters=applied,
            title_search=sanitize_search_text(filters.ilike),
            page_limit=filters.effective_page_limit,
        )

        async with SupabaseClient(self._client) as client:
            query = apply_search_filters(self._listing_query(client), filters)
            result = (
                query
                .order("created_at", desc=True)
                .limit(filters.effective_page_limit)
                .execute()
            )

        rows = result.data or []
        logger.info("Listing search completed", result_count=len(rows))
        return [Listing.model_validate(row) for row in rows]

    @timed("listing_search.get_one_listing")
    async def get_one_listing(self, property_id: str) -> Optional[Listing]:
        """Get a single listing by ID, or None when it does not exist."""
        async with SupabaseClient(self._client) as client:
            result = (
                self._listing_query(client)
                .eq("property_id", property_id)
                .limit(1)
                .execute()
            )

        if not result.data:
            logger.info("Listing not found", property_id=property_id)
            return None
        return Listing.model_validate(result.data[0])

    @timed("listing_search.get_property_types")
    async def get_property_types(self) -> list[PropertyType]:
        async with SupabaseClient(self._client) as client:
            result = (
                client.table("property_types")
                .select("property_type_id, name")
                .order("property_type_id")
                .execute()
            )
        return [PropertyType.model_validate(row) for row in result.data or []]

    @timed("listing_search.get_listing_types")
    async def get_listing_types(self) -> list[ListingType]:
        async with SupabaseClient(self._client) as client:
            result = (
                client.table("listing_types")
                .select("listing_type_id, name")
                .order("listing_type_id")
                .execute()
            )
        return [ListingType.model_validate(row) for row in result.data or []]

    @timed("listing_search.get_turnover_status")
    async def get_turnover_status(self) -> list[TurnoverStatus]:
        async with SupabaseClient(self._client) as client:
            result = (
                client.table("turnover_status")
                .select("turnover_status_id, name")
                .order("turnover_status_id")
                .execute()
            )
        return [TurnoverStatus.model_validate(row) for row in result.data or []]

    @timed("listing_search.get_cities")
    async def get_cities(self, name: Optional[str] = None) -> list[City]:
        """
        Look up cities, alphabetically, capped at 25 rows.

        Args:
            name: optional case-insensitive substring of the city name
        """
        async with SupabaseClient(self._client) as client:
            query = client.table("cities").select("city_id, name")
            if name:
                query = query.ilike("name", f"%{name}%")
            result = (
                query
                .order("name")
                .limit(CITY_LOOKUP_LIMIT)
                .execute()
            )

        rows = result.data or []
        logger.debug(
            "City lookup completed",
            name_filter=sanitize_search_text(name),
            result_count=len(rows),
        )
        return [City.model_validate(row) for row in rows]


# Global service instance (singleton pattern)
_service: Optional[ListingSearchService] = None


def get_listing_search_service() -> ListingSearchService:
    """Get or create the process-wide listing search service."""
    global _service
    if _service is None:
        _service = ListingSearchService()
    return _service
