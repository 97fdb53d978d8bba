"""Listing search endpoint for Vercel."""

from src.models.search_filters import SearchListingFilters
from src.services.listing_search import get_listing_search_service
from src.utils.http import JsonEndpoint, run_async
from src.utils.logging import setup_logging

setup_logging()


class handler(JsonEndpoint):
    """GET /api/listings/search?city=3&min_price=...: filtered listings, newest first."""

    endpoint_name = "listings.search"

    def respond(self, params):
        filters = SearchListingFilters.from_query_params(params)
        listings = run_async(get_listing_search_service().search_listings(filters))
        return 200, [listing.model_dump(mode="json") for listing in listings]
