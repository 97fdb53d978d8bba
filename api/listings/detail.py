"""Single listing endpoint for Vercel."""

from src.services.listing_search import get_listing_search_service
from src.utils.errors import InvalidFilterError
from src.utils.http import JsonEndpoint, first_param, run_async
from src.utils.logging import setup_logging

setup_logging()


class handler(JsonEndpoint):
    """GET /api/listings/detail?property_id=...: one listing or 404."""

    endpoint_name = "listings.detail"

    def respond(self, params):
        property_id = first_param(params, "property_id")
        if not property_id:
            raise InvalidFilterError(
                "property_id is required",
                errors=[{"loc": ["property_id"], "msg": "Field required", "type": "missing"}],
            )

        listing = run_async(get_listing_search_service().get_one_listing(property_id))
        if listing is None:
            return 404, {"error": "listing not found"}
        return 200, listing.model_dump(mode="json")
