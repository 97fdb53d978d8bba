"""City lookup endpoint for Vercel."""

from src.services.listing_search import get_listing_search_service
from src.utils.http import JsonEndpoint, first_param, run_async
from src.utils.logging import setup_logging

setup_logging()


class handler(JsonEndpoint):
    """GET /api/reference/cities?name=man: up to 25 cities, alphabetical."""

    endpoint_name = "reference.cities"

    def respond(self, params):
        rows = run_async(get_listing_search_service().get_cities(first_param(params, "name")))
        return 200, [row.model_dump(mode="json") for row in rows]
