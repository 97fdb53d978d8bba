"""Turnover status lookup endpoint for Vercel."""

from src.services.listing_search import get_listing_search_service
from src.utils.http import JsonEndpoint, run_async
from src.utils.logging import setup_logging

setup_logging()


class handler(JsonEndpoint):
    endpoint_name = "reference.turnover_status"

    def respond(self, params):
        rows = run_async(get_listing_search_service().get_turnover_status())
        return 200, [row.model_dump(mode="json") for row in rows]
