"""Health check endpoint."""

from src.utils.http import JsonEndpoint


class handler(JsonEndpoint):
    """Health check handler for Vercel serverless function."""

    endpoint_name = "health"

    def respond(self, params):
        return 200, {"status": "ok", "service": "listing-search-backend"}

