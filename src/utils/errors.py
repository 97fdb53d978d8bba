"""Error handling utilities."""

from typing import Any, Optional


class ListingSearchError(Exception):
    """Base exception for the listing search backend."""
    pass


class SupabaseError(ListingSearchError):
    """Supabase client configuration error."""
    pass


class InvalidFilterError(ListingSearchError):
    """Search or lookup parameters failed validation."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []
