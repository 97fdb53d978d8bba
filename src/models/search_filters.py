"""Search filter model for listing queries."""

from typing import Any, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.utils.errors import InvalidFilterError


DEFAULT_PAGE_LIMIT = 100


class SearchListingFilters(BaseModel):
    """Optional filters accepted by listing search.

    Every field is optional; an absent field adds no predicate. ``is_cbd`` is
    only applied when true, and the square-meter range only when both bounds
    are given.
    """
    model_config = ConfigDict(extra="ignore")

    property_type: Optional[int] = Field(None, description="Property type ID")
    listing_type: Optional[int] = Field(None, description="Listing type ID")
    turnover_status: Optional[int] = Field(None, description="Turnover status ID")
    city: Optional[int] = Field(None, description="City ID")
    bedroom_count: Optional[int] = Field(None, ge=0, description="Exact bedroom count")
    bathroom_count: Optional[int] = Field(None, ge=0, description="Exact bathroom count")
    studio_type: Optional[bool] = Field(None, description="Studio-type units only")
    is_cbd: Optional[bool] = Field(None, description="CBD listings only (false is ignored)")
    ilike: Optional[str] = Field(None, description="Case-insensitive title substring")
    sqm: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Exact size in square meters")
    sqm_min: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Lower size bound, needs sqm_max")
    sqm_max: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Upper size bound, needs sqm_min")
    min_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Minimum price (inclusive)")
    max_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Maximum price (inclusive)")
    page_limit: Optional[int] = Field(None, ge=0, description="Result cap, 0 or absent means default")

    @property
    def effective_page_limit(self) -> int:
        return self.page_limit or DEFAULT_PAGE_LIMIT

    @classmethod
    def from_query_params(cls, params: Optional[Mapping[str, Any]]) -> "SearchListingFilters":
        """
        Build filters from query-string parameters.

        Accepts ``parse_qs`` output (lists of strings) or a flat mapping. The
        first value of each key wins and empty strings count as absent.

        Raises:
            InvalidFilterError: a value could not be validated
        """
        values: dict[str, Any] = {}
        for key, value in (params or {}).items():
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
            if isinstance(value, str):
                value = value.strip()
                if value == "":
                    continue
            if value is None:
                continue
            values[key] = value

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise InvalidFilterError(
                "Invalid search filters",
                errors=e.errors(include_url=False, include_context=False),
            ) from e
