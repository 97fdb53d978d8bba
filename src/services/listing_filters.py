"""Composable predicates for the listing search query.

Each step takes the query builder and the parsed filters and returns the
builder with its predicate attached, or untouched when its option is absent.
``apply_search_filters`` folds every step over a base query.
"""

from functools import reduce
from typing import Any, Callable

from src.models.search_filters import SearchListingFilters

FilterStep = Callable[[Any, SearchListingFilters], Any]


def _equals(column: str, option: str) -> FilterStep:
    def step(query, filters: SearchListingFilters):
        value = getattr(filters, option)
        if value is None:
            return query
        return query.eq(column, value)

    step.__name__ = f"filter_{option}"
    return step


filter_property_type = _equals("property_type_id", "property_type")
filter_listing_type = _equals("listing_type_id", "listing_type")
filter_turnover_status = _equals("turnover_status_id", "turnover_status")
filter_city = _equals("city_id", "city")
filter_bedroom_count = _equals("bedroom", "bedroom_count")
filter_bathroom_count = _equals("bathroom", "bathroom_count")
filter_studio_type = _equals("studio_type", "studio_type")
filter_sqm = _equals("sqm", "sqm")


def filter_is_cbd(query, filters: SearchListingFilters):
    # False is never applied; callers cannot ask for non-CBD listings
    if not filters.is_cbd:
        return query
    return query.eq("is_cbd", True)


def filter_title(query, filters: SearchListingFilters):
    if not filters.ilike:
        return query
    return query.ilike("listing_title", f"%{filters.ilike}%")


def filter_sqm_range(query, filters: SearchListingFilters):
    # Both bounds or nothing; bounds are never swapped
    if filters.sqm_min is None or filters.sqm_max is None:
        return query
    return query.gte("sqm", filters.sqm_min).lte("sqm", filters.sqm_max)


def filter_price_range(query, filters: SearchListingFilters):
    if filters.min_price is not None:
        query = query.gte("current_price", filters.min_price)
    if filters.max_price is not None:
        query = query.lte("current_price", filters.max_price)
    return query


def require_images(query, filters: SearchListingFilters):
    return query.not_.is_("images", "null")


def exclude_nan_price(query, filters: SearchListingFilters):
    # current_price IS DISTINCT FROM 'NaN'
    return query.or_("current_price.is.null,current_price.neq.NaN")


OPTIONAL_FILTERS: tuple[FilterStep, ...] = (
    filter_property_type,
    filter_listing_type,
    filter_turnover_status,
    filter_bedroom_count,
    filter_bathroom_count,
    filter_studio_type,
    filter_is_cbd,
    filter_city,
    filter_title,
    filter_sqm,
    filter_sqm_range,
    filter_price_range,
)

SEARCH_GUARDS: tuple[FilterStep, ...] = (
    require_images,
    exclude_nan_price,
)


def apply_search_filters(query, filters: SearchListingFilters):
    """Attach every optional filter and the always-on guards to ``query``."""
    steps = OPTIONAL_FILTERS + SEARCH_GUARDS
    return reduce(lambda current, step: step(current, filters), steps, query)
