"""
Google review fetch.

Returns a display-ready slice of the business's Google reviews without the
website holding a Places API key. Every call queries Google again; caching
is left to the caller.
"""

import httpx
import logging
from typing import Any, Dict, Optional
from pydantic import ValidationError as SchemaError

from ideal_properties.core.config import Settings
from ideal_properties.core.exceptions import ConfigurationError, UpstreamRejected, ValidationError
from ideal_properties.core.place_resolver import DETAILS_FIELDS, PlaceResolver, get_place_resolver, places_get
from ideal_properties.models.review import PlaceDetails, ReviewRecord, ReviewsSummary

logger = logging.getLogger(__name__)

MAX_REVIEWS = 3


def check_places_config(settings: Settings) -> None:
    if not settings.google_places_api_key:
        logger.error("GOOGLE_PLACES_API_KEY is not configured")
        raise ConfigurationError("API key not configured")


def parse_place_details(result: Any) -> PlaceDetails:
    """
    Validate the ``result`` object of a details response.

    Raises:
        UpstreamRejected: the payload does not have the expected shape
    """
    if result is None:
        result = {}
    try:
        return PlaceDetails.model_validate(result)
    except SchemaError as e:
        logger.error(f"Malformed place details from Places API: {e}")
        raise UpstreamRejected("Invalid response from Places API")


def summarize(details: PlaceDetails) -> ReviewsSummary:
    reviews = (details.reviews or [])[:MAX_REVIEWS]
    return ReviewsSummary(
        reviews=[ReviewRecord.from_place_review(review) for review in reviews],
        total_rating=details.rating,
        total_reviews=details.user_ratings_total or 0,
        name=details.name,
    )


async def fetch_reviews_summary(client: httpx.AsyncClient, settings: Settings, resolver: Optional[PlaceResolver] = None) -> ReviewsSummary:
    """
    Resolve the place, fetch its details and reduce them to a ReviewsSummary.

    Args:
        client: HTTP client used for every Places call
        settings: Application settings
        resolver: Place resolution strategy, chosen from settings when omitted

    Raises:
        ConfigurationError: no Places API key
        NotFound: text search returned no candidate
        ValidationError: Places answered with a non-OK status
        UpstreamRejected: Places answered with a malformed payload
    """
    check_places_config(settings)

    if resolver is None:
        resolver = get_place_resolver(settings)
    place_id = await resolver.resolve(client, settings)

    data: Dict[str, Any] = await places_get(
        client,
        settings,
        "details",
        {"place_id": place_id, "fields": DETAILS_FIELDS},
    )

    if data.get("status") != "OK":
        logger.error(f"Error fetching place details: {data}")
        raise ValidationError(data.get("status") or "Places API error")

    summary = summarize(parse_place_details(data.get("result")))
    logger.info(f"⭐ Fetched {len(summary.reviews)} reviews for place {place_id}")
    return summary
