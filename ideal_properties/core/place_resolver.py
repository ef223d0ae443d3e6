"""
Google Places access for the review widget.

A ``PlaceResolver`` turns the configured business into a place identifier.
``FixedIdResolver`` uses an identifier known in advance and makes no call;
``TextSearchResolver`` looks the business up by name first. Which one runs
depends only on whether GOOGLE_PLACE_ID is configured.
"""

import httpx
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any

from ideal_properties.core.config import Settings
from ideal_properties.core.exceptions import NotFound, UpstreamRejected, ValidationError

logger = logging.getLogger(__name__)

DETAILS_FIELDS = "name,rating,reviews,user_ratings_total"


async def places_get(client: httpx.AsyncClient, settings: Settings, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Call one Places web service endpoint and return the decoded JSON body.

    Raises:
        UpstreamRejected: the body is not a JSON object
    """
    url = f"{settings.google_places_api_url.rstrip('/')}/{endpoint}/json"
    response = await client.get(
        url,
        params={**params, "key": settings.google_places_api_key},
        timeout=settings.upstream_timeout_seconds,
    )

    try:
        data = response.json()
    except ValueError:
        logger.error(f"Places {endpoint} returned non-JSON body (HTTP {response.status_code}): {response.text[:200]}")
        raise UpstreamRejected("Invalid response from Places API")

    if not isinstance(data, dict):
        logger.error(f"Places {endpoint} returned unexpected payload: {data!r}")
        raise UpstreamRejected("Invalid response from Places API")

    return data


class PlaceResolver(ABC):
    """Resolves the configured business to a Places identifier."""

    @abstractmethod
    async def resolve(self, client: httpx.AsyncClient, settings: Settings) -> str:
        ...


class FixedIdResolver(PlaceResolver):

    def __init__(self, place_id: str):
        self.place_id = place_id

    async def resolve(self, client: httpx.AsyncClient, settings: Settings) -> str:
        return self.place_id


class TextSearchResolver(PlaceResolver):
    """Finds the place by a free-text query such as the business name."""

    def __init__(self, query: str):
        self.query = query

    async def resolve(self, client: httpx.AsyncClient, settings: Settings) -> str:
        data = await places_get(client, settings, "textsearch", {"query": self.query})
        status = data.get("status")

        if status not in ("OK", "ZERO_RESULTS"):
            logger.error(f"Error searching for place '{self.query}': {data}")
            raise ValidationError(status or "Places API error")

        candidates = data.get("results") or []
        if not candidates or not candidates[0].get("place_id"):
            logger.warning(f"No place found for query '{self.query}'")
            raise NotFound("Place not found")

        place_id = candidates[0]["place_id"]
        logger.info(f"Resolved '{self.query}' to place {place_id}")
        return place_id


def get_place_resolver(settings: Settings) -> PlaceResolver:
    if settings.google_place_id:
        return FixedIdResolver(settings.google_place_id)
    return TextSearchResolver(settings.place_query)
