"""
Image URL resolution for property listings.

Older listings reference bundled stock photos by file name; newer ones carry
uploaded image URLs, stored either as a list or as a single string (JSON
array, or newline/comma separated).
"""

import json
import logging
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

BUNDLED_IMAGES = ("property-1.jpg", "property-2.jpg", "property-3.jpg")
FALLBACK_IMAGE = BUNDLED_IMAGES[0]

ImageList = Union[List[str], str, None]


def resolve_image_path(path: Optional[str], asset_base_url: str = "/assets") -> str:
    """Map a bundled asset name to its URL; anything else is returned as is."""
    base = asset_base_url.rstrip("/")
    if not path:
        return f"{base}/{FALLBACK_IMAGE}"
    if path in BUNDLED_IMAGES:
        return f"{base}/{path}"
    return path


def normalize_image_list(image_urls: ImageList) -> List[str]:
    if not image_urls:
        return []

    if isinstance(image_urls, list):
        return [url for url in image_urls if isinstance(url, str) and url]

    trimmed = image_urls.strip()
    if not trimmed:
        return []

    try:
        parsed = json.loads(trimmed)
        if isinstance(parsed, list):
            return [value for value in parsed if isinstance(value, str) and value]
    except ValueError:
        logger.debug("Property image URLs are not JSON, splitting on delimiters")

    return [url.strip() for url in trimmed.replace("\n", ",").split(",") if url.strip()]


def resolve_property_images(image_urls: ImageList, primary_image_url: Optional[str] = None, asset_base_url: str = "/assets") -> List[str]:
    """
    Resolve every image of a listing.

    Falls back to the primary image, and then to the first bundled photo, so
    the result is never empty.
    """
    resolved = [resolve_image_path(url, asset_base_url) for url in normalize_image_list(image_urls)]
    if resolved:
        return resolved
    return [resolve_image_path(primary_image_url, asset_base_url)]


def resolve_property_image(image_url: Optional[str], fallback_urls: ImageList = None, asset_base_url: str = "/assets") -> str:
    """Cover image of a listing card."""
    return resolve_property_images(fallback_urls, image_url, asset_base_url)[0]
