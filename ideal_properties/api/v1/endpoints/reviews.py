from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import httpx
import logging

from ideal_properties.core.config import Settings, get_settings
from ideal_properties.core.cors import CORS_HEADERS, preflight_response
from ideal_properties.core.exceptions import FunctionError, UnexpectedError
from ideal_properties.core.http_client import get_http_client
from ideal_properties.core.reviews import fetch_reviews_summary

router = APIRouter()
logger = logging.getLogger(__name__)


@router.options("/fetch-google-reviews")
async def fetch_google_reviews_preflight():
    return preflight_response()


@router.api_route("/fetch-google-reviews", methods=["GET", "POST"])
async def fetch_google_reviews(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Fetch up to three Google reviews plus the aggregate rating of the business.

    Returns:
        dict: ``{"reviews": [...], "totalRating": float|null, "totalReviews": int, "name": str|null}``
    """
    try:
        summary = await fetch_reviews_summary(client, settings)
    except FunctionError:
        raise
    except Exception as e:
        logger.exception(f"Error in fetch-google-reviews: {str(e)}")
        raise UnexpectedError(str(e) or "Unknown error occurred")

    return JSONResponse(summary.model_dump(by_alias=True), headers=CORS_HEADERS)
