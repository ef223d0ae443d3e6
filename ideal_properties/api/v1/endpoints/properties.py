"""
Property listing endpoints.

Public visitors browse and filter listings; the owner publishes and removes
them. Filtering runs over the listings of one status, newest first.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Dict, Any, List, Optional
import logging

from ideal_properties.core.auth import require_owner
from ideal_properties.core.config import Settings, get_settings
from ideal_properties.core.property_filters import apply_filters
from ideal_properties.core.property_images import normalize_image_list, resolve_property_images
from ideal_properties.db.records import RecordStore, get_record_store
from ideal_properties.db.storage import ObjectStorage, get_object_storage, path_from_url
from ideal_properties.models.property import PropertyCreate, PropertyFilters, PropertyResponse, PropertyUpdate
from ideal_properties.models.user import OwnerUser

router = APIRouter()
logger = logging.getLogger(__name__)

TABLE = "properties"


def to_response(record: Dict[str, Any], settings: Settings) -> PropertyResponse:
    images = resolve_property_images(record.get("image_urls"), record.get("image_url"), settings.asset_base_url)
    return PropertyResponse(**{**record, "image_urls": normalize_image_list(record.get("image_urls")), "images": images})


@router.get("/properties", response_model=List[PropertyResponse])
async def list_properties(
    listing_status: Optional[str] = Query(None, alias="status"),
    filters: PropertyFilters = Depends(),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """
    List properties, optionally restricted to one status ("For Sale", "For Rent", ...).

    Args:
        listing_status: Listing status, passed as ``?status=For Rent``
        filters: min_price, max_price, beds, baths, property_type
    """
    try:
        query = {"status": listing_status} if listing_status else None
        records = await store.select(TABLE, query, order_by="created_at", descending=True)
        matching = apply_filters(records, filters)
        logger.debug(f"{len(matching)} of {len(records)} properties match filters")
        return [to_response(record, settings) for record in matching]
    except Exception as e:
        logger.error(f"Error listing properties: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to list properties: {str(e)}")


@router.get("/properties/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: str,
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    try:
        record = await store.get(TABLE, property_id)
        if not record:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")
        return to_response(record, settings)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching property {property_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to fetch property: {str(e)}")


@router.post("/properties", status_code=status.HTTP_201_CREATED, response_model=PropertyResponse)
async def create_property(
    listing: PropertyCreate,
    owner: OwnerUser = Depends(require_owner),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """Publish a new listing (owner only)."""
    try:
        record = await store.insert(TABLE, listing.model_dump())
        logger.info(f"🏠 Owner {owner.id} published property '{listing.title}'")
        return to_response(record, settings)
    except Exception as e:
        logger.error(f"Error creating property: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to create property: {str(e)}")


@router.patch("/properties/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    changes: PropertyUpdate,
    owner: OwnerUser = Depends(require_owner),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """Change some fields of a listing, e.g. mark it Sold (owner only)."""
    try:
        record = await store.update(TABLE, property_id, changes.model_dump(exclude_unset=True))
        if not record:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")
        logger.info(f"✏️ Owner {owner.id} updated property {property_id}")
        return to_response(record, settings)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating property {property_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to update property: {str(e)}")


@router.delete("/properties/{property_id}")
async def delete_property(
    property_id: str,
    owner: OwnerUser = Depends(require_owner),
    store: RecordStore = Depends(get_record_store),
    storage: ObjectStorage = Depends(get_object_storage),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Remove a listing and the photos it had uploaded (owner only)."""
    try:
        record = await store.get(TABLE, property_id)
        if not record or not await store.delete(TABLE, property_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting property {property_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to delete property: {str(e)}")

    removed_images = await remove_stored_images(record, storage, settings)
    return {"success": True, "id": property_id, "removed_images": removed_images}


async def remove_stored_images(record: Dict[str, Any], storage: ObjectStorage, settings: Settings) -> int:
    """Best-effort cleanup of uploaded photos; a listing is already gone when this runs"""
    urls = normalize_image_list(record.get("image_urls"))
    if record.get("image_url"):
        urls.append(record["image_url"])

    removed = 0
    for url in dict.fromkeys(urls):
        for bucket in settings.storage_buckets_list:
            key = path_from_url(bucket, url)
            if not key:
                continue
            try:
                if await storage.remove(bucket, key):
                    removed += 1
            except Exception as e:
                logger.error(f"Failed to remove image {bucket}/{key}: {str(e)}")
    return removed
