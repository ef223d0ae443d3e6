"""
Listing photo uploads.

The owner uploads images into a storage bucket; keys are prefixed with the
owner id. Stored images are publicly readable.
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response
from typing import Dict, Any
from uuid import uuid4
import logging

from ideal_properties.core.auth import require_owner
from ideal_properties.core.config import Settings, get_settings
from ideal_properties.db.storage import ObjectStorage, get_object_storage
from ideal_properties.models.user import OwnerUser, StoredObject

router = APIRouter()
logger = logging.getLogger(__name__)


def check_bucket(bucket: str, settings: Settings) -> None:
    if bucket not in settings.storage_buckets_list:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Bucket '{bucket}' not found")


def object_key(owner: OwnerUser, filename: str) -> str:
    """``<owner id>/<uuid>.<ext>``, the extension lower-cased and defaulting to jpg"""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return f"{owner.id}/{uuid4()}.{ext or 'jpg'}"


@router.post("/storage/{bucket}", status_code=status.HTTP_201_CREATED, response_model=StoredObject)
async def upload_image(
    bucket: str,
    file: UploadFile = File(...),
    owner: OwnerUser = Depends(require_owner),
    storage: ObjectStorage = Depends(get_object_storage),
    settings: Settings = Depends(get_settings),
):
    """
    Upload one image (owner only).

    Returns:
        StoredObject: bucket, storage path and public URL of the image
    """
    check_bucket(bucket, settings)

    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only images allowed")

    data = await file.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=f"Max {settings.max_upload_mb}MB")

    key = object_key(owner, file.filename or "")
    try:
        url = await storage.upload(bucket, key, data, content_type)
    except Exception as e:
        logger.error(f"Error uploading {bucket}/{key}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to upload image: {str(e)}")

    return StoredObject(bucket=bucket, path=key, content_type=content_type, url=url)


@router.get("/storage/{bucket}/{key:path}")
async def download_image(
    bucket: str,
    key: str,
    storage: ObjectStorage = Depends(get_object_storage),
    settings: Settings = Depends(get_settings),
):
    check_bucket(bucket, settings)
    try:
        data, content_type = await storage.download(bucket, key)
    except FileNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Object not found")
    return Response(content=data, media_type=content_type)


@router.delete("/storage/{bucket}/{key:path}")
async def delete_image(
    bucket: str,
    key: str,
    owner: OwnerUser = Depends(require_owner),
    storage: ObjectStorage = Depends(get_object_storage),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    check_bucket(bucket, settings)
    try:
        removed = await storage.remove(bucket, key)
    except Exception as e:
        logger.error(f"Error deleting {bucket}/{key}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to delete image: {str(e)}")

    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Object not found")
    return {"success": True, "path": key}
