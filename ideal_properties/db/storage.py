"""
Object storage for listing photos, kept in MongoDB GridFS.

Each bucket is its own GridFS bucket and an object's key is stored as the
GridFS filename. Objects are publicly readable through
``/v1/storage/<bucket>/<key>``.
"""

import logging
from typing import Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorGridFSBucket
from gridfs.errors import NoFile

from ideal_properties.core.config import get_settings
from ideal_properties.db.mongo import get_db

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def public_url(bucket: str, key: str, base_url: str = "") -> str:
    return f"{base_url.rstrip('/')}/v1/storage/{bucket}/{key}"


def path_from_url(bucket: str, url: str) -> Optional[str]:
    """Recover an object key from its public URL, None if the URL is not ours"""
    marker = f"/v1/storage/{bucket}/"
    idx = url.find(marker)
    if idx == -1:
        return None
    return url[idx + len(marker):] or None


class ObjectStorage:

    def __init__(self, db, base_url: str = ""):
        self.db = db
        self.base_url = base_url

    def _bucket(self, bucket: str) -> AsyncIOMotorGridFSBucket:
        return AsyncIOMotorGridFSBucket(self.db, bucket_name=bucket)

    async def upload(self, bucket: str, key: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE) -> str:
        """
        Store an object, replacing any object with the same key.

        Returns:
            str: Public URL of the object
        """
        await self.remove(bucket, key)
        await self._bucket(bucket).upload_from_stream(
            key,
            data,
            metadata={"content_type": content_type},
        )
        logger.info(f"📦 Stored {bucket}/{key} ({len(data)} bytes)")
        return public_url(bucket, key, self.base_url)

    async def download(self, bucket: str, key: str) -> Tuple[bytes, str]:
        """
        Raises:
            FileNotFoundError: no object with this key
        """
        try:
            stream = await self._bucket(bucket).open_download_stream_by_name(key)
        except NoFile:
            raise FileNotFoundError(f"{bucket}/{key}")
        data = await stream.read()
        metadata = stream.metadata or {}
        return data, metadata.get("content_type", DEFAULT_CONTENT_TYPE)

    async def remove(self, bucket: str, key: str) -> bool:
        fs = self._bucket(bucket)
        removed = False
        async for grid_out in fs.find({"filename": key}):
            await fs.delete(grid_out._id)
            removed = True
        if removed:
            logger.info(f"🗑️ Removed {bucket}/{key}")
        return removed


def get_object_storage() -> ObjectStorage:
    return ObjectStorage(get_db(), get_settings().public_base_url)
