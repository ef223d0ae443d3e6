"""
Generic record store over MongoDB collections.

The website only ever needs simple equality filters, one sort key and
whole-record inserts, so records are plain dicts keyed by a string ``id``.
MongoDB's ``_id`` never leaves this module.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from uuid import uuid4

from pymongo import ASCENDING, DESCENDING, ReturnDocument

from ideal_properties.db.mongo import get_db

logger = logging.getLogger(__name__)

TABLES = ("properties", "blog_posts")

NO_OBJECT_ID = {"_id": 0}


class RecordStore:

    def __init__(self, db):
        self.db = db

    def _collection(self, table: str):
        if table not in TABLES:
            raise ValueError(f"Unknown table '{table}'. Expected one of: {', '.join(TABLES)}")
        return self.db[table]

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch records matching all equality filters.

        Args:
            table: Collection name
            filters: Field/value pairs that must all match
            order_by: Field to sort on
            descending: Sort direction
            limit: Maximum number of records, None for all

        Returns:
            list: Matching records
        """
        cursor = self._collection(table).find(filters or {}, NO_OBJECT_ID)
        if order_by:
            cursor = cursor.sort(order_by, DESCENDING if descending else ASCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=limit)

    async def get(self, table: str, record_id: str) -> Optional[Dict[str, Any]]:
        return await self._collection(table).find_one({"id": record_id}, NO_OBJECT_ID)

    async def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record, assigning ``id`` and ``created_at`` when absent."""
        document = dict(record)
        document.setdefault("id", str(uuid4()))
        document.setdefault("created_at", datetime.now(timezone.utc))

        await self._collection(table).insert_one(document)
        document.pop("_id", None)
        logger.info(f"✅ Inserted {table} record {document['id']}")
        return document

    async def update(self, table: str, record_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        changes = {key: value for key, value in changes.items() if key not in ("id", "_id")}
        return await self._collection(table).find_one_and_update(
            {"id": record_id},
            {"$set": changes},
            projection=NO_OBJECT_ID,
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, table: str, record_id: str) -> bool:
        result = await self._collection(table).delete_one({"id": record_id})
        if result.deleted_count:
            logger.info(f"🗑️ Deleted {table} record {record_id}")
        return result.deleted_count > 0


def get_record_store() -> RecordStore:
    """FastAPI dependency returning a store on the shared database"""
    return RecordStore(get_db())
