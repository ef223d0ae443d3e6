"""
Database initialization for the listings site.
Ensures the record collections and their indexes exist. Safe to run on every
startup; MongoDB creates a collection together with its first index.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Any
from pymongo.errors import PyMongoError

from ideal_properties.db.mongo import get_db

# Set up logger
logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = [
    {
        "name": "properties",
        "description": "Property listings shown on the Buy and Rent pages",
        "indexes": [
            {"keys": [("id", 1)], "unique": True},
            {"keys": [("status", 1), ("created_at", -1)], "unique": False},
            {"keys": [("created_at", -1)], "unique": False}
        ]
    },
    {
        "name": "blog_posts",
        "description": "Blog articles",
        "indexes": [
            {"keys": [("id", 1)], "unique": True},
            {"keys": [("created_at", -1)], "unique": False}
        ]
    }
]


async def ensure_collection(db, collection_config) -> bool:
    """
    Create the indexes of one collection, creating the collection as needed.

    Returns:
        bool: True if every index is in place
    """
    collection_name = collection_config["name"]
    collection = db[collection_name]
    ok = True

    for index_config in collection_config.get("indexes", []):
        keys = index_config["keys"]
        options = {k: v for k, v in index_config.items() if k != "keys"}
        try:
            await collection.create_index(keys, **options)
            logger.debug(f"✅ Index {keys} ensured for '{collection_name}'")
        except PyMongoError as e:
            logger.warning(f"Failed to create index {keys} for '{collection_name}': {str(e)}")
            ok = False

    return ok


async def initialize_database(db=None) -> bool:
    """
    Initialize all required collections and indexes.

    Returns:
        bool: True if initialization completed without errors
    """
    start_time = datetime.now(timezone.utc)
    logger.info("🚀 Starting database initialization...")

    if db is None:
        db = get_db()

    try:
        error_count = 0
        for collection_config in REQUIRED_COLLECTIONS:
            if not await ensure_collection(db, collection_config):
                error_count += 1

        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        if error_count:
            logger.warning(f"⚠️ Database initialization completed with {error_count} errors in {duration:.2f}s")
            return False

        logger.info(f"🎉 Database '{db.name}' initialized: {len(REQUIRED_COLLECTIONS)} collections in {duration:.2f}s")
        return True

    except PyMongoError as e:
        logger.error(f"❌ MongoDB error during database initialization: {str(e)}")
        return False


async def verify_database_setup(db=None) -> Dict[str, Any]:
    """
    Report document counts and indexes for each required collection.

    Returns:
        dict: Verification results with an ``overall_status`` of PASS or FAIL
    """
    if db is None:
        db = get_db()

    results = {"database_name": db.name, "collections": {}, "overall_status": "PASS"}

    try:
        existing = await db.list_collection_names()
        for collection_config in REQUIRED_COLLECTIONS:
            name = collection_config["name"]
            if name not in existing:
                results["collections"][name] = {"exists": False}
                results["overall_status"] = "FAIL"
                logger.error(f"❌ {name}: Collection does not exist")
                continue

            collection = db[name]
            indexes = await collection.list_indexes().to_list(None)
            results["collections"][name] = {
                "exists": True,
                "document_count": await collection.count_documents({}),
                "indexes": [idx.get("name", "unknown") for idx in indexes],
            }
    except PyMongoError as e:
        logger.error(f"❌ Error during database verification: {str(e)}")
        results["overall_status"] = "ERROR"
        results["error"] = str(e)

    return results
