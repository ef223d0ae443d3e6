import motor.motor_asyncio
import logging

from ideal_properties.core.config import get_settings

# Set up logger
logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "ideal_properties"

client = None


def mask_uri(uri: str) -> str:
    """Hide the password of a MongoDB connection string for logging"""
    if '@' not in uri or '://' not in uri:
        return uri
    credentials_part = uri.split('@')[0]
    user_pass = credentials_part.split('://')[-1]
    if ':' not in user_pass:
        return uri
    user, password = user_pass.split(':', 1)
    return uri.replace(user_pass, f"{user}:{'*' * len(password)}")


def get_client():
    """Create the Motor client on first use"""
    global client
    if client is None:
        uri = get_settings().effective_mongo_uri
        logger.info(f"Connecting to MongoDB server: {mask_uri(uri)}")
        client = motor.motor_asyncio.AsyncIOMotorClient(
            uri,
            maxPoolSize=10,
            minPoolSize=2,
            maxIdleTimeMS=30000,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=10000
        )
    return client


def get_db():
    """Returns the database connection"""
    return get_client().get_default_database(DEFAULT_DB_NAME)


def close_client():
    global client
    if client is not None:
        client.close()
        client = None
        logger.info("MongoDB connections closed successfully")
