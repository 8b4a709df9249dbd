from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from typing import Optional
import logging

from ..core.config import get_settings
from ..core.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)

class MongoDB:
    """Holds the client and database handle for the running app."""
    client: Optional[AsyncIOMotorClient] = None
    db = None

mongodb = MongoDB()

async def create_indexes(db) -> None:
    """Create the indexes the services rely on."""
    await db.users.create_index("username", unique=True)
    await db.users.create_index("email", unique=True)
    await db.usage_logs.create_index([("user_id", ASCENDING), ("date", DESCENDING)])
    await db.usage_logs.create_index([("user_id", ASCENDING), ("app_name", ASCENDING), ("date", ASCENDING)])

async def connect_to_mongodb() -> bool:
    """Create database connection."""
    settings = get_settings()
    try:
        mongodb.client = AsyncIOMotorClient(settings.MONGO_URI)
        mongodb.db = mongodb.client[settings.DATABASE_NAME]
        await create_indexes(mongodb.db)
        logger.info(f"✅ Connected to MongoDB database '{settings.DATABASE_NAME}'")
        return True
    except Exception as e:
        logger.error(f"❌ Error connecting to MongoDB: {e}")
        if mongodb.client:
            mongodb.client.close()
        mongodb.client = None
        mongodb.db = None
        return False

async def close_mongodb_connection() -> None:
    """Close database connection."""
    if mongodb.client:
        mongodb.client.close()
        logger.info("MongoDB connection closed")
    mongodb.client = None
    mongodb.db = None

def get_database():
    """Get database instance."""
    return mongodb.db

def get_db():
    """FastAPI dependency returning the database or failing with 503."""
    db = get_database()
    if db is None:
        raise ServiceUnavailableError("Database connection not available")
    return db
