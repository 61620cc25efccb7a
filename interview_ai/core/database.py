"""
MongoDB database connection and utilities.

Uses Motor for async MongoDB operations.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from interview_ai.core.config import get_settings

logger = logging.getLogger(__name__)


class MongoDBClient:
    """
    Async MongoDB client wrapper with connection management.
    """
    
    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None
    
    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Get the database instance."""
        if self._db is None:
            raise RuntimeError("MongoDB database not initialized. Call connect() first.")
        return self._db
    
    async def connect(self) -> None:
        """
        Establish connection to MongoDB.
        """
        settings = get_settings()
        try:
            self._client = AsyncIOMotorClient(
                settings.mongodb_uri,
                serverSelectionTimeoutMS=5000,
            )
            # Verify connection
            await self._client.admin.command("ping")
            self._db = self._client[settings.mongodb_db_name]
            await self.interview_sessions.create_index([("owner_id", 1), ("created_at", -1)])
            logger.info(f"Connected to MongoDB: {settings.mongodb_db_name}")
        except ServerSelectionTimeoutError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise
    
    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")
    
    async def health_check(self) -> bool:
        """Check if MongoDB connection is healthy."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError:
            return False
    
    @property
    def interview_sessions(self):
        """Access the interview_sessions collection."""
        return self.db["interview_sessions"]


# Global client instance
mongodb_client = MongoDBClient()
