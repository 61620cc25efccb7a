"""
Interview session storage.

Both implementations apply the same optimistic concurrency rule: ``save``
succeeds only if the stored version still equals ``expected_version``,
and bumps the version by one when it does.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from interview_ai.core.config import get_settings
from interview_ai.core.database import mongodb_client
from interview_ai.core.errors import ConcurrencyConflictError
from interview_ai.models.interview import InterviewSession

logger = logging.getLogger(__name__)


class SessionRepository(ABC):
    """Persistence interface for interview sessions."""
    
    @abstractmethod
    async def create(self, session: InterviewSession) -> InterviewSession:
        pass
    
    @abstractmethod
    async def get(self, session_id: str) -> Optional[InterviewSession]:
        pass
    
    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[InterviewSession]:
        """Sessions owned by ``owner_id``, newest first."""
        pass
    
    @abstractmethod
    async def save(self, session: InterviewSession, expected_version: int) -> InterviewSession:
        """
        Persist a mutated session.
        
        Raises:
            ConcurrencyConflictError: Stored version differs from expected_version
        """
        pass


class InMemorySessionRepository(SessionRepository):
    """Process-local store. Sessions are copied in and out so callers never share state."""
    
    def __init__(self):
        self._sessions: Dict[str, InterviewSession] = {}
        self._lock = asyncio.Lock()
    
    async def create(self, session: InterviewSession) -> InterviewSession:
        async with self._lock:
            self._sessions[session.id] = session.model_copy(deep=True)
        return session
    
    async def get(self, session_id: str) -> Optional[InterviewSession]:
        stored = self._sessions.get(session_id)
        return stored.model_copy(deep=True) if stored else None
    
    async def list_by_owner(self, owner_id: str) -> List[InterviewSession]:
        owned = [s for s in self._sessions.values() if s.owner_id == owner_id]
        owned.sort(key=lambda s: s.created_at, reverse=True)
        return [s.model_copy(deep=True) for s in owned]
    
    async def save(self, session: InterviewSession, expected_version: int) -> InterviewSession:
        async with self._lock:
            stored = self._sessions.get(session.id)
            if stored is None or stored.version != expected_version:
                raise ConcurrencyConflictError()
            session.version = expected_version + 1
            self._sessions[session.id] = session.model_copy(deep=True)
        return session


class MongoSessionRepository(SessionRepository):
    """MongoDB store using a conditional update on ``version``."""
    
    def __init__(self, collection=None):
        self._collection = collection
    
    @property
    def collection(self):
        if self._collection is None:
            return mongodb_client.interview_sessions
        return self._collection
    
    @staticmethod
    def _to_document(session: InterviewSession) -> dict:
        doc = session.model_dump(mode="json", by_alias=False)
        doc["_id"] = doc.pop("id")
        doc["created_at"] = session.created_at
        return doc
    
    @staticmethod
    def _from_document(doc: dict) -> InterviewSession:
        doc = dict(doc)
        doc["id"] = str(doc.pop("_id"))
        return InterviewSession.model_validate(doc)
    
    async def create(self, session: InterviewSession) -> InterviewSession:
        await self.collection.insert_one(self._to_document(session))
        logger.info(f"Stored interview session {session.id}")
        return session
    
    async def get(self, session_id: str) -> Optional[InterviewSession]:
        doc = await self.collection.find_one({"_id": session_id})
        return self._from_document(doc) if doc else None
    
    async def list_by_owner(self, owner_id: str) -> List[InterviewSession]:
        cursor = self.collection.find({"owner_id": owner_id}).sort("created_at", -1)
        return [self._from_document(doc) async for doc in cursor]
    
    async def save(self, session: InterviewSession, expected_version: int) -> InterviewSession:
        doc = self._to_document(session)
        doc["version"] = expected_version + 1
        doc.pop("_id")
        
        result = await self.collection.update_one(
            {"_id": session.id, "version": expected_version},
            {"$set": doc},
        )
        if result.matched_count == 0:
            logger.warning(f"Version conflict saving session {session.id} at version {expected_version}")
            raise ConcurrencyConflictError()
        
        session.version = expected_version + 1
        return session


def create_session_repository() -> SessionRepository:
    """Pick the store configured by SESSION_STORE."""
    settings = get_settings()
    if settings.uses_mongodb:
        logger.info("Using MongoDB session store")
        return MongoSessionRepository()
    logger.info("Using in-memory session store")
    return InMemorySessionRepository()


# Global repository instance
_repository: Optional[SessionRepository] = None


def get_session_repository() -> SessionRepository:
    global _repository
    if _repository is None:
        _repository = create_session_repository()
    return _repository
