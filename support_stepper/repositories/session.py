import uuid
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from ..services.exceptions import SessionNotFoundError
from ..services.support_session import SupportSession

SessionFactory = Callable[[str], SupportSession]


class SessionRepository(ABC):
    """
    Defines how the application keeps live sessions.
    Sessions only live as long as the process; nothing is persisted.
    """

    @abstractmethod
    def create(self) -> SupportSession:
        """Creates a new session with a unique ID."""
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[SupportSession]:
        """Retrieves a session by ID."""
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Deletes a session. Returns True if found and deleted."""
        pass

    def require(self, session_id: str) -> SupportSession:
        session = self.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session


class InMemorySessionRepository(SessionRepository):
    """
    Uses an in-memory dictionary for session storage.
    """

    def __init__(self, factory: SessionFactory):
        self._factory = factory
        self._store: Dict[str, SupportSession] = {}

    def create(self) -> SupportSession:
        new_id = str(uuid.uuid4())
        session = self._factory(new_id)
        self._store[new_id] = session
        return session

    def get(self, session_id: str) -> Optional[SupportSession]:
        return self._store.get(session_id)

    def delete(self, session_id: str) -> bool:
        if session_id in self._store:
            del self._store[session_id]
            return True
        return False
