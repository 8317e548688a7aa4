"""
Bearer-token session state

A Session holds the tokens obtained through login/refreshToken. The stdio
server owns one Session per process; the HTTP app keeps one per session key.
Access is not locked: concurrent writers resolve as last-write-wins.
"""
import uuid
from collections import OrderedDict
from typing import Optional

from brandservice.config.settings import settings


DEFAULT_SESSION_KEY = "default"


class Session:
    """Cached access and refresh tokens for one MCP connection"""

    def __init__(self, access_token: Optional[str] = None, refresh_token: Optional[str] = None):
        self._access_token = access_token or None
        self._refresh_token = refresh_token or None

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._refresh_token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._access_token)

    def set_tokens(self, access_token: Optional[str] = None, refresh_token: Optional[str] = None):
        """Overwrite whichever tokens are given. Empty values leave the cached token alone."""
        if access_token:
            self._access_token = access_token
        if refresh_token:
            self._refresh_token = refresh_token

    def __repr__(self) -> str:
        return f"Session(authenticated={self.is_authenticated}, has_refresh_token={bool(self._refresh_token)})"


class SessionStore:
    """
    Sessions keyed by connection id

    Least recently used sessions are evicted once max_sessions is reached.
    The default session is never evicted.
    """

    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, Session]" = OrderedDict()

    def create(self) -> str:
        """Issue a fresh session id"""
        key = uuid.uuid4().hex
        self.get(key)
        return key

    def get(self, key: Optional[str] = None) -> Session:
        key = key or DEFAULT_SESSION_KEY
        session = self._sessions.get(key)
        if session is None:
            session = Session()
            self._sessions[key] = session
            self._evict()
        else:
            self._sessions.move_to_end(key)
        return session

    def _evict(self):
        while len(self._sessions) > self.max_sessions:
            oldest = next((k for k in self._sessions if k != DEFAULT_SESSION_KEY), None)
            if oldest is None:
                return
            del self._sessions[oldest]

    def __contains__(self, key: str) -> bool:
        return key in self._sessions

    def discard(self, key: str) -> bool:
        return self._sessions.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Get global session store instance"""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(max_sessions=settings.MCP_MAX_SESSIONS)
    return _session_store
