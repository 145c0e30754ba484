"""In-memory store of admin session tokens."""

import secrets
import threading
import time
from dataclasses import dataclass

DEFAULT_TTL = 60 * 60


@dataclass
class AdminSession:
    token: str
    created_at: float
    expires_at: float


class SessionStore:
    """Process-local map of session token -> expiry with sliding expiration.

    Entries are never swept in the background; an expired token is evicted
    the next time it is looked up. Every read-modify-write on the map holds
    ``self._lock`` so a ``touch`` racing a ``revoke`` cannot bring the entry
    back.
    """

    def __init__(self, ttl=DEFAULT_TTL, clock=time.time):
        self.ttl = ttl
        self._clock = clock
        self._sessions = {}
        self._lock = threading.Lock()

    def init_app(self, app):
        self.ttl = app.config.get('ADMIN_SESSION_TTL', DEFAULT_TTL)
        app.extensions['admin_sessions'] = self

    def create(self):
        """Start a new session and return its token."""
        token = secrets.token_hex(24)
        now = self._clock()
        with self._lock:
            self._sessions[token] = AdminSession(token, now, now + self.ttl)
        return token

    def is_valid(self, token):
        if not token:
            return False
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return False
            if self._clock() >= session.expires_at:
                del self._sessions[token]
                return False
            return True

    def touch(self, token):
        """Restart the TTL window of a live session.

        Returns False, and changes nothing, if the token is absent or
        already expired.
        """
        if not token:
            return False
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return False
            now = self._clock()
            if now >= session.expires_at:
                del self._sessions[token]
                return False
            session.expires_at = now + self.ttl
            return True

    def revoke(self, token):
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def clear(self):
        with self._lock:
            self._sessions.clear()

    def get(self, token):
        """Snapshot of a session's timestamps, or None."""
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            return AdminSession(session.token, session.created_at, session.expires_at)

    def __len__(self):
        with self._lock:
            return len(self._sessions)
