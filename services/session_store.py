"""
In-memory registry of browsing sessions.
Entries expire after a period of inactivity (TTL refreshed on access).
Single-process only; nothing survives a restart.
"""
import uuid
from datetime import datetime, timedelta
from typing import Optional

from config import settings
from exceptions import SessionNotFoundError
from services.catalog_service import CatalogSession

_sessions: dict[str, tuple[datetime, CatalogSession]] = {}


def _ttl() -> timedelta:
    return timedelta(minutes=settings.session_ttl_minutes)


def create_session() -> tuple[str, CatalogSession]:
    """Create an empty session, return (session_id, session)."""
    _cleanup_expired()
    session_id = str(uuid.uuid4())
    session = CatalogSession()
    _sessions[session_id] = (datetime.now() + _ttl(), session)
    return session_id, session


def find_session(session_id: str) -> Optional[CatalogSession]:
    """Session by id, or None if unknown/expired. Refreshes the TTL."""
    entry = _sessions.get(session_id)
    if entry is None:
        return None
    expires_at, session = entry
    if datetime.now() > expires_at:
        del _sessions[session_id]
        return None
    _sessions[session_id] = (datetime.now() + _ttl(), session)
    return session


def get_session(session_id: str) -> CatalogSession:
    """Session by id. Raises SessionNotFoundError if unknown/expired."""
    session = find_session(session_id)
    if session is None:
        raise SessionNotFoundError(session_id)
    return session


def delete_session(session_id: str) -> None:
    """Drop a session."""
    _sessions.pop(session_id, None)


def clear_sessions() -> None:
    """Drop every session."""
    _sessions.clear()


def _cleanup_expired() -> None:
    """Remove all expired entries."""
    now = datetime.now()
    expired = [k for k, (exp, _) in _sessions.items() if now > exp]
    for k in expired:
        del _sessions[k]
