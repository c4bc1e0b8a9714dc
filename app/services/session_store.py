"""
File-backed admin session store.

Sessions live in memory and are mirrored to one JSON file per session so
that a restarted process picks them up again.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, Optional

from app.schemas.login import SessionRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    """
    In-memory map of session id -> SessionRecord with per-session files.

    Expiry is absolute and checked lazily when a session is looked up.
    Failures to write or delete a session file are logged and otherwise
    ignored; the in-memory state stays authoritative for the process.
    """

    def __init__(
        self,
        session_dir,
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.session_dir = Path(session_dir)
        self.ttl = ttl
        self._clock = clock
        self._sessions: Dict[str, SessionRecord] = {}

        self.session_dir.mkdir(parents=True, exist_ok=True)
        self.load()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def _path(self, session_id: str) -> Path:
        return self.session_dir / f"{session_id}.json"

    def load(self) -> int:
        """
        Load every persisted session from disk.

        Returns:
            Number of sessions held in memory after loading
        """
        for path in sorted(self.session_dir.glob("*.json")):
            try:
                record = SessionRecord.model_validate_json(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.error(f"Error loading session file {path.name}: {e}")
                continue
            self._sessions[path.stem] = record

        logger.info(f"Loaded {len(self._sessions)} sessions")
        return len(self._sessions)

    def _save(self, session_id: str, record: SessionRecord) -> None:
        try:
            self._path(session_id).write_text(
                record.model_dump_json(by_alias=True), encoding="utf-8"
            )
        except OSError as e:
            logger.error(f"Error saving session {session_id[:8]}...: {e}")

    def _remove(self, session_id: str) -> None:
        try:
            self._path(session_id).unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error removing session file {session_id[:8]}...: {e}")

    def create_session(self, username: str) -> str:
        """
        Create and persist a new session.

        Args:
            username: Authenticated admin username

        Returns:
            The new session id (64 hex characters)
        """
        session_id = secrets.token_hex(32)
        now = self._clock()
        record = SessionRecord(username=username, created_at=now, expires_at=now + self.ttl)

        self._sessions[session_id] = record
        self._save(session_id, record)
        return session_id

    def get_session(self, session_id: Optional[str]) -> Optional[SessionRecord]:
        """Return the live session record, dropping it if it has expired."""
        if not session_id:
            return None

        record = self._sessions.get(session_id)
        if record is None:
            return None

        if self._clock() >= record.expires_at:
            del self._sessions[session_id]
            self._remove(session_id)
            return None

        return record

    def validate_session(self, session_id: Optional[str]) -> bool:
        return self.get_session(session_id) is not None

    def destroy_session(self, session_id: Optional[str]) -> bool:
        """
        Delete a session from memory and disk.

        Returns:
            True if the session existed
        """
        if not session_id or session_id not in self._sessions:
            return False

        del self._sessions[session_id]
        self._remove(session_id)
        return True
