"""
Tests for SessionStore

Covers creation, lazy expiry, destruction, persistence across instances
and tolerance of broken session files. A fake clock drives expiry.
"""
import json
from datetime import datetime, timedelta, timezone

import pytest

from app.services.session_store import SessionStore


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 3, 14, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(session_dir, clock):
    return SessionStore(session_dir, clock=clock)


def test_create_session_persists_one_file(store, session_dir):
    session_id = store.create_session("admin")

    assert len(session_id) == 64
    int(session_id, 16)
    assert store.validate_session(session_id)

    data = json.loads((session_dir / f"{session_id}.json").read_text(encoding="utf-8"))
    assert set(data) == {"username", "createdAt", "expiresAt"}
    assert data["username"] == "admin"


def test_session_ids_are_unique(store):
    ids = {store.create_session("admin") for _ in range(20)}
    assert len(ids) == 20


def test_expiry_is_24_hours(store, clock):
    session_id = store.create_session("admin")
    record = store.get_session(session_id)

    assert record.expires_at - record.created_at == timedelta(hours=24)


def test_session_valid_until_expiry_instant(store, clock, session_dir):
    session_id = store.create_session("admin")

    clock.advance(hours=24, seconds=-1)
    assert store.validate_session(session_id)

    clock.advance(seconds=1)
    assert not store.validate_session(session_id)
    assert session_id not in store
    assert not (session_dir / f"{session_id}.json").exists()


@pytest.mark.parametrize("session_id", [None, "", "unknown"])
def test_validate_rejects_missing_ids(store, session_id):
    assert not store.validate_session(session_id)


def test_destroy_session(store, session_dir):
    session_id = store.create_session("admin")

    assert store.destroy_session(session_id) is True
    assert not store.validate_session(session_id)
    assert not (session_dir / f"{session_id}.json").exists()
    assert store.destroy_session(session_id) is False


def test_sessions_survive_restart(session_dir, clock):
    first = SessionStore(session_dir, clock=clock)
    session_id = first.create_session("admin")

    second = SessionStore(session_dir, clock=clock)

    assert len(second) == 1
    assert second.validate_session(session_id)
    assert second.get_session(session_id).username == "admin"


def test_broken_session_files_are_skipped(session_dir, clock):
    session_dir.mkdir(parents=True)
    (session_dir / "broken.json").write_text("{not json", encoding="utf-8")
    (session_dir / "incomplete.json").write_text('{"username": "admin"}', encoding="utf-8")
    (session_dir / "notes.txt").write_text("ignored", encoding="utf-8")
    (session_dir / "good.json").write_text(
        json.dumps({
            "username": "admin",
            "createdAt": "2025-03-14T08:00:00.000Z",
            "expiresAt": "2025-03-15T08:00:00.000Z",
        }),
        encoding="utf-8",
    )

    store = SessionStore(session_dir, clock=clock)

    assert len(store) == 1
    assert store.validate_session("good")


def test_write_failures_are_swallowed(store, tmp_path, monkeypatch):
    monkeypatch.setattr(store, "_path", lambda session_id: tmp_path / "gone" / f"{session_id}.json")

    session_id = store.create_session("admin")

    assert store.validate_session(session_id)
    assert store.destroy_session(session_id) is True
