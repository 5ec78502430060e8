from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from goalcraft.db.models.goal_progress import GoalProgressRecord
from goalcraft.services.progress_store import InMemoryProgressStore, SqlProgressStore, progress_key, spec_key


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    GoalProgressRecord.__table__.create(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def test_keys_are_namespaced_by_title() -> None:
    assert spec_key("Learn French") == "spec:Learn French"
    assert progress_key("Learn French") == "progress:Learn French"


def test_in_memory_store_copies_blobs() -> None:
    store = InMemoryProgressStore()
    blob = {"totals": {"a": 1}}
    store.set("k", blob)
    blob["totals"]["a"] = 99

    assert store.get("k") == {"totals": {"a": 1}}
    assert store.get("missing") is None


def test_sql_store_upserts(session_factory) -> None:
    with session_factory() as db:
        store = SqlProgressStore(db)
        store.set("progress:Run", {"streak": 1})
        store.set("progress:Run", {"streak": 2})

    with session_factory() as db:
        assert SqlProgressStore(db).get("progress:Run") == {"streak": 2}
        assert db.query(GoalProgressRecord).count() == 1
        assert SqlProgressStore(db).get("progress:Other") is None
