from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from taskflow.client.mirror import LocalMirror
from taskflow.client.sync import SyncCoordinator
from taskflow.database import create_tables, get_db
from taskflow.main import app
from taskflow.models import Category, TaskStatus
from taskflow.schemas.task import Task, TaskCreate
from taskflow.schemas.user import User

from .fakes import FakeTaskApi


@pytest.fixture()
def db_engine():
    """Fresh in-memory SQLite per test; StaticPool keeps one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def client(db_engine) -> TestClient:
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def user() -> User:
    return User(
        name="Adan Food",
        email="adan.food@gmail.com",
        avatar="https://ui-avatars.com/api/?name=Adan+Food",
    )


@pytest.fixture()
def mirror(tmp_path: Path) -> LocalMirror:
    return LocalMirror(tmp_path / "mirror")


@pytest.fixture()
def api() -> FakeTaskApi:
    return FakeTaskApi()


@pytest.fixture()
def coordinator(api: FakeTaskApi, mirror: LocalMirror) -> SyncCoordinator:
    return SyncCoordinator(api, mirror)


def make_task(task_id: str = "t1", **overrides) -> Task:
    fields = dict(
        id=task_id,
        title=f"Task {task_id}",
        category=Category.PERSONAL,
        amount=0,
        due_date=date(2026, 10, 20),
        status=TaskStatus.UPCOMING,
    )
    fields.update(overrides)
    return Task(**fields)


def make_draft(**overrides) -> TaskCreate:
    fields = dict(
        title="Pay electricity bill",
        category=Category.FINANCE,
        amount=120.5,
        due_date=date(2026, 10, 25),
    )
    fields.update(overrides)
    return TaskCreate(**fields)
