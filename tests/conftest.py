# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from db import DocumentGateway
from notifications import InMemoryNotificationCenter, NotificationService
from stores import ProjectStore, TaskStore, UserStore

from .fakes import FixedClock, RecordingGateway

NOW = datetime(2025, 3, 10, 9, 30)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def gateway(tmp_path: Path):
    """Real SQLite gateway on a per-test database file."""
    gw = DocumentGateway(f"sqlite:///{tmp_path / 'taskpilot.db'}")
    assert gw.init_db()
    yield gw
    gw.dispose()


@pytest.fixture()
def recording_gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture()
def task_store(recording_gateway, clock):
    store = TaskStore(recording_gateway, save_delay=0.05, clock=clock)
    yield store
    store.close()


@pytest.fixture()
def project_store(recording_gateway, clock):
    store = ProjectStore(recording_gateway, save_delay=0.05, clock=clock)
    yield store
    store.close()


@pytest.fixture()
def user_store(recording_gateway, clock):
    store = UserStore(recording_gateway, save_delay=0.05, clock=clock)
    yield store
    store.close()


@pytest.fixture()
def center() -> InMemoryNotificationCenter:
    return InMemoryNotificationCenter(granted=False, grant_on_request=False)


@pytest.fixture()
def notifications(center) -> NotificationService:
    return NotificationService(center)
