"""Shared fixtures for the diario test suite."""

import os
import tempfile

# Keep the package's file log out of the real home directory
os.environ.setdefault("DIARIO_LOG_DIR", tempfile.mkdtemp(prefix="diario-logs-"))

from datetime import datetime

import pytest

from diario.data import FileStore, Layout, MemoryStore, PersistenceGateway
from diario.models import Project, Section, Task, TaskStatus
from diario.planner import Planner


@pytest.fixture()
def memory_store():
    return MemoryStore()


@pytest.fixture()
def store_path(tmp_path):
    return tmp_path / "store.yml"


@pytest.fixture()
def file_store(store_path):
    return FileStore(store_path)


@pytest.fixture()
def planner(memory_store):
    """Planner over an in-memory store using the sections layout."""
    p = Planner(PersistenceGateway(memory_store, Layout.SECTIONS))
    p.load_all()
    return p


@pytest.fixture()
def sample_projects():
    """A small sections-layout tree with every status represented."""
    created = datetime(2024, 5, 1, 9, 30, 15, 123456)
    return [
        Project(
            id="p1",
            name="Work",
            description="Day job",
            color=0xFF2196F3,
            icon=0xE2C7,
            created_at=created,
            sections=[
                Section(
                    id="s1",
                    name="Sprint 1",
                    icon=0xE896,
                    tasks=[
                        Task(id="t1", title="Write spec", created_at=created, status=TaskStatus.DONE),
                        Task(id="t2", title="Review", description="With the team", created_at=created,
                             status=TaskStatus.IN_PROGRESS),
                        Task(id="t3", title="Ship", created_at=created),
                    ],
                ),
                Section(id="s2", name="Backlog", description="Later", icon=1),
            ],
        ),
        Project(id="p2", name="Home", color=0xFF4CAF50, icon=7, created_at=created),
    ]
