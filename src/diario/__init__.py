"""
Diario Checklist - a personal task manager with locally persisted data.

Work is organized as Project → Section → Task, and every task moves through
To Do, In Progress and Done.
"""

from .version import VERSION
from .models import (
    TaskStatus,
    Task,
    Section,
    Project,
    TaskStats,
)
from .data import Layout, FileStore, MemoryStore, PersistenceGateway, GatewayState
from .planner import Planner

__version__ = VERSION

__all__ = [
    "VERSION",
    "TaskStatus",
    "Task",
    "Section",
    "Project",
    "TaskStats",
    "Layout",
    "FileStore",
    "MemoryStore",
    "PersistenceGateway",
    "GatewayState",
    "Planner",
]
