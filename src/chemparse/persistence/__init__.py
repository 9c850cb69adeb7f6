"""Persistence helpers for chemparse."""

from chemparse.persistence.sqlite_store import (
    connect,
    create_project,
    ensure_schema,
    save_batch,
)

__all__ = [
    "connect",
    "create_project",
    "ensure_schema",
    "save_batch",
]
