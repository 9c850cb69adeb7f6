"""SQLite persistence helpers for batch results."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Sequence

from chemparse.batch import BatchSummary, LineResult

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS project (
  id INTEGER PRIMARY KEY,
  name TEXT NOT NULL,
  created_utc TEXT,
  notes TEXT
);
CREATE TABLE IF NOT EXISTS batch_run (
  id INTEGER PRIMARY KEY,
  project_id INTEGER REFERENCES project(id),
  source TEXT,
  started TEXT,
  summary JSON
);
CREATE TABLE IF NOT EXISTS line_result (
  run_id INTEGER REFERENCES batch_run(id),
  line_number INTEGER,
  text TEXT,
  balanced INTEGER,
  reactants JSON,
  products JSON,
  error TEXT,
  PRIMARY KEY (run_id, line_number)
);
"""


def connect(project_file: str | Path) -> sqlite3.Connection:
    """Open (and create) a SQLite project file."""
    path = Path(project_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(path)
    connection.execute("PRAGMA foreign_keys = ON;")
    return connection


def ensure_schema(connection: sqlite3.Connection) -> None:
    connection.executescript(SCHEMA_SQL)
    connection.commit()


def create_project(
    connection: sqlite3.Connection,
    name: str,
    notes: str | None = None,
    created_utc: str | None = None,
) -> int:
    """Create a project entry and return its ID."""
    created_utc = created_utc or _utc_now()
    cursor = connection.execute(
        "INSERT INTO project (name, created_utc, notes) VALUES (?, ?, ?)",
        (name, created_utc, notes),
    )
    connection.commit()
    return int(cursor.lastrowid)


def save_batch(
    connection: sqlite3.Connection,
    project_id: int,
    source: str,
    results: Sequence[LineResult],
    started_utc: str | None = None,
) -> int:
    """Persist a batch run with one row per processed line and return its ID."""
    started_utc = started_utc or _utc_now()
    summary = BatchSummary.from_results(results)
    cursor = connection.execute(
        "INSERT INTO batch_run (project_id, source, started, summary) VALUES (?, ?, ?, ?)",
        (project_id, source, started_utc, _json_dumps(summary.__dict__)),
    )
    run_id = int(cursor.lastrowid)

    rows: list[tuple[object, ...]] = []
    for result in results:
        equation = result.equation
        rows.append(
            (
                run_id,
                result.line_number,
                result.text,
                None if result.balanced is None else int(result.balanced),
                _json_dumps(equation.reactants) if equation else None,
                _json_dumps(equation.products) if equation else None,
                str(result.error) if result.error else None,
            )
        )
    connection.executemany(
        "INSERT INTO line_result"
        " (run_id, line_number, text, balanced, reactants, products, error)"
        " VALUES (?, ?, ?, ?, ?, ?, ?)",
        rows,
    )
    connection.commit()
    return run_id


def _json_dumps(payload: Mapping[str, object]) -> str:
    return json.dumps(dict(payload), ensure_ascii=False, indent=2, sort_keys=True)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()
