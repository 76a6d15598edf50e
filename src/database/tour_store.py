"""
Tour Store
==========

SQLite-backed persistence for tours, keyed by owner.

Steps are stored as a JSON array on the tour row; a tour and its steps are
always written together. Updates are last-write-wins.

Usage:
    from src.database.tour_store import SQLiteTourStore

    store = SQLiteTourStore('data/arcade_tours.db')
    store.init_schema()
    saved = store.save(tour, owner_id='user-1')
    store.list('user-1')
    store.delete(saved.id, 'user-1')   # -> True
"""

import json
import logging
import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from src.tours.errors import NotFoundError
from src.tours.models import Analytics, Step, Tour, new_id

logger = logging.getLogger(__name__)

SCHEMA = {
    'tours': """
        CREATE TABLE IF NOT EXISTS tours (
            id TEXT PRIMARY KEY,
            owner_id TEXT NOT NULL,
            title TEXT NOT NULL,
            steps_json TEXT NOT NULL DEFAULT '[]',
            views INTEGER NOT NULL DEFAULT 0,
            shares INTEGER NOT NULL DEFAULT 0,
            is_public INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    'users': """
        CREATE TABLE IF NOT EXISTS users (
            user_id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
    """,
}

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tours_owner ON tours(owner_id)",
    "CREATE INDEX IF NOT EXISTS idx_tours_public ON tours(is_public)",
]


def _row_to_tour(row) -> Tour:
    steps = [Step.from_dict(s) for s in json.loads(row['steps_json'] or '[]')]
    return Tour(
        id=row['id'],
        title=row['title'],
        steps=steps,
        analytics=Analytics(views=row['views'], shares=row['shares']),
        is_public=bool(row['is_public']),
        created_at=datetime.fromisoformat(row['created_at']),
        owner_id=row['owner_id'],
    )


def _steps_json(tour: Tour) -> str:
    return json.dumps([s.to_dict() for s in tour.steps])


class SQLiteTourStore:
    """
    PersistenceService backed by a SQLite file.

    Every call opens its own connection, so one store can be shared by
    request handlers running on different threads.
    """

    def __init__(self, db_path):
        self.db_path = Path(db_path)

    def get_connection(self):
        """Get database connection"""
        os.makedirs(self.db_path.parent, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def init_schema(self):
        """Create tables and indexes if they do not exist."""
        conn = self.get_connection()
        try:
            for table_sql in SCHEMA.values():
                conn.execute(table_sql)
            for index_sql in INDEXES:
                conn.execute(index_sql)
            conn.commit()
        finally:
            conn.close()
        logger.info("Tour store schema ready (%s)", self.db_path)

    # ============================================================
    # Reads
    # ============================================================

    def get(self, tour_id: str, owner_id: Optional[str] = None) -> Optional[Tour]:
        conn = self.get_connection()
        try:
            if owner_id is None:
                row = conn.execute("SELECT * FROM tours WHERE id = ?", (tour_id,)).fetchone()
            else:
                row = conn.execute(
                    "SELECT * FROM tours WHERE id = ? AND owner_id = ?",
                    (tour_id, owner_id),
                ).fetchone()
            return _row_to_tour(row) if row else None
        finally:
            conn.close()

    def list(self, owner_id: str) -> List[Tour]:
        """All tours owned by `owner_id`, oldest first."""
        conn = self.get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM tours WHERE owner_id = ? ORDER BY created_at, rowid",
                (owner_id,),
            ).fetchall()
            return [_row_to_tour(r) for r in rows]
        finally:
            conn.close()

    def list_public(self) -> List[Tour]:
        conn = self.get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM tours WHERE is_public = 1 ORDER BY created_at, rowid"
            ).fetchall()
            return [_row_to_tour(r) for r in rows]
        finally:
            conn.close()

    # ============================================================
    # Writes
    # ============================================================

    def create(self, tour: Tour, owner_id: str) -> Tour:
        """Insert a tour. Keeps tour.id when the client assigned one."""
        saved = tour.copy()
        if saved.id is None:
            saved.id = new_id()
        saved.owner_id = owner_id
        now = datetime.now().isoformat()

        conn = self.get_connection()
        try:
            conn.execute("""
                INSERT INTO tours (id, owner_id, title, steps_json, views, shares,
                                   is_public, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                saved.id, owner_id, saved.title, _steps_json(saved),
                saved.analytics.views, saved.analytics.shares,
                1 if saved.is_public else 0, saved.created_at.isoformat(), now,
            ))
            conn.commit()
        finally:
            conn.close()

        logger.info("Created tour %s (%d steps)", saved.id, len(saved.steps))
        return saved

    def update(self, tour: Tour, owner_id: str) -> Tour:
        """
        Replace a tour's editable fields.

        Only the owner can update; a missing id or a foreign owner raises
        NotFoundError. id, owner and created_at never change.
        """
        if tour.id is None:
            raise NotFoundError("Cannot update a tour without an id")

        conn = self.get_connection()
        try:
            cursor = conn.execute("""
                UPDATE tours
                SET title = ?, steps_json = ?, views = ?, shares = ?,
                    is_public = ?, updated_at = ?
                WHERE id = ? AND owner_id = ?
            """, (
                tour.title, _steps_json(tour),
                tour.analytics.views, tour.analytics.shares,
                1 if tour.is_public else 0, datetime.now().isoformat(),
                tour.id, owner_id,
            ))
            conn.commit()
            if cursor.rowcount == 0:
                raise NotFoundError(tour_id=tour.id)
        finally:
            conn.close()

        logger.info("Updated tour %s", tour.id)
        return self.get(tour.id, owner_id)

    def save(self, tour: Tour, owner_id: str) -> Tour:
        """Create when the tour has no id, update otherwise."""
        if tour.id is None:
            return self.create(tour, owner_id)
        return self.update(tour, owner_id)

    def delete(self, tour_id: str, owner_id: str) -> bool:
        conn = self.get_connection()
        try:
            cursor = conn.execute(
                "DELETE FROM tours WHERE id = ? AND owner_id = ?",
                (tour_id, owner_id),
            )
            conn.commit()
            removed = cursor.rowcount > 0
        finally:
            conn.close()

        if removed:
            logger.info("Deleted tour %s", tour_id)
        return removed

    def seed_fixtures(self, owner_id: str) -> int:
        """Insert the sample tours for `owner_id` unless they already exist."""
        from src.tours.fixtures import sample_tours

        created = 0
        for tour in sample_tours():
            tour.id = f"{owner_id}-{tour.id}"
            if self.get(tour.id) is None:
                self.create(tour, owner_id)
                created += 1
        return created
