"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import get_settings
from ..errors import PersistenceError


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "workout_tracker.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    try:
        async with aiosqlite.connect(db_path) as db:
            # Pending anonymous payloads
            await db.execute("""
                CREATE TABLE IF NOT EXISTS sync_queue (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TIMESTAMP NOT NULL,
                    status TEXT NOT NULL DEFAULT 'pending',
                    payload TEXT NOT NULL,
                    retry_count INTEGER NOT NULL DEFAULT 0,
                    last_error TEXT
                )
            """)

            # Key-value application settings (JSON values)
            await db.execute("""
                CREATE TABLE IF NOT EXISTS app_settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            await db.execute("""
                CREATE INDEX IF NOT EXISTS idx_sync_queue_status
                ON sync_queue(status)
            """)
            await db.execute("""
                CREATE INDEX IF NOT EXISTS idx_sync_queue_timestamp
                ON sync_queue(timestamp)
            """)

            await db.commit()
    except aiosqlite.Error as e:
        raise PersistenceError("init_db", e) from e
