"""Data access layer for workout-tracker."""

import json
import logging
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..errors import PersistenceError
from ..models.sync import AnonymousDataPayload, QueueItem, QueueStatus, SyncSettings
from .engine import get_db_path

logger = logging.getLogger(__name__)

CORRUPT_PAYLOAD_ERROR = "Corrupt payload"

# Updatable queue columns, keyed by QueueItem attribute
_QUEUE_COLUMNS = {
    "status": "status",
    "retry_count": "retry_count",
    "last_error": "last_error",
}


class SyncQueueRepository:
    """Repository for the anonymous data sync queue.

    Every aiosqlite failure is re-raised as PersistenceError naming the
    operation that failed.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def insert(self, item: QueueItem) -> int:
        """Insert a new queue item and return its ID."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    """
                    INSERT INTO sync_queue
                    (timestamp, status, payload, retry_count, last_error)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        item.timestamp.isoformat(),
                        item.status.value,
                        json.dumps(item.payload.to_dict()),
                        item.retry_count,
                        item.last_error,
                    ),
                )
                await db.commit()
                return cursor.lastrowid
        except aiosqlite.Error as e:
            raise PersistenceError("insert", e) from e

    async def get(self, item_id: int) -> QueueItem | None:
        """Get a queue item by ID."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT * FROM sync_queue WHERE id = ?", (item_id,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PersistenceError("get", e) from e

        if row is None:
            return None
        items = await self._rows_to_items([row])
        return items[0] if items else None

    async def list_by_status(self, status: QueueStatus) -> list[QueueItem]:
        """List items with the given status in insertion order."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT * FROM sync_queue WHERE status = ? ORDER BY id",
                    (QueueStatus(status).value,),
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise PersistenceError("list_by_status", e) from e

        return await self._rows_to_items(rows)

    async def list_all(self) -> list[QueueItem]:
        """List every queued item, oldest first."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT * FROM sync_queue ORDER BY timestamp, id"
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise PersistenceError("list_all", e) from e

        return await self._rows_to_items(rows)

    async def update(self, item_id: int, **changes) -> None:
        """Apply a partial update to a queue item.

        Only the keys passed are written, so ``last_error=None`` clears
        the stored error.
        """
        unknown = set(changes) - set(_QUEUE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update queue fields: {', '.join(sorted(unknown))}")
        if not changes:
            return

        assignments = []
        values = []
        for name, value in changes.items():
            if isinstance(value, QueueStatus):
                value = value.value
            assignments.append(f"{_QUEUE_COLUMNS[name]} = ?")
            values.append(value)
        values.append(item_id)

        try:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    f"UPDATE sync_queue SET {', '.join(assignments)} WHERE id = ?",
                    values,
                )
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceError("update", e) from e

    async def delete(self, item_id: int) -> None:
        """Delete a queue item."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute("DELETE FROM sync_queue WHERE id = ?", (item_id,))
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceError("delete", e) from e

    async def delete_all(self) -> int:
        """Delete every queue item."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute("DELETE FROM sync_queue")
                await db.commit()
                return cursor.rowcount
        except aiosqlite.Error as e:
            raise PersistenceError("delete_all", e) from e

    async def count_by_status(self) -> dict[QueueStatus, int]:
        """Count queued items per status."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    "SELECT status, COUNT(*) FROM sync_queue GROUP BY status"
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise PersistenceError("count_by_status", e) from e

        counts = {status: 0 for status in QueueStatus}
        for status, count in rows:
            counts[QueueStatus(status)] = count
        return counts

    async def _rows_to_items(self, rows) -> list[QueueItem]:
        """Decode rows, marking undecodable ones failed and leaving them out."""
        items = []
        for row in rows:
            try:
                items.append(self._row_to_item(row))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.error("Sync item %s is unreadable: %s", row["id"], e)
                if row["status"] != QueueStatus.FAILED.value:
                    await self.update(
                        row["id"],
                        status=QueueStatus.FAILED,
                        last_error=CORRUPT_PAYLOAD_ERROR,
                    )
        return items

    def _row_to_item(self, row: aiosqlite.Row) -> QueueItem:
        """Convert a database row to a QueueItem."""
        return QueueItem(
            id=row["id"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            status=QueueStatus(row["status"]),
            payload=AnonymousDataPayload.from_dict(json.loads(row["payload"])),
            retry_count=row["retry_count"],
            last_error=row["last_error"],
        )


class SyncSettingsRepository:
    """Repository for the persisted sync settings record."""

    KEY = "sync_settings"

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def read(self) -> SyncSettings:
        """Read settings, merged over the defaults.

        A missing or unreadable record yields the defaults.
        """
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    "SELECT value FROM app_settings WHERE key = ?", (self.KEY,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PersistenceError("read_settings", e) from e

        if row is None:
            return SyncSettings()

        try:
            data = json.loads(row[0])
            if not isinstance(data, dict):
                raise ValueError("settings record is not an object")
            return SyncSettings.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning("Failed to load sync settings, using defaults: %s", e)
            return SyncSettings()

    async def write(self, **changes) -> SyncSettings:
        """Merge changes into the stored settings and persist them."""
        settings = (await self.read()).merged(**changes)
        try:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    """
                    INSERT INTO app_settings (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (self.KEY, json.dumps(settings.to_dict())),
                )
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceError("write_settings", e) from e
        return settings
