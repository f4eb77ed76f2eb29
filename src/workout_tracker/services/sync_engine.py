"""Offline-first sync of anonymized workout data.

Payloads are queued locally and sent to the statistics backend one at a
time. Each queue item moves through

    pending -> processing -> deleted | pending | failed

and only ``retry_failed`` moves an item out of ``failed``. The database
is the single source of truth for queue state; the engine keeps no
in-memory copy of items between calls.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..clients.base import AnonymousDataTransport
from ..db.repositories import SyncQueueRepository, SyncSettingsRepository
from ..errors import AnonymizationError, ApiError, InvalidInputError, PersistenceError
from ..models.sync import (
    DrainResult,
    QueueItem,
    QueueStatus,
    SyncSettings,
    SyncStatusSummary,
)
from ..models.workout import BodyProfile, WorkoutRecord
from .anonymizer import build_payload, validate_payload

logger = logging.getLogger(__name__)


class SyncEngine:
    """Queues anonymized payloads and drains them through a transport."""

    def __init__(
        self,
        queue_repo: SyncQueueRepository,
        settings_repo: SyncSettingsRepository,
        transport: AnonymousDataTransport,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the engine.

        Args:
            queue_repo: Persistent queue store
            settings_repo: Persistent sync settings store
            transport: Sends payloads to the backend
            sleep: Coroutine used for the delay between items
        """
        self.queue_repo = queue_repo
        self.settings_repo = settings_repo
        self.transport = transport
        self.settings = SyncSettings()
        self.last_drain_at: datetime | None = None
        self._sleep = sleep
        self._draining = False

    # Settings

    async def reload(self) -> SyncSettings:
        """Load the current settings from the store."""
        self.settings = await self.settings_repo.read()
        return self.settings

    async def save(self) -> SyncSettings:
        """Persist the engine's settings struct."""
        self.settings = await self.settings_repo.write(**vars(self.settings))
        return self.settings

    async def update_settings(self, **changes) -> SyncSettings:
        """Merge changes into the stored settings."""
        self.settings = await self.settings_repo.write(**changes)
        return self.settings

    async def is_sharing_enabled(self) -> bool:
        return (await self.reload()).enabled

    async def set_sharing_enabled(self, enabled: bool) -> None:
        await self.update_settings(enabled=enabled)
        logger.info("Data sharing %s", "enabled" if enabled else "disabled")

    # Queue operations

    async def queue(
        self,
        identifier: str,
        profile: BodyProfile,
        records: list[WorkoutRecord],
    ) -> int | None:
        """Anonymize a user's data and add it to the queue.

        Returns:
            The new item's ID, or None if data sharing is disabled

        Raises:
            AnonymizationError: If the payload could not be built
            PersistenceError: If the item could not be stored
        """
        if not await self.is_sharing_enabled():
            logger.info("Data sharing is disabled, skipping queue")
            return None

        try:
            payload = build_payload(identifier, profile, records)
        except InvalidInputError as e:
            raise AnonymizationError(str(e)) from e

        if not validate_payload(payload):
            raise AnonymizationError("Anonymized payload failed validation")

        item_id = await self.queue_repo.insert(QueueItem(payload=payload))
        logger.debug("Queued item %s with %d workouts", item_id, len(payload.workouts))
        return item_id

    async def process_one(self, item_id: int) -> bool:
        """Send a single queued item.

        Returns:
            True if the item was sent and removed from the queue
        """
        item = await self.queue_repo.get(item_id)
        if item is None or item.status != QueueStatus.PENDING:
            # Already handled by a concurrent drain or manual action
            logger.warning("Sync item %s not found in pending queue", item_id)
            return False

        settings = await self.reload()

        if not validate_payload(item.payload):
            logger.error("Sync item %s has an invalid payload, marking failed", item_id)
            await self.queue_repo.update(
                item_id,
                status=QueueStatus.FAILED,
                retry_count=item.retry_count + 1,
                last_error="Payload failed validation",
            )
            return False

        await self.queue_repo.update(item_id, status=QueueStatus.PROCESSING)

        try:
            await self.transport.send(item.payload)
        except Exception as e:
            try:
                await self._record_failure(item_id, e, settings)
            except PersistenceError:
                # Left in processing; recover_interrupted returns it to pending
                logger.exception("Could not record failure for sync item %s", item_id)
            return False

        await self.queue_repo.delete(item_id)
        logger.debug("Sync item %s sent", item_id)
        return True

    async def _record_failure(
        self, item_id: int, error: Exception, settings: SyncSettings
    ) -> None:
        """Move a failed item back to pending, or to failed at the retry limit."""
        item = await self.queue_repo.get(item_id)
        if item is None:
            logger.error("Failed to find sync item %s for error handling", item_id)
            return

        retry_count = item.retry_count + 1
        message = error.message if isinstance(error, ApiError) else "Unknown error"

        if retry_count >= settings.max_retries:
            await self.queue_repo.update(
                item_id,
                status=QueueStatus.FAILED,
                retry_count=retry_count,
                last_error=message,
            )
            logger.error(
                "Sync item %s failed after %d retries: %s", item_id, retry_count, error
            )
        else:
            await self.queue_repo.update(
                item_id,
                status=QueueStatus.PENDING,
                retry_count=retry_count,
                last_error=message,
            )
            logger.warning(
                "Sync item %s failed, will retry (%d/%d): %s",
                item_id,
                retry_count,
                settings.max_retries,
                error,
            )

    async def drain(self) -> DrainResult:
        """Send every pending item once, one at a time.

        Items that return to pending during this pass wait for the next
        drain. A drain requested while another is running does nothing.
        """
        if not await self.is_sharing_enabled():
            logger.info("Data sharing is disabled, skipping sync")
            return DrainResult()

        if self._draining:
            logger.info("Sync already in progress, skipping")
            return DrainResult()

        self._draining = True
        try:
            pending = await self.queue_repo.list_by_status(QueueStatus.PENDING)
            result = DrainResult()

            for index, item in enumerate(pending):
                if item.id is None:
                    continue

                result.processed += 1
                if await self.process_one(item.id):
                    result.succeeded += 1

                if index < len(pending) - 1:
                    await self._sleep(self.settings.retry_delay / 1000)

            self.last_drain_at = datetime.now()
            if result.processed:
                logger.info(
                    "Sync pass finished: %d/%d sent", result.succeeded, result.processed
                )
            return result
        finally:
            self._draining = False

    async def retry_failed(self) -> int:
        """Reset every failed item to pending with a fresh retry budget."""
        failed = await self.queue_repo.list_by_status(QueueStatus.FAILED)
        for item in failed:
            await self.queue_repo.update(
                item.id,
                status=QueueStatus.PENDING,
                retry_count=0,
                last_error=None,
            )
        if failed:
            logger.info("Reset %d failed sync items", len(failed))
        return len(failed)

    async def recover_interrupted(self) -> int:
        """Return items stranded in processing by an abnormal exit to pending."""
        stranded = await self.queue_repo.list_by_status(QueueStatus.PROCESSING)
        for item in stranded:
            await self.queue_repo.update(item.id, status=QueueStatus.PENDING)
        if stranded:
            logger.warning("Recovered %d interrupted sync items", len(stranded))
        return len(stranded)

    async def list_queue(self) -> list[QueueItem]:
        """List pending and failed items, oldest first."""
        items = await self.queue_repo.list_all()
        return [item for item in items if item.status != QueueStatus.PROCESSING]

    async def clear_queue(self) -> int:
        """Delete every queued item."""
        removed = await self.queue_repo.delete_all()
        logger.info("Cleared %d sync items", removed)
        return removed

    async def get_status(self) -> SyncStatusSummary:
        settings = await self.reload()
        counts = await self.queue_repo.count_by_status()
        return SyncStatusSummary(
            settings=settings,
            pending=counts[QueueStatus.PENDING],
            processing=counts[QueueStatus.PROCESSING],
            failed=counts[QueueStatus.FAILED],
            last_drain_at=self.last_drain_at,
        )

    # Background sync

    async def start_background(
        self, interval_ms: int, require_online: bool = False
    ) -> "BackgroundSync":
        """Drain now and then every ``interval_ms`` until stopped.

        Args:
            interval_ms: Delay between the start of consecutive drains
            require_online: Skip a scheduled drain while the transport's
                health check fails

        Returns:
            Handle that stops future drains; inert if auto sync is off
        """
        settings = await self.reload()
        handle = BackgroundSync(self, interval_ms, require_online)
        if not settings.auto_sync:
            logger.info("Auto sync is disabled")
            return handle
        handle.start()
        return handle


class BackgroundSync:
    """Cancellable repeating drain.

    Drains never overlap: the next one is scheduled only after the
    current one returns. ``stop`` prevents further drains but lets a
    running one finish.
    """

    def __init__(self, engine: SyncEngine, interval_ms: int, require_online: bool = False):
        self.engine = engine
        self.interval = interval_ms / 1000
        self.require_online = require_online
        self.runs = 0
        self._stopped = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stopped.clear()
        self._task = asyncio.create_task(self._run())

    def stop(self) -> None:
        """Prevent future drains."""
        self._stopped.set()

    async def wait(self) -> None:
        """Wait for the loop to exit after ``stop``."""
        if self._task is not None:
            await self._task

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        while not self._stopped.is_set():
            started = loop.time()
            await self._tick()

            remaining = max(0.0, self.interval - (loop.time() - started))
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=remaining)
            except asyncio.TimeoutError:
                pass

    async def _tick(self) -> None:
        try:
            if self.require_online and not await self.engine.transport.health_check():
                logger.info("Backend unreachable, postponing sync")
                return
            self.runs += 1
            await self.engine.drain()
        except Exception:
            logger.exception("Background sync failed")
