"""Periodic autosave of the current trip snapshot."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from tourcalc.db.repositories import AutosaveStore
from tourcalc.models.trip import TripParameters
from tourcalc.utils.metrics import metrics

logger = logging.getLogger(__name__)


class AutosaveScheduler:
    """Writes the current snapshot to an autosave slot at a fixed interval.

    The snapshot is obtained through `snapshot_provider` on every tick; the
    scheduler keeps no reference to the session that owns it. A failed write
    is logged and the next tick tries again.
    """

    def __init__(
        self,
        snapshot_provider: Callable[[], TripParameters],
        store: AutosaveStore,
        interval_seconds: float = 30.0,
    ) -> None:
        self._snapshot_provider = snapshot_provider
        self._store = store
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self.last_saved_at: datetime | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> bool:
        """Save the current snapshot once.

        Returns:
            True if the write succeeded
        """
        params = self._snapshot_provider()
        try:
            await asyncio.to_thread(self._store.save_autosave, params)
        except Exception as e:
            logger.error(f"Autosave failed: {e}")
            metrics.inc_autosave("error")
            return False

        self.last_saved_at = datetime.now(timezone.utc)
        metrics.inc_autosave("ok")
        logger.debug(f"Autosaved trip '{params.trip_name}'")
        return True

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            await self.run_once()

    def start(self) -> None:
        """Start the periodic task on the running event loop."""
        if self.running:
            return
        logger.info(f"Starting autosave every {self._interval_seconds}s")
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Cancel the periodic task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Autosave stopped")
