"""Timer Lifecycle Engine - the once-per-second tick loop"""
import asyncio
import logging
from typing import List, Optional

from timer_server.config import TICK_INTERVAL_SECONDS
from .store import TimerStore

logger = logging.getLogger(__name__)


class TimerLifecycleEngine:
    """
    Advances every running timer by one logical second per tick.

    Ticks run one after another inside a single asyncio task, so two ticks
    never overlap. Each tick is worth exactly one second of countdown no
    matter how late the loop wakes up.
    """

    def __init__(self, store: TimerStore, interval: float = TICK_INTERVAL_SECONDS):
        self._store = store
        self._interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick_once(self) -> List[str]:
        """
        Apply one tick to the store.

        Returns:
            IDs of timers that completed during this tick
        """
        completed = []
        for timer_id in self._store.running_ids():
            self._store.tick(timer_id)
            if self._store.get(timer_id) is None:
                completed.append(timer_id)
        for timer_id in completed:
            logger.info(f"✓ Timer completed: {timer_id}")
        return completed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.tick_once()
            except Exception as e:
                logger.error(f"Timer tick failed: {e}", exc_info=True)

    def start(self) -> None:
        """Start the tick loop on the running event loop. No-op if already started."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"Timer lifecycle engine started (interval={self._interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Timer lifecycle engine stopped")
