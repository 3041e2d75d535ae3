"""Timer Store - in-memory source of truth for active timers and history"""
import logging
import secrets
import time
from typing import Dict, List, Optional

from timer_server.models.timer import Timer, TimerStatus
from timer_server.utils.datetime_helper import utc_now_iso
from .countdown import countdown_step

logger = logging.getLogger(__name__)


def generate_timer_id() -> str:
    """Opaque id: timer_<epoch ms>_<9 random chars>"""
    return f"timer_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class TimerStore:
    """
    Owns the active set and the history log.

    A timer is in exactly one of the two collections. Active timers are
    ``running`` or ``paused``; history holds ``stopped`` and ``completed``
    snapshots in the order they finished. History is never truncated here;
    readers ask for a bounded tail.

    Every method is a short synchronous step with no awaits, so callers on a
    single event loop never observe a half-applied mutation. Returned timers
    are copies.
    """

    def __init__(self):
        self._active: Dict[str, Timer] = {}
        self._history: List[Timer] = []

    # ── mutations ────────────────────────────────────────────────────────

    def create(self, name: str, duration_seconds: int) -> Timer:
        """Insert a new running timer. Never fails."""
        timer = Timer(
            id=generate_timer_id(),
            name=name or f"Timer {len(self._active) + 1}",
            duration_seconds=duration_seconds,
            remaining_seconds=duration_seconds,
            status=TimerStatus.RUNNING,
            created_at=utc_now_iso(),
        )
        self._active[timer.id] = timer
        logger.info(f"Timer created: {timer.id} '{timer.name}' ({duration_seconds}s)")
        return timer.model_copy()

    def pause(self, timer_id: str) -> bool:
        timer = self._active.get(timer_id)
        if timer is None or timer.status != TimerStatus.RUNNING:
            return False
        timer.status = TimerStatus.PAUSED
        return True

    def resume(self, timer_id: str) -> bool:
        timer = self._active.get(timer_id)
        if timer is None or timer.status != TimerStatus.PAUSED:
            return False
        timer.status = TimerStatus.RUNNING
        return True

    def stop(self, timer_id: str) -> bool:
        timer = self._active.get(timer_id)
        if timer is None or not timer.status.is_active:
            return False
        self._retire(timer, TimerStatus.STOPPED)
        return True

    def tick(self, timer_id: str) -> bool:
        """Apply one second to a running timer; completes it on reaching zero."""
        timer = self._active.get(timer_id)
        if timer is None or timer.status != TimerStatus.RUNNING or timer.remaining_seconds <= 0:
            return False
        step = countdown_step(timer.remaining_seconds)
        timer.remaining_seconds = step.remaining_seconds
        if step.finished:
            self._retire(timer, TimerStatus.COMPLETED)
        return True

    def _retire(self, timer: Timer, status: TimerStatus) -> None:
        """Move a timer from the active set into history"""
        timer.status = status
        if status == TimerStatus.COMPLETED:
            timer.remaining_seconds = 0
        timer.completed_at = utc_now_iso()
        self._history.append(timer.model_copy())
        del self._active[timer.id]
        logger.info(f"Timer {status.value}: {timer.id} '{timer.name}'")

    # ── reads ────────────────────────────────────────────────────────────

    def get(self, timer_id: str) -> Optional[Timer]:
        timer = self._active.get(timer_id)
        return timer.model_copy() if timer else None

    def list_active(self) -> List[Timer]:
        """Active timers in creation order"""
        return [t.model_copy() for t in self._active.values()]

    def list_history(self, limit: Optional[int] = None) -> List[Timer]:
        """
        History oldest-first.

        Args:
            limit: Return only the most recent ``limit`` entries (still oldest-first)
        """
        entries = self._history if limit is None else self._history[-limit:] if limit > 0 else []
        return [t.model_copy() for t in entries]

    def running_ids(self) -> List[str]:
        return [t.id for t in self._active.values() if t.status == TimerStatus.RUNNING]

    @property
    def active_count(self) -> int:
        return len(self._active)

    @property
    def history_count(self) -> int:
        return len(self._history)
