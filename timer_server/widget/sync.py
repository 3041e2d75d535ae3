"""
Widget-side timer synchronization.

The widget keeps its own copy of the active timers and runs two independent
loops on one event loop:

- a local tick (every ``tick_interval``) that counts running timers down
  between syncs, and
- a server sync (every ``sync_interval``) that fetches /api/timers and
  reconciles, with the server winning every conflict.

Start and control requests go to the server first and fall back to local
simulation when the server cannot be reached. Completion notifications are
de-duplicated by timer id, so a timer that both loops see finish only rings
once. A snapshot fetched before a local start or control does not
override that timer.
"""
import asyncio
import logging
import secrets
from typing import Callable, Dict, List, Optional, Set

from timer_server.config import (
    HISTORY_LIMIT,
    TIMER_LIMITS,
    WIDGET_SYNC_INTERVAL_SECONDS,
    WIDGET_TICK_INTERVAL_SECONDS,
)
from timer_server.data.presets import TIMER_PRESETS
from timer_server.models.timer import TimerAction, TimerPreset, TimerStatus
from timer_server.services.timer.command_service import parse_duration
from timer_server.services.timer.countdown import countdown_step
from timer_server.utils.datetime_helper import utc_now_iso
from .client import TimerApiClient, TimerApiError
from .models import HistoryEntry, StatusSnapshot, WidgetTimer
from .notifier import BellNotifier, CompletionNotifier

logger = logging.getLogger(__name__)

RenderCallback = Callable[["TimerWidget"], None]


def _history_entry(timer: WidgetTimer, status: TimerStatus) -> HistoryEntry:
    return HistoryEntry(
        id=timer.id,
        name=timer.name,
        duration_seconds=timer.original_duration,
        remaining_seconds=0 if status == TimerStatus.COMPLETED else timer.remaining_seconds,
        status=status,
        created_at=timer.created_at,
        completed_at=utc_now_iso(),
    )


class TimerWidget:
    """Local mirror of the server's timers with optimistic offline fallback"""

    def __init__(
        self,
        api: TimerApiClient,
        notifier: Optional[CompletionNotifier] = None,
        on_render: Optional[RenderCallback] = None,
        sync_interval: float = WIDGET_SYNC_INTERVAL_SECONDS,
        tick_interval: float = WIDGET_TICK_INTERVAL_SECONDS,
        history_limit: int = HISTORY_LIMIT,
    ):
        self._api = api
        self._notifier = notifier if notifier is not None else BellNotifier()
        self._on_render = on_render
        self._sync_interval = sync_interval
        self._tick_interval = tick_interval
        self._history_limit = history_limit

        self._timers: Dict[str, WidgetTimer] = {}
        self._history: List[HistoryEntry] = []
        self._presets: List[TimerPreset] = list(TIMER_PRESETS)
        self._notified: Set[str] = set()
        # Local change counter; ids map to the generation of their last local insert or control
        self._generation = 0
        self._touched: Dict[str, int] = {}

        self._tick_task: Optional[asyncio.Task] = None
        self._sync_task: Optional[asyncio.Task] = None
        self._sync_requests: Set[asyncio.Task] = set()

    # ── read-only views ──────────────────────────────────────────────────

    @property
    def active_timers(self) -> List[WidgetTimer]:
        return [t.model_copy() for t in self._timers.values()]

    @property
    def history(self) -> List[HistoryEntry]:
        return [h.model_copy() for h in self._history]

    @property
    def presets(self) -> List[TimerPreset]:
        return list(self._presets)

    def get(self, timer_id: str) -> Optional[WidgetTimer]:
        timer = self._timers.get(timer_id)
        return timer.model_copy() if timer else None

    @property
    def is_local_ticking(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    @property
    def is_syncing(self) -> bool:
        return self._sync_task is not None and not self._sync_task.done()

    @property
    def is_idle(self) -> bool:
        return not self._timers and not self.is_local_ticking and not self.is_syncing

    # ── rendering / notification ─────────────────────────────────────────

    def _render(self) -> None:
        if self._on_render is not None:
            self._on_render(self)

    def _notify_completed(self, timer: WidgetTimer) -> None:
        if timer.id in self._notified:
            logger.debug(f"Completion for {timer.id} already signalled")
            return
        self._notified.add(timer.id)
        try:
            self._notifier(timer)
        except Exception as e:
            # Notifier failures never reach the sync or tick loops
            logger.warning(f"Completion notifier failed for {timer.id}: {e}")

    def _trim_history(self) -> None:
        if self._history_limit > 0 and len(self._history) > self._history_limit:
            self._history = self._history[-self._history_limit:]

    def _touch(self, timer_id: str) -> None:
        self._generation += 1
        self._touched[timer_id] = self._generation

    def _changed_since(self, timer_id: str, generation: Optional[int]) -> bool:
        return generation is not None and self._touched.get(timer_id, 0) > generation

    # ── reconciliation ───────────────────────────────────────────────────

    def reconcile(self, snapshot: StatusSnapshot, fetched_at: Optional[int] = None) -> bool:
        """
        Fold one server snapshot into local state.

        1. Local timers missing from the server are dropped; if they were
           running they are recorded as completed and signalled once.
        2. Server timers that are new or differ in remaining time or status
           replace the local copy.
        3. Presets and history are replaced by the server's.

        Args:
            snapshot: Server state
            fetched_at: Local generation when the fetch began. Timers started
                or controlled locally after that are left alone by steps 1-2.

        Returns:
            True if anything changed (and a render was issued)
        """
        changed = False
        server_ids = {t.id for t in snapshot.active_timers}

        synthesized: List[HistoryEntry] = []
        for timer_id, local in list(self._timers.items()):
            if timer_id in server_ids or self._changed_since(timer_id, fetched_at):
                continue
            if local.status == TimerStatus.RUNNING:
                synthesized.append(_history_entry(local, TimerStatus.COMPLETED))
                self._notify_completed(local)
            del self._timers[timer_id]
            changed = True

        for server_timer in snapshot.active_timers:
            if self._changed_since(server_timer.id, fetched_at):
                continue
            local = self._timers.get(server_timer.id)
            if local is None or local.differs_from(server_timer):
                self._timers[server_timer.id] = server_timer.model_copy()
                changed = True

        if snapshot.presets and snapshot.presets != self._presets:
            self._presets = list(snapshot.presets)
            changed = True

        history = [h.model_copy() for h in snapshot.history]
        known_ids = {h.id for h in history}
        history.extend(h for h in synthesized if h.id not in known_ids)
        if self._history_limit > 0:
            history = history[-self._history_limit:]
        if history != self._history:
            self._history = history
            changed = True

        self._touched = {k: v for k, v in self._touched.items() if k in self._timers}

        if changed:
            self._render()
        self._ensure_local_loop()
        return changed

    async def sync_now(self) -> bool:
        """Fetch server state once and reconcile. A failed fetch changes nothing."""
        fetched_at = self._generation
        try:
            snapshot = await self._api.fetch_status()
        except TimerApiError as e:
            logger.warning(f"Sync skipped, server unavailable: {e}")
            return False
        return self.reconcile(snapshot, fetched_at)

    # ── local simulation ─────────────────────────────────────────────────

    def local_tick(self) -> bool:
        """
        Count every running timer down by one second.

        Timers that reach zero move to local history and are signalled. The
        next sync may still bring them back if the server disagrees.
        """
        changed = False
        for timer_id, timer in list(self._timers.items()):
            if timer.status != TimerStatus.RUNNING or timer.remaining_seconds <= 0:
                continue
            step = countdown_step(timer.remaining_seconds)
            timer.remaining_seconds = step.remaining_seconds
            changed = True
            if step.finished:
                del self._timers[timer_id]
                self._history.append(_history_entry(timer, TimerStatus.COMPLETED))
                self._trim_history()
                self._notify_completed(timer)
        if changed:
            self._render()
        return changed

    def _local_create(self, name: str, duration_seconds: int) -> WidgetTimer:
        return WidgetTimer(
            id=f"local_{secrets.token_hex(6)}",
            name=name or f"Timer {len(self._timers) + 1}",
            remaining_seconds=duration_seconds,
            status=TimerStatus.RUNNING,
            original_duration=duration_seconds,
            created_at=utc_now_iso(),
        )

    def _local_control(self, timer_id: str, action: TimerAction) -> bool:
        """Apply a control action to local state with the server's preconditions"""
        timer = self._timers.get(timer_id)
        if timer is None:
            return False
        if action == TimerAction.PAUSE:
            if timer.status != TimerStatus.RUNNING:
                return False
            timer.status = TimerStatus.PAUSED
        elif action == TimerAction.RESUME:
            if timer.status != TimerStatus.PAUSED:
                return False
            timer.status = TimerStatus.RUNNING
        else:
            del self._timers[timer_id]
            self._history.append(_history_entry(timer, TimerStatus.STOPPED))
            self._trim_history()
        return True

    # ── user actions ─────────────────────────────────────────────────────

    async def start_timer(self, name: str, duration_seconds: int) -> Optional[WidgetTimer]:
        """
        Start a timer on the server, or locally if the server is unreachable.

        Returns:
            The new timer, or None if the duration is invalid
        """
        duration = parse_duration(duration_seconds)
        if duration is None or not TIMER_LIMITS["MIN_DURATION"] <= duration <= TIMER_LIMITS["MAX_DURATION"]:
            logger.warning(f"Refusing to start timer with duration {duration_seconds!r}")
            return None
        label = (name or "").strip()

        try:
            structured = await self._api.start_timer(label, duration)
            created = structured["timer"]
            view = next((t for t in structured.get("activeTimers", []) if t.get("id") == created["id"]), None)
            if view is not None:
                timer = WidgetTimer.model_validate(view)
            else:
                timer = WidgetTimer(
                    id=created["id"],
                    name=created["name"],
                    remaining_seconds=created["minutesLeft"] * 60 + created["secondsLeft"],
                    status=TimerStatus(created["status"]),
                    original_duration=created.get("totalDuration", duration),
                    created_at=utc_now_iso(),
                )
            if structured.get("presets"):
                self._presets = [TimerPreset.model_validate(p) for p in structured["presets"]]
            if "history" in structured:
                self._history = [HistoryEntry.model_validate(h) for h in structured["history"]]
        except (TimerApiError, KeyError, ValueError) as e:
            logger.warning(f"Server start failed, running timer locally: {e}")
            timer = self._local_create(label, duration)

        self._timers[timer.id] = timer
        self._touch(timer.id)
        self._render()
        self._ensure_local_loop()
        return timer.model_copy()

    async def control_timer(self, timer_id: str, action: str) -> bool:
        """
        Pause, resume or stop a timer on the server, or locally if unreachable.

        Returns:
            Whether the action took effect
        """
        try:
            verb = TimerAction(action)
        except ValueError:
            logger.warning(f"Unknown timer action: {action!r}")
            return False

        try:
            structured = await self._api.control_timer(timer_id, verb.value)
        except TimerApiError as e:
            logger.warning(f"Server control failed, applying {verb.value} locally: {e}")
            success = self._local_control(timer_id, verb)
        else:
            success = bool(structured.get("success"))
            if success:
                if verb == TimerAction.STOP:
                    self._timers.pop(timer_id, None)
                    if "history" in structured:
                        self._history = [HistoryEntry.model_validate(h) for h in structured["history"]]
                elif timer_id in self._timers:
                    self._timers[timer_id].status = (
                        TimerStatus.PAUSED if verb == TimerAction.PAUSE else TimerStatus.RUNNING
                    )
            else:
                logger.info(f"Server refused to {verb.value} timer {timer_id}")

        if success:
            self._touch(timer_id)
            self._render()
            self._ensure_local_loop()
        return success

    # ── loops ────────────────────────────────────────────────────────────

    def _ensure_local_loop(self) -> None:
        if not self._timers or self.is_local_ticking:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop: the caller drives local_tick() by hand
            return
        self._tick_task = loop.create_task(self._local_loop())

    async def _local_loop(self) -> None:
        while self._timers:
            await asyncio.sleep(self._tick_interval)
            self.local_tick()
        # Active set empty: drop the handle so the next timer restarts the loop
        self._tick_task = None

    async def _sync_loop(self) -> None:
        while True:
            # Each sync runs as its own task so a hung request cannot delay the next one
            request = asyncio.get_running_loop().create_task(self.sync_now())
            self._sync_requests.add(request)
            request.add_done_callback(self._sync_requests.discard)
            await asyncio.sleep(self._sync_interval)

    def start(self) -> None:
        """Begin server syncing. The sync loop runs until close()."""
        if not self.is_syncing:
            self._sync_task = asyncio.get_running_loop().create_task(self._sync_loop())
            logger.info(f"Widget sync started (every {self._sync_interval}s)")
        self._ensure_local_loop()

    async def close(self) -> None:
        tasks = [t for t in (self._sync_task, self._tick_task) if t is not None]
        tasks.extend(self._sync_requests)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._sync_task = None
        self._tick_task = None
        self._sync_requests.clear()
