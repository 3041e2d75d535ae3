"""Health check endpoint"""

from fastapi import APIRouter, Depends

from timer_server.api.deps import get_timer_store
from timer_server.config import SERVER_INFO
from timer_server.services.timer.store import TimerStore
from timer_server.utils.datetime_helper import utc_now_iso

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(store: TimerStore = Depends(get_timer_store)):
    """Liveness plus active/completed timer counts"""
    return {
        "status": "ok",
        "timestamp": utc_now_iso(),
        "server": SERVER_INFO["name"],
        "version": SERVER_INFO["version"],
        "activeTimers": store.active_count,
        "completedTimers": store.history_count,
    }
