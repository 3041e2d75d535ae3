"""HTTP client for the widget sync endpoints"""
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from timer_server.config import TIMER_SERVER_URL
from .models import StatusSnapshot

logger = logging.getLogger(__name__)


class TimerApiError(Exception):
    """Network, HTTP or payload failure talking to the timer server"""


class TimerApiClient:
    """
    Thin async wrapper over /api/timers.

    No timeout is applied; a hung request stalls only the caller awaiting it.
    """

    def __init__(self, base_url: str = TIMER_SERVER_URL, client: Optional[httpx.AsyncClient] = None):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=None)

    async def _request(self, method: str, url: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, url, json=json)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise TimerApiError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise TimerApiError(f"{method} {url} returned invalid JSON") from e

    async def fetch_status(self) -> StatusSnapshot:
        body = await self._request("GET", "/api/timers")
        try:
            return StatusSnapshot.model_validate(body)
        except ValidationError as e:
            raise TimerApiError(f"Unexpected status payload: {e}") from e

    async def start_timer(self, name: str, duration_seconds: int) -> Dict[str, Any]:
        """Returns the structuredContent of the start envelope"""
        body = await self._request("POST", "/api/timers", {"name": name, "durationSeconds": duration_seconds})
        return body.get("structuredContent", {})

    async def control_timer(self, timer_id: str, action: str) -> Dict[str, Any]:
        """Returns the structuredContent of the control envelope"""
        body = await self._request("POST", f"/api/timers/{timer_id}/control", {"action": action})
        return body.get("structuredContent", {})

    async def aclose(self) -> None:
        await self._client.aclose()
