import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SERVER_INFO = {
    "name": "advanced-timer-server",
    "version": "2.0.0",
}

MCP_CONFIG = {
    "protocolVersion": "2024-11-05",
    "capabilities": {
        "tools": {},
        "resources": {},
    },
}

TIMER_LIMITS = {
    "MIN_DURATION": 1,
    "MAX_DURATION": 7200,  # 2 hours
}

# Timer engine
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "20"))  # History entries returned to callers
TICK_INTERVAL_SECONDS = float(os.getenv("TICK_INTERVAL_SECONDS", "1.0"))
POLLING_INTERVAL_MS = int(os.getenv("POLLING_INTERVAL_MS", "1000"))

# Widget client
TIMER_SERVER_URL = os.getenv("TIMER_SERVER_URL", f"http://localhost:{PORT}")
WIDGET_SYNC_INTERVAL_SECONDS = float(os.getenv("WIDGET_SYNC_INTERVAL_SECONDS", "2.0"))
WIDGET_TICK_INTERVAL_SECONDS = float(os.getenv("WIDGET_TICK_INTERVAL_SECONDS", "1.0"))
