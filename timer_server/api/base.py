from fastapi import APIRouter
from timer_server.api import health, mcp, timers, tools

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(tools.router)
api_router.include_router(timers.router)
api_router.include_router(mcp.router)
api_router.include_router(health.router)
