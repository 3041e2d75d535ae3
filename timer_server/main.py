import logging

from timer_server.config import LOG_LEVEL

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402
from typing import Optional  # noqa: E402

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from timer_server.api.base import api_router  # noqa: E402
from timer_server.api.errors import command_response  # noqa: E402
from timer_server.config import HOST, PORT, SERVER_INFO  # noqa: E402
from timer_server.services.mcp.mcp_service import McpService  # noqa: E402
from timer_server.services.timer.command_service import TimerCommandService  # noqa: E402
from timer_server.services.timer.engine import TimerLifecycleEngine  # noqa: E402
from timer_server.services.timer.results import CommandResult, ErrorKind  # noqa: E402
from timer_server.services.timer.store import TimerStore  # noqa: E402
from timer_server.services.tools.implementations import register_all_tools  # noqa: E402
from timer_server.services.tools.registry import ToolRegistry  # noqa: E402

logger = logging.getLogger(__name__)


def create_app(store: Optional[TimerStore] = None, start_engine: bool = True) -> FastAPI:
    """
    Build the FastAPI app around one timer store.

    Args:
        store: Store to serve; a fresh one is created when omitted
        start_engine: Run the once-per-second tick loop during the app lifespan
    """
    store = store or TimerStore()
    command_service = TimerCommandService(store)
    registry = register_all_tools(ToolRegistry(), command_service)
    engine = TimerLifecycleEngine(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if start_engine:
            engine.start()
        logger.info(f"⏰ {SERVER_INFO['name']} ready: MCP POST /mcp, REST /tools/*, widget sync /api/timers")
        yield
        await engine.stop()

    app = FastAPI(
        title="Advanced Timer Server",
        description="Countdown timers over REST, MCP JSON-RPC and a polling widget API",
        version=SERVER_INFO["version"],
        lifespan=lifespan,
    )

    app.state.timer_store = store
    app.state.command_service = command_service
    app.state.tool_registry = registry
    app.state.mcp_service = McpService(registry)
    app.state.timer_engine = engine

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed request bodies answer 400 like every other validation failure
        logger.warning(f"Request validation failed for {request.url.path}: {exc.errors()}")
        result = CommandResult.fail(
            request.url.path, ErrorKind.INVALID_REQUEST, "Request body is missing or malformed"
        )
        return command_response(result, extra={"detail": jsonable_errors(exc)})

    # Include all API routes
    app.include_router(api_router)

    @app.get("/")
    def read_root():
        return {
            "message": "Advanced Timer Server",
            "docs": "/docs",
            "version": SERVER_INFO["version"],
        }

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
