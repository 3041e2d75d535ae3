"""Tool implementations - registered once per app at startup."""
from timer_server.services.timer.command_service import TimerCommandService
from timer_server.services.tools.registry import ToolRegistry
from .start_timer import StartTimerTool
from .control_timer import ControlTimerTool
from .get_timer_status import GetTimerStatusTool


def register_all_tools(registry: ToolRegistry, service: TimerCommandService) -> ToolRegistry:
    """Register every timer tool against one command service."""
    registry.register(StartTimerTool(service))
    registry.register(ControlTimerTool(service))
    registry.register(GetTimerStatusTool(service))
    return registry
