from .command_service import TimerCommandService
from .countdown import CountdownStep, countdown_step
from .engine import TimerLifecycleEngine
from .results import CommandError, CommandResult, ErrorKind
from .store import TimerStore

__all__ = [
    "TimerCommandService",
    "CountdownStep",
    "countdown_step",
    "TimerLifecycleEngine",
    "CommandError",
    "CommandResult",
    "ErrorKind",
    "TimerStore",
]
