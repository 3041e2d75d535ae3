from .base import BaseTool
from .registry import ToolRegistry
from .executor import ToolExecutor

__all__ = ["BaseTool", "ToolRegistry", "ToolExecutor"]
