from .registry import ToolRegistry
from .executor import ToolExecutor
from .catalog import build_tool_registry

__all__ = ["ToolExecutor", "ToolRegistry", "build_tool_registry"]
