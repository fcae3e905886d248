"""Runtime engine exports."""

from .loop import RuntimeBootstrap, RuntimeEngine
from .window import LoggingWindowManager

__all__ = ["LoggingWindowManager", "RuntimeBootstrap", "RuntimeEngine"]
