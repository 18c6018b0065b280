from .console import ConsoleRenderer
from .session import InteractiveSession

__all__ = ["ConsoleRenderer", "InteractiveSession"]
