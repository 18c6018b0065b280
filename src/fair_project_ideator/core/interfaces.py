from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

from .state import Source


@dataclass(frozen=True)
class BrainstormResponse:
    """Raw document returned for a topic plus its grounding citations."""
    text: str
    sources: list[Source] = field(default_factory=list)


class ChatSession(ABC):
    """Follow-up conversation bound to one selected project."""

    @abstractmethod
    def stream(self, message: str) -> AsyncIterator[str]:
        """Send a message and yield the reply as incremental text fragments."""
        pass


class IdeaService(ABC):
    """Abstract base for the generative text service."""

    @abstractmethod
    async def brainstorm(self, topic: str) -> BrainstormResponse:
        """Generate the markdown brainstorm document for a topic."""
        pass

    @abstractmethod
    async def generate_timeline(self, title: str, description: str) -> str:
        """Return the JSON timeline payload for a project."""
        pass

    @abstractmethod
    async def create_chat(self, title: str, description: str) -> ChatSession:
        """Open a chat session primed with the project's context."""
        pass
