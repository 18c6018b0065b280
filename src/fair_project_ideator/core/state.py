from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Literal

View = Literal["welcome", "results", "project"]
Role = Literal["user", "model"]

UNTITLED = "Untitled"


@dataclass(frozen=True)
class Source:
    """Grounding citation returned alongside a brainstorm document."""
    uri: str
    title: str = ""

    @property
    def label(self) -> str:
        return self.title or self.uri


@dataclass(frozen=True)
class ProjectRecord:
    """One project idea extracted from a brainstorm document."""
    title: str
    category: str = "N/A"
    description: str = "No description."
    analysis: str = "No analysis."
    impact: int = 0
    rigor: int = 0
    novelty: int = 0
    wow_factor: int = 0
    resources: str = ""

    @property
    def scores(self) -> dict[str, int]:
        return {
            "Impact": self.impact,
            "Scientific Rigor": self.rigor,
            "Novelty": self.novelty,
            "Wow Factor": self.wow_factor,
        }


@dataclass(frozen=True)
class Phase:
    name: str
    duration: str
    tasks: tuple[str, ...] = ()


@dataclass(frozen=True)
class Timeline:
    phases: tuple[Phase, ...] = ()


@dataclass(frozen=True)
class ChatMessage:
    """One transcript entry. Streaming replaces the last entry instead of mutating it."""
    role: Role
    content: str


@dataclass(frozen=True)
class AppState:
    """Single source of truth for the interactive client."""
    view: View = "welcome"
    is_loading: bool = False
    error: str | None = None
    topic: str = ""
    subtopics: str = ""
    field_analysis: str = ""
    projects: tuple[ProjectRecord, ...] = ()
    sources: tuple[Source, ...] = ()
    selected_project: ProjectRecord | None = None
    timeline: Timeline | None = None
    chat: Any | None = None
    chat_history: tuple[ChatMessage, ...] = ()

    def find_project(self, title: str) -> ProjectRecord | None:
        for project in self.projects:
            if project.title == title:
                return project
        return None
