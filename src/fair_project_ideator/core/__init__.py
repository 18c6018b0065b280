from .state import AppState, ChatMessage, Phase, ProjectRecord, Source, Timeline, View
from .interfaces import BrainstormResponse, ChatSession, IdeaService
from .store import RenderCallback, StateStore
from .errors import (
    IdeatorError,
    ProviderNotConfiguredError,
    ServiceError,
    TimelineSchemaError,
    ImportValidationError,
    InvalidTransitionError,
)

__all__ = [
    "AppState",
    "ChatMessage",
    "Phase",
    "ProjectRecord",
    "Source",
    "Timeline",
    "View",
    "BrainstormResponse",
    "ChatSession",
    "IdeaService",
    "RenderCallback",
    "StateStore",
    "IdeatorError",
    "ProviderNotConfiguredError",
    "ServiceError",
    "TimelineSchemaError",
    "ImportValidationError",
    "InvalidTransitionError",
]
