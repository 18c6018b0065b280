from .factory import ProviderType, create_service
from .gemini_client import GeminiChatSession, GeminiIdeaService

__all__ = [
    "ProviderType",
    "create_service",
    "GeminiChatSession",
    "GeminiIdeaService",
]
