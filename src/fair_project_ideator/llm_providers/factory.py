from __future__ import annotations
from typing import Literal
from fair_project_ideator.core.errors import ProviderNotConfiguredError
from fair_project_ideator.core.interfaces import IdeaService
from fair_project_ideator.llm_providers.gemini_client import GeminiIdeaService

ProviderType = Literal["gemini"]

def create_service(provider: ProviderType = "gemini", **kwargs) -> IdeaService:
    if provider == "gemini":
        return GeminiIdeaService(**kwargs)
    raise ProviderNotConfiguredError(f"Unsupported provider type: {provider}")
