from __future__ import annotations
from collections.abc import AsyncIterator
from typing import Any
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types
from fair_project_ideator.adapters.timeline import TIMELINE_RESPONSE_SCHEMA
from fair_project_ideator.config import settings
from fair_project_ideator.core.errors import ProviderNotConfiguredError, ServiceError
from fair_project_ideator.core.interfaces import BrainstormResponse, ChatSession, IdeaService
from fair_project_ideator.core.state import Source
from fair_project_ideator.utils import get_logger

from .prompts import advisor_instruction, brainstorm_prompt, timeline_prompt


class GeminiChatSession(ChatSession):
    """Streams replies from a google.genai async chat."""

    def __init__(self, chat: Any) -> None:
        self._chat = chat
        self.logger = get_logger(__name__)

    async def stream(self, message: str) -> AsyncIterator[str]:
        response_stream = None
        try:
            response_stream = await self._chat.send_message_stream(message)
            async for chunk in response_stream:
                yield chunk.text or ""
        except genai_errors.APIError as exc:
            self.logger.error("gemini.chat.stream_error", error=str(exc))
            raise ServiceError(str(exc)) from exc
        finally:
            aclose = getattr(response_stream, "aclose", None)
            if aclose is not None:
                await aclose()


class GeminiIdeaService(IdeaService):
    """Wrapper for Google Gemini models using the google.genai SDK."""

    def __init__(
        self,
        model: str | None = None,
        enable_search_grounding: bool | None = None,
        client: genai.Client | None = None,
    ) -> None:
        if client is None:
            if not settings.secrets.google_api_key:
                raise ProviderNotConfiguredError("Gemini API key is not configured (set GOOGLE_API_KEY).")
            client = genai.Client(api_key=settings.secrets.google_api_key)

        self.client = client
        self.model = model or settings.runtime.model_name
        self.enable_search_grounding = (
            settings.runtime.enable_search_grounding
            if enable_search_grounding is None
            else enable_search_grounding
        )
        self.logger = get_logger(__name__)

    async def brainstorm(self, topic: str) -> BrainstormResponse:
        config = None
        if self.enable_search_grounding:
            config = genai_types.GenerateContentConfig(
                tools=[genai_types.Tool(google_search=genai_types.GoogleSearch())],
            )

        self.logger.info("gemini.brainstorm.start", model=self.model, topic=topic)
        response = await self._generate(brainstorm_prompt(topic), config)
        text = self._extract_text(response)
        sources = self._extract_sources(response)
        self.logger.info("gemini.brainstorm.complete", chars=len(text), sources=len(sources))
        return BrainstormResponse(text=text, sources=sources)

    async def generate_timeline(self, title: str, description: str) -> str:
        config = genai_types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=TIMELINE_RESPONSE_SCHEMA,
        )
        self.logger.info("gemini.timeline.start", model=self.model, title=title)
        response = await self._generate(timeline_prompt(title, description), config)
        return self._extract_text(response)

    async def create_chat(self, title: str, description: str) -> ChatSession:
        chat = self.client.aio.chats.create(
            model=self.model,
            config=genai_types.GenerateContentConfig(
                system_instruction=advisor_instruction(title, description),
            ),
        )
        self.logger.info("gemini.chat.created", model=self.model, title=title)
        return GeminiChatSession(chat)

    async def _generate(
        self,
        prompt: str,
        config: genai_types.GenerateContentConfig | None,
    ) -> genai_types.GenerateContentResponse:
        try:
            return await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            self.logger.error("gemini.request_error", error=str(exc), model=self.model)
            raise ServiceError(str(exc)) from exc

    def _extract_text(self, response: genai_types.GenerateContentResponse) -> str:
        if getattr(response, "text", None):
            return response.text

        collected: list[str] = []
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                text = getattr(part, "text", None)
                if text:
                    collected.append(text)
        return "\n".join(collected).strip()

    def _extract_sources(self, response: genai_types.GenerateContentResponse) -> list[Source]:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        metadata = getattr(candidates[0], "grounding_metadata", None)
        sources: list[Source] = []
        for chunk in getattr(metadata, "grounding_chunks", None) or []:
            web = getattr(chunk, "web", None)
            uri = getattr(web, "uri", None)
            if uri:
                sources.append(Source(uri=uri, title=getattr(web, "title", None) or ""))
        return sources
