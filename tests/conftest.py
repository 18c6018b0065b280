from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import orjson
import pytest

from fair_project_ideator.core.controller import IdeatorController
from fair_project_ideator.core.interfaces import BrainstormResponse, ChatSession, IdeaService
from fair_project_ideator.core.state import AppState, Source
from fair_project_ideator.core.store import StateStore


SAMPLE_DOCUMENT = """\
### State of the Field Analysis
Machine learning is reshaping protein design.

---

### Subtopics
- Protein folding
- Drug discovery

---

### Project Idea 1
**Title:** Folding Proteins with GANs
**ISEF Category:** Computational Biology and Bioinformatics (CO)
**Description:** Use a [GAN](https://en.wikipedia.org/wiki/Generative_adversarial_network) to propose structures.
It builds on recent work.
**Feasibility & Limitations:**
| Aspect | Analysis |
| :--- | :--- |
| Data Availability | Good |
**Rankings:**
| Criteria | Score (1-10) |
| :--- | :--- |
| Impact | 9 |
| Scientific Rigor | 7 |
| Novelty | 8 |
| Wow Factor | 10 |
**Key Resources:**
- [Generative Adversarial Nets](https://arxiv.org/abs/1406.2661)

---

### Project Idea 2
**Title:** Soil Microbes and Drought
**ISEF Category:** Microbiology (MI)
**Description:** Measure drought tolerance.
**Feasibility & Limitations:**
| Aspect | Analysis |
| :--- | :--- |
| Time Commitment | High |
**Rankings:**
| Criteria | Score (1-10) |
| :--- | :--- |
| Impact | 6 |
| Novelty | 5 |
**Key Resources:**
- [Soil microbiology](https://en.wikipedia.org/wiki/Soil_microbiology)
"""

TIMELINE_JSON = orjson.dumps(
    {
        "timeline": [
            {"phase": "Research", "tasks": ["Read papers", "Pick dataset"], "duration": "2 weeks"},
            {"phase": "Analysis", "tasks": ["Train model"], "duration": "3 weeks"},
        ]
    }
).decode()


class FakeChatSession(ChatSession):
    def __init__(self, fragments: list[str], error: Exception | None = None) -> None:
        self.fragments = fragments
        self.error = error
        self.messages: list[str] = []
        self.closed = False

    async def stream(self, message: str) -> AsyncIterator[str]:
        self.messages.append(message)
        try:
            for fragment in self.fragments:
                yield fragment
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


class FakeIdeaService(IdeaService):
    def __init__(
        self,
        document: str = SAMPLE_DOCUMENT,
        sources: list[Source] | None = None,
        timeline: str = TIMELINE_JSON,
        chat: FakeChatSession | None = None,
    ) -> None:
        self.document = document
        self.sources = sources or []
        self.timeline = timeline
        self.chat = chat or FakeChatSession(["Hel", "lo, ", "world"])
        self.brainstorm_error: Exception | None = None
        self.timeline_error: Exception | None = None
        self.calls: list[tuple[str, Any]] = []

    async def brainstorm(self, topic: str) -> BrainstormResponse:
        self.calls.append(("brainstorm", topic))
        if self.brainstorm_error is not None:
            raise self.brainstorm_error
        return BrainstormResponse(text=self.document, sources=list(self.sources))

    async def generate_timeline(self, title: str, description: str) -> str:
        self.calls.append(("timeline", title))
        if self.timeline_error is not None:
            raise self.timeline_error
        return self.timeline

    async def create_chat(self, title: str, description: str) -> ChatSession:
        self.calls.append(("chat", title))
        return self.chat


class RecordingRenderer:
    def __init__(self) -> None:
        self.states: list[AppState] = []

    def __call__(self, state: AppState) -> None:
        self.states.append(state)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def store(renderer: RecordingRenderer) -> StateStore:
    return StateStore(render=renderer)


@pytest.fixture
def service() -> FakeIdeaService:
    return FakeIdeaService()


@pytest.fixture
def controller(store: StateStore, service: FakeIdeaService, tmp_path) -> IdeatorController:
    return IdeatorController(store, service, exports_dir=tmp_path)
