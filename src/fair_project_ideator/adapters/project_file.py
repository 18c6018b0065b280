from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fair_project_ideator.core.errors import ImportValidationError
from fair_project_ideator.core.state import AppState, ProjectRecord, Source
from fair_project_ideator.utils import get_logger

logger = get_logger(__name__)

EXPORT_PREFIX = "firi-projects"
INVALID_FILE_MESSAGE = "Invalid or corrupted project file."
UNREADABLE_FILE_MESSAGE = "Failed to read the selected file."


class ProjectPayload(BaseModel):
    """Wire shape of a project record inside an export file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    category: str = "N/A"
    description: str = "No description."
    analysis: str = "No analysis."
    impact: int = 0
    rigor: int = 0
    novelty: int = 0
    wow_factor: int = Field(default=0, alias="wowFactor")
    resources: str = Field(default="", alias="resourcesHtml")

    @classmethod
    def from_record(cls, record: ProjectRecord) -> "ProjectPayload":
        return cls(
            title=record.title,
            category=record.category,
            description=record.description,
            analysis=record.analysis,
            impact=record.impact,
            rigor=record.rigor,
            novelty=record.novelty,
            wow_factor=record.wow_factor,
            resources=record.resources,
        )

    def to_record(self) -> ProjectRecord:
        return ProjectRecord(**self.model_dump())


class SourcePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uri: str
    title: str = ""


class ProjectFilePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    topic: str
    subtopics: str
    projects: list[ProjectPayload]
    sources: list[SourcePayload] | None = None
    field_analysis: str | None = Field(default=None, alias="fieldAnalysis")


@dataclass(frozen=True)
class ProjectSet:
    """The exportable slice of AppState."""
    topic: str
    subtopics: str
    projects: tuple[ProjectRecord, ...]
    sources: tuple[Source, ...] = ()
    field_analysis: str = ""

    @classmethod
    def from_state(cls, state: AppState) -> "ProjectSet":
        return cls(
            topic=state.topic,
            subtopics=state.subtopics,
            projects=state.projects,
            sources=state.sources,
            field_analysis=state.field_analysis,
        )

    def as_state_update(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "subtopics": self.subtopics,
            "projects": self.projects,
            "sources": self.sources,
            "field_analysis": self.field_analysis,
        }


def slugify_topic(topic: str) -> str:
    cleaned = "".join(ch if ch.isalnum() or ch == "-" else "-" for ch in topic.strip().lower())
    normalized = "-".join(filter(None, cleaned.split("-")))
    return normalized or "topic"


def export_filename(topic: str) -> str:
    return f"{EXPORT_PREFIX}-{slugify_topic(topic)}.json"


def dump_project_set(project_set: ProjectSet) -> bytes:
    payload = {
        "topic": project_set.topic,
        "subtopics": project_set.subtopics,
        "projects": [ProjectPayload.from_record(p).model_dump(by_alias=True) for p in project_set.projects],
        "sources": [{"uri": s.uri, "title": s.title} for s in project_set.sources],
        "fieldAnalysis": project_set.field_analysis,
    }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def write_project_set(project_set: ProjectSet, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(project_set.topic)
    path.write_bytes(dump_project_set(project_set))
    logger.info("project_file.exported", path=str(path), projects=len(project_set.projects))
    return path


def parse_project_set(raw: str | bytes) -> ProjectSet:
    """Validate an export file's contents.

    ``topic``, ``subtopics`` and ``projects`` are required; ``sources`` and
    ``fieldAnalysis`` default to empty.
    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ImportValidationError(INVALID_FILE_MESSAGE) from exc

    if not isinstance(data, dict):
        raise ImportValidationError(INVALID_FILE_MESSAGE)

    try:
        payload = ProjectFilePayload.model_validate(data)
    except ValidationError as exc:
        logger.warning("project_file.invalid", errors=exc.error_count())
        raise ImportValidationError(INVALID_FILE_MESSAGE) from exc

    return ProjectSet(
        topic=payload.topic,
        subtopics=payload.subtopics,
        projects=tuple(p.to_record() for p in payload.projects),
        sources=tuple(Source(uri=s.uri, title=s.title) for s in payload.sources or ()),
        field_analysis=payload.field_analysis or "",
    )


def read_project_set(path: Path) -> ProjectSet:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ImportValidationError(UNREADABLE_FILE_MESSAGE) from exc
    project_set = parse_project_set(raw)
    logger.info("project_file.imported", path=str(path), projects=len(project_set.projects))
    return project_set
