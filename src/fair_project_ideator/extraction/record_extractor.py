"""Turns a generated brainstorm document into typed project records.

The document is expected to follow the markdown template requested in the
brainstorm prompt: an analysis section, a subtopics section, then one section
per project idea, all separated by standalone ``---`` lines. Each project
section carries bold labels (``**Title:**``, ``**Rankings:**``, ...).

Nothing in this module raises on malformed input. Missing structure degrades
to placeholder values, and project sections without a title are dropped.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from fair_project_ideator.core.state import UNTITLED, ProjectRecord, Source
from fair_project_ideator.utils import get_logger

logger = get_logger(__name__)

SEPARATOR_PATTERN = re.compile(r"(?<=\n)[ \t]*---[ \t]*$", re.MULTILINE)

LABELS: dict[str, str] = {
    "title": "title",
    "isef category": "category",
    "description": "description",
    "feasibility & limitations": "analysis",
    "rankings": "rankings",
    "key resources": "resources",
}

LABEL_PATTERN = re.compile(
    # Any lead-in without asterisks, such as a list marker or heading, may precede the label.
    r"^\s*(?:[-*+]\s+)?[^*\n]*?\*\*\s*(?P<label>"
    + "|".join(re.escape(label) for label in LABELS)
    + r")\s*:?\s*\*\*\s*:?[ \t]*(?P<rest>.*)$",
    re.IGNORECASE,
)

RANKING_ROWS: dict[str, str] = {
    "impact": "impact",
    "scientific rigor": "rigor",
    "novelty": "novelty",
    "wow factor": "wow_factor",
}

SCORE_PATTERN = re.compile(r"(?<!\d)(\d{1,2})(?!\d)")

DEFAULT_CATEGORY = "N/A"
DEFAULT_DESCRIPTION = "No description."
DEFAULT_ANALYSIS = "No analysis."


@dataclass(frozen=True)
class BrainstormDocument:
    field_analysis: str
    subtopics: str
    projects: tuple[ProjectRecord, ...]


def split_sections(document: str) -> list[str]:
    """Split on ``---`` lines that follow a newline, keeping everything else verbatim."""
    return SEPARATOR_PATTERN.split(document)


def tokenize_block(block: str) -> dict[str, str]:
    """Map each recognized label in a project block to its raw value.

    A value spans from its label line to the next label or the end of the
    block. Text before the first label is ignored, and a repeated label
    keeps its first value.
    """
    captured: dict[str, list[str]] = {}
    current: list[str] | None = None

    for line in block.splitlines():
        match = LABEL_PATTERN.match(line)
        if match is None:
            if current is not None:
                current.append(line)
            continue

        key = LABELS[match.group("label").lower()]
        if key in captured:
            current = None
            continue
        current = [match.group("rest")]
        captured[key] = current

    return {key: "\n".join(lines).strip() for key, lines in captured.items()}


def parse_rankings(table: str) -> dict[str, int]:
    """Read the four score rows of a rankings table; absent rows score 0."""
    scores = {field_name: 0 for field_name in RANKING_ROWS.values()}
    seen: set[str] = set()

    for line in table.splitlines():
        if "|" not in line:
            continue
        cells = [cell.strip() for cell in line.strip().strip("|").split("|")]
        if len(cells) < 2:
            continue
        row = RANKING_ROWS.get(cells[0].strip("*_ ").lower())
        if row is None or row in seen:
            continue
        seen.add(row)
        match = SCORE_PATTERN.search(cells[1])
        if match:
            scores[row] = int(match.group(1))

    return scores


def _first_line(value: str | None) -> str:
    if not value:
        return ""
    for line in value.splitlines():
        if line.strip():
            return line.strip()
    return ""


def extract_project(block: str) -> ProjectRecord:
    values = tokenize_block(block)
    scores = parse_rankings(values.get("rankings", ""))

    return ProjectRecord(
        title=_first_line(values.get("title")) or UNTITLED,
        category=_first_line(values.get("category")) or DEFAULT_CATEGORY,
        description=values.get("description") or DEFAULT_DESCRIPTION,
        analysis=values.get("analysis") or DEFAULT_ANALYSIS,
        resources=values.get("resources", ""),
        **scores,
    )


def extract_brainstorm(document: str | None) -> BrainstormDocument:
    sections = split_sections(document or "")
    field_analysis = sections[0] if sections else ""
    subtopics = sections[1] if len(sections) > 1 else ""

    projects: list[ProjectRecord] = []
    skipped = 0
    for block in sections[2:]:
        project = extract_project(block)
        if project.title == UNTITLED:
            skipped += 1
            continue
        projects.append(project)

    logger.debug(
        "extractor.complete",
        sections=len(sections),
        projects=len(projects),
        skipped=skipped,
    )
    return BrainstormDocument(
        field_analysis=field_analysis,
        subtopics=subtopics,
        projects=tuple(projects),
    )


def dedupe_sources(sources: Iterable[Source]) -> tuple[Source, ...]:
    """Keep the first source seen for each uri, in order of first appearance."""
    unique: dict[str, Source] = {}
    for source in sources:
        if not source.uri or source.uri in unique:
            continue
        unique[source.uri] = source
    return tuple(unique.values())
