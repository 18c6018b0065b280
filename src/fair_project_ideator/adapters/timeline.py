from __future__ import annotations
from collections.abc import Mapping
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, ValidationError

from fair_project_ideator.core.errors import TimelineSchemaError
from fair_project_ideator.core.state import Phase, Timeline


class PhasePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    phase: str
    tasks: list[str]
    duration: str


class TimelinePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    timeline: list[PhasePayload]


# JSON schema handed to the service so the reply matches TimelinePayload.
TIMELINE_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "timeline": {
            "type": "ARRAY",
            "description": "A list of steps for the project timeline.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "phase": {"type": "STRING", "description": "Name of the project phase (e.g., Data Collection)."},
                    "tasks": {"type": "ARRAY", "items": {"type": "STRING"}},
                    "duration": {"type": "STRING", "description": "Estimated duration (e.g., 1-2 weeks)."},
                },
                "required": ["phase", "tasks", "duration"],
            },
        }
    },
    "required": ["timeline"],
}


def parse_timeline(payload: str | bytes | Mapping[str, Any]) -> Timeline:
    """Deserialize a timeline payload, raising TimelineSchemaError on any mismatch."""
    try:
        data = orjson.loads(payload) if isinstance(payload, (str, bytes)) else dict(payload)
    except orjson.JSONDecodeError as exc:
        raise TimelineSchemaError(f"Timeline response is not valid JSON: {exc}") from exc

    try:
        parsed = TimelinePayload.model_validate(data)
    except ValidationError as exc:
        raise TimelineSchemaError(
            f"Timeline response does not match the expected schema ({exc.error_count()} errors)."
        ) from exc

    return Timeline(
        phases=tuple(
            Phase(name=item.phase, duration=item.duration, tasks=tuple(item.tasks))
            for item in parsed.timeline
        )
    )
