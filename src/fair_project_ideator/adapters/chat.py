"""Transcript helpers for the follow-up chat.

A reply streams in as fragments. Each fragment extends an accumulator and the
last transcript entry is replaced with the accumulated text, so every update
is a strict extension of the previous one.
"""

from __future__ import annotations
from collections.abc import AsyncIterator, Callable

from fair_project_ideator.core.state import ChatMessage, Role

ERROR_REPLY_PREFIX = "Sorry, I encountered an error: "


def append_message(history: tuple[ChatMessage, ...], role: Role, content: str) -> tuple[ChatMessage, ...]:
    return (*history, ChatMessage(role=role, content=content))


def replace_last(history: tuple[ChatMessage, ...], content: str) -> tuple[ChatMessage, ...]:
    """Return a copy of ``history`` whose last entry is a model message holding ``content``."""
    if not history:
        return (ChatMessage(role="model", content=content),)
    return (*history[:-1], ChatMessage(role="model", content=content))


def error_reply(exc: BaseException) -> str:
    return f"{ERROR_REPLY_PREFIX}{exc}"


class ReplyAccumulator:
    """Running concatenation of the fragments received for one reply."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self.text = ""

    def push(self, fragment: str | None) -> str:
        if fragment:
            self._parts.append(fragment)
            self.text = "".join(self._parts)
        return self.text


async def stream_reply(
    fragments: AsyncIterator[str],
    on_update: Callable[[str], bool],
) -> str:
    """Consume ``fragments`` one at a time, reporting the accumulated text after each.

    ``on_update`` returns False when the consumer no longer wants the reply;
    the fragment source is then closed and the partial text returned.
    """
    accumulator = ReplyAccumulator()
    try:
        async for fragment in fragments:
            # Empty chunks (e.g. a trailing metadata-only chunk) carry no text.
            if not fragment:
                continue
            text = accumulator.push(fragment)
            if not on_update(text):
                break
    finally:
        aclose = getattr(fragments, "aclose", None)
        if aclose is not None:
            await aclose()
    return accumulator.text
