from __future__ import annotations
from dataclasses import fields, replace
from typing import Any, Callable

from fair_project_ideator.utils import get_logger

from .errors import IdeatorError
from .state import AppState

RenderCallback = Callable[[AppState], None]

_STATE_FIELDS = frozenset(f.name for f in fields(AppState))


class StateStore:
    """Owns the single live AppState and re-renders after every merge.

    The store also tracks an ``epoch`` counter. Navigation bumps it so that
    handlers resuming after a suspension can tell their view was abandoned
    and skip merging stale results.
    """

    def __init__(self, render: RenderCallback | None = None, initial: AppState | None = None) -> None:
        self._state = initial or AppState()
        self._render = render
        self._epoch = 0
        self.logger = get_logger(__name__)

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def epoch(self) -> int:
        return self._epoch

    def set_renderer(self, render: RenderCallback | None) -> None:
        self._render = render

    def merge(self, **partial: Any) -> AppState:
        """Replace the state with a shallow override of ``partial`` and render."""
        unknown = set(partial) - _STATE_FIELDS
        if unknown:
            raise IdeatorError(f"Unknown state fields: {sorted(unknown)}")

        self._state = replace(self._state, **partial)
        self.logger.debug("store.merge", fields=sorted(partial), view=self._state.view)
        if self._render is not None:
            self._render(self._state)
        return self._state

    def merge_if_current(self, epoch: int, **partial: Any) -> bool:
        """Merge only when no navigation happened since ``epoch`` was captured."""
        if epoch != self._epoch:
            self.logger.info("store.stale_merge_dropped", epoch=epoch, current=self._epoch, fields=sorted(partial))
            return False
        self.merge(**partial)
        return True

    def advance_epoch(self) -> int:
        self._epoch += 1
        return self._epoch
