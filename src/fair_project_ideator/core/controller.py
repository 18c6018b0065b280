from __future__ import annotations
import asyncio
from pathlib import Path

from fair_project_ideator.adapters.chat import append_message, error_reply, replace_last, stream_reply
from fair_project_ideator.adapters.project_file import ProjectSet, read_project_set, write_project_set
from fair_project_ideator.adapters.timeline import parse_timeline
from fair_project_ideator.config import settings
from fair_project_ideator.extraction import dedupe_sources, extract_brainstorm
from fair_project_ideator.llm_providers.prompts import greeting
from fair_project_ideator.utils import get_logger

from .errors import IdeatorError, InvalidTransitionError
from .interfaces import IdeaService
from .state import ChatMessage, ProjectRecord, View
from .store import StateStore


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class IdeatorController:
    """Drives the welcome -> results -> project view graph.

    Every handler validates the current view, merges a loading state, awaits
    the service, then merges the outcome. Results that arrive after the user
    navigated away are dropped through the store's epoch check.
    """

    def __init__(
        self,
        store: StateStore,
        service: IdeaService,
        exports_dir: Path | None = None,
    ) -> None:
        self.store = store
        self.service = service
        self.exports_dir = exports_dir or settings.runtime.exports_dir
        self.logger = get_logger(__name__)

    def _require_view(self, action: str, *allowed: View) -> None:
        current = self.store.state.view
        if current not in allowed:
            self.logger.warning("controller.invalid_transition", action=action, view=current)
            raise InvalidTransitionError(f"'{action}' is not available from the {current} view.")

    # welcome -> results

    async def submit_topic(self, topic: str) -> bool:
        self._require_view("submit_topic", "welcome")
        topic = topic.strip()
        if not topic:
            return False

        epoch = self.store.epoch
        self.store.merge(is_loading=True, error=None, topic=topic)
        self.logger.info("controller.topic.start", topic=topic)

        try:
            response = await self.service.brainstorm(topic)
            document = extract_brainstorm(response.text)
        except Exception as exc:
            self.logger.exception("controller.topic.error", topic=topic)
            self.store.merge_if_current(epoch, is_loading=False, error=_describe(exc), view="welcome")
            return False

        self.logger.info("controller.topic.complete", projects=len(document.projects))
        return self.store.merge_if_current(
            epoch,
            view="results",
            is_loading=False,
            field_analysis=document.field_analysis,
            subtopics=document.subtopics,
            projects=document.projects,
            sources=dedupe_sources(response.sources),
        )

    async def import_projects(self, path: Path) -> bool:
        self._require_view("import_projects", "welcome")
        epoch = self.store.epoch
        self.store.merge(is_loading=True, error=None)

        try:
            project_set = await asyncio.to_thread(read_project_set, Path(path))
        except Exception as exc:
            self.logger.error("controller.import.error", path=str(path), error=_describe(exc))
            self.store.merge_if_current(epoch, is_loading=False, error=_describe(exc), view="welcome")
            return False

        return self.store.merge_if_current(
            epoch,
            view="results",
            is_loading=False,
            error=None,
            **project_set.as_state_update(),
        )

    # results

    def export_projects(self, directory: Path | None = None) -> Path | None:
        self._require_view("export_projects", "results")
        try:
            return write_project_set(ProjectSet.from_state(self.store.state), directory or self.exports_dir)
        except OSError as exc:
            self.logger.error("controller.export.error", error=_describe(exc))
            self.store.merge(error=f"Failed to save projects. {_describe(exc)}")
            return None

    def start_over(self) -> None:
        self._require_view("start_over", "results")
        self.store.advance_epoch()
        self.store.merge(
            view="welcome",
            is_loading=False,
            error=None,
            topic="",
            subtopics="",
            field_analysis="",
            projects=(),
            sources=(),
        )

    # results -> project

    async def select_project(self, project: ProjectRecord | str) -> bool:
        self._require_view("select_project", "results")
        if isinstance(project, str):
            found = self.store.state.find_project(project)
            if found is None:
                raise IdeatorError(f"No project titled {project!r}.")
            project = found

        epoch = self.store.epoch
        self.store.merge(
            view="project",
            is_loading=True,
            error=None,
            selected_project=project,
            timeline=None,
            chat=None,
            chat_history=(),
        )
        self.logger.info("controller.project.start", title=project.title)

        try:
            chat = await self.service.create_chat(project.title, project.description)
            raw_timeline = await self.service.generate_timeline(project.title, project.description)
            timeline = parse_timeline(raw_timeline)
        except Exception as exc:
            self.logger.exception("controller.project.error", title=project.title)
            self.store.merge_if_current(
                epoch,
                view="results",
                is_loading=False,
                error=f"Failed to generate timeline. {_describe(exc)}",
                selected_project=None,
                timeline=None,
                chat=None,
                chat_history=(),
            )
            return False

        return self.store.merge_if_current(
            epoch,
            is_loading=False,
            timeline=timeline,
            chat=chat,
            chat_history=(ChatMessage(role="model", content=greeting(project.title)),),
        )

    # project

    def back_to_results(self) -> None:
        self._require_view("back_to_results", "project")
        self.store.advance_epoch()
        self.store.merge(
            view="results",
            is_loading=False,
            selected_project=None,
            timeline=None,
            chat=None,
            chat_history=(),
        )

    async def send_chat(self, message: str) -> bool:
        self._require_view("send_chat", "project")
        chat = self.store.state.chat
        if not message.strip() or chat is None:
            return False

        epoch = self.store.epoch
        self.store.merge(
            is_loading=True,
            chat_history=append_message(self.store.state.chat_history, "user", message),
        )
        self.store.merge(chat_history=append_message(self.store.state.chat_history, "model", ""))

        def on_update(text: str) -> bool:
            return self.store.merge_if_current(
                epoch,
                chat_history=replace_last(self.store.state.chat_history, text),
            )

        try:
            reply = await stream_reply(chat.stream(message), on_update)
            self.logger.info("controller.chat.complete", chars=len(reply))
        except Exception as exc:
            self.logger.exception("controller.chat.error")
            self.store.merge_if_current(
                epoch,
                chat_history=replace_last(self.store.state.chat_history, error_reply(exc)),
            )
        finally:
            self.store.merge_if_current(epoch, is_loading=False)
        return True
