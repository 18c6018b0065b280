from __future__ import annotations
import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from fair_project_ideator.core.controller import IdeatorController
from fair_project_ideator.core.state import View
from fair_project_ideator.utils import get_logger

QUIT_COMMANDS = frozenset({":quit", ":q", ":exit"})

PROMPTS: dict[View, str] = {
    "welcome": "topic",
    "results": "ideas",
    "project": "question",
}

LineReader = Callable[[str], Awaitable[str]]


class InteractiveSession:
    """Reads commands from the terminal and dispatches them to the controller."""

    def __init__(
        self,
        controller: IdeatorController,
        console: Console | None = None,
        read_line: LineReader | None = None,
    ) -> None:
        self.controller = controller
        self.console = console or Console()
        self._read_line = read_line or self._prompt
        self.logger = get_logger(__name__)

    async def _prompt(self, label: str) -> str:
        return await asyncio.to_thread(Prompt.ask, f"\n[bold]{label}[/bold]", console=self.console)

    async def run(self, topic: str | None = None, load: Path | None = None) -> int:
        if load is not None:
            await self.controller.import_projects(load)
        elif topic:
            await self.controller.submit_topic(topic)

        while True:
            view = self.controller.store.state.view
            try:
                line = await self._read_line(PROMPTS[view])
            except (EOFError, KeyboardInterrupt):
                return 0
            if not await self.handle(view, line.strip()):
                return 0

    async def handle(self, view: View, line: str) -> bool:
        """Dispatch one command; returns False when the session should end."""
        if line.lower() in QUIT_COMMANDS:
            return False
        if not line:
            return True

        if view == "welcome":
            if line.startswith(":load"):
                path = line[len(":load"):].strip()
                if not path:
                    self.console.print("Usage: :load PATH")
                    return True
                await self.controller.import_projects(Path(path).expanduser())
            else:
                await self.controller.submit_topic(line)
        elif view == "results":
            await self._handle_results(line)
        elif line == ":back":
            self.controller.back_to_results()
        else:
            await self.controller.send_chat(line)
        return True

    async def _handle_results(self, line: str) -> None:
        if line == ":restart":
            self.controller.start_over()
            return
        if line.startswith(":save"):
            target = line[len(":save"):].strip()
            path = self.controller.export_projects(Path(target).expanduser() if target else None)
            if path is not None:
                self.console.print(f"Saved projects to {path}", markup=False)
            return

        projects = self.controller.store.state.projects
        if line.isdigit() and 1 <= int(line) <= len(projects):
            await self.controller.select_project(projects[int(line) - 1])
            return
        self.console.print(f"Choose a project between 1 and {len(projects)}.")
