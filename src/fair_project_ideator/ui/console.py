"""Terminal rendering of the three views with rich.

The renderer is the store's render callback. It redraws a view only when the
view's structure changes; while a chat reply streams it prints just the
newly appended text of the last message.
"""

from __future__ import annotations
from typing import Any

from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from fair_project_ideator.core.state import AppState, ChatMessage, ProjectRecord, Timeline

WELCOME_HINT = "Enter a topic (e.g. physics, chemistry, biology) or ':load PATH' to open saved projects."
RESULTS_HINT = "Pick a project number, ':save [DIR]' to export, ':restart' to start over, ':quit' to exit."
PROJECT_HINT = "Ask a question about the project, ':back' to return to the ideas, ':quit' to exit."


class ConsoleRenderer:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._signature: tuple[Any, ...] | None = None
        self._chat_started = 0
        self._last_text = ""

    def __call__(self, state: AppState) -> None:
        signature = self._signature_of(state)
        if signature != self._signature:
            self._signature = signature
            self._chat_started = 0
            self._last_text = ""
            self._render_view(state)
        if state.view == "project":
            self._render_chat(state.chat_history)

    @staticmethod
    def _signature_of(state: AppState) -> tuple[Any, ...]:
        # Chat-time loading is shown by the streaming text itself.
        loading = state.is_loading and (state.view != "project" or state.timeline is None)
        return (
            state.view,
            loading,
            state.error,
            state.topic,
            state.projects,
            state.selected_project,
            state.timeline,
        )

    def _render_view(self, state: AppState) -> None:
        if state.view == "welcome":
            self._render_welcome(state)
        elif state.view == "results":
            self._render_results(state)
        else:
            self._render_project(state)

    def _render_status(self, state: AppState) -> None:
        if state.is_loading:
            self.console.print(Text("Working...", style="bold cyan"))
        if state.error:
            self.console.print(Panel(Text(state.error), title="Error", border_style="red"))

    def _render_welcome(self, state: AppState) -> None:
        self.console.print(Rule("FIRI"))
        self.console.print(Text("Built for research", style="italic"))
        self.console.print(Text(WELCOME_HINT))
        self._render_status(state)

    def _render_results(self, state: AppState) -> None:
        self.console.print(Rule(Text(f"Ideas for: {state.topic}")))
        self._render_status(state)
        if state.is_loading:
            return

        if state.field_analysis.strip():
            self.console.print(Panel(Markdown(state.field_analysis), title="State of the Field Analysis"))
        self.console.print(Panel(Markdown(state.subtopics or ""), title="Subtopics"))

        for number, project in enumerate(state.projects, start=1):
            self.console.print(project_panel(number, project))

        if state.sources:
            self.console.print(Rule("Sources"))
            for source in state.sources:
                self.console.print(Text(f"- {source.label} <{source.uri}>"))
        self.console.print(Text(RESULTS_HINT))

    def _render_project(self, state: AppState) -> None:
        project = state.selected_project
        if project is None:
            return
        self.console.print(Rule(Text(project.title)))
        self.console.print(Panel(Markdown(project.description), title="Project Plan"))
        if state.timeline is not None:
            self.console.print(timeline_table(state.timeline))
        self._render_status(state)
        self.console.print(Text(PROJECT_HINT))

    def _render_chat(self, history: tuple[ChatMessage, ...]) -> None:
        if self._chat_started > len(history):
            self._chat_started = 0
            self._last_text = ""

        if self._chat_started:
            content = history[self._chat_started - 1].content
            if content != self._last_text:
                if content.startswith(self._last_text):
                    self._write(content[len(self._last_text):])
                else:
                    self.console.print()
                    self._write(content)
                self._last_text = content

        for message in history[self._chat_started:]:
            self.console.print()
            self.console.print(Text("You: " if message.role == "user" else "Advisor: ", style="bold"), end="")
            self._write(message.content)
            self._last_text = message.content
            self._chat_started += 1

    def _write(self, text: str) -> None:
        self.console.print(text, end="", markup=False, highlight=False)


def rankings_table(project: ProjectRecord) -> Table:
    table = Table(title="Rankings (1-10)", show_header=False)
    table.add_column("Criteria")
    table.add_column("Score", justify="right")
    for label, score in project.scores.items():
        table.add_row(label, str(score))
    return table


def project_panel(number: int, project: ProjectRecord) -> Panel:
    body = Group(
        Text(project.category, style="dim"),
        Markdown(project.description),
        Text("Feasibility & Limitations", style="bold"),
        Markdown(project.analysis),
        rankings_table(project),
        Text("Key Resources", style="bold"),
        Markdown(project.resources),
    )
    return Panel(body, title=Text(f"{number}. {project.title}"))


def timeline_table(timeline: Timeline) -> Table:
    table = Table(title="Proposed Timeline")
    table.add_column("Phase")
    table.add_column("Duration")
    table.add_column("Tasks")
    for phase in timeline.phases:
        table.add_row(Text(phase.name), Text(f"~{phase.duration}"), Text("\n".join(f"- {task}" for task in phase.tasks)))
    return table
