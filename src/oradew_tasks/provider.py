"""Editor-facing task provider.

The host calls ``provide_tasks`` to fill its task palette and
``resolve_task`` to turn a saved task definition back into something it can
run. One provider, and with it one TaskManager, lives per workspace session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from oradew_tasks.catalog import COMPILE_ON_SAVE, list_tasks
from oradew_tasks.config import Settings
from oradew_tasks.logging import Logger
from oradew_tasks.paths import build
from oradew_tasks.process_runner import ProcessRunner
from oradew_tasks.task_manager import RunnableTask, TaskManager

__all__ = [
    "OUTPUT_CHANNEL_NAME",
    "HostContext",
    "OutputChannel",
    "TaskProvider",
]

OUTPUT_CHANNEL_NAME = "Oradew Auto Detection"


@dataclass
class HostContext:
    """Locations the host knows about the running extension."""

    workspace_folders: Sequence[str]
    extension_path: str
    storage_path: Optional[str] = None

    @property
    def workspace_root(self) -> str:
        if self.workspace_folders and self.workspace_folders[0]:
            return self.workspace_folders[0]
        return self.extension_path

    @property
    def storage_root(self) -> str:
        return self.storage_path or self.extension_path


@dataclass
class OutputChannel:
    """Append-only text sink shown to the user when something goes wrong."""

    name: str
    logger: Logger
    lines: list[str] = field(default_factory=list)
    visible: bool = False
    preserve_focus: bool = True

    def append_line(self, text: str) -> None:
        self.lines.append(text)

    def show(self, preserve_focus: bool = True) -> None:
        """Reveal the channel by writing its contents through the logger."""
        self.logger.error(f"[bold]{self.name}[/bold]", markup=True)
        for line in self.lines:
            self.logger.error(line, markup=False, highlight=False)
        self.visible = True
        self.preserve_focus = preserve_focus


class TaskProvider:
    """Supplies Oradew tasks to the host."""

    def __init__(
        self,
        context: HostContext,
        settings: Settings,
        logger: Logger,
        process_runner: Optional[ProcessRunner] = None,
    ):
        self.logger = logger
        self._channel: Optional[OutputChannel] = None

        resolution = build(
            context.workspace_root,
            context.extension_path,
            context.storage_root,
            is_silent=not settings.chatty,
            is_color=True,
            extra_variables=settings.env_variables,
        )
        self.task_manager = TaskManager(
            resolution,
            logger,
            executable=settings.cli_executable,
            process_runner=process_runner,
        )

    def get_output_channel(self) -> OutputChannel:
        """Return the diagnostics channel, creating it on first use."""
        if self._channel is None:
            self._channel = OutputChannel(OUTPUT_CHANNEL_NAME, self.logger)
        return self._channel

    def provide_tasks(self) -> list[RunnableTask]:
        """Build every catalog task.

        Never raises: a failure is written to the output channel and an empty
        list is returned so the host's task list keeps working.
        """
        try:
            return self._build_tasks()
        except Exception as err:
            channel = self.get_output_channel()
            stderr = getattr(err, "stderr", None)
            if stderr:
                channel.append_line(_as_text(stderr))
            stdout = getattr(err, "stdout", None)
            if stdout:
                channel.append_line(_as_text(stdout))
            channel.append_line(f"Auto detecting oradew tasks failed. {err}")
            channel.show(preserve_focus=True)
            return []

    def _build_tasks(self) -> list[RunnableTask]:
        return [self.task_manager.create_task(descriptor) for descriptor in list_tasks()]

    def resolve_task(self, definition: Mapping[str, Any]) -> Optional[RunnableTask]:
        """Rebuild a task from the host's definition.

        Returns None unless the definition carries both a name and params.
        The definition object itself is reused in the result.
        """
        name = definition.get("name")
        params = definition.get("params")
        if name and params:
            return self.task_manager.create_task_from_definition(definition)
        return None

    def create_compile_on_save_task(self) -> RunnableTask:
        """Background compile task started when a file is saved."""
        return self.task_manager.create_task(COMPILE_ON_SAVE)


def _as_text(payload: Any) -> str:
    if isinstance(payload, bytes):
        return payload.decode(errors="replace")
    return str(payload)
