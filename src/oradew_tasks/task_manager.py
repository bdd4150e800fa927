"""Turning catalog entries and raw arguments into tool invocations."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from oradew_tasks.catalog import TASK_TYPE, TaskDescriptor
from oradew_tasks.logging import Logger
from oradew_tasks.paths import Resolution
from oradew_tasks.process_runner import InheritedStdioProcessRunner, ProcessHandle, ProcessRunner

__all__ = [
    "DEFAULT_EXECUTABLE",
    "PROBLEM_MATCHER",
    "ProcessExecution",
    "RunnableTask",
    "TaskManager",
]

DEFAULT_EXECUTABLE = "node"
PROBLEM_MATCHER = "$oracle-plsql"


@dataclass
class ProcessExecution:
    """What the host needs to start the tool: program, arguments, environment."""

    executable: str
    args: list[str]
    env: dict[str, str]
    inherit_stdio: bool = True


@dataclass
class RunnableTask:
    """A catalog task bound to a concrete process execution.

    ``definition`` is the host's task definition object; the host requires the
    same object back when it resolves a task.
    """

    definition: dict[str, Any]
    name: str
    execution: ProcessExecution
    source: str = TASK_TYPE
    problem_matcher: str = PROBLEM_MATCHER
    is_background: bool = False
    reveal: str = "always"  # "always" or "silent"


def make_task_definition(name: str, params: Sequence[str]) -> dict[str, Any]:
    return {"type": TASK_TYPE, "name": name, "params": list(params)}


@dataclass
class TaskManager:
    """Holds the resolved configuration of one workspace session.

    Builds runnable tasks for the host and dispatches raw argument lists to
    the tool directly.
    """

    resolution: Resolution
    logger: Logger
    executable: str = DEFAULT_EXECUTABLE
    process_runner: Optional[ProcessRunner] = None
    base_environ: Optional[Mapping[str, str]] = field(default=None, repr=False)

    def __post_init__(self):
        if self.process_runner is None:
            self.process_runner = InheritedStdioProcessRunner(self.logger)
        paths = self.resolution.paths
        self.logger.debug(f"Tool entry: {paths.tool_entry_path}")
        self.logger.debug(f"Tool project file: {paths.tool_project_file}")
        self.logger.debug(f"Database config: {paths.db_config_path}")
        self.logger.debug(f"Workspace config: {paths.ws_config_path}")
        self.logger.debug(f"Storage: {paths.storage_root}")

    def build_arguments(self, params: Sequence[str]) -> list[str]:
        """Append ``params`` to a fresh copy of the base arguments."""
        return [*self.resolution.base_arguments, *params]

    def create_execution(self, params: Sequence[str]) -> ProcessExecution:
        environment = self.resolution.environment
        return ProcessExecution(
            executable=self.executable,
            args=self.build_arguments(params),
            env=environment.variables(),
            inherit_stdio=environment.inherit_stdio,
        )

    def create_task(self, descriptor: TaskDescriptor) -> RunnableTask:
        """Build a runnable task for a catalog descriptor.

        Nothing is executed and neither the descriptor nor the base arguments
        are modified.
        """
        definition = make_task_definition(descriptor.name, descriptor.params())
        return self.create_task_from_definition(definition, is_background=descriptor.is_background)

    def create_task_from_definition(self, definition: dict[str, Any], is_background: bool = False) -> RunnableTask:
        """Build a runnable task around an existing host definition object."""
        return RunnableTask(
            definition=definition,
            name=definition["name"],
            execution=self.create_execution(definition["params"]),
            is_background=is_background,
            reveal="silent" if is_background else "always",
        )

    def dispatch(self, raw_args: Sequence[str]) -> ProcessHandle:
        """Run the tool with ``raw_args`` appended to the base arguments.

        Returns as soon as the process has started. The exit code is not
        inspected; the child's output goes straight to the inherited streams.

        Raises:
            OSError: If the executable cannot be started
        """
        params = self.build_arguments(raw_args)
        self.logger.info("Executing oradew task: " + " ".join(params), markup=False, highlight=False)

        base = os.environ if self.base_environ is None else self.base_environ
        env = {**base, **self.resolution.environment.variables()}
        return self.process_runner.spawn(self.executable, params, env)
