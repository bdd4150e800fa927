"""oradew-tasks - Editor task integration for the Oradew build tool."""

__version__ = "0.1.0"

from oradew_tasks.catalog import COMPILE_ON_SAVE, TaskDescriptor, find_task, list_tasks
from oradew_tasks.config import ConfigError, Settings, load_settings
from oradew_tasks.paths import InvocationEnvironment, Resolution, ResolvedPaths, build
from oradew_tasks.process_runner import ProcessHandle, ProcessRunner
from oradew_tasks.provider import HostContext, OutputChannel, TaskProvider
from oradew_tasks.substitution import Literal, Placeholder, resolve_placeholders
from oradew_tasks.task_manager import ProcessExecution, RunnableTask, TaskManager

__all__ = [
    "__version__",
    "COMPILE_ON_SAVE",
    "TaskDescriptor",
    "find_task",
    "list_tasks",
    "ConfigError",
    "Settings",
    "load_settings",
    "InvocationEnvironment",
    "Resolution",
    "ResolvedPaths",
    "build",
    "ProcessHandle",
    "ProcessRunner",
    "HostContext",
    "OutputChannel",
    "TaskProvider",
    "Literal",
    "Placeholder",
    "resolve_placeholders",
    "ProcessExecution",
    "RunnableTask",
    "TaskManager",
]
