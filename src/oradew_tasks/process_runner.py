"""Process spawning abstraction layer.

This module provides an interface for starting the external tool, allowing
for better testability and dependency injection. Spawns are fire-and-forget:
the child shares the caller's standard streams and nothing here waits for it.
"""

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from subprocess import Popen
from typing import Any, Mapping, Optional, Sequence

__all__ = [
    "ProcessHandle",
    "ProcessRunner",
    "InheritedStdioProcessRunner",
]

from oradew_tasks.logging import Logger


@dataclass
class ProcessHandle:
    """
    Handle to a spawned child process.

    Callers that only fire the process may discard it; the handle lets others
    wait for completion without changing how the process is started.
    """

    pid: int
    inherited_stdio: bool
    _process: Optional[Popen] = field(default=None, repr=False, compare=False)

    def poll(self) -> Optional[int]:
        """
        Return the exit code if the process has finished, otherwise None.
        """
        if self._process is None:
            return None
        return self._process.poll()

    def wait(self, timeout: Optional[float] = None) -> int:
        """
        Block until the process exits and return its exit code.

        Raises:
        subprocess.TimeoutExpired: If timeout is exceeded
        RuntimeError: If the handle is not attached to a process
        """
        if self._process is None:
            raise RuntimeError(f"No process attached to handle for pid {self.pid}")
        return self._process.wait(timeout=timeout)


class ProcessRunner(ABC):
    """
    Abstract interface for spawning the external tool.
    """

    @abstractmethod
    def spawn(
        self,
        executable: str,
        args: Sequence[str],
        env: Mapping[str, str],
        **kwargs: Any,
    ) -> ProcessHandle:
        """
        Start ``executable`` with ``args`` and return immediately.

        Args:
        executable: Program to run (the interpreter of the tool entry script)
        args: Arguments following the executable
        env: Complete environment for the child
        **kwargs: Extra keyword arguments passed to subprocess.Popen

        Returns:
        ProcessHandle: Handle to the started process

        Raises:
        OSError: If the executable cannot be started
        """
        ...


class InheritedStdioProcessRunner(ProcessRunner):
    """
    Process runner whose children write straight to the caller's terminal.
    """

    def __init__(self, logger: Logger) -> None:
        self._logger = logger

    def spawn(
        self,
        executable: str,
        args: Sequence[str],
        env: Mapping[str, str],
        **kwargs: Any,
    ) -> ProcessHandle:
        # None means the child inherits our stdin, stdout and stderr
        kwargs["stdin"] = None
        kwargs["stdout"] = None
        kwargs["stderr"] = None

        process = subprocess.Popen([executable, *args], env=dict(env), **kwargs)
        self._logger.trace(f"Spawned pid {process.pid}")
        return ProcessHandle(pid=process.pid, inherited_stdio=True, _process=process)
