"""Unit tests for process_runner module."""

import os
import subprocess
import sys
import unittest
from unittest.mock import MagicMock, patch

from helpers.logging import logger_stub
from oradew_tasks.process_runner import (
    InheritedStdioProcessRunner,
    ProcessHandle,
    ProcessRunner,
)


class TestProcessRunner(unittest.TestCase):
    """
    Tests for ProcessRunner abstract interface.
    """

    def test_process_runner_is_abstract(self):
        """
        ProcessRunner cannot be instantiated directly.
        """
        with self.assertRaises(TypeError):
            ProcessRunner()


class TestInheritedStdioProcessRunner(unittest.TestCase):
    """
    Tests for InheritedStdioProcessRunner implementation.
    """

    def setUp(self):
        self.runner = InheritedStdioProcessRunner(logger_stub)

    @patch("oradew_tasks.process_runner.subprocess.Popen")
    def test_spawn_passes_arguments_and_environment(self, mock_popen):
        mock_popen.return_value = MagicMock(pid=123)

        handle = self.runner.spawn("node", ["gulp.js", "--cwd", "/ws"], {"storagePath": "/store"})

        mock_popen.assert_called_once_with(
            ["node", "gulp.js", "--cwd", "/ws"],
            env={"storagePath": "/store"},
            stdin=None,
            stdout=None,
            stderr=None,
        )
        self.assertEqual(handle.pid, 123)
        self.assertTrue(handle.inherited_stdio)

    @patch("oradew_tasks.process_runner.subprocess.Popen")
    def test_spawn_does_not_wait(self, mock_popen):
        process = MagicMock(pid=1)
        mock_popen.return_value = process

        self.runner.spawn("node", [], {})

        process.wait.assert_not_called()
        process.communicate.assert_not_called()

    @patch("oradew_tasks.process_runner.subprocess.Popen")
    def test_spawn_overrides_stream_arguments(self, mock_popen):
        mock_popen.return_value = MagicMock(pid=1)

        self.runner.spawn("node", [], {}, stdout=subprocess.PIPE)

        self.assertIsNone(mock_popen.call_args.kwargs["stdout"])

    def test_spawn_missing_executable_raises(self):
        with self.assertRaises(OSError):
            self.runner.spawn("/definitely/not/a/real/executable", [], dict(os.environ))

    def test_spawn_real_process_and_wait(self):
        handle = self.runner.spawn(
            sys.executable,
            ["-c", "import os, sys; sys.exit(0 if os.environ.get('wsConfigPath') == '/ws/oradewrc.json' else 3)"],
            {**os.environ, "wsConfigPath": "/ws/oradewrc.json"},
        )
        self.assertEqual(handle.wait(timeout=30), 0)
        self.assertEqual(handle.poll(), 0)

    def test_exit_code_is_not_checked(self):
        handle = self.runner.spawn(sys.executable, ["-c", "import sys; sys.exit(5)"], dict(os.environ))
        self.assertEqual(handle.wait(timeout=30), 5)


class TestProcessHandle(unittest.TestCase):
    """
    Tests for ProcessHandle.
    """

    def test_detached_handle_polls_none(self):
        handle = ProcessHandle(pid=7, inherited_stdio=True)
        self.assertIsNone(handle.poll())

    def test_detached_handle_cannot_wait(self):
        handle = ProcessHandle(pid=7, inherited_stdio=True)
        with self.assertRaises(RuntimeError):
            handle.wait()

    def test_wait_delegates_to_process(self):
        process = MagicMock()
        process.wait.return_value = 4
        handle = ProcessHandle(pid=7, inherited_stdio=True, _process=process)
        self.assertEqual(handle.wait(timeout=2.5), 4)
        process.wait.assert_called_once_with(timeout=2.5)


if __name__ == "__main__":
    unittest.main()
