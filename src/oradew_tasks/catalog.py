"""Static catalog of Oradew tasks offered to the editor."""

from __future__ import annotations

from dataclasses import dataclass

from oradew_tasks.substitution import ArgToken, parse_arguments, render_arguments

__all__ = [
    "TASK_TYPE",
    "TaskDescriptor",
    "COMPILE_ON_SAVE",
    "list_tasks",
    "find_task",
]

TASK_TYPE = "oradew"

# Placeholders bound by the host
ENV = "${command:oradew.getEnvironment}"
PICK_ENV = "${command:oradew.pickEnvironment}"
USER = "${command:oradew.getUser}"
GENERATOR_FUNC = "${command:oradew.getGeneratorFunction}"
FILE = "${file}"
SELECTED_TEXT = "${selectedText}"
LINE_NUMBER = "${lineNumber}"


@dataclass(frozen=True)
class TaskDescriptor:
    """Named action and the argument suffix appended to the base arguments."""

    name: str
    arguments: tuple[ArgToken, ...]
    is_background: bool = False

    @classmethod
    def of(cls, name: str, *params: str, is_background: bool = False) -> TaskDescriptor:
        return cls(name, parse_arguments(params), is_background)

    def params(self) -> list[str]:
        """Arguments as the host sees them, placeholders unresolved."""
        return render_arguments(self.arguments)


COMPILE_ON_SAVE = TaskDescriptor.of("compileOnSave", "compileOnSave", "--env", ENV, is_background=True)


def list_tasks() -> tuple[TaskDescriptor, ...]:
    """Return the catalog in display order.

    Names must stay unique: the host resolves tasks by name.
    """
    return (
        TaskDescriptor.of(
            "generator",
            "generate",
            "--env", ENV,
            "--func", GENERATOR_FUNC,
            "--file", FILE,
            "--object", SELECTED_TEXT,
            "--user", USER,
        ),
        TaskDescriptor.of("init", "init"),
        TaskDescriptor.of("create", "create", "--env", ENV),
        TaskDescriptor.of("compile", "compile", "--env", ENV, "--changed", "true"),
        TaskDescriptor.of(
            "compile--file",
            "compile",
            "--env", ENV,
            "--file", FILE,
            "--user", USER,
        ),
        TaskDescriptor.of("compile--all", "compile", "--env", ENV),
        TaskDescriptor.of(
            "compile--object",
            "compile",
            "--env", ENV,
            "--file", FILE,
            "--object", SELECTED_TEXT,
            "--line", LINE_NUMBER,
            "--user", USER,
        ),
        TaskDescriptor.of("import", "import", "--env", ENV),
        TaskDescriptor.of(
            "import--file",
            "import",
            "--env", ENV,
            "--file", FILE,
            "--ease", "false",
        ),
        TaskDescriptor.of(
            "import--object",
            "import",
            "--env", ENV,
            "--object", SELECTED_TEXT,
            "--user", USER,
        ),
        TaskDescriptor.of("package", "package", "--env", ENV),
        TaskDescriptor.of("package--delta", "package", "--env", ENV, "--delta"),
        TaskDescriptor.of("deploy", "run", "--env", PICK_ENV, "--user", USER),
        TaskDescriptor.of(
            "deploy--file",
            "run",
            "--env", ENV,
            "--file", FILE,
            "--user", USER,
        ),
        TaskDescriptor.of("test", "test", "--env", ENV),
    )


def find_task(name: str) -> TaskDescriptor | None:
    """Get a catalog task by name."""
    for descriptor in list_tasks():
        if descriptor.name == name:
            return descriptor
    return None
