"""Late-bound task arguments.

Task arguments are a sequence of literal strings and named placeholders.
The editor host fills placeholders such as ``${file}`` or
``${command:oradew.getUser}`` just before it runs a task; this module keeps
that substitution a pure function so it can be exercised without spawning
anything.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Union

__all__ = [
    "PLACEHOLDER_PATTERN",
    "Literal",
    "Placeholder",
    "ArgToken",
    "parse_argument",
    "parse_arguments",
    "render_arguments",
    "find_placeholders",
    "resolve_placeholders",
]

# Pattern matches a whole argument of the form ${name}; use with fullmatch()
# Group 1: placeholder name, e.g. "file" or "command:oradew.getUser"
PLACEHOLDER_PATTERN = re.compile(r"\$\{([^{}\s]+)\}")


@dataclass(frozen=True)
class Literal:
    """An argument passed to the tool as-is."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Placeholder:
    """An argument whose value is supplied by the host at execution time."""

    name: str

    def __str__(self) -> str:
        return "${" + self.name + "}"


ArgToken = Union[Literal, Placeholder]


def parse_argument(text: str) -> ArgToken:
    """Classify a raw argument string.

    Only an argument that consists entirely of ``${name}`` is a placeholder;
    text merely containing one stays literal.

    Example:
        >>> parse_argument("${file}")
        Placeholder(name='file')
        >>> parse_argument("--file")
        Literal(value='--file')
    """
    match = PLACEHOLDER_PATTERN.fullmatch(text)
    if match:
        return Placeholder(match.group(1))
    return Literal(text)


def parse_arguments(texts: Iterable[str]) -> tuple[ArgToken, ...]:
    return tuple(parse_argument(text) for text in texts)


def render_arguments(tokens: Iterable[ArgToken]) -> list[str]:
    """Render tokens in the host's syntax, leaving placeholders unresolved."""
    return [str(token) for token in tokens]


def find_placeholders(tokens: Iterable[ArgToken]) -> list[str]:
    """Return placeholder names in order of first appearance."""
    names: list[str] = []
    for token in tokens:
        if isinstance(token, Placeholder) and token.name not in names:
            names.append(token.name)
    return names


def resolve_placeholders(tokens: Iterable[ArgToken], bindings: Mapping[str, str]) -> list[str]:
    """Substitute placeholder tokens with their bound values.

    Args:
        tokens: Literal and placeholder tokens
        bindings: Mapping from placeholder name to its concrete value

    Returns:
        Concrete argument list, in the same order as ``tokens``

    Raises:
        ValueError: If a placeholder has no binding
    """
    resolved = []
    for token in tokens:
        if isinstance(token, Placeholder):
            if token.name not in bindings:
                raise ValueError(
                    f"Placeholder '{token}' has no value. "
                    f"Placeholders must be bound before the task runs."
                )
            resolved.append(str(bindings[token.name]))
        else:
            resolved.append(token.value)
    return resolved
