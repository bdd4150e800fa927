"""Resolution of workspace, storage and tool paths.

Everything here is computed syntactically from three roots: the workspace
root, the extension (context) root and the storage root. Nothing checks that
the paths exist; a bad root only shows up later as a failed spawn.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, NamedTuple, Optional

__all__ = [
    "DB_CONFIG_FILE",
    "WS_CONFIG_FILE",
    "TOOL_ENTRY_SCRIPT",
    "TOOL_PROJECT_FILE",
    "ResolvedPaths",
    "InvocationEnvironment",
    "Resolution",
    "resolve_paths",
    "build_base_arguments",
    "build",
]

DB_CONFIG_FILE = "dbconfig.json"
WS_CONFIG_FILE = "oradewrc.json"
TOOL_ENTRY_SCRIPT = "node_modules/gulp/bin/gulp.js"
TOOL_PROJECT_FILE = "out/gulpfile.js"


def _resolve(root: str, relative: str) -> Path:
    # abspath normalizes without following symlinks
    return Path(os.path.abspath(os.path.join(root, relative)))


@dataclass(frozen=True)
class ResolvedPaths:
    """Paths derived from the workspace, context and storage roots.

    ``workspace_root`` and ``storage_root`` are kept as the strings they were
    given, since the tool receives them unchanged as ``--cwd`` and
    ``storagePath``. The remaining fields are absolute paths joined onto a
    root.
    """

    workspace_root: str
    tool_entry_path: Path
    tool_project_file: Path
    storage_root: str
    db_config_path: Path
    ws_config_path: Path


@dataclass(frozen=True)
class InvocationEnvironment:
    """Environment handed unchanged to every spawn of the tool."""

    storage_path: str
    db_config_path: str
    ws_config_path: str
    inherit_stdio: bool = True
    extra_variables: Mapping[str, str] = field(default_factory=dict)

    def variables(self) -> dict[str, str]:
        """Return the environment variables the tool reads its paths from.

        User supplied extra variables come first so they can never shadow the
        resolved config paths.
        """
        return {
            **{str(k): str(v) for k, v in self.extra_variables.items()},
            "storagePath": self.storage_path,
            "dbConfigPath": self.db_config_path,
            "wsConfigPath": self.ws_config_path,
        }


class Resolution(NamedTuple):
    paths: ResolvedPaths
    environment: InvocationEnvironment
    base_arguments: tuple[str, ...]


def resolve_paths(workspace_root: str, context_root: str, storage_root: str) -> ResolvedPaths:
    """Compute the config file and tool locations.

    The config files always sit directly in the workspace root; the tool entry
    script and its project file depend on the context root only.
    """
    return ResolvedPaths(
        workspace_root=workspace_root,
        tool_entry_path=_resolve(context_root, TOOL_ENTRY_SCRIPT),
        tool_project_file=_resolve(context_root, TOOL_PROJECT_FILE),
        storage_root=storage_root,
        db_config_path=_resolve(workspace_root, DB_CONFIG_FILE),
        ws_config_path=_resolve(workspace_root, WS_CONFIG_FILE),
    )


def build_base_arguments(paths: ResolvedPaths, is_silent: bool, is_color: bool) -> tuple[str, ...]:
    """Build the argument prefix shared by every invocation of the tool.

    Example:
        >>> build_base_arguments(resolve_paths("/ws", "/ext", "/store"), True, False)
        ('/ext/node_modules/gulp/bin/gulp.js', '--cwd', '/ws', '--gulpfile', '/ext/out/gulpfile.js', '--silent', 'true')
    """
    arguments = [
        str(paths.tool_entry_path),
        "--cwd",
        paths.workspace_root,
        "--gulpfile",
        str(paths.tool_project_file),
    ]
    # Flags are only ever passed as true; the tool misreads an explicit false
    if is_color:
        arguments += ["--color", "true"]
    if is_silent:
        arguments += ["--silent", "true"]
    return tuple(arguments)


def build(
    workspace_root: str,
    context_root: str,
    storage_root: str,
    is_silent: bool,
    is_color: bool,
    extra_variables: Optional[Mapping[str, str]] = None,
) -> Resolution:
    """Resolve paths, environment and base arguments in one go.

    Args:
        workspace_root: Root folder of the open workspace
        context_root: Install root of the extension that ships the tool
        storage_root: Extension storage folder passed to the tool
        is_silent: Pass ``--silent true`` to the tool
        is_color: Pass ``--color true`` to the tool
        extra_variables: Additional environment variables for the tool

    Returns:
        Resolution with the paths, the invocation environment and the base
        argument vector
    """
    paths = resolve_paths(workspace_root, context_root, storage_root)
    environment = InvocationEnvironment(
        storage_path=storage_root,
        db_config_path=str(paths.db_config_path),
        ws_config_path=str(paths.ws_config_path),
        extra_variables=dict(extra_variables or {}),
    )
    return Resolution(paths, environment, build_base_arguments(paths, is_silent, is_color))
