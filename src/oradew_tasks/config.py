"""
Settings for oradew-tasks.

Settings are read from up to three YAML files, each overriding the keys of
the one before: machine config, user config, project config.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import platformdirs
import yaml

__all__ = [
    "APP_NAME",
    "PROJECT_CONFIG_NAME",
    "Settings",
    "ConfigError",
    "get_user_config_path",
    "get_machine_config_path",
    "find_project_config",
    "parse_config_file",
    "load_settings",
]

APP_NAME = "oradew-tasks"
PROJECT_CONFIG_NAME = ".oradew-tasks.yml"


class ConfigError(Exception):
    """
    Raised when a configuration file is invalid.
    """

    pass


@dataclass(frozen=True)
class Settings:
    """
    User-facing options of the task integration.

    Attributes:
        chatty: Show the tool's full output; when false the tool runs with --silent
        cli_executable: Program that interprets the tool entry script
        extension_root: Install root of the extension shipping the tool; a relative
            value is taken relative to the config file that sets it
        env_variables: Extra environment variables for every tool invocation
    """

    chatty: bool = False
    cli_executable: str = "node"
    extension_root: str = ""
    env_variables: dict[str, str] = field(default_factory=dict)


_FIELD_TYPES = {
    "chatty": bool,
    "cli_executable": str,
    "extension_root": str,
    "env_variables": dict,
}


def get_machine_config_path() -> Path:
    """
    Get the path to the machine-level (system-wide) configuration file.

    Returns:
        Path to the machine config file (may not exist)
    """
    config_dir = Path(platformdirs.site_config_dir(APP_NAME))
    return config_dir / "config.yml"


def get_user_config_path() -> Path:
    """
    Get the path to the user-level configuration file.

    Returns:
        Path to the user config file (may not exist)
    """
    config_dir: Path = Path(platformdirs.user_config_dir(APP_NAME))
    return config_dir / "config.yml"


def find_project_config(start_dir: Path) -> Optional[Path]:
    """
    Walk up the directory tree from start_dir to find .oradew-tasks.yml.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to .oradew-tasks.yml if found, None otherwise
    """
    try:
        current = start_dir.resolve()
    except (OSError, RuntimeError):
        # resolve() can raise OSError on invalid paths or RuntimeError on symlink loops
        return None

    while True:
        try:
            config_path = current / PROJECT_CONFIG_NAME
            if config_path.is_file():
                return config_path
        except OSError:
            # Unreadable directory, keep walking up
            pass

        parent = current.parent
        if parent == current:
            return None
        current = parent


def parse_config_file(path: Path) -> dict[str, Any]:
    """
    Parse a configuration file and return the settings it defines.

    Unknown keys are ignored. Missing or empty files define nothing.
    A relative `extension_root` is resolved against the directory holding the
    file.

    Args:
        path: Path to the configuration file

    Returns:
        Mapping of setting name to value, only for keys present in the file

    Raises:
        ConfigError: If the file cannot be read, is malformed YAML, or a
                     setting has the wrong type

    Example config file:
        ```yaml
        chatty: true
        cli_executable: /usr/local/bin/node
        env_variables:
          NODE_OPTIONS: --max-old-space-size=4096
        ```
    """
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Error reading config file '{path}': {e}") from e

    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML in config file '{path}': {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(
            f"Error in config file '{path}': top level must be a dictionary"
        )

    values = {}
    for name, expected in _FIELD_TYPES.items():
        if name not in data:
            continue
        value = data[name]
        if not isinstance(value, expected):
            raise ConfigError(
                f"Error in config file '{path}': Field '{name}' must be a "
                f"{'dictionary' if expected is dict else expected.__name__}"
            )
        values[name] = value

    if "env_variables" in values:
        values["env_variables"] = {
            str(k): "" if v is None else str(v)
            for k, v in values["env_variables"].items()
        }

    root = values.get("extension_root")
    if root and not os.path.isabs(root):
        values["extension_root"] = os.path.normpath(os.path.join(path.absolute().parent, root))

    return values


def load_settings(workspace_root: Optional[Path] = None) -> Settings:
    """
    Merge machine, user and project configuration into Settings.

    Args:
        workspace_root: Directory to start the project config search from
                        (defaults to the current directory)

    Raises:
        ConfigError: If any of the files is invalid
    """
    sources = [get_machine_config_path(), get_user_config_path()]
    project_config = find_project_config(workspace_root or Path.cwd())
    if project_config is not None:
        sources.append(project_config)

    merged: dict[str, Any] = {}
    for source in sources:
        merged.update(parse_config_file(source))

    return Settings(**merged)
