"""kubedeploy - Utility functions"""

import os
import shutil
from pathlib import Path
from typing import Optional, Dict, Mapping

from dotenv import dotenv_values

from kubedeploy.constants import TRUTHY_VALUES


def find_env_file(start: Optional[Path] = None) -> Optional[Path]:
    """Smart .env file detection"""
    search_paths = [
        (start or Path.cwd()) / ".env",
        Path.home() / ".kubedeploy" / ".env",
    ]

    for path in search_paths:
        if path.is_file():
            return path

    return None


def load_env_file(
    env_file: Optional[Path] = None, environ: Optional[Dict[str, str]] = None
) -> Dict[str, str]:
    """
    Load a .env file into the environment without overriding real variables.

    Args:
        env_file: Explicit file (auto-detected if not provided)
        environ: Target mapping (os.environ if not provided)

    Returns:
        Variables that were added to the environment
    """
    if environ is None:
        environ = os.environ

    env_file = env_file or find_env_file()
    if not env_file:
        return {}

    added = {}
    for key, value in dotenv_values(env_file).items():
        if value is None or key in environ:
            continue
        environ[key] = value
        added[key] = value

    return added


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a boolean environment value ("true", "1", "yes", ...)."""
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in TRUTHY_VALUES


def env_flag(name: str, default: bool = False, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Read a boolean flag from the environment."""
    environ = os.environ if environ is None else environ
    return parse_bool(environ.get(name), default)


def tool_exists(tool: str) -> bool:
    """Check if a binary is installed (absolute paths are checked directly)."""
    if os.path.sep in tool:
        return os.path.isfile(tool) and os.access(tool, os.X_OK)
    return shutil.which(tool) is not None
