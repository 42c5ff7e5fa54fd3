"""
Package-manager collaborator: which plugins a project already has, and
installing the ones it lacks.

Never blocks a transformation; every failure here is logged and reported
as "not installed".
"""

import json
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from zephyr_codemod.logging_config import logger

# Checked in order; the first lock file found decides the manager
LOCK_FILES = [
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("package-lock.json", "npm"),
]

DEFAULT_MANAGER = "npm"

INSTALL_COMMANDS: Dict[str, List[str]] = {
    "npm": ["npm", "install", "--save-dev"],
    "yarn": ["yarn", "add", "-D"],
    "pnpm": ["pnpm", "add", "-D"],
    "bun": ["bun", "add", "-d"],
}

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")


def detect_package_manager(directory: Union[str, Path]) -> str:
    """
    Detect the project's package manager from its lock file, searching
    upward from directory (monorepo roots hold the lock file).
    """
    current = Path(directory).resolve()
    for candidate in [current, *current.parents]:
        for lock_file, manager in LOCK_FILES:
            if (candidate / lock_file).exists():
                logger.debug(f"Found {lock_file} in {candidate}, using {manager}")
                return manager
    return DEFAULT_MANAGER


def _read_package_json(directory: Path) -> Optional[dict]:
    package_json = directory / "package.json"
    if not package_json.is_file():
        return None
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read {package_json}: {e}")
        return None
    return data if isinstance(data, dict) else None


def is_package_installed(package: str, directory: Union[str, Path]) -> bool:
    """
    True if package is declared in package.json or present in node_modules.
    """
    directory = Path(directory)
    manifest = _read_package_json(directory)
    if manifest is not None:
        for section in DEPENDENCY_SECTIONS:
            deps = manifest.get(section)
            if isinstance(deps, dict) and package in deps:
                return True
    return (directory / "node_modules" / package).is_dir()


def install_command(package: str, manager: str = DEFAULT_MANAGER) -> List[str]:
    """Command line that adds package as a dev dependency."""
    base = INSTALL_COMMANDS.get(manager, INSTALL_COMMANDS[DEFAULT_MANAGER])
    return [*base, package]


def install_package(
    directory: Union[str, Path],
    package: str,
    manager: Optional[str] = None,
) -> bool:
    """
    Install package as a dev dependency with the project's manager.

    Returns:
        True on success, False if the manager is missing or the command failed
    """
    manager = manager or detect_package_manager(directory)
    command = install_command(package, manager)

    if shutil.which(command[0]) is None:
        logger.warning(f"{command[0]} not found on PATH; cannot install {package}")
        return False

    logger.info(f"Installing {package} with {manager}")
    try:
        result = subprocess.run(
            command,
            cwd=str(directory),
            capture_output=True,
            text=True,
            timeout=300,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.error(f"Failed to install {package}: {e}")
        return False

    if result.returncode != 0:
        logger.error(f"Failed to install {package}: {result.stderr.strip()}")
        return False
    return True
