from typing import List

from zephyr_codemod.exceptions import ConfigError

# Directories that never hold a project's own bundler config
DEFAULT_IGNORE_PATTERNS = [
    ".git/",
    "node_modules/",
    "bower_components/",
    ".pnpm-store/",
    ".yarn/",
    "dist/",
    "build/",
    ".next/",
    ".nx/",
    ".turbo/",
    ".cache/",
    "coverage/",
    ".venv/",
    "__pycache__/",
]


def validate_ignore_patterns(patterns: List[str]) -> None:
    """
    Validate extra ignore patterns supplied by the caller.

    Raises:
        ConfigError: If a pattern is empty or not a string.
    """
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern.strip():
            raise ConfigError(f"Invalid ignore pattern: {pattern!r}")
