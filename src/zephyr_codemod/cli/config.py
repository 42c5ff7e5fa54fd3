"""
CLI Configuration

Process-wide output settings for the zephyr-codemod CLI.
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # JSON mode: stdout carries only the JSON summary
    _json_mode: Optional[bool] = None
    _verbose: bool = False

    @classmethod
    def set_json_mode(cls, enabled: bool) -> None:
        cls._json_mode = enabled

    @classmethod
    def is_json_mode(cls) -> bool:
        """
        Check if JSON output is active.

        Set by --json; otherwise ZEPHYR_CODEMOD_JSON=1 enables it.
        """
        if cls._json_mode is not None:
            return cls._json_mode
        return os.getenv("ZEPHYR_CODEMOD_JSON", "").lower() in ("1", "true", "yes")

    @classmethod
    def set_verbose(cls, enabled: bool) -> None:
        cls._verbose = enabled

    @classmethod
    def is_verbose(cls) -> bool:
        return cls._verbose

    @classmethod
    def reset(cls) -> None:
        """Back to defaults (each CLI invocation starts from here)."""
        cls._json_mode = None
        cls._verbose = False
