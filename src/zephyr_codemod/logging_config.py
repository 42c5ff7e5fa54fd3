import os
import sys
from pathlib import Path

from loguru import logger

LOG_DIR = Path(".zephyr-codemod") / "logs"

# Flag to track if logging has been configured
_logging_configured = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def setup_logging(level=None, suppress_console=None, enable_file_logging=None, force=False):
    """
    Configures the global logger.

    Console logging goes to stderr. File logging is opt-in via
    ZEPHYR_CODEMOD_FILE_LOGGING=1 or enable_file_logging=True.

    Args:
        level: Logging level. If None, ZEPHYR_CODEMOD_LOG_LEVEL or INFO.
        suppress_console: If True, suppress console logging. If None, check ZEPHYR_CODEMOD_QUIET.
        enable_file_logging: If True, enable file logging. If None, check ZEPHYR_CODEMOD_FILE_LOGGING.
        force: Reconfigure even if logging was already set up (used by the CLI --verbose flag).
    """
    global _logging_configured

    # Only configure once to avoid duplicate handlers
    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if level is None:
        level = os.getenv("ZEPHYR_CODEMOD_LOG_LEVEL", "INFO").upper()

    if suppress_console is None:
        suppress_console = _env_flag("ZEPHYR_CODEMOD_QUIET")

    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    if enable_file_logging is None:
        enable_file_logging = _env_flag("ZEPHYR_CODEMOD_FILE_LOGGING")

    if enable_file_logging:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            LOG_DIR / "codemod.log",
            level="DEBUG",
            rotation="5 MB",
            retention="7 days",
            compression="gz",
            catch=True,
            serialize=False
        )


# Configure the logger on import (will check env vars for quiet mode)
setup_logging()
