"""
Zephyr Codemod - inject the Zephyr plugin into bundler configurations.

Finds build-tool configuration files, recognizes how each one declares its
plugins or exported config, and rewrites it in place to call the matching
Zephyr plugin factory.
"""

__version__ = "1.0.0"

from zephyr_codemod.catalog import BUNDLER_CONFIGS, load_catalog
from zephyr_codemod.mutation import CodemodFacade
from zephyr_codemod.schemas import CodemodOptions, CodemodSummary, FileResult, TransformOutcome
from zephyr_codemod.scanner import find_config_files

__all__ = [
    "__version__",
    "BUNDLER_CONFIGS",
    "load_catalog",
    "CodemodFacade",
    "CodemodOptions",
    "CodemodSummary",
    "FileResult",
    "TransformOutcome",
    "find_config_files",
]
