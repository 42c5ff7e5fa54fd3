"""
Mutation package: detect a config's shape and rewrite it to call the
Zephyr plugin.

Importing the package registers every transform handler.
"""

from .facade import CodemodFacade
from .detector import detect_pattern
from .editor import CodeEditor
from .guard import already_present, check_file, has_factory_call, has_reporter, load_json_config
from .registry import apply_transform, get_transform, list_transforms, register_transform

# Transform modules register their handlers on import
from . import plugins, wrap, rsbuild, parcel  # noqa: F401

__all__ = [
    # Main facade
    "CodemodFacade",

    # Components
    "detect_pattern",
    "CodeEditor",

    # Guard
    "already_present",
    "check_file",
    "has_factory_call",
    "has_reporter",
    "load_json_config",

    # Registry
    "apply_transform",
    "get_transform",
    "list_transforms",
    "register_transform",
]
