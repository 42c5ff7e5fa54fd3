"""
Idempotency guard: is the plugin already wired into a config?

Consulted before any transform; a positive answer skips the file.
"""

import json
from pathlib import Path
from typing import Union

from zephyr_codemod.catalog import BundlerConfig
from zephyr_codemod.exceptions import JsonParseError, ParseError
from zephyr_codemod.logging_config import logger
from zephyr_codemod.syntax import SyntaxTree, parse_file
from zephyr_codemod.syntax.nodes import is_call_to, walk


def has_factory_call(tree: SyntaxTree, import_name: str) -> bool:
    """
    True if any call expression anywhere in the tree calls `import_name`.

    Shape-independent: a call inside an unrelated nested scope still counts.
    """
    return any(is_call_to(node, import_name) for node in walk(tree.root))


def has_reporter(document: dict, plugin: str) -> bool:
    """True if a parsed .parcelrc already lists the plugin as a reporter."""
    reporters = document.get("reporters") if isinstance(document, dict) else None
    return isinstance(reporters, list) and plugin in reporters


def already_present(subject: Union[SyntaxTree, dict], config: BundlerConfig) -> bool:
    """
    Check a parsed tree or JSON document for an existing injection.
    """
    if isinstance(subject, SyntaxTree):
        return has_factory_call(subject, config.import_name)
    return has_reporter(subject, config.plugin)


def load_json_config(file_path: Union[str, Path]) -> dict:
    """
    Read a JSON bundler config.

    Raises:
        JsonParseError: If the content is not a JSON object.
        OSError: If the file cannot be read.
    """
    content = Path(file_path).read_text(encoding="utf-8")
    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise JsonParseError(str(file_path), str(e)) from e
    if not isinstance(document, dict):
        raise JsonParseError(str(file_path), "top-level value is not an object")
    return document


def check_file(file_path: Union[str, Path], config: BundlerConfig) -> bool:
    """
    Guard check straight from disk.

    Unparseable or unreadable files are reported as not yet transformed;
    the transform step reports the actual failure.
    """
    try:
        if config.is_json:
            return already_present(load_json_config(file_path), config)
        return already_present(parse_file(file_path), config)
    except (ParseError, JsonParseError, OSError, UnicodeDecodeError) as e:
        logger.debug(f"Guard could not parse {file_path}: {e}")
        return False
