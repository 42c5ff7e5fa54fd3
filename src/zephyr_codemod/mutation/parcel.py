"""
Parcel support: `.parcelrc` is JSON, edited as a document rather than a
syntax tree.
"""

import json

from zephyr_codemod.catalog import BundlerConfig, TransformType
from zephyr_codemod.exceptions import UnsupportedShape
from zephyr_codemod.logging_config import logger

from .registry import register_transform

# Parcel's placeholder for the reporters inherited from `extends`
INHERITED_REPORTERS = "..."


@register_transform(TransformType.PARCEL_REPORTERS)
def add_to_parcel_reporters(document: dict, config: BundlerConfig) -> None:
    """
    Append the plugin to `reporters`.

    A config without `reporters` gets `["...", plugin]` so the inherited
    reporters keep running.
    """
    shape = TransformType.PARCEL_REPORTERS.value
    reporters = document.get("reporters")
    if reporters is None:
        document["reporters"] = [INHERITED_REPORTERS, config.plugin]
        logger.debug(f"Created reporters list with {config.plugin}")
        return
    if not isinstance(reporters, list):
        raise UnsupportedShape(shape, "'reporters' is not a list")
    if config.plugin not in reporters:
        reporters.append(config.plugin)


def dump_json_config(document: dict) -> str:
    """Serialize a JSON config the way Parcel's own templates format it."""
    return json.dumps(document, indent=2) + "\n"
