"""
Transform registry: TransformType -> handler.

Handlers take the parsed subject (a SyntaxTree, or the JSON document for
JSON-configured bundlers) and the bundler config, mutate the subject in
place and raise UnsupportedShape when the node they edit is missing.
Adding a dialect means registering a new handler; existing ones stay as
they are.
"""

from typing import Any, Callable, Dict, List

from zephyr_codemod.catalog import BundlerConfig, TransformType
from zephyr_codemod.exceptions import ConfigError
from zephyr_codemod.logging_config import logger

TransformHandler = Callable[[Any, BundlerConfig], None]

_TRANSFORM_REGISTRY: Dict[TransformType, TransformHandler] = {}


def register_transform(transform_type: TransformType):
    """Decorator to register a handler for a transform type."""
    def decorator(func: TransformHandler) -> TransformHandler:
        _TRANSFORM_REGISTRY[transform_type] = func
        return func
    return decorator


def get_transform(transform_type: TransformType) -> TransformHandler:
    """Retrieve a registered handler by type."""
    if transform_type not in _TRANSFORM_REGISTRY:
        raise ConfigError(f"Unknown transformer {transform_type}")
    return _TRANSFORM_REGISTRY[transform_type]


def list_transforms() -> List[TransformType]:
    return list(_TRANSFORM_REGISTRY.keys())


def apply_transform(subject: Any, transform_type: TransformType, config: BundlerConfig) -> None:
    """Look up and run the handler for transform_type."""
    handler = get_transform(transform_type)
    logger.debug(f"Applying {transform_type.value} for {config.name}")
    handler(subject, config)
