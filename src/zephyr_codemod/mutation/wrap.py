"""
Transforms that wrap the whole exported config: `withZephyr()(<config>)`.
"""

from zephyr_codemod.catalog import BundlerConfig, TransformType
from zephyr_codemod.exceptions import UnsupportedShape
from zephyr_codemod.logging_config import logger
from zephyr_codemod.syntax import SyntaxTree
from zephyr_codemod.syntax.edits import wrap_node
from zephyr_codemod.syntax.nodes import (
    default_export_value,
    is_call_to,
    module_exports_value,
    unwrap,
    walk,
)

from .registry import register_transform

# Exported values that can be passed to the factory as they are
WRAPPABLE_TYPES = {"object", "call_expression", "identifier", "member_expression"}


@register_transform(TransformType.WRAP_EXPORT_DEFAULT)
def wrap_export_default(tree: SyntaxTree, config: BundlerConfig) -> None:
    """export default { ... } -> export default withZephyr()({ ... })"""
    shape = TransformType.WRAP_EXPORT_DEFAULT.value
    value = default_export_value(tree.root)
    if value is None:
        raise UnsupportedShape(shape, f"no `export default <expression>` in {tree.file_path}")
    if unwrap(value).type not in WRAPPABLE_TYPES:
        raise UnsupportedShape(shape, f"cannot wrap exported {unwrap(value).type}")

    wrap_node(tree, value, config.factory_call)
    logger.debug(f"Wrapped default export of {tree.file_path}")


@register_transform(TransformType.WRAP_MODULE_EXPORTS)
def wrap_module_exports(tree: SyntaxTree, config: BundlerConfig) -> None:
    """module.exports = { ... } -> module.exports = withZephyr()({ ... })"""
    shape = TransformType.WRAP_MODULE_EXPORTS.value
    value = module_exports_value(tree.root)
    if value is None:
        raise UnsupportedShape(shape, f"no `module.exports = <expression>` in {tree.file_path}")
    if unwrap(value).type not in WRAPPABLE_TYPES:
        raise UnsupportedShape(shape, f"cannot wrap exported {unwrap(value).type}")

    wrap_node(tree, value, config.factory_call)
    logger.debug(f"Wrapped module.exports of {tree.file_path}")


@register_transform(TransformType.WRAP_EXPORTED_IDENTIFIER)
def wrap_exported_identifier(tree: SyntaxTree, config: BundlerConfig) -> None:
    """
    export default config -> export default withZephyr()(config)

    A conditional export that already calls the factory
    (`export default USE_ZEPHYR ? withZephyr()(config) : config`) is left
    untouched.
    """
    shape = TransformType.WRAP_EXPORTED_IDENTIFIER.value
    value = default_export_value(tree.root)
    if value is None:
        raise UnsupportedShape(shape, f"no `export default <identifier>` in {tree.file_path}")

    target = unwrap(value)
    if target.type == "ternary_expression":
        if any(is_call_to(node, config.import_name) for node in walk(target)):
            logger.info(f"{tree.file_path}: conditional export already calls {config.import_name}")
            return
        raise UnsupportedShape(shape, "conditional export without the plugin call")
    if target.type not in ("identifier", "member_expression"):
        raise UnsupportedShape(shape, f"exported {target.type} is not an identifier")

    wrap_node(tree, value, config.factory_call)
    logger.debug(f"Wrapped exported identifier in {tree.file_path}")


@register_transform(TransformType.SKIP_ALREADY_WRAPPED)
def skip_already_wrapped(tree: SyntaxTree, config: BundlerConfig) -> None:
    """Config is already wrapped by hand; nothing to edit."""
    logger.debug(f"{tree.file_path}: already wrapped, leaving as is")
