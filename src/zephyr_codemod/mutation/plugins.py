"""
Transforms that add the factory call to an existing list: a plugins array
or the argument list of a composition call.

The factory call goes last (after the user's plugins) except in compose
chains, where the final plain function stays last.
"""

from typing import Optional

from tree_sitter import Node

from zephyr_codemod.catalog import BundlerConfig, TransformType
from zephyr_codemod.exceptions import UnsupportedShape
from zephyr_codemod.logging_config import logger
from zephyr_codemod.syntax import SyntaxTree
from zephyr_codemod.syntax.edits import append_element, insert_before_last_element
from zephyr_codemod.syntax.nodes import (
    FUNCTION_TYPES,
    call_arguments,
    exported_value,
    find_calls,
    is_call_to,
    plugins_array,
    returned_values,
    unwrap,
    walk,
)

from .registry import register_transform


def find_define_config(tree: SyntaxTree) -> Optional[Node]:
    """The exported `defineConfig(...)` call, else the first one in the file."""
    value = unwrap(exported_value(tree.root))
    if value is not None and is_call_to(value, "defineConfig"):
        return value
    calls = find_calls(tree.root, "defineConfig")
    return calls[0] if calls else None


def define_config_plugins_array(tree: SyntaxTree, shape: str) -> Node:
    """
    Resolve the plugins array of a `defineConfig` call whose argument is an
    object literal or a function returning one.
    """
    call = find_define_config(tree)
    if call is None:
        raise UnsupportedShape(shape, f"no defineConfig() call in {tree.file_path}")

    arguments = call_arguments(call)
    if not arguments:
        raise UnsupportedShape(shape, "defineConfig() has no arguments")

    argument = unwrap(arguments[0])
    candidates = returned_values(argument) if argument.type in FUNCTION_TYPES else [argument]
    for candidate in candidates:
        array = plugins_array(candidate)
        if array is not None:
            return array

    raise UnsupportedShape(shape, "defineConfig() config has no 'plugins' array")


def _first_plugins_array(node: Node) -> Optional[Node]:
    for candidate in walk(node):
        if candidate.type == "object":
            array = plugins_array(candidate)
            if array is not None:
                return array
    return None


@register_transform(TransformType.COMPOSE_PLUGINS)
def add_to_compose_plugins(tree: SyntaxTree, config: BundlerConfig) -> None:
    """
    composePlugins(withNx(), withReact(), (config) => config)
    -> composePlugins(withNx(), withReact(), withZephyr(), (config) => config)
    """
    shape = TransformType.COMPOSE_PLUGINS.value
    calls = find_calls(tree.root, "composePlugins")
    if not calls:
        raise UnsupportedShape(shape, f"no composePlugins() call in {tree.file_path}")

    call = calls[0]
    arguments = call_arguments(call)
    container = call.child_by_field_name("arguments")
    if arguments and unwrap(arguments[-1]).type in FUNCTION_TYPES:
        insert_before_last_element(tree, container, config.factory_call)
    else:
        # No trailing config function to keep last
        append_element(tree, container, config.factory_call)
    logger.debug(f"Added {config.factory_call} to composePlugins() in {tree.file_path}")


@register_transform(TransformType.PLUGINS_ARRAY)
def add_to_plugins_array(tree: SyntaxTree, config: BundlerConfig) -> None:
    """
    Append to the first `plugins: [...]` array, preferring the exported
    config over other objects in the file.
    """
    shape = TransformType.PLUGINS_ARRAY.value
    array = None
    exported = exported_value(tree.root)
    if exported is not None:
        array = _first_plugins_array(exported)
    if array is None:
        array = _first_plugins_array(tree.root)
    if array is None:
        raise UnsupportedShape(shape, f"no 'plugins' array in {tree.file_path}")

    append_element(tree, array, config.factory_call)
    logger.debug(f"Appended {config.factory_call} to plugins array in {tree.file_path}")


@register_transform(TransformType.DEFINE_CONFIG_PLUGINS)
def add_to_define_config_plugins(tree: SyntaxTree, config: BundlerConfig) -> None:
    """defineConfig({ plugins: [react()] }) -> defineConfig({ plugins: [react(), withZephyr()] })"""
    array = define_config_plugins_array(tree, TransformType.DEFINE_CONFIG_PLUGINS.value)
    append_element(tree, array, config.factory_call)


@register_transform(TransformType.DEFINE_CONFIG_FUNCTION_PLUGINS)
def add_to_define_config_function_plugins(tree: SyntaxTree, config: BundlerConfig) -> None:
    """
    defineConfig(() => ({ plugins: [...] })) and block-bodied variants that
    `return { plugins: [...] }`.
    """
    array = define_config_plugins_array(tree, TransformType.DEFINE_CONFIG_FUNCTION_PLUGINS.value)
    append_element(tree, array, config.factory_call)


@register_transform(TransformType.FUNCTION_CONFIG_ARGUMENTS)
def add_to_function_config(tree: SyntaxTree, config: BundlerConfig) -> None:
    """
    export default compose(resolve(), babel()) -> compose(resolve(), babel(), withZephyr())
    """
    shape = TransformType.FUNCTION_CONFIG_ARGUMENTS.value
    value = unwrap(exported_value(tree.root))
    if value is None or value.type != "call_expression":
        raise UnsupportedShape(shape, f"exported config of {tree.file_path} is not a call")

    append_element(tree, value.child_by_field_name("arguments"), config.factory_call)


@register_transform(TransformType.ARRAY_CONFIG_PLUGINS)
def add_to_array_config(tree: SyntaxTree, config: BundlerConfig) -> None:
    """export default [{ plugins: [resolve()] }] -> [{ plugins: [resolve(), withZephyr()] }]"""
    shape = TransformType.ARRAY_CONFIG_PLUGINS.value
    value = unwrap(exported_value(tree.root))
    if value is None or value.type != "array":
        raise UnsupportedShape(shape, f"exported config of {tree.file_path} is not an array")

    for element in value.named_children:
        array = plugins_array(element)
        if array is not None:
            append_element(tree, array, config.factory_call)
            return

    raise UnsupportedShape(shape, "no config object with a 'plugins' array in the exported array")
