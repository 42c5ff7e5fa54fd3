"""
Rsbuild/Rslib support.

There is no native Zephyr plugin for Rsbuild, so the codemod synthesizes a
small Rsbuild plugin in the config file that runs the rspack plugin over
Rsbuild's generated rspack config, and registers it in `plugins`.
"""

from zephyr_codemod.catalog import BundlerConfig, TransformType
from zephyr_codemod.logging_config import logger
from zephyr_codemod.syntax import SyntaxTree, insert_after_imports, insert_import
from zephyr_codemod.syntax.edits import append_element
from zephyr_codemod.syntax.nodes import declared_function_names, is_call_to, string_value

from .plugins import define_config_plugins_array
from .registry import register_transform

WRAPPER_NAME = "zephyrRSbuildPlugin"
WRAPPER_PLUGIN_NAME = "zephyr-rsbuild-plugin"
PLUGIN_TYPE = "RsbuildPlugin"
CORE_PACKAGES = ("@rsbuild/core", "@rslib/core")


def render_wrapper(tree: SyntaxTree, config: BundlerConfig) -> str:
    """
    Source of the wrapper plugin, formatted with the file's indentation,
    quotes and semicolon style.
    """
    i = tree.indent_unit
    q = tree.quote
    s = ";" if tree.uses_semicolons else ""
    annotation = f": {PLUGIN_TYPE}" if tree.is_typescript else ""
    lines = [
        f"const {WRAPPER_NAME} = (){annotation} => ({{",
        f"{i}name: {q}{WRAPPER_PLUGIN_NAME}{q},",
        f"{i}setup(api) {{",
        f"{i * 2}api.modifyRspackConfig(async (config) => {{",
        f"{i * 3}const zephyrConfig = await {config.factory_call}(config){s}",
        f"{i * 3}return zephyrConfig{s}",
        f"{i * 2}}}){s}",
        f"{i}}},",
        f"}}){s}",
    ]
    return "\n".join(lines)


def _core_package(tree: SyntaxTree) -> str:
    """Package the file imports defineConfig from, if it is Rsbuild or Rslib."""
    for statement in tree.root.named_children:
        if statement.type != "import_statement":
            continue
        source = string_value(statement.child_by_field_name("source"))
        if source in CORE_PACKAGES:
            return source
    return CORE_PACKAGES[0]


def _wrapper_call_present(tree: SyntaxTree, shape: str) -> bool:
    array = define_config_plugins_array(tree, shape)
    return any(is_call_to(element, WRAPPER_NAME) for element in array.named_children)


@register_transform(TransformType.RSBUILD_WRAPPER_PLUGIN)
def add_zephyr_rsbuild_plugin(tree: SyntaxTree, config: BundlerConfig) -> None:
    """
    (a) define `zephyrRSbuildPlugin` unless a function of that name exists;
    (b) add `zephyrRSbuildPlugin()` to defineConfig's plugins unless present.
    """
    shape = TransformType.RSBUILD_WRAPPER_PLUGIN.value

    # Resolve the call site before editing anything so a missing plugins
    # array fails without touching the tree
    call_present = _wrapper_call_present(tree, shape)

    if WRAPPER_NAME in declared_function_names(tree.root):
        logger.debug(f"{tree.file_path}: {WRAPPER_NAME} already defined")
    else:
        insert_import(tree, config.plugin, config.import_name)
        if tree.is_typescript:
            insert_import(tree, _core_package(tree), PLUGIN_TYPE)
        insert_after_imports(tree, render_wrapper(tree, config))
        logger.debug(f"{tree.file_path}: synthesized {WRAPPER_NAME}")

    if call_present:
        logger.debug(f"{tree.file_path}: {WRAPPER_NAME}() already registered")
        return

    array = define_config_plugins_array(tree, shape)
    append_element(tree, array, f"{WRAPPER_NAME}()")
