"""
Static registry of supported build tools.

Patterns are listed most specific first: the detector returns the first one
whose matcher finds the raw file text, falling back to the first entry.
"""

import re
from types import MappingProxyType
from typing import Dict, Mapping

from .types import BundlerConfig, TransformType, pattern

IDENTIFIER = r"[A-Za-z_$][\w$]*"

COMPOSE_PLUGINS = pattern(
    "compose-plugins", r"composePlugins\s*\(", TransformType.COMPOSE_PLUGINS
)
ALREADY_WRAPPED = pattern(
    "already-wrapped", r"withZephyr\s*\(\s*\)\s*\(", TransformType.SKIP_ALREADY_WRAPPED
)
MODULE_EXPORTS = pattern(
    "module-exports", r"module\.exports\s*=", TransformType.WRAP_MODULE_EXPORTS
)
CONDITIONAL_EXPORT = pattern(
    "conditional-export",
    rf"^\s*export\s+default\s+{IDENTIFIER}(?:\.{IDENTIFIER})*\s*\?",
    TransformType.WRAP_EXPORTED_IDENTIFIER,
    re.MULTILINE,
)
EXPORTED_IDENTIFIER = pattern(
    "exported-identifier",
    rf"^\s*export\s+default\s+{IDENTIFIER}\s*;?\s*$",
    TransformType.WRAP_EXPORTED_IDENTIFIER,
    re.MULTILINE,
)
EXPORT_DEFAULT = pattern(
    "export-default",
    rf"export\s+default\s+(?:\{{|{IDENTIFIER}(?:\.{IDENTIFIER})*\s*\()",
    TransformType.WRAP_EXPORT_DEFAULT,
)
DEFINE_CONFIG_FUNCTION = pattern(
    "define-config-function",
    rf"defineConfig\s*\(\s*(?:async\s+)?(?:function\b|\([^)]*\)\s*(?::[^=]+)?=>|{IDENTIFIER}\s*=>)",
    TransformType.DEFINE_CONFIG_FUNCTION_PLUGINS,
)
DEFINE_CONFIG = pattern(
    "define-config", r"defineConfig\s*\(\s*\{", TransformType.DEFINE_CONFIG_PLUGINS
)
PLUGINS_ARRAY = pattern(
    "plugins-array", r"plugins\s*:\s*\[", TransformType.PLUGINS_ARRAY
)
ARRAY_CONFIG = pattern(
    "array-config",
    r"(?:export\s+default|module\.exports\s*=)\s*\[",
    TransformType.ARRAY_CONFIG_PLUGINS,
)
FUNCTION_CONFIG = pattern(
    "function-config",
    rf"(?:export\s+default|module\.exports\s*=)\s*{IDENTIFIER}(?:\.{IDENTIFIER})*\s*\(\s*{IDENTIFIER}(?:\.{IDENTIFIER})*\s*\(",
    TransformType.FUNCTION_CONFIG_ARGUMENTS,
)
RSBUILD_DEFINE_CONFIG = pattern(
    "define-config", r"defineConfig\s*\(", TransformType.RSBUILD_WRAPPER_PLUGIN
)
PARCEL_REPORTERS = pattern(
    "parcel-reporters", r'"reporters"\s*:', TransformType.PARCEL_REPORTERS
)

# webpack and rspack configs share every recognized shape
WRAPPED_CONFIG_PATTERNS = (
    COMPOSE_PLUGINS,
    ALREADY_WRAPPED,
    MODULE_EXPORTS,
    CONDITIONAL_EXPORT,
    EXPORTED_IDENTIFIER,
    EXPORT_DEFAULT,
)


def _config_files(stem: str, *extensions: str):
    return tuple(f"{stem}.{ext}" for ext in extensions)


_CONFIGS: Dict[str, BundlerConfig] = {
    "webpack": BundlerConfig(
        name="webpack",
        files=_config_files("webpack.config", "js", "ts", "mjs", "cjs"),
        plugin="zephyr-webpack-plugin",
        import_name="withZephyr",
        patterns=WRAPPED_CONFIG_PATTERNS,
    ),
    "rspack": BundlerConfig(
        name="rspack",
        files=_config_files("rspack.config", "js", "ts", "mjs", "cjs"),
        plugin="zephyr-rspack-plugin",
        import_name="withZephyr",
        patterns=WRAPPED_CONFIG_PATTERNS,
    ),
    # Re.Pack projects ship ESM rspack/webpack configs that export a function
    "repack": BundlerConfig(
        name="repack",
        files=("rspack.config.mjs", "webpack.config.mjs"),
        plugin="zephyr-repack-plugin",
        import_name="withZephyr",
        patterns=(CONDITIONAL_EXPORT, EXPORTED_IDENTIFIER, EXPORT_DEFAULT),
    ),
    "vite": BundlerConfig(
        name="vite",
        files=_config_files("vite.config", "js", "ts", "mjs", "mts"),
        plugin="vite-plugin-zephyr",
        import_name="withZephyr",
        patterns=(DEFINE_CONFIG_FUNCTION, DEFINE_CONFIG, PLUGINS_ARRAY),
    ),
    "rollup": BundlerConfig(
        name="rollup",
        files=_config_files("rollup.config", "js", "ts", "mjs"),
        plugin="rollup-plugin-zephyr",
        import_name="withZephyr",
        patterns=(ARRAY_CONFIG, FUNCTION_CONFIG, PLUGINS_ARRAY),
    ),
    "rolldown": BundlerConfig(
        name="rolldown",
        files=_config_files("rolldown.config", "js", "ts", "mjs"),
        plugin="zephyr-rolldown-plugin",
        import_name="withZephyr",
        patterns=(DEFINE_CONFIG, PLUGINS_ARRAY),
    ),
    "modernjs": BundlerConfig(
        name="modernjs",
        files=_config_files("modern.config", "js", "ts", "mjs"),
        plugin="zephyr-modernjs-plugin",
        import_name="withZephyr",
        patterns=(DEFINE_CONFIG, PLUGINS_ARRAY),
    ),
    "rspress": BundlerConfig(
        name="rspress",
        files=_config_files("rspress.config", "js", "ts", "mjs"),
        plugin="zephyr-rspress-plugin",
        import_name="withZephyr",
        patterns=(DEFINE_CONFIG, PLUGINS_ARRAY),
    ),
    "rsbuild": BundlerConfig(
        name="rsbuild",
        files=_config_files("rsbuild.config", "js", "ts", "mjs"),
        plugin="zephyr-rspack-plugin",
        import_name="withZephyr",
        patterns=(RSBUILD_DEFINE_CONFIG,),
    ),
    "rslib": BundlerConfig(
        name="rslib",
        files=_config_files("rslib.config", "js", "ts", "mjs"),
        plugin="zephyr-rspack-plugin",
        import_name="withZephyr",
        patterns=(RSBUILD_DEFINE_CONFIG,),
    ),
    "parcel": BundlerConfig(
        name="parcel",
        files=(".parcelrc", ".parcelrc.json"),
        plugin="parcel-reporter-zephyr",
        import_name=None,
        patterns=(PARCEL_REPORTERS,),
        format="json",
    ),
}


def load_catalog() -> Mapping[str, BundlerConfig]:
    """Return the read-only bundler catalog."""
    return MappingProxyType(_CONFIGS)


BUNDLER_CONFIGS = load_catalog()
