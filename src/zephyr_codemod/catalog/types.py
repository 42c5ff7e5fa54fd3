"""
Catalog types: bundler configurations and the patterns recognized in them.

All of these are frozen; the catalog is built once and shared read-only
across every file of a run.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern, Tuple


class TransformType(str, Enum):
    """Identifier selecting one Transform Engine operation."""
    COMPOSE_PLUGINS = "compose_plugins"
    PLUGINS_ARRAY = "plugins_array"
    DEFINE_CONFIG_PLUGINS = "define_config_plugins"
    DEFINE_CONFIG_FUNCTION_PLUGINS = "define_config_function_plugins"
    FUNCTION_CONFIG_ARGUMENTS = "function_config_arguments"
    ARRAY_CONFIG_PLUGINS = "array_config_plugins"
    WRAP_EXPORT_DEFAULT = "wrap_export_default"
    WRAP_MODULE_EXPORTS = "wrap_module_exports"
    WRAP_EXPORTED_IDENTIFIER = "wrap_exported_identifier"
    SKIP_ALREADY_WRAPPED = "skip_already_wrapped"
    PARCEL_REPORTERS = "parcel_reporters"
    RSBUILD_WRAPPER_PLUGIN = "rsbuild_wrapper_plugin"


@dataclass(frozen=True)
class BundlerPattern:
    """A raw-text matcher paired with the transform to apply when it matches."""
    type: str
    matcher: Pattern[str]
    transform: TransformType

    def matches(self, content: str) -> bool:
        return self.matcher.search(content) is not None


@dataclass(frozen=True)
class BundlerConfig:
    """
    Everything the codemod knows about one build tool.

    Attributes:
        name: Bundler identifier (catalog key)
        files: File-name globs to search for
        plugin: npm package providing the injected factory
        import_name: Symbol bound by the import/require statement
        patterns: Recognized shapes, most specific first
        format: "source" for JS/TS files, "json" for JSON configs
    """
    name: str
    files: Tuple[str, ...]
    plugin: str
    import_name: Optional[str]
    patterns: Tuple[BundlerPattern, ...] = field(default_factory=tuple)
    format: str = "source"

    @property
    def is_json(self) -> bool:
        return self.format == "json"

    @property
    def factory_call(self) -> str:
        """Source text of the zero-argument factory invocation."""
        return f"{self.import_name}()"


@dataclass(frozen=True)
class ConfigFile:
    """A discovered file paired with the bundler whose globs it matched."""
    file_path: str
    bundler_name: str
    config: BundlerConfig


def pattern(type_: str, regex: str, transform: TransformType, flags: int = 0) -> BundlerPattern:
    """Shorthand used by the catalog definitions."""
    return BundlerPattern(type=type_, matcher=re.compile(regex, flags), transform=transform)
