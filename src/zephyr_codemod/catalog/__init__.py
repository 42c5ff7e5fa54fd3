"""
Pattern catalog: which files belong to which bundler, which plugin each one
gets, and which syntactic shapes are recognized in its config.
"""

from .bundlers import BUNDLER_CONFIGS, load_catalog
from .types import BundlerConfig, BundlerPattern, ConfigFile, TransformType

__all__ = [
    "BUNDLER_CONFIGS",
    "load_catalog",
    "BundlerConfig",
    "BundlerPattern",
    "ConfigFile",
    "TransformType",
]
