"""
Syntax access layer: tree-sitter backed parsing, serialization and
import insertion for JavaScript/TypeScript configuration files.
"""

from .imports import has_import, insert_after_imports, insert_import
from .tree import SyntaxTree, detect_dialect, parse, parse_file, serialize, validate_syntax

__all__ = [
    "SyntaxTree",
    "detect_dialect",
    "parse",
    "parse_file",
    "serialize",
    "validate_syntax",
    "has_import",
    "insert_import",
    "insert_after_imports",
]
