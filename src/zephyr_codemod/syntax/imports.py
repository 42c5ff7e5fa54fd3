"""
Import/require insertion for the injected plugin symbol.
"""

from typing import Optional

from tree_sitter import Node

from zephyr_codemod.logging_config import logger

from .edits import append_element
from .nodes import callee_name, call_arguments, named_elements, node_text, string_value
from .tree import SyntaxTree


def _import_source(statement: Node) -> Optional[str]:
    return string_value(statement.child_by_field_name("source"))


def _is_type_only(statement: Node) -> bool:
    # `import type { X } from '...'`
    return any(child.type == "type" for child in statement.children)


def _named_imports(statement: Node) -> Optional[Node]:
    for child in statement.named_children:
        if child.type == "import_clause":
            for part in child.named_children:
                if part.type == "named_imports":
                    return part
    return None


def _local_bindings(statement: Node):
    """Default and namespace bindings: `import a from`, `import * as a from`."""
    for child in statement.named_children:
        if child.type != "import_clause":
            continue
        for part in child.named_children:
            if part.type == "identifier":
                yield node_text(part)
            elif part.type == "namespace_import":
                for name in part.named_children:
                    if name.type == "identifier":
                        yield node_text(name)


def _imported_names(named_imports: Node):
    for specifier in named_imports.named_children:
        if specifier.type != "import_specifier":
            continue
        alias = specifier.child_by_field_name("alias")
        name = specifier.child_by_field_name("name")
        target = alias or name
        if target is not None:
            yield node_text(target)


def _require_declarator(statement: Node) -> Optional[Node]:
    """The `{ ... } = require('pkg')` declarator of a top-level declaration."""
    if statement.type not in ("lexical_declaration", "variable_declaration"):
        return None
    for declarator in statement.named_children:
        if declarator.type != "variable_declarator":
            continue
        value = declarator.child_by_field_name("value")
        if value is not None and callee_name(value) == "require":
            return declarator
    return None


def _required_package(declarator: Node) -> Optional[str]:
    arguments = call_arguments(declarator.child_by_field_name("value"))
    return string_value(arguments[0]) if arguments else None


def _destructured_names(pattern: Node):
    for child in pattern.named_children:
        if child.type == "shorthand_property_identifier_pattern":
            yield node_text(child)
        elif child.type == "pair_pattern":
            value = child.child_by_field_name("value")
            if value is not None:
                yield node_text(value)


def has_import(tree: SyntaxTree, package: str, symbol: str) -> bool:
    """
    True if `symbol` is already bound from `package` by an import statement
    (named, default or namespace) or a require.
    """
    for statement in tree.root.named_children:
        if statement.type == "import_statement" and _import_source(statement) == package:
            named = _named_imports(statement)
            if named is not None and symbol in _imported_names(named):
                return True
            if symbol in _local_bindings(statement):
                return True
        declarator = _require_declarator(statement)
        if declarator is not None and _required_package(declarator) == package:
            name = declarator.child_by_field_name("name")
            if name.type == "object_pattern" and symbol in _destructured_names(name):
                return True
            if name.type == "identifier" and node_text(name) == symbol:
                return True
    return False


def _prologue_end(tree: SyntaxTree) -> int:
    """Offset just past a hashbang line and any directive prologue."""
    offset = 0
    for child in tree.root.named_children:
        if child.type == "hash_bang_line":
            offset = child.end_byte
            continue
        if child.type == "expression_statement" and named_elements(child) and named_elements(child)[0].type == "string":
            offset = child.end_byte
            continue
        break
    return offset


def _insert_statement(tree: SyntaxTree, anchor: Optional[Node], statement: str) -> None:
    if anchor is not None:
        tree.insert(tree.line_end(anchor.end_byte), f"\n{statement}")
        return

    offset = _prologue_end(tree)
    if offset == 0:
        tree.insert(0, f"{statement}\n")
    else:
        tree.insert(tree.line_end(offset), f"\n{statement}")


def insert_import(tree: SyntaxTree, package: str, symbol: str) -> bool:
    """
    Bind `symbol` from `package` at the top of the file.

    Uses `import { symbol } from 'package'` when the file is an ES module
    (merging into an existing named import from the same package if there
    is one), otherwise `const { symbol } = require('package')`.

    Returns:
        False if the binding already existed (nothing was changed)
    """
    if has_import(tree, package, symbol):
        logger.debug(f"{tree.file_path}: '{symbol}' already imported from '{package}'")
        return False

    quote = tree.quote
    semicolon = ";" if tree.uses_semicolons else ""

    if tree.uses_module_syntax:
        last_import = None
        for statement in tree.root.named_children:
            if statement.type != "import_statement":
                continue
            last_import = statement
            named = _named_imports(statement)
            if _import_source(statement) == package and named is not None and not _is_type_only(statement):
                append_element(tree, named, symbol)
                logger.debug(f"{tree.file_path}: added '{symbol}' to existing import from '{package}'")
                return True
        _insert_statement(
            tree,
            last_import,
            f"import {{ {symbol} }} from {quote}{package}{quote}{semicolon}",
        )
        logger.debug(f"{tree.file_path}: added import of '{symbol}' from '{package}'")
        return True

    last_require = None
    for statement in tree.root.named_children:
        declarator = _require_declarator(statement)
        if declarator is None:
            continue
        last_require = statement
        name = declarator.child_by_field_name("name")
        if _required_package(declarator) == package and name.type == "object_pattern":
            append_element(tree, name, symbol)
            logger.debug(f"{tree.file_path}: added '{symbol}' to existing require of '{package}'")
            return True
    _insert_statement(
        tree,
        last_require,
        f"const {{ {symbol} }} = require({quote}{package}{quote}){semicolon}",
    )
    logger.debug(f"{tree.file_path}: added require of '{symbol}' from '{package}'")
    return True


def insert_after_imports(tree: SyntaxTree, statement: str) -> None:
    """
    Add a top-level statement below the file's imports/requires, separated
    by a blank line.
    """
    anchor = None
    for child in tree.root.named_children:
        if child.type == "import_statement" or _require_declarator(child) is not None:
            anchor = child
    _insert_statement(tree, anchor, f"\n{statement}" if anchor is not None else f"{statement}\n")
