"""
Formatting-aware splice helpers.

Each helper performs exactly one SyntaxTree edit and lays the inserted text
out the way the surrounding list is laid out (single line or one element
per line, trailing comma or not).
"""

from tree_sitter import Node

from .nodes import named_elements
from .tree import SyntaxTree


def _same_line_comment_after(node: Node):
    sibling = node.next_sibling
    if sibling is not None and sibling.type == "comment" and sibling.start_point[0] == node.end_point[0]:
        return sibling
    return None


def append_element(tree: SyntaxTree, container: Node, text: str) -> None:
    """
    Append text as the last element of a bracketed list.

    Works for array literals, call arguments, named import lists and object
    patterns: any node whose first child is the opening bracket and whose
    named children are the elements.
    """
    elements = named_elements(container)
    if not elements:
        opening = container.children[0]
        tree.insert(opening.end_byte, text)
        return

    last = elements[-1]
    following = last.next_sibling
    while following is not None and following.type == "comment":
        following = following.next_sibling
    has_trailing_comma = following is not None and following.type == ","

    previous_end_row = container.start_point[0] if len(elements) == 1 else elements[-2].end_point[0]
    multiline = last.start_point[0] != previous_end_row

    if multiline:
        indent = tree.line_indent(last)
        if has_trailing_comma:
            anchor = _same_line_comment_after(following) or following
            tree.insert(anchor.end_byte, f"\n{indent}{text},")
            return
        comment = _same_line_comment_after(last)
        if comment is not None:
            # Keep the comment on its element: insert after it, comma goes before it
            tree.insert(comment.end_byte, f"\n{indent}{text}")
            tree.insert(last.end_byte, ",")
            return
        tree.insert(last.end_byte, f",\n{indent}{text}")
        return

    if has_trailing_comma:
        tree.insert(following.end_byte, f" {text},")
    else:
        tree.insert(last.end_byte, f", {text}")


def insert_before_last_element(tree: SyntaxTree, container: Node, text: str) -> None:
    """
    Insert text as a new element just before the last one.

    With a single-line list the separator is ", "; otherwise the new
    element gets its own line with the last element's indentation.
    """
    elements = named_elements(container)
    if not elements:
        append_element(tree, container, text)
        return

    last = elements[-1]
    previous_end_row = container.start_point[0] if len(elements) == 1 else elements[-2].end_point[0]
    if last.start_point[0] != previous_end_row:
        separator = f",\n{tree.line_indent(last)}"
    else:
        separator = ", "
    tree.insert(last.start_byte, f"{text}{separator}")


def wrap_node(tree: SyntaxTree, node: Node, prefix: str) -> None:
    """Rewrite `<node>` as `<prefix>(<node>)`."""
    tree.replace(node.start_byte, node.end_byte, f"{prefix}({tree.text(node)})")
