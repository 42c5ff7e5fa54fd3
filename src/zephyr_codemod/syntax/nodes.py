"""
Node lookup helpers shared by the import layer, the guard and the transforms.
"""

from typing import Iterator, List, Optional

from tree_sitter import Node

FUNCTION_TYPES = {
    "arrow_function",
    "function",
    "function_expression",
    "function_declaration",
    "generator_function",
    "generator_function_declaration",
    "method_definition",
}

# Expression wrappers that do not change which value is meant
TRANSPARENT_TYPES = {
    "parenthesized_expression",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
    "type_assertion",
}


def named_elements(node: Node) -> List[Node]:
    """Named children without comments (array elements, call arguments...)."""
    return [child for child in node.named_children if child.type != "comment"]


def unwrap(node: Optional[Node]) -> Optional[Node]:
    """Look through parentheses and TypeScript `as`/`satisfies`/`!` wrappers."""
    while node is not None and node.type in TRANSPARENT_TYPES:
        if node.type == "type_assertion":
            # <Type>expr: the expression is the last named child
            node = named_elements(node)[-1]
        else:
            node = named_elements(node)[0]
    return node


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal of node and all of its descendants."""
    yield node
    for child in node.children:
        yield from walk(child)


def node_text(node: Node) -> str:
    return node.text.decode("utf-8")


def string_value(node: Node) -> Optional[str]:
    """Value of a plain string literal, without its quotes."""
    if node is None or node.type != "string":
        return None
    return node_text(node)[1:-1]


def callee_name(call: Node) -> Optional[str]:
    """Identifier being called by a call_expression, or None."""
    if call.type != "call_expression":
        return None
    function = call.child_by_field_name("function")
    if function is not None and function.type == "identifier":
        return node_text(function)
    return None


def is_call_to(node: Node, name: str) -> bool:
    return callee_name(node) == name


def call_arguments(call: Node) -> List[Node]:
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return []
    return named_elements(arguments)


def find_calls(node: Node, name: str) -> List[Node]:
    """All calls to `name` below node, in document order."""
    return [n for n in walk(node) if is_call_to(n, name)]


def property_key(pair: Node) -> Optional[str]:
    key = pair.child_by_field_name("key")
    if key is None:
        return None
    if key.type == "string":
        return string_value(key)
    if key.type in ("property_identifier", "identifier"):
        return node_text(key)
    return None


def object_property(obj: Node, key: str) -> Optional[Node]:
    """Value node of `key: value` in an object literal (unwrapped), or None."""
    if obj is None or obj.type != "object":
        return None
    for child in named_elements(obj):
        if child.type == "pair" and property_key(child) == key:
            return unwrap(child.child_by_field_name("value"))
    return None


def plugins_array(obj: Optional[Node]) -> Optional[Node]:
    """The array literal bound to `plugins` in an object, or None."""
    value = object_property(unwrap(obj), "plugins")
    if value is not None and value.type == "array":
        return value
    return None


def default_export(root: Node) -> Optional[Node]:
    """The export_statement carrying `export default <expression>`, or None."""
    for child in root.named_children:
        if child.type != "export_statement":
            continue
        if any(c.type == "default" for c in child.children) and child.child_by_field_name("value") is not None:
            return child
    return None


def default_export_value(root: Node) -> Optional[Node]:
    statement = default_export(root)
    if statement is None:
        return None
    return statement.child_by_field_name("value")


def module_exports_value(root: Node) -> Optional[Node]:
    """Right-hand side of a top-level `module.exports = <expression>`."""
    for child in root.named_children:
        if child.type != "expression_statement":
            continue
        expression = named_elements(child)[0] if named_elements(child) else None
        if expression is None or expression.type != "assignment_expression":
            continue
        left = expression.child_by_field_name("left")
        if left is not None and node_text(left).replace(" ", "") == "module.exports":
            return expression.child_by_field_name("right")
    return None


def exported_value(root: Node) -> Optional[Node]:
    """Default export value, falling back to `module.exports`. Not unwrapped."""
    value = default_export_value(root)
    if value is None:
        value = module_exports_value(root)
    return value


def returned_values(function: Node) -> List[Node]:
    """
    Expressions a function returns: the implicit arrow body, or the argument
    of every `return` in its body that is not inside a nested function.
    """
    body = function.child_by_field_name("body")
    if body is None:
        return []
    if body.type != "statement_block":
        return [unwrap(body)]

    values = []

    def visit(node: Node):
        for child in node.named_children:
            if child.type in FUNCTION_TYPES or child.type in ("class", "class_declaration"):
                continue
            if child.type == "return_statement":
                expressions = named_elements(child)
                if expressions:
                    values.append(unwrap(expressions[0]))
                continue
            visit(child)

    visit(body)
    return values


def declared_function_names(root: Node) -> List[str]:
    """
    Names bound to functions at any level: function declarations and
    variables initialized with a function or arrow function.
    """
    names = []
    for node in walk(root):
        if node.type in ("function_declaration", "generator_function_declaration"):
            name = node.child_by_field_name("name")
            if name is not None:
                names.append(node_text(name))
        elif node.type == "variable_declarator":
            name = node.child_by_field_name("name")
            value = unwrap(node.child_by_field_name("value"))
            if name is not None and value is not None and value.type in FUNCTION_TYPES:
                names.append(node_text(name))
    return names
