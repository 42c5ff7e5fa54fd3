"""
SyntaxTree: one file's source text plus its tree-sitter tree.

Edits are byte-range splices on the owned source followed by a reparse, so
everything outside an edited range is serialized back byte-for-byte.
Node objects obtained before an edit are stale afterwards; callers re-query
the tree after every edit.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser

from zephyr_codemod.exceptions import ConfigError, ParseError
from zephyr_codemod.logging_config import logger

DIALECT_BY_EXTENSION = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Extensions whose module system is fixed regardless of content
MODULE_EXTENSIONS = {".mjs", ".mts"}
SCRIPT_EXTENSIONS = {".cjs", ".cts"}

# Global cache for loaded languages to avoid repeated loading
_language_cache: Dict[str, Language] = {}


def get_language(dialect: str) -> Language:
    """
    Load the tree-sitter language for a dialect.

    Caches the loaded language object; parsers themselves are created per
    tree so no parser state is shared between files.
    """
    if dialect in _language_cache:
        return _language_cache[dialect]

    if dialect == "javascript":
        lang = Language(tsjavascript.language())
    elif dialect == "typescript":
        lang = Language(tstypescript.language_typescript())
    elif dialect == "tsx":
        lang = Language(tstypescript.language_tsx())
    else:
        raise ConfigError(f"Unsupported dialect '{dialect}'. Supported: javascript, typescript, tsx")

    _language_cache[dialect] = lang
    logger.debug(f"Loaded tree-sitter language '{dialect}'")
    return lang


def detect_dialect(file_path: Union[str, Path]) -> str:
    """Pick the grammar from the file extension (JavaScript by default)."""
    return DIALECT_BY_EXTENSION.get(Path(file_path).suffix.lower(), "javascript")


def find_error_nodes(node: Node) -> List[Node]:
    """
    Recursively find all ERROR and missing nodes below node.
    """
    errors = []
    if node.type == "ERROR" or node.is_missing:
        errors.append(node)
        return errors

    for child in node.children:
        if child.has_error or child.is_missing:
            errors.extend(find_error_nodes(child))

    return errors


class SyntaxTree:
    """
    Mutable syntax tree for a single configuration file.

    Attributes:
        dialect: "javascript", "typescript" or "tsx"
        file_path: Path used in log and error messages
        newline: Line ending style detected in the original source
    """

    def __init__(
        self,
        source: str,
        dialect: str = "javascript",
        file_path: str = "<string>",
        module_kind: Optional[str] = None,
    ):
        """
        Args:
            source: File content
            dialect: Grammar to parse with
            file_path: Path for messages
            module_kind: "module" or "script" to force the import style;
                None detects it from the source
        """
        self.dialect = dialect
        self.file_path = file_path
        self.newline = "\r\n" if "\r\n" in source else "\n"
        self._module_kind = module_kind
        self._parser = Parser()
        self._parser.language = get_language(dialect)
        self._source = source.encode("utf-8")
        self._tree = self._parser.parse(self._source)

    @property
    def root(self) -> Node:
        return self._tree.root_node

    @property
    def source(self) -> bytes:
        return self._source

    @property
    def is_typescript(self) -> bool:
        return self.dialect in ("typescript", "tsx")

    def text(self, node: Node) -> str:
        """Source text covered by node."""
        return self._source[node.start_byte:node.end_byte].decode("utf-8")

    def serialize(self) -> str:
        return self._source.decode("utf-8")

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def replace(self, start_byte: int, end_byte: int, text: str) -> None:
        """
        Replace a byte range with text and reparse.

        "\\n" in text is converted to the file's line ending.
        """
        if self.newline != "\n":
            text = text.replace("\r\n", "\n").replace("\n", self.newline)
        self._source = self._source[:start_byte] + text.encode("utf-8") + self._source[end_byte:]
        self._tree = self._parser.parse(self._source)

    def insert(self, byte_offset: int, text: str) -> None:
        self.replace(byte_offset, byte_offset, text)

    # ------------------------------------------------------------------
    # Layout helpers used to format inserted code like its surroundings
    # ------------------------------------------------------------------

    def line_start(self, byte_offset: int) -> int:
        return self._source.rfind(b"\n", 0, byte_offset) + 1

    def line_end(self, byte_offset: int) -> int:
        """Offset of the line break ending the line that contains byte_offset."""
        end = self._source.find(b"\n", byte_offset)
        if end == -1:
            return len(self._source)
        if end > 0 and self._source[end - 1:end] == b"\r":
            return end - 1
        return end

    def line_indent(self, node: Node) -> str:
        """Leading whitespace of the line on which node starts."""
        start = self.line_start(node.start_byte)
        line = self._source[start:node.start_byte].decode("utf-8")
        return line[:len(line) - len(line.lstrip())]

    @property
    def indent_unit(self) -> str:
        """
        Smallest indentation step used in the file (two spaces if unknown).
        """
        widths = set()
        for line in self.serialize().splitlines()[:200]:
            stripped = line.lstrip()
            if not stripped or len(stripped) == len(line):
                continue
            # ` * ` continuation lines of block comments
            if stripped.startswith("*"):
                continue
            indent = line[:len(line) - len(stripped)]
            if indent.startswith("\t"):
                return "\t"
            widths.add(len(indent))
        return " " * min(widths) if widths else "  "

    @property
    def quote(self) -> str:
        """Quote character preferred by the file's import sources."""
        single = double = 0
        for child in self.root.named_children:
            if child.type in ("import_statement", "export_statement") or "require" in self.text(child)[:200]:
                for node in _iter_strings(child):
                    if self.text(node).startswith('"'):
                        double += 1
                    else:
                        single += 1
        return '"' if double > single else "'"

    @property
    def uses_semicolons(self) -> bool:
        """Whether top-level statements are terminated with semicolons."""
        statements = [
            child for child in self.root.named_children
            if child.type not in ("comment", "hash_bang_line", "function_declaration", "class_declaration")
        ]
        if not statements:
            return True
        terminated = sum(1 for s in statements if self.text(s).rstrip().endswith(";"))
        return terminated * 2 >= len(statements)

    @property
    def uses_module_syntax(self) -> bool:
        """
        True when imports should be written as ES module statements.

        Fixed by extension for .mjs/.cjs style files, otherwise true when the
        file already contains a top-level import or export statement.
        TypeScript files without either are treated as modules.
        """
        if self._module_kind is not None:
            return self._module_kind == "module"
        for child in self.root.named_children:
            if child.type in ("import_statement", "export_statement"):
                return True
        return self.is_typescript

    def errors(self) -> List[Node]:
        if not self.root.has_error:
            return []
        return find_error_nodes(self.root)


def _iter_strings(node: Node):
    if node.type in ("string", "template_string"):
        yield node
        return
    for child in node.children:
        yield from _iter_strings(child)


def parse(
    text: str,
    dialect: str = "javascript",
    file_path: str = "<string>",
    module_kind: Optional[str] = None,
) -> SyntaxTree:
    """
    Parse source text into a SyntaxTree.

    Raises:
        ParseError: If the text is not valid source in the dialect.
    """
    tree = SyntaxTree(text, dialect=dialect, file_path=file_path, module_kind=module_kind)
    errors = tree.errors()
    if errors:
        first = errors[0]
        line = first.start_point[0] + 1
        col = first.start_point[1] + 1
        kind = f"missing '{first.type}'" if first.is_missing else "syntax error"
        raise ParseError(file_path, f"{kind} at line {line}, column {col} ({len(errors)} error(s))")
    return tree


def parse_file(file_path: Union[str, Path]) -> SyntaxTree:
    """
    Read and parse a configuration file, choosing dialect and module kind
    from its extension.

    Raises:
        ParseError: If the file content does not parse.
        OSError: If the file cannot be read.
    """
    path = Path(file_path)
    # newline="" keeps CRLF files byte-identical outside edited ranges
    with open(path, "r", encoding="utf-8", newline="") as f:
        content = f.read()
    suffix = path.suffix.lower()
    module_kind = None
    if suffix in MODULE_EXTENSIONS:
        module_kind = "module"
    elif suffix in SCRIPT_EXTENSIONS:
        module_kind = "script"
    logger.debug(f"Parsing {path} as {detect_dialect(path)}")
    return parse(content, detect_dialect(path), str(path), module_kind)


def serialize(tree: SyntaxTree) -> str:
    return tree.serialize()


def validate_syntax(text: str, dialect: str = "javascript") -> List[str]:
    """
    Check text for syntax errors without raising.

    Returns:
        Error messages (empty when the text parses cleanly)
    """
    tree = SyntaxTree(text, dialect=dialect)
    messages = []
    for node in tree.errors():
        line = node.start_point[0] + 1
        col = node.start_point[1] + 1
        messages.append(f"Syntax error at line {line}, column {col}")
    return messages
