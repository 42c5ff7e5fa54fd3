# Custom exceptions for the codemod

class CodemodError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ParseError(CodemodError):
    """Raised when a file is not valid source in its expected dialect."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to parse {file_path}: {message}")


class JsonParseError(CodemodError):
    """Raised when a JSON configuration file (.parcelrc) is malformed."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Invalid JSON in {file_path}: {message}")


class UnsupportedShape(CodemodError):
    """Raised by a transform when the node it edits is not in the tree."""
    def __init__(self, shape: str, message: str):
        self.shape = shape
        self.message = message
        super().__init__(f"[{shape}] {message}")


class WriteError(CodemodError):
    """Raised when an edited file cannot be written back."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to write {file_path}: {message}")


class ConfigError(CodemodError):
    """Raised for configuration-related problems."""
    pass
