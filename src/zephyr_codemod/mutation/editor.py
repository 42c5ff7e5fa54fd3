"""
CodeEditor: atomic writes of fully staged file contents.

Edits are made in memory; the file on disk is only replaced once the new
content is complete, so a failed write leaves the original untouched.
"""

import difflib
import os
import stat
import tempfile
from pathlib import Path

from zephyr_codemod.exceptions import WriteError
from zephyr_codemod.logging_config import logger


class CodeEditor:
    """
    Write transformed configs back to disk.

    Features:
    - Atomic writes (temp file + rename)
    - UTF-8 encoding handling
    - Line ending preservation (LF/CRLF)
    """

    def write(self, file_path: str, content: str, original_content: str = "") -> None:
        """
        Replace a file's content atomically.

        Args:
            file_path: Target file
            content: New content
            original_content: Content read before editing; its line ending
                style is applied to content

        Raises:
            WriteError: If the temp file cannot be written or renamed.
        """
        if original_content:
            content = self._normalize_line_endings(content, self._detect_line_ending(original_content))
        self._atomic_write(file_path, content)
        logger.debug(f"Wrote {file_path}")

    def _atomic_write(self, file_path: str, content: str) -> None:
        """
        Write file atomically using temp file + rename.
        """
        path = Path(file_path)

        try:
            # Temp file next to the target so os.replace stays on one filesystem
            fd, temp_path = tempfile.mkstemp(
                dir=str(path.parent),
                prefix=f".{path.name}.",
                suffix=".tmp"
            )
        except OSError as e:
            raise WriteError(file_path, f"cannot create temp file: {e}") from e

        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
            if path.exists():
                os.chmod(temp_path, stat.S_IMODE(path.stat().st_mode))
            os.replace(temp_path, str(path))
        except OSError as e:
            # Clean up temp file on error
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise WriteError(file_path, str(e)) from e

    def _detect_line_ending(self, content: str) -> str:
        """
        Detect line ending style (LF vs CRLF).
        """
        if '\r\n' in content:
            return '\r\n'
        return '\n'

    def _normalize_line_endings(self, content: str, line_ending: str) -> str:
        """
        Normalize line endings to match detected style.
        """
        # First convert all to LF
        content = content.replace('\r\n', '\n')
        # Then convert to target if CRLF
        if line_ending == '\r\n':
            content = content.replace('\n', '\r\n')
        return content

    def generate_unified_diff(
        self,
        file_path: str,
        original_content: str,
        modified_content: str,
    ) -> str:
        """
        Unified diff between original and modified content, for dry runs.
        """
        diff_lines = difflib.unified_diff(
            original_content.splitlines(keepends=True),
            modified_content.splitlines(keepends=True),
            fromfile=f"a/{file_path}",
            tofile=f"b/{file_path}",
        )
        return ''.join(diff_lines)
