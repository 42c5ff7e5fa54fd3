"""
Pytest configuration for the zephyr-codemod test suite.

This conftest.py provides:
- Quiet logging (suppresses console output)
- Temp directory fixtures holding small bundler projects
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from zephyr_codemod.logging_config import setup_logging


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, enable_file_logging=False, force=True)


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="zephyr_codemod_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


WEBPACK_CONFIG = """\
const path = require('path');

module.exports = {
  entry: './src/index.js',
  output: {
    path: path.resolve(__dirname, 'dist'),
  },
};
"""

VITE_CONFIG = """\
import { defineConfig } from 'vite';
import react from '@vitejs/plugin-react';

export default defineConfig({
  plugins: [react()],
});
"""

PARCELRC = """\
{
  "extends": "@parcel/config-default",
  "reporters": ["@parcel/reporter-dev-server"]
}
"""


def write_file(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_project(temp_dir):
    """
    Create a small monorepo with one webpack app, one vite app and a
    Parcel config, plus a vendored config under node_modules.

    Returns:
        Path to the project root.
    """
    write_file(temp_dir, "package.json", '{"name": "demo", "devDependencies": {"vite": "^5.0.0"}}\n')
    write_file(temp_dir, "apps/shell/webpack.config.js", WEBPACK_CONFIG)
    write_file(temp_dir, "apps/remote/vite.config.ts", VITE_CONFIG)
    write_file(temp_dir, "apps/legacy/.parcelrc", PARCELRC)
    write_file(temp_dir, "node_modules/some-lib/webpack.config.js", WEBPACK_CONFIG)

    yield temp_dir


@pytest.fixture
def write_config(temp_dir):
    """Factory fixture: write_config("webpack.config.js", source) -> Path."""
    def _write(relative: str, content: str) -> Path:
        return write_file(temp_dir, relative, content)
    return _write
