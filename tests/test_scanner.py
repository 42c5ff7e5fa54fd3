"""
Tests for config discovery.
"""

from pathlib import Path

import pytest

from zephyr_codemod.catalog import BUNDLER_CONFIGS
from zephyr_codemod.exceptions import ConfigError
from zephyr_codemod.scanner import find_config_files, resolve_bundlers


def relative(results, root):
    return [(Path(r.file_path).relative_to(root).as_posix(), r.bundler_name) for r in results]


def test_finds_configs_in_catalog_order(temp_project):
    results = find_config_files(temp_project, BUNDLER_CONFIGS)
    assert relative(results, temp_project) == [
        ("apps/shell/webpack.config.js", "webpack"),
        ("apps/remote/vite.config.ts", "vite"),
        ("apps/legacy/.parcelrc", "parcel"),
    ]


def test_node_modules_ignored(temp_project):
    results = find_config_files(temp_project, BUNDLER_CONFIGS)
    assert not any("node_modules" in r.file_path for r in results)


def test_build_output_ignored(temp_dir, write_config):
    write_config("dist/webpack.config.js", "module.exports = {};\n")
    write_config(".git/webpack.config.js", "module.exports = {};\n")
    write_config("webpack.config.js", "module.exports = {};\n")

    results = find_config_files(temp_dir, BUNDLER_CONFIGS)
    assert relative(results, temp_dir) == [("webpack.config.js", "webpack")]


def test_gitignore_respected(temp_dir, write_config):
    write_config(".gitignore", "generated/\n")
    write_config("generated/vite.config.js", "export default {};\n")
    write_config("vite.config.js", "export default {};\n")

    assert relative(find_config_files(temp_dir, BUNDLER_CONFIGS), temp_dir) == [("vite.config.js", "vite")]
    unfiltered = find_config_files(temp_dir, BUNDLER_CONFIGS, respect_gitignore=False)
    assert len(unfiltered) == 2


def test_file_matching_two_bundlers(temp_dir, write_config):
    write_config("rspack.config.mjs", "export default {};\n")
    results = find_config_files(temp_dir, BUNDLER_CONFIGS)
    assert [r.bundler_name for r in results] == ["rspack", "repack"]
    assert results[0].file_path == results[1].file_path


def test_sorted_within_glob(temp_dir, write_config):
    write_config("packages/b/vite.config.ts", "export default {};\n")
    write_config("packages/a/vite.config.ts", "export default {};\n")
    results = find_config_files(temp_dir, BUNDLER_CONFIGS)
    assert relative(results, temp_dir) == [
        ("packages/a/vite.config.ts", "vite"),
        ("packages/b/vite.config.ts", "vite"),
    ]


def test_bundler_filter(temp_project):
    results = find_config_files(temp_project, BUNDLER_CONFIGS, bundlers=["parcel"])
    assert [r.bundler_name for r in results] == ["parcel"]


def test_unknown_bundler():
    with pytest.raises(ConfigError) as exc_info:
        resolve_bundlers(BUNDLER_CONFIGS, ["webpack", "esbuild"])
    assert "esbuild" in str(exc_info.value)


def test_extra_ignore_patterns(temp_dir, write_config):
    write_config("examples/vite.config.js", "export default {};\n")
    assert find_config_files(temp_dir, BUNDLER_CONFIGS, extra_ignore_patterns=["examples/"]) == []


def test_invalid_ignore_pattern(temp_dir):
    with pytest.raises(ConfigError):
        find_config_files(temp_dir, BUNDLER_CONFIGS, extra_ignore_patterns=[""])
