"""
Integration tests for CodemodFacade: full runs over temporary projects.
"""

import json

import pytest

from zephyr_codemod.catalog import BUNDLER_CONFIGS, ConfigFile
from zephyr_codemod.exceptions import ConfigError, WriteError
from zephyr_codemod.mutation import CodemodFacade
from zephyr_codemod.schemas import CodemodOptions, TransformOutcome


def config_file(path, bundler):
    return ConfigFile(file_path=str(path), bundler_name=bundler, config=BUNDLER_CONFIGS[bundler])


@pytest.fixture
def facade():
    return CodemodFacade(BUNDLER_CONFIGS)


@pytest.fixture
def dry_run_facade():
    return CodemodFacade(BUNDLER_CONFIGS, CodemodOptions(dry_run=True))


class TestTransformFile:

    def test_module_exports_written(self, facade, write_config):
        path = write_config("webpack.config.js", "module.exports = {\n  mode: 'development',\n};\n")

        result = facade.transform_file(config_file(path, "webpack"))

        assert result.outcome == TransformOutcome.TRANSFORMED
        assert result.pattern == "module-exports"
        assert path.read_text() == (
            "const { withZephyr } = require('zephyr-webpack-plugin');\n"
            "module.exports = withZephyr()({\n"
            "  mode: 'development',\n"
            "});\n"
        )

    def test_vite_typescript_config(self, facade, write_config):
        path = write_config(
            "vite.config.ts",
            "import { defineConfig } from 'vite';\n"
            "import react from '@vitejs/plugin-react';\n"
            "\n"
            "export default defineConfig({\n"
            "  plugins: [react()],\n"
            "});\n",
        )

        result = facade.transform_file(config_file(path, "vite"))

        assert result.outcome == TransformOutcome.TRANSFORMED
        assert path.read_text() == (
            "import { defineConfig } from 'vite';\n"
            "import react from '@vitejs/plugin-react';\n"
            "import { withZephyr } from 'vite-plugin-zephyr';\n"
            "\n"
            "export default defineConfig({\n"
            "  plugins: [react(), withZephyr()],\n"
            "});\n"
        )

    def test_existing_default_import_is_reused(self, facade, write_config):
        path = write_config(
            "vite.config.ts",
            "import { defineConfig } from 'vite';\n"
            "import withZephyr from 'vite-plugin-zephyr';\n"
            "\n"
            "export default defineConfig({\n"
            "  plugins: [react()],\n"
            "});\n",
        )

        result = facade.transform_file(config_file(path, "vite"))

        assert result.outcome == TransformOutcome.TRANSFORMED
        assert path.read_text() == (
            "import { defineConfig } from 'vite';\n"
            "import withZephyr from 'vite-plugin-zephyr';\n"
            "\n"
            "export default defineConfig({\n"
            "  plugins: [react(), withZephyr()],\n"
            "});\n"
        )

    def test_second_run_is_noop(self, facade, write_config):
        path = write_config("webpack.config.js", "module.exports = {\n  mode: 'development',\n};\n")
        facade.transform_file(config_file(path, "webpack"))
        after_first = path.read_text()

        result = facade.transform_file(config_file(path, "webpack"))

        assert result.outcome == TransformOutcome.SKIPPED_ALREADY_PRESENT
        assert path.read_text() == after_first

    def test_dry_run_does_not_write(self, dry_run_facade, write_config):
        source = "module.exports = {\n  mode: 'development',\n};\n"
        path = write_config("webpack.config.js", source)

        result = dry_run_facade.transform_file(config_file(path, "webpack"))

        assert result.outcome == TransformOutcome.TRANSFORMED
        assert path.read_text() == source
        assert "+const { withZephyr } = require('zephyr-webpack-plugin');" in result.diff
        assert "-module.exports = {" in result.diff

    def test_parse_failure_is_warning(self, facade, write_config):
        source = "module.exports = {\n  mode: 'development',\n"
        path = write_config("webpack.config.js", source)

        result = facade.transform_file(config_file(path, "webpack"))

        assert result.outcome == TransformOutcome.PARSE_WARNING
        assert result.message
        assert path.read_text() == source

    def test_unsupported_shape_is_error(self, facade, write_config):
        source = "module.exports = (env) => ({ mode: env });\n"
        path = write_config("webpack.config.js", source)

        result = facade.transform_file(config_file(path, "webpack"))

        assert result.outcome == TransformOutcome.ERROR
        assert result.pattern == "module-exports"
        assert "wrap_module_exports" in result.message
        # Nothing is written when the transform fails, not even the import
        assert path.read_text() == source

    def test_write_failure_is_error(self, facade, write_config, monkeypatch):
        source = "module.exports = {};\n"
        path = write_config("webpack.config.js", source)

        def fail(file_path, content, original_content=""):
            raise WriteError(file_path, "disk full")

        monkeypatch.setattr(facade.editor, "write", fail)
        result = facade.transform_file(config_file(path, "webpack"))

        assert result.outcome == TransformOutcome.ERROR
        assert "disk full" in result.message
        assert path.read_text() == source

    def test_crlf_preserved(self, facade, temp_dir):
        path = temp_dir / "webpack.config.js"
        path.write_bytes(b"module.exports = {\r\n  mode: 'none',\r\n};\r\n")

        facade.transform_file(config_file(path, "webpack"))

        content = path.read_bytes().decode("utf-8")
        assert "withZephyr()({" in content
        assert "\n" not in content.replace("\r\n", "")

    def test_parcelrc(self, facade, write_config):
        path = write_config(".parcelrc", '{"extends": "@parcel/config-default", "reporters": ["@parcel/reporter-dev-server"]}')

        result = facade.transform_file(config_file(path, "parcel"))

        assert result.outcome == TransformOutcome.TRANSFORMED
        content = path.read_text()
        assert content.endswith("\n")
        assert json.loads(content)["reporters"] == ["@parcel/reporter-dev-server", "parcel-reporter-zephyr"]

    def test_invalid_parcelrc_is_warning(self, facade, write_config):
        path = write_config(".parcelrc", '{"extends": ')
        result = facade.transform_file(config_file(path, "parcel"))
        assert result.outcome == TransformOutcome.PARSE_WARNING


class TestRun:

    def test_full_project(self, facade, temp_project):
        summary = facade.run(temp_project)

        outcomes = {r.bundler_name: r.outcome for r in summary.results}
        assert outcomes == {
            "webpack": TransformOutcome.TRANSFORMED,
            "vite": TransformOutcome.TRANSFORMED,
            "parcel": TransformOutcome.TRANSFORMED,
        }
        assert summary.processed == 3
        assert summary.errors == 0
        # node_modules is never touched
        vendored = temp_project / "node_modules" / "some-lib" / "webpack.config.js"
        assert "withZephyr" not in vendored.read_text()

    def test_missing_plugins_reported(self, facade, temp_project):
        summary = facade.run(temp_project)
        assert summary.required_plugins == [
            "zephyr-webpack-plugin",
            "vite-plugin-zephyr",
            "parcel-reporter-zephyr",
        ]
        assert summary.missing_plugins == summary.required_plugins
        assert summary.installed_plugins == []

    def test_declared_plugin_not_missing(self, temp_dir, write_config):
        write_config("package.json", '{"devDependencies": {"zephyr-webpack-plugin": "^0.1.0"}}')
        write_config("webpack.config.js", "module.exports = {};\n")

        summary = CodemodFacade(BUNDLER_CONFIGS).run(temp_dir)

        assert summary.required_plugins == ["zephyr-webpack-plugin"]
        assert summary.missing_plugins == []

    def test_second_run_skips_everything(self, facade, temp_project):
        facade.run(temp_project)
        summary = facade.run(temp_project)
        assert summary.processed == 0
        assert summary.skipped == 3

    def test_overlapping_bundlers_inject_once(self, facade, write_config, temp_dir):
        path = write_config("rspack.config.mjs", "export default {\n  mode: 'production',\n};\n")

        summary = facade.run(temp_dir)

        assert [(r.bundler_name, r.outcome) for r in summary.results] == [
            ("rspack", TransformOutcome.TRANSFORMED),
            ("repack", TransformOutcome.SKIPPED_ALREADY_PRESENT),
        ]
        assert path.read_text() == (
            "import { withZephyr } from 'zephyr-rspack-plugin';\n"
            "export default withZephyr()({\n"
            "  mode: 'production',\n"
            "});\n"
        )

    def test_one_failure_does_not_stop_the_run(self, facade, write_config, temp_dir):
        write_config("a/webpack.config.js", "module.exports = (env) => ({});\n")
        good = write_config("b/webpack.config.js", "module.exports = {};\n")

        summary = facade.run(temp_dir)

        assert [r.outcome for r in summary.results] == [TransformOutcome.ERROR, TransformOutcome.TRANSFORMED]
        assert "withZephyr()({})" in good.read_text()
        assert summary.errors == 1

    def test_bundler_filter(self, temp_project):
        facade = CodemodFacade(BUNDLER_CONFIGS, CodemodOptions(bundlers=["vite"]))
        summary = facade.run(temp_project)
        assert [r.bundler_name for r in summary.results] == ["vite"]

    def test_unknown_bundler(self, temp_project):
        facade = CodemodFacade(BUNDLER_CONFIGS, CodemodOptions(bundlers=["esbuild"]))
        with pytest.raises(ConfigError):
            facade.run(temp_project)

    def test_install_runs_for_missing_plugins(self, temp_dir, write_config, monkeypatch):
        write_config("webpack.config.js", "module.exports = {};\n")
        installed = []

        def fake_install(directory, package, manager=None):
            installed.append((package, manager))
            return True

        monkeypatch.setattr("zephyr_codemod.mutation.facade.install_package", fake_install)
        summary = CodemodFacade(BUNDLER_CONFIGS, CodemodOptions(install_packages=True)).run(temp_dir)

        assert installed == [("zephyr-webpack-plugin", "npm")]
        assert summary.installed_plugins == ["zephyr-webpack-plugin"]

    def test_no_install_in_dry_run(self, temp_dir, write_config, monkeypatch):
        write_config("webpack.config.js", "module.exports = {};\n")
        monkeypatch.setattr(
            "zephyr_codemod.mutation.facade.install_package",
            lambda *args, **kwargs: pytest.fail("install_package called in dry run"),
        )
        summary = CodemodFacade(BUNDLER_CONFIGS, CodemodOptions(dry_run=True, install_packages=True)).run(temp_dir)
        assert summary.installed_plugins == []

    def test_empty_directory(self, facade, temp_dir):
        summary = facade.run(temp_dir)
        assert summary.results == []
        assert summary.to_dict()["processed"] == 0
