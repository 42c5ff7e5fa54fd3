"""
Tests for the zephyr-codemod command line.
"""

import json

from typer.testing import CliRunner

from zephyr_codemod.main import app

runner = CliRunner()


class TestListBundlers:

    def test_table(self):
        result = runner.invoke(app, ["--list-bundlers"])
        assert result.exit_code == 0
        assert "webpack" in result.stdout
        assert "parcel" in result.stdout

    def test_json(self):
        result = runner.invoke(app, ["--list-bundlers", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["vite"]["plugin"] == "vite-plugin-zephyr"
        assert data["parcel"]["import_name"] is None


class TestRun:

    def test_dry_run(self, temp_project):
        config = temp_project / "apps" / "shell" / "webpack.config.js"
        before = config.read_text()

        result = runner.invoke(app, [str(temp_project), "--dry-run"])

        assert result.exit_code == 0
        assert "Would transform: 3" in result.stdout
        assert config.read_text() == before

    def test_apply(self, temp_project):
        result = runner.invoke(app, [str(temp_project)])

        assert result.exit_code == 0
        assert "Transformed: 3" in result.stdout
        assert "withZephyr()" in (temp_project / "apps" / "shell" / "webpack.config.js").read_text()

    def test_json_summary(self, temp_project):
        result = runner.invoke(app, [str(temp_project), "--json", "--dry-run"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["dry_run"] is True
        assert data["processed"] == 3
        assert data["errors"] == 0
        assert {r["outcome"] for r in data["results"]} == {"transformed"}
        assert "vite-plugin-zephyr" in data["missing_plugins"]

    def test_bundler_filter(self, temp_project):
        result = runner.invoke(app, [str(temp_project), "--json", "-b", "vite,parcel"])
        data = json.loads(result.stdout)
        assert sorted(r["bundler_name"] for r in data["results"]) == ["parcel", "vite"]

    def test_unknown_bundler_exits_2(self, temp_project):
        result = runner.invoke(app, [str(temp_project), "--json", "--bundlers", "esbuild"])
        assert result.exit_code == 2
        assert "esbuild" in json.loads(result.stdout)["message"]

    def test_missing_directory_exits_2(self, temp_dir):
        result = runner.invoke(app, [str(temp_dir / "nope"), "--json"])
        assert result.exit_code == 2

    def test_errors_exit_1(self, temp_dir, write_config):
        write_config("webpack.config.js", "module.exports = (env) => ({});\n")
        result = runner.invoke(app, [str(temp_dir), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["errors"] == 1

    def test_no_configs(self, temp_dir):
        result = runner.invoke(app, [str(temp_dir)])
        assert result.exit_code == 0
        assert "No bundler configuration files found" in result.stdout
