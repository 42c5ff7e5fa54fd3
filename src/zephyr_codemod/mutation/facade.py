"""
CodemodFacade: run the codemod over a project.

Main entry point for host drivers (the CLI, or a caller embedding the
engine). Each discovered (file, bundler) pairing goes through:
1. Parse (SyntaxTree, or a JSON document for .parcelrc)
2. Guard (skip if the plugin is already wired in)
3. Detect pattern (PatternDetector)
4. Insert import (syntax.imports)
5. Apply transform (registry)
6. Validate the edited source
7. Write atomically unless dry_run (CodeEditor)
"""

from pathlib import Path
from typing import List, Mapping, Optional, Union

from zephyr_codemod.catalog import BUNDLER_CONFIGS, BundlerConfig, ConfigFile
from zephyr_codemod.exceptions import (
    JsonParseError,
    ParseError,
    UnsupportedShape,
    WriteError,
)
from zephyr_codemod.logging_config import logger
from zephyr_codemod.packages import (
    detect_package_manager,
    install_package,
    is_package_installed,
)
from zephyr_codemod.scanner import find_config_files
from zephyr_codemod.schemas import (
    CodemodOptions,
    CodemodSummary,
    FileResult,
    TransformOutcome,
)
from zephyr_codemod.syntax import insert_import, parse_file, validate_syntax

from .detector import detect_pattern
from .editor import CodeEditor
from .guard import already_present, check_file, load_json_config
from .parcel import dump_json_config
from .registry import apply_transform


class CodemodFacade:
    """
    Main facade for codemod runs.

    One facade instance serves one run; it holds no per-file state between
    transform_file calls.
    """

    def __init__(
        self,
        catalog: Optional[Mapping[str, BundlerConfig]] = None,
        options: Optional[CodemodOptions] = None,
    ):
        """
        Args:
            catalog: Bundler catalog (the built-in one if None)
            options: Run options (defaults if None)
        """
        self.catalog = catalog if catalog is not None else BUNDLER_CONFIGS
        self.options = options or CodemodOptions()
        self.editor = CodeEditor()
        logger.debug("CodemodFacade initialized")

    # ------------------------------------------------------------------
    # Single file
    # ------------------------------------------------------------------

    def transform_file(self, config_file: ConfigFile) -> FileResult:
        """
        Process one discovered config file for one bundler.

        Never raises for a per-file problem; the outcome and its reason are
        in the returned FileResult.
        """
        file_path = config_file.file_path
        config = config_file.config
        logger.info(f"Processing {file_path} ({config.name})")

        # A file claimed by two bundlers may already have been edited for the
        # first one in this run, so the guard always reads from disk
        if check_file(file_path, config):
            return self._skip_present(config_file)

        if config.is_json:
            return self._transform_json(config_file)
        return self._transform_source(config_file)

    def _result(self, config_file: ConfigFile, outcome: TransformOutcome, **kwargs) -> FileResult:
        return FileResult(
            file_path=config_file.file_path,
            bundler_name=config_file.bundler_name,
            outcome=outcome,
            **kwargs,
        )

    def _skip_present(self, config_file: ConfigFile) -> FileResult:
        logger.info(f"{config_file.file_path}: plugin already configured, skipping")
        return self._result(
            config_file,
            TransformOutcome.SKIPPED_ALREADY_PRESENT,
            message=f"{config_file.config.plugin} already configured",
        )

    def _error(self, config_file: ConfigFile, message: str, pattern: Optional[str] = None) -> FileResult:
        logger.error(f"{config_file.file_path}: {message}")
        return self._result(config_file, TransformOutcome.ERROR, pattern=pattern, message=message)

    def _transform_source(self, config_file: ConfigFile) -> FileResult:
        file_path = config_file.file_path
        config = config_file.config

        try:
            tree = parse_file(file_path)
        except ParseError as e:
            logger.warning(str(e))
            return self._result(config_file, TransformOutcome.PARSE_WARNING, message=e.message)
        except (OSError, UnicodeDecodeError) as e:
            return self._error(config_file, f"cannot read file: {e}")

        original = tree.serialize()

        if already_present(tree, config):
            return self._skip_present(config_file)

        pattern = detect_pattern(original, config.patterns)
        if pattern is None or config.import_name is None:
            logger.warning(f"{file_path}: no transform defined for {config.name}")
            return self._result(
                config_file,
                TransformOutcome.SKIPPED_UNMATCHED_BUNDLER,
                message=f"no transform defined for {config.name}",
            )

        try:
            insert_import(tree, config.plugin, config.import_name)
            apply_transform(tree, pattern.transform, config)
        except UnsupportedShape as e:
            return self._error(config_file, str(e), pattern=pattern.type)

        modified = tree.serialize()
        problems = validate_syntax(modified, tree.dialect)
        if problems:
            return self._error(
                config_file,
                f"transformed source does not parse: {problems[0]}",
                pattern=pattern.type,
            )

        return self._finish(config_file, original, modified, pattern.type)

    def _transform_json(self, config_file: ConfigFile) -> FileResult:
        file_path = config_file.file_path
        config = config_file.config

        try:
            with open(file_path, "r", encoding="utf-8", newline="") as f:
                original = f.read()
            document = load_json_config(file_path)
        except JsonParseError as e:
            logger.warning(str(e))
            return self._result(config_file, TransformOutcome.PARSE_WARNING, message=e.message)
        except (OSError, UnicodeDecodeError) as e:
            return self._error(config_file, f"cannot read file: {e}")

        if already_present(document, config):
            return self._skip_present(config_file)

        pattern = detect_pattern(original, config.patterns)
        if pattern is None:
            return self._result(
                config_file,
                TransformOutcome.SKIPPED_UNMATCHED_BUNDLER,
                message=f"no transform defined for {config.name}",
            )

        try:
            apply_transform(document, pattern.transform, config)
        except UnsupportedShape as e:
            return self._error(config_file, str(e), pattern=pattern.type)

        return self._finish(config_file, original, dump_json_config(document), pattern.type)

    def _finish(self, config_file: ConfigFile, original: str, modified: str, pattern: str) -> FileResult:
        file_path = config_file.file_path
        plugin = config_file.config.plugin

        if self.options.dry_run:
            logger.info(f"[dry run] Would add {plugin} to {file_path}")
            return self._result(
                config_file,
                TransformOutcome.TRANSFORMED,
                pattern=pattern,
                message=f"would add {plugin}",
                diff=self.editor.generate_unified_diff(file_path, original, modified),
            )

        try:
            self.editor.write(file_path, modified, original)
        except WriteError as e:
            return self._error(config_file, str(e), pattern=pattern)

        logger.info(f"Added {plugin} to {file_path}")
        return self._result(
            config_file,
            TransformOutcome.TRANSFORMED,
            pattern=pattern,
            message=f"added {plugin}",
        )

    # ------------------------------------------------------------------
    # Whole project
    # ------------------------------------------------------------------

    def discover(self, directory: Union[str, Path]) -> List[ConfigFile]:
        """
        Find the config files this run will process.

        Raises:
            ConfigError: If options.bundlers names an unknown bundler.
        """
        return find_config_files(Path(directory), self.catalog, self.options.bundlers)

    def run(self, directory: Union[str, Path]) -> CodemodSummary:
        """
        Discover and transform every bundler config under directory.

        Raises:
            ConfigError: If options.bundlers names an unknown bundler.
        """
        directory = Path(directory)
        config_files = self.discover(directory)
        summary = CodemodSummary(directory=str(directory), dry_run=self.options.dry_run)

        if not config_files:
            logger.warning(f"No bundler configuration files found in {directory}")
            return summary

        for config_file in config_files:
            summary.results.append(self.transform_file(config_file))

        self._check_packages(directory, summary)
        logger.info(
            f"Done: {summary.processed} transformed, {summary.skipped} skipped, "
            f"{summary.warnings} warnings, {summary.errors} errors"
        )
        return summary

    def _check_packages(self, directory: Path, summary: CodemodSummary) -> None:
        """Fill in required/missing plugins and install them if asked to."""
        for result in summary.results:
            if result.outcome != TransformOutcome.TRANSFORMED:
                continue
            plugin = self.catalog[result.bundler_name].plugin
            if plugin not in summary.required_plugins:
                summary.required_plugins.append(plugin)

        summary.missing_plugins = [
            plugin for plugin in summary.required_plugins
            if not is_package_installed(plugin, directory)
        ]
        if not summary.missing_plugins:
            return

        if not self.options.install_packages or self.options.dry_run:
            logger.info(f"Plugins to install: {', '.join(summary.missing_plugins)}")
            return

        manager = detect_package_manager(directory)
        for plugin in summary.missing_plugins:
            if install_package(directory, plugin, manager):
                summary.installed_plugins.append(plugin)
