import fnmatch
import os
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

import pathspec

from zephyr_codemod.catalog import BundlerConfig, ConfigFile
from zephyr_codemod.exceptions import ConfigError
from zephyr_codemod.logging_config import logger
from .config import DEFAULT_IGNORE_PATTERNS, validate_ignore_patterns


def _load_ignore_spec(directory: Path, respect_gitignore: bool, extra_patterns: Sequence[str]) -> pathspec.PathSpec:
    all_patterns = list(DEFAULT_IGNORE_PATTERNS)
    all_patterns.extend(extra_patterns)

    if respect_gitignore:
        gitignore_path = directory / ".gitignore"
        if gitignore_path.is_file():
            try:
                gitignore_patterns = gitignore_path.read_text(encoding="utf-8").splitlines()
                all_patterns.extend(gitignore_patterns)
                logger.debug(f"Loaded {len(gitignore_patterns)} patterns from '{gitignore_path}'")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not read .gitignore file at '{gitignore_path}'. Error: {e}")

    return pathspec.PathSpec.from_lines("gitwildmatch", all_patterns)


def _walk(directory: Path, spec: pathspec.PathSpec) -> List[Path]:
    """Relative paths of every file under directory that is not ignored."""
    found: List[Path] = []
    for root, dirs, files in os.walk(directory):
        root_path = Path(root)

        # Prune ignored directories in place so os.walk never descends into them
        original_dirs = list(dirs)
        dirs[:] = []
        for d in original_dirs:
            dir_path_to_check = root_path.relative_to(directory) / d
            if spec.match_file(f"{dir_path_to_check.as_posix()}/"):
                logger.debug(f"Ignoring directory '{dir_path_to_check}' due to ignore rules.")
            else:
                dirs.append(d)

        for file_name in files:
            relative_path = (root_path / file_name).relative_to(directory)
            if spec.match_file(relative_path.as_posix()):
                continue
            found.append(relative_path)
    return found


def resolve_bundlers(
    catalog: Mapping[str, BundlerConfig],
    bundlers: Optional[Sequence[str]] = None,
) -> List[BundlerConfig]:
    """
    Catalog entries to process, in catalog order.

    Raises:
        ConfigError: If a requested bundler is not in the catalog.
    """
    if not bundlers:
        return list(catalog.values())

    unknown = [name for name in bundlers if name not in catalog]
    if unknown:
        supported = ", ".join(catalog.keys())
        raise ConfigError(f"Unknown bundler(s): {', '.join(unknown)}. Supported: {supported}")
    return [config for name, config in catalog.items() if name in bundlers]


def find_config_files(
    directory: Path,
    catalog: Mapping[str, BundlerConfig],
    bundlers: Optional[Sequence[str]] = None,
    respect_gitignore: bool = True,
    extra_ignore_patterns: Sequence[str] = (),
) -> List[ConfigFile]:
    """
    Find every bundler configuration file under a directory.

    A file matching the globs of two bundlers yields one entry per bundler.

    Args:
        directory: Root directory to search
        catalog: Bundler catalog
        bundlers: Only look for these bundlers (all if None)
        respect_gitignore: Also skip paths listed in the root .gitignore
        extra_ignore_patterns: Additional gitignore-style patterns

    Returns:
        ConfigFile entries grouped by bundler (catalog order), then by glob
    """
    directory = Path(directory)
    validate_ignore_patterns(list(extra_ignore_patterns))
    selected = resolve_bundlers(catalog, bundlers)

    logger.info(f"Searching for bundler configs in '{directory}'")
    spec = _load_ignore_spec(directory, respect_gitignore, extra_ignore_patterns)
    files = sorted(_walk(directory, spec), key=lambda p: p.as_posix())

    config_files: List[ConfigFile] = []
    for config in selected:
        for file_glob in config.files:
            for relative_path in files:
                if fnmatch.fnmatchcase(relative_path.name, file_glob):
                    config_files.append(ConfigFile(
                        file_path=str(directory / relative_path),
                        bundler_name=config.name,
                        config=config,
                    ))

    logger.debug(f"Found {len(config_files)} config file(s)")
    return config_files
