from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class TransformOutcome(str, Enum):
    """Per-file result of a codemod run."""
    TRANSFORMED = "transformed"
    SKIPPED_ALREADY_PRESENT = "skipped_already_present"
    SKIPPED_UNMATCHED_BUNDLER = "skipped_unmatched_bundler"
    PARSE_WARNING = "parse_warning"
    ERROR = "error"


class CodemodOptions(BaseModel):
    """
    Options supplied by the host driver for one run.
    """
    dry_run: bool = False
    bundlers: Optional[List[str]] = None  # None means every bundler in the catalog
    install_packages: bool = False


class FileResult(BaseModel):
    """
    Outcome of processing one (file, bundler) pairing.
    """
    file_path: str
    bundler_name: str
    outcome: TransformOutcome
    pattern: Optional[str] = None  # Pattern type that was applied, if any
    message: str = ""
    diff: Optional[str] = None  # Unified diff of the change, dry runs only


class CodemodSummary(BaseModel):
    """
    Aggregate of a whole run, suitable for --json output.
    """
    directory: str
    dry_run: bool = False
    results: List[FileResult] = Field(default_factory=list)
    required_plugins: List[str] = Field(default_factory=list)  # Plugins of files that were (or would be) transformed
    missing_plugins: List[str] = Field(default_factory=list)  # Subset not declared/installed in the project
    installed_plugins: List[str] = Field(default_factory=list)

    def _count(self, *outcomes: TransformOutcome) -> int:
        return sum(1 for r in self.results if r.outcome in outcomes)

    @property
    def processed(self) -> int:
        return self._count(TransformOutcome.TRANSFORMED)

    @property
    def skipped(self) -> int:
        return self._count(
            TransformOutcome.SKIPPED_ALREADY_PRESENT,
            TransformOutcome.SKIPPED_UNMATCHED_BUNDLER,
        )

    @property
    def errors(self) -> int:
        return self._count(TransformOutcome.ERROR)

    @property
    def warnings(self) -> int:
        return self._count(TransformOutcome.PARSE_WARNING)

    def to_dict(self) -> dict:
        """Serialize including the derived counters."""
        data = self.model_dump(mode="json")
        data.update(
            processed=self.processed,
            skipped=self.skipped,
            errors=self.errors,
            warnings=self.warnings,
        )
        return data
