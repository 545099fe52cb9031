"""Domain models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

NOT_APPLICABLE = "n/a"


@dataclass(frozen=True)
class SourceEntry:
    """One entry of the input directory."""

    path: Path
    is_dir: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        return self.path.suffix

    @classmethod
    def from_path(cls, path: Path) -> "SourceEntry":
        return cls(path=path, is_dir=path.is_dir())

    def is_eligible(self, marker: str = "RD", extension: str = ".xml") -> bool:
        """Only regular files with the right extension and marker are processed."""
        return not self.is_dir and self.extension == extension and marker in self.name


@dataclass(frozen=True)
class DateKey:
    """Date identity of an as-run log."""

    weekday: str
    year: int
    month: int
    day: int
    week: int
    week_year: int

    @classmethod
    def zero(cls) -> "DateKey":
        return cls(weekday="", year=0, month=0, day=0, week=0, week_year=0)

    @property
    def is_zero(self) -> bool:
        return self == DateKey.zero()


@dataclass(frozen=True)
class LineDecision:
    """Keep/drop verdict for a single line."""

    kept: bool
    text: str


@dataclass
class FilterResult:
    """Lines retained by the line filter plus counters."""

    lines: list[str] = field(default_factory=list)
    kept: int = 0
    dropped: int = 0

    @property
    def total(self) -> int:
        return self.kept + self.dropped

    @property
    def ratio(self) -> float:
        """Kept lines as a percentage of all lines."""
        if self.total == 0:
            return 0.0
        return self.kept / self.total * 100.0


class OutcomeStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ProcessingOutcome:
    """Result of processing one input file."""

    source: SourceEntry
    status: OutcomeStatus
    year: int = 0
    week: int = 0
    output_name: str = NOT_APPLICABLE
    stage: str | None = None  # Pipeline stage that failed
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.status == OutcomeStatus.PASSED


class BatchState(str, Enum):
    IDLE = "idle"
    WORKSPACE_PREPARED = "workspace_prepared"
    PROCESSING_FILES = "processing_files"
    ARCHIVING_MINIFIED = "archiving_minified"
    ARCHIVING_ORIGINAL = "archiving_original"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BatchResult:
    """Aggregate result of a batch run."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    output_names: list[str] = field(default_factory=list)
    outcomes: list[ProcessingOutcome] = field(default_factory=list)
    year: int = 0
    week: int = 0
    archives: list[Path] = field(default_factory=list)

    def record(self, outcome: ProcessingOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.status == OutcomeStatus.SKIPPED:
            self.skipped += 1
            return
        self.total += 1
        if outcome.success:
            self.passed += 1
            self.output_names.append(outcome.output_name)
        else:
            self.failed += 1

    @property
    def successful(self) -> list[ProcessingOutcome]:
        return [o for o in self.outcomes if o.success]


class MissingDatePolicy(str, Enum):
    """What to do with a file that has no date field."""

    FAIL = "fail"
    DEGRADE = "degrade"  # Substitute the zero date key


class WeekPolicy(str, Enum):
    """How to pick the (year, week) that names the batch archives."""

    LAST = "last"  # Last successful file wins
    MODE = "mode"  # Most common pair, ties go to the later file
    STRICT = "strict"  # All successful files must share one pair
