"""Domain services - orchestrate business logic."""

import io
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..ports.archiver import ArchiverPort
from ..ports.decoder import DecoderPort
from ..ports.validator import ValidatorPort
from ..ports.workspace import WorkspacePort
from .date_key import DATE_FIELD_MARKER, extract_date_key
from .errors import (
    ArchiveError,
    DateKeyError,
    DecodeError,
    InputError,
    MinifyError,
    ValidationError,
    WeekMismatchError,
    WriteError,
)
from .line_filter import filter_lines
from .models import (
    BatchResult,
    BatchState,
    DateKey,
    MissingDatePolicy,
    OutcomeStatus,
    ProcessingOutcome,
    SourceEntry,
    WeekPolicy,
)
from .naming import archive_name, derive_filename

logger = logging.getLogger(__name__)

MINIFIED = "MINIFIED"
ORIGINAL = "ORIGINAL"


class Stage:
    """Per-file pipeline stages, used in failure reports."""

    DECODE = "decode"
    FILTER = "filter"
    DATE = "date"
    FILENAME = "filename"
    PRE_VALIDATION = "pre-validation"
    WRITE = "write"
    POST_VALIDATION = "post-validation"


class MinifyService:
    """Minifies a single as-run log into the workspace."""

    def __init__(
        self,
        decoder: DecoderPort,
        validator: ValidatorPort,
        workspace: WorkspacePort,
        missing_date: MissingDatePolicy = MissingDatePolicy.FAIL,
        marker: str = "RD",
        extension: str = ".xml",
    ) -> None:
        self.decoder = decoder
        self.validator = validator
        self.workspace = workspace
        self.missing_date = missing_date
        self.marker = marker
        self.extension = extension

    def is_eligible(self, entry: SourceEntry) -> bool:
        return entry.is_eligible(self.marker, self.extension)

    def process(self, entry: SourceEntry, index: int = 1, total: int = 1) -> ProcessingOutcome:
        """Process one input file.

        Pipeline:
            1. Decode UTF-16 lines
            2. Filter empty fields and duplicate declarations
            3. Extract the date key
            4. Derive the output filename
            5. Validate the source document
            6. Write the minified document to the workspace
            7. Validate the written document

        Failures are returned on the outcome, never raised. Output that
        fails validation is renamed to its _MALFORMED name.
        """
        if not self.is_eligible(entry):
            logger.debug(f"Skipping folder, non-XML file or non-{self.marker} file: {entry.name}")
            return ProcessingOutcome(source=entry, status=OutcomeStatus.SKIPPED)

        logger.info(f"Minifying: {entry.path}")
        stage = Stage.DECODE
        try:
            data = self._read_source(entry.path)
            lines = list(self.decoder.lines(io.BytesIO(data)))

            stage = Stage.FILTER
            filtered = filter_lines(lines, entry.name)

            stage = Stage.DATE
            key = self._date_key(lines, entry.name)

            stage = Stage.FILENAME
            output_name = derive_filename(entry.name, key)

            stage = Stage.PRE_VALIDATION
            logger.info(f"Validating source file: {entry.path}")
            self.validator.validate(data, subject=entry.name)

            stage = Stage.WRITE
            written = self.workspace.write_lines(output_name, filtered.lines)

            stage = Stage.POST_VALIDATION
            logger.info(f"Validating destination file: {written}")
            self._validate_output(written)

        except MinifyError as e:
            logger.error(f"Minifying FAILED! {index}/{total} {entry.name} [{stage}]: {e}")
            return ProcessingOutcome(
                source=entry, status=OutcomeStatus.FAILED, stage=stage, error=e
            )

        logger.info(f"Minifying PASSED! {index}/{total}")
        return ProcessingOutcome(
            source=entry,
            status=OutcomeStatus.PASSED,
            year=key.week_year,
            week=key.week,
            output_name=output_name,
        )

    def _read_source(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise DecodeError(f"Cannot read {path}: {e}") from e

    def _date_key(self, lines: list[str], name: str) -> DateKey:
        key = extract_date_key(lines)
        if key is not None:
            return key
        if self.missing_date == MissingDatePolicy.DEGRADE:
            logger.warning(f"No date field in {name}, using zero date")
            return DateKey.zero()
        raise DateKeyError(f"No date field ({DATE_FIELD_MARKER}) in {name}")

    def _validate_output(self, path: Path) -> None:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise WriteError(f"Cannot read back {path}: {e}") from e

        try:
            self.validator.validate(data, subject=path.name)
        except ValidationError:
            try:
                self.workspace.mark_corrupt(path)
            except WriteError as rename_error:
                logger.error(str(rename_error))
            raise


def select_week(outcomes: list[ProcessingOutcome], policy: WeekPolicy) -> tuple[int, int]:
    """Pick the (year, week) that names the batch archives.

    Outcomes are in processing order. Without any successful outcome the
    result is (0, 0).
    """
    pairs = [(o.year, o.week) for o in outcomes if o.success]
    if not pairs:
        return 0, 0

    if policy == WeekPolicy.LAST:
        return pairs[-1]

    counts = Counter(pairs)
    if policy == WeekPolicy.STRICT and len(counts) > 1:
        found = ", ".join(f"{y:04d}_W{w:02d}" for y, w in sorted(counts))
        raise WeekMismatchError(archive_name(*pairs[-1], MINIFIED), f"mixed weeks: {found}")

    best = max(counts.values())
    return next(pair for pair in reversed(pairs) if counts[pair] == best)


class BatchService:
    """Runs a whole input directory and packages the results.

    States: idle -> workspace_prepared -> processing_files ->
    archiving_minified -> archiving_original -> cleaning_up -> done.
    Any run-fatal error moves to failed. The workspace is removed in every
    case.
    """

    def __init__(
        self,
        minifier: MinifyService,
        archiver: ArchiverPort,
        workspace: WorkspacePort,
        week_policy: WeekPolicy = WeekPolicy.MODE,
        workers: int = 1,
    ) -> None:
        self.minifier = minifier
        self.archiver = archiver
        self.workspace = workspace
        self.week_policy = week_policy
        self.workers = workers
        self.state = BatchState.IDLE

    def run(self, input_dir: Path, output_dir: Path) -> BatchResult:
        self.state = BatchState.IDLE
        result = BatchResult()
        try:
            self.workspace.prepare()
            self._transition(BatchState.WORKSPACE_PREPARED)

            entries = self._list(input_dir)
            self._transition(BatchState.PROCESSING_FILES)
            self._process_all(entries, result)

            result.year, result.week = select_week(result.outcomes, self.week_policy)

            self._transition(BatchState.ARCHIVING_MINIFIED)
            logger.info(f"Zipping minified, no. of files: {result.passed}")
            result.archives.append(
                self._archive(self.workspace.path, output_dir, result, MINIFIED)
            )

            self._transition(BatchState.ARCHIVING_ORIGINAL)
            logger.info(f"Zipping originals, no. of files: {result.total}")
            result.archives.append(self._archive(input_dir, output_dir, result, ORIGINAL))
        except MinifyError as e:
            self.state = BatchState.FAILED
            logger.error(f"Batch failed: {e}")
            raise
        finally:
            if self.state != BatchState.FAILED:
                self._transition(BatchState.CLEANING_UP)
            self.workspace.remove()

        self._transition(BatchState.DONE)
        logger.info(
            f"Minifier finished, PASS/FAIL/TOTAL: "
            f"{result.passed}/{result.failed}/{result.total}"
        )
        return result

    def _transition(self, state: BatchState) -> None:
        logger.debug(f"Batch state: {self.state.value} -> {state.value}")
        self.state = state

    def _list(self, input_dir: Path) -> list[SourceEntry]:
        try:
            return [SourceEntry.from_path(p) for p in sorted(input_dir.iterdir())]
        except OSError as e:
            raise InputError(f"Cannot list input directory {input_dir}: {e}") from e

    def _process_all(self, entries: list[SourceEntry], result: BatchResult) -> None:
        eligible = [e for e in entries if self.minifier.is_eligible(e)]
        total = len(eligible)

        for entry in entries:
            if not self.minifier.is_eligible(entry):
                result.record(self.minifier.process(entry))

        jobs = list(enumerate(eligible, start=1))
        if self.workers <= 1:
            outcomes = [self.minifier.process(entry, index, total) for index, entry in jobs]
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [
                    executor.submit(self.minifier.process, entry, index, total)
                    for index, entry in jobs
                ]
                outcomes = [future.result() for future in futures]

        for outcome in outcomes:
            result.record(outcome)

    def _archive(
        self, source: Path, output_dir: Path, result: BatchResult, kind: str
    ) -> Path:
        name = archive_name(result.year, result.week, kind)
        try:
            return self.archiver.archive(source, output_dir / name)
        except ArchiveError:
            logger.error(f"Zipping {kind.lower()} results FAILED!: {name}")
            raise
        except OSError as e:
            raise ArchiveError(name, str(e)) from e
