"""Error taxonomy.

Per-file errors (decode, date, filename, validation, write) are recorded on
the file's outcome and never abort a batch. Input, workspace and archive
errors are fatal to the run.
"""


class MinifyError(Exception):
    """Base class for all minifier errors."""


class DecodeError(MinifyError):
    """Source bytes could not be decoded as UTF-16."""


class DateKeyError(MinifyError):
    """Date field missing or not parseable."""


class FilenameError(MinifyError):
    """Source filename does not have the expected segments."""


class ValidationError(MinifyError):
    """Document failed well-formedness or schema validation."""

    def __init__(self, errors: list[tuple[int, str]], subject: str = "") -> None:
        self.errors = errors or [(0, "unknown validation error")]
        self.subject = subject
        line, message = self.errors[0]
        prefix = f"{subject}: " if subject else ""
        super().__init__(f"{prefix}line {line}: {message}")

    @property
    def line(self) -> int:
        return self.errors[0][0]

    @property
    def message(self) -> str:
        return self.errors[0][1]


class WriteError(MinifyError):
    """Minified output could not be written."""


class InputError(MinifyError):
    """Input directory could not be listed."""


class WorkspaceError(MinifyError):
    """Scratch workspace could not be prepared."""


class ArchiveError(MinifyError):
    """Archive could not be written."""

    def __init__(self, archive_name: str, reason: str) -> None:
        self.archive_name = archive_name
        super().__init__(f"Failed to create zip archive: {archive_name}: {reason}")


class WeekMismatchError(ArchiveError):
    """Successful files span more than one ISO week."""


class SchemaError(MinifyError):
    """Validation schema could not be loaded."""
