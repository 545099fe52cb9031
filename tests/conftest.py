"""Shared test fixtures."""

import codecs
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from openmedia_minify.adapters.decoder import Utf16Decoder
from openmedia_minify.adapters.storage import FilesystemWorkspace
from openmedia_minify.adapters.validator import LxmlValidator
from openmedia_minify.domain.services import MinifyService
from openmedia_minify.ports.archiver import ArchiverPort
from openmedia_minify.ports.validator import ValidatorPort
from openmedia_minify.ports.workspace import WorkspacePort

SAMPLE_LINES = [
    '<?xml version="1.0" encoding="UTF-16"?>',
    "<OPENMEDIA>",
    '<OM_OBJECT SystemID = "3" ObjectID = "0001" TemplateID = "1">',
    '<OM_HEADER TemplateName = "Radio Rundown" IsEmpty = "no">',
    '<OM_FIELD FieldType = "3" FieldID = "1004" FieldName = "Začátek" IsEmpty = "no">'
    "<OM_DATETIME>20240315T060000,000</OM_DATETIME></OM_FIELD>",
    '<OM_FIELD FieldType = "1" FieldID = "8" FieldName = "Název" IsEmpty = "yes">'
    "<OM_STRING></OM_STRING></OM_FIELD>",
    '<OM_FIELD FieldType = "1" FieldID = "5" FieldName = "Autor" IsEmpty = "yes"/>',
    "</OM_HEADER>",
    '<OM_RECORD RecordID = "1">',
    '<OM_FIELD FieldType = "1" FieldID = "9" IsEmpty = "no"><OM_STRING>Zprávy</OM_STRING></OM_FIELD>',
    '<OM_FIELD FieldType = "1" FieldID = "10" IsEmpty = "yes"/>',
    "</OM_RECORD>",
    "</OM_OBJECT>",
    "</OPENMEDIA>",
]

# Lines of SAMPLE_LINES removed by the line filter
SAMPLE_DROPPED = 3


def encode_utf16(text: str, bom: bool = True) -> bytes:
    """Encode text the way the automation system exports it."""
    data = text.encode("utf-16-le")
    return codecs.BOM_UTF16_LE + data if bom else data


def sample_text(date: str = "20240315", lines: list[str] | None = None) -> str:
    source = lines if lines is not None else SAMPLE_LINES
    return "\r\n".join(line.replace("20240315", date) for line in source) + "\r\n"


@pytest.fixture
def sample_lines() -> list[str]:
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_dropped() -> int:
    return SAMPLE_DROPPED


@pytest.fixture
def write_log() -> Callable[..., Path]:
    """Factory writing a UTF-16 as-run log into a directory."""

    def _write(
        directory: Path,
        name: str,
        lines: list[str] | None = None,
        date: str = "20240315",
        bom: bool = True,
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_bytes(encode_utf16(sample_text(date, lines), bom=bom))
        return path

    return _write


@pytest.fixture
def workspace(tmp_path: Path) -> FilesystemWorkspace:
    ws = FilesystemWorkspace(tmp_path / "scratch", name="ws")
    ws.prepare()
    return ws


@pytest.fixture
def minifier(workspace: FilesystemWorkspace) -> MinifyService:
    """MinifyService wired with real adapters."""
    return MinifyService(
        decoder=Utf16Decoder(),
        validator=LxmlValidator(),
        workspace=workspace,
    )


@pytest.fixture
def mock_validator() -> MagicMock:
    """Mock validator port accepting everything."""
    mock = MagicMock(spec=ValidatorPort)
    mock.validate.return_value = None
    return mock


@pytest.fixture
def mock_archiver() -> MagicMock:
    """Mock archiver port returning the target path."""
    mock = MagicMock(spec=ArchiverPort)
    mock.archive.side_effect = lambda source, target: target
    return mock


@pytest.fixture
def mock_workspace(tmp_path: Path) -> MagicMock:
    mock = MagicMock(spec=WorkspacePort)
    mock.path = tmp_path / "mock-workspace"
    return mock


@pytest.fixture
def sample_bytes() -> bytes:
    """Sample log as exported: UTF-16LE with byte-order mark and CRLF."""
    return encode_utf16(sample_text())
