"""Validator adapter using lxml.

Without a schema only well-formedness is checked. The schema is compiled
once per validator instance and shared by all validations of a run.
"""

import logging
import threading
from pathlib import Path

from lxml import etree

from ...domain.errors import SchemaError, ValidationError
from ...ports.validator import ValidatorPort

logger = logging.getLogger(__name__)


def _entries(error_log) -> list[tuple[int, str]]:
    return [(entry.line, entry.message) for entry in error_log]


class LxmlValidator(ValidatorPort):
    """Validation implementation using libxml2 through lxml."""

    def __init__(self, schema_path: Path | None = None) -> None:
        self.schema_path = schema_path
        self.schema: etree.XMLSchema | None = None
        self._lock = threading.Lock()

        if schema_path is not None:
            try:
                self.schema = etree.XMLSchema(etree.parse(str(schema_path)))
            except (OSError, etree.XMLSyntaxError, etree.XMLSchemaParseError) as e:
                raise SchemaError(f"Cannot load schema {schema_path}: {e}") from e
            logger.info(f"Loaded schema: {schema_path}")

    def validate(self, data: bytes, subject: str = "") -> None:
        # Parsers are not shared between threads
        parser = etree.XMLParser(huge_tree=True, resolve_entities=False, no_network=True)
        try:
            document = etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            errors = _entries(e.error_log) or [(e.lineno or 0, str(e))]
            raise ValidationError(errors, subject) from e

        if self.schema is None:
            return

        with self._lock:
            if not self.schema.validate(document):
                raise ValidationError(_entries(self.schema.error_log), subject)
