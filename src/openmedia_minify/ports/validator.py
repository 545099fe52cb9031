"""Validator port - interface for schema validation."""

from abc import ABC, abstractmethod


class ValidatorPort(ABC):
    """Interface for document validation."""

    @abstractmethod
    def validate(self, data: bytes, subject: str = "") -> None:
        """Validate a document buffer.

        Raises ValidationError carrying (line, message) pairs on failure.
        """
        pass
