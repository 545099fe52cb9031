"""Decoder port - interface for character-set transcoding."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import BinaryIO


class DecoderPort(ABC):
    """Interface for turning a raw byte stream into text lines."""

    @abstractmethod
    def lines(self, stream: BinaryIO) -> Iterator[str]:
        """Yield decoded lines without their terminators.

        The iterator is single pass. Raises DecodeError on malformed input.
        """
        pass
