"""UTF-16 line decoder."""

import codecs
from collections.abc import Iterator
from typing import BinaryIO

from ...domain.errors import DecodeError
from ...ports.decoder import DecoderPort

CHUNK_SIZE = 64 * 1024


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


class Utf16Decoder(DecoderPort):
    """Decode UTF-16 streams, little-endian unless a byte-order mark says otherwise."""

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        self.chunk_size = chunk_size

    def lines(self, stream: BinaryIO) -> Iterator[str]:
        head = stream.read(2)
        if head == codecs.BOM_UTF16_BE:
            encoding, pending_bytes = "utf-16-be", b""
        elif head == codecs.BOM_UTF16_LE:
            encoding, pending_bytes = "utf-16-le", b""
        else:
            encoding, pending_bytes = "utf-16-le", head

        decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        pending = ""
        try:
            pending += decoder.decode(pending_bytes)
            for chunk in iter(lambda: stream.read(self.chunk_size), b""):
                pending += decoder.decode(chunk)
                *complete, pending = pending.split("\n")
                for line in complete:
                    yield _strip_cr(line)
            pending += decoder.decode(b"", final=True)
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-16 input: {e}") from e

        # A final line without terminator still counts; an empty tail does not
        if pending:
            yield _strip_cr(pending)
