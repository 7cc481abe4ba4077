"""A source that replays the received data recorded in a hexdump log."""

from __future__ import annotations

import os
import re

from .source import Source

_PREFIX = " <= "
_HEX = re.compile(r"(?:0[xX])?([0-9a-fA-F]+)")


def _parse_bytes(text: str) -> bytes:
    """Parse whitespace-separated hex values until the first invalid token."""
    values = bytearray()
    for token in text.split():
        match = _HEX.match(token)
        if match is None:
            break
        values.append(int(match.group(1), 16) & 0xFF)
        if match.end() != len(token):
            break
    return bytes(values)


class HexdumpFileSource(Source):
    """Each read returns the next ``' <= '`` line of a hexdump log, as bytes."""

    name = "HexdumpFile"

    def __init__(self, filename: str | os.PathLike) -> None:
        self.filename = os.fspath(filename)
        self._chunks: list[bytes] = []
        self._index = 0

    def init(self, vendor_id: int, product_id: int) -> None:
        """Read and decode the whole file."""
        if not os.access(self.filename, os.R_OK):
            raise OSError(f"Unable to access {self.filename}")
        try:
            with open(self.filename, "rb") as handle:
                content = handle.read().decode("latin-1")
        except OSError as exc:
            raise OSError(f"Unable to open {self.filename}") from exc
        self._chunks.extend(
            _parse_bytes(line[len(_PREFIX):])
            for line in content.split("\n")
            if line.startswith(_PREFIX) and len(line) > len(_PREFIX)
        )

    def release(self) -> None:
        """Nothing to release for a file."""

    def read_data(self, endpoint: int) -> tuple[bytes, bool]:
        """Return the next recorded chunk and whether chunks remain after it."""
        data = b""
        if self._index < len(self._chunks):
            data = self._chunks[self._index]
            self._index += 1
        return data, self._index < len(self._chunks)

    def write_data(self, endpoint: int, data: bytes) -> None:
        """Anything sent to a file source is ignored."""

    def control_transfer(
        self, request_type: int, request: int, value: int, index: int, data: bytes
    ) -> None:
        """Control transfers are ignored."""