"""A source that replays the lines of a file instead of a USB device."""

from __future__ import annotations

import os

from .source import Source


class FileSource(Source):
    """Each read returns the next line of the file."""

    name = "File"

    def __init__(self, filename: str | os.PathLike) -> None:
        self.filename = os.fspath(filename)
        self._lines: list[bytes] = []
        self._index = 0

    def init(self, vendor_id: int, product_id: int) -> None:
        """Read the whole file."""
        if not os.access(self.filename, os.R_OK):
            raise OSError(
                f"Unable to access {self.filename}: file doesn't exist or is not readable"
            )
        try:
            with open(self.filename, "rb") as handle:
                content = handle.read()
        except OSError as exc:
            raise OSError(f"Unable to open {self.filename}") from exc
        self._lines.extend(content.split(b"\n"))

    def release(self) -> None:
        """Nothing to release for a file."""

    def read_data(self, endpoint: int) -> tuple[bytes, bool]:
        """Return the next line and whether lines remain after it."""
        data = b""
        if self._index < len(self._lines):
            data = self._lines[self._index]
            self._index += 1
        return data, self._index < len(self._lines)

    def write_data(self, endpoint: int, data: bytes) -> None:
        """Anything sent to a file source is ignored."""

    def control_transfer(
        self, request_type: int, request: int, value: int, index: int, data: bytes
    ) -> None:
        """Control transfers are ignored."""