"""A source that transparently logs the traffic of another source."""

from __future__ import annotations

import os

from .source import Source


def _hex_line(direction: str, data: bytes) -> str:
    return f" {direction} " + "".join(f"{byte:02x} " for byte in data) + "\n"


class LoggingSource(Source):
    """Forwards every call to a wrapped source and appends its traffic to a log.

    The log format is the one read back by the hexdump file source.
    """

    name = "Logger"

    def __init__(self, source: Source, log_filename: str | os.PathLike) -> None:
        if source is None:
            raise ValueError("Source passed to Logger is None")
        self.source = source
        self.log_filename = os.fspath(log_filename)

    def _log(self, direction: str, data: bytes | None) -> None:
        with open(self.log_filename, "a", encoding="ascii") as log:
            log.write(_hex_line(direction, data or b""))

    def init(self, vendor_id: int, product_id: int) -> None:
        self.source.init(vendor_id, product_id)

    def release(self) -> None:
        self.source.release()

    def read_data(self, endpoint: int) -> tuple[bytes, bool]:
        data, more = self.source.read_data(endpoint)
        self._log("<=", data)
        return data, more

    def write_data(self, endpoint: int, data: bytes) -> None:
        self.source.write_data(endpoint, data)
        self._log("=>", data)

    def control_transfer(
        self, request_type: int, request: int, value: int, index: int, data: bytes
    ) -> None:
        self.source.control_transfer(request_type, request, value, index, data)