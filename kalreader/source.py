"""Interface of a data source: a USB device, a recorded file, and so on."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Source(ABC):
    """A source of raw data exchanged with a device."""

    name: str = ""

    @abstractmethod
    def init(self, vendor_id: int, product_id: int) -> None:
        """Prepare the source before it is used."""

    @abstractmethod
    def release(self) -> None:
        """Release the source once it is no longer needed."""

    @abstractmethod
    def read_data(self, endpoint: int) -> tuple[bytes, bool]:
        """Read one chunk of data.

        Returns the data read and whether more data may follow.
        """

    @abstractmethod
    def write_data(self, endpoint: int, data: bytes) -> None:
        """Send data to the source."""

    @abstractmethod
    def control_transfer(
        self, request_type: int, request: int, value: int, index: int, data: bytes
    ) -> None:
        """Send a control transfer to the source."""