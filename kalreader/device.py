"""Interface of a GPS watch or bike computer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .source import Source


@dataclass(frozen=True)
class DeviceId:
    """USB identifiers of a device."""

    vendor_id: int
    product_id: int


class DeviceTarget(Enum):
    """The kind of activity a device records."""

    RUNNING = "Running"
    BIKING = "Biking"


class Device(ABC):
    """A GPS device that sessions can be read from and exported to.

    Subclasses set the class attributes ``name`` and ``device_id``.
    """

    name: str = ""
    device_id: DeviceId | None = None
    target: DeviceTarget = DeviceTarget.RUNNING

    def __init__(
        self,
        configuration: Mapping[str, str] | None = None,
        source: Source | None = None,
    ) -> None:
        self.configuration: dict[str, str] = dict(configuration or {})
        self.source = source

    @abstractmethod
    def init(self, device_id: DeviceId) -> None:
        """Prepare the device before talking to it."""

    @abstractmethod
    def release(self) -> None:
        """Release the device once the work is over."""

    @abstractmethod
    def get_sessions_list(self) -> dict[Any, Any]:
        """Read the list of sessions from the device, keyed by session id."""

    @abstractmethod
    def export_session(self, session: Any) -> None:
        """Send a session from the computer to the device."""

    @abstractmethod
    def get_sessions_details(self, sessions: dict[Any, Any]) -> None:
        """Fill the given sessions in place with their details."""

    def log_verbose(self, message: str) -> None:
        """Print ``message`` when the configuration enables verbose mode."""
        if self.configuration.get("verbose") == "true":
            print(f"{self.name}: {message}")