"""Base classes for session outputs and the number formatting they share.

Outputs work on duck-typed session objects. A session provides ``name``,
``begin_time`` (text), ``duration``, ``distance``, ``avg_heartrate``,
``max_heartrate``, ``avg_speed``, ``max_speed``, ``points``, ``laps`` and the
start date parts ``year``, ``month``, ``day``, ``hour``, ``minutes``,
``seconds``. A point provides ``latitude``, ``longitude``, ``altitude``,
``speed``, ``heart_rate``, ``cadence``, ``power``, ``time`` (seconds) and a
``time_as_string()`` method. A lap provides ``start_point``, ``end_point``,
``first_point_id``, ``last_point_id``, ``lap_num``, ``duration``,
``distance``, ``calories``, ``avg_speed``, ``max_speed``, ``avg_heartrate``,
``max_heartrate`` and ``avg_cadence``. Optional values are None when unknown.
"""

from __future__ import annotations

import math
import os
from abc import ABC, abstractmethod
from typing import Any, Mapping, TextIO

from .registry import LayerRegistry

OUTPUTS: LayerRegistry = LayerRegistry()


def format_number(value: Any, precision: int = 6) -> str:
    """Format a value the way a stream with ``precision`` significant digits does.

    Integers are written in full, floats with at most ``precision``
    significant digits and no trailing zeros; None gives an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "-nan" if math.copysign(1.0, value) < 0 else "nan"
        if math.isinf(value):
            return "-inf" if value < 0 else "inf"
        return f"{value:.{precision}g}"
    return str(value)


def optional(value: Any, prefix: str = "", suffix: str = "", precision: int = 6) -> str:
    """Return ``prefix + value + suffix`` if the value is known, else an empty string."""
    if value is None:
        return ""
    return f"{prefix}{format_number(value, precision)}{suffix}"


def duration_as_string(seconds: float, with_ms: bool = False) -> str:
    """Format a duration in seconds as e.g. ``10d 7h42m20s`` (plus milliseconds)."""
    if with_ms:
        whole, millis = divmod(round(seconds * 1000), 1000)
    else:
        whole, millis = int(seconds), 0
    days, rest = divmod(whole, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    text = ""
    if days:
        text += f"{days}d "
    if days or hours:
        text += f"{hours}h"
    if days or hours or minutes:
        text += f"{minutes}m"
    text += f"{secs}s"
    if with_ms:
        text += f"{millis:03d}"
    return text


class Output(ABC):
    """Something a session can be exported to."""

    name: str = ""

    @abstractmethod
    def dump(self, session: Any, configuration: Mapping[str, str]) -> None:
        """Export the session."""

    def exists(self, session: Any, configuration: Mapping[str, str]) -> bool:
        """Whether the session was already exported; unknown outputs say no."""
        return False


class FileOutput(Output):
    """An output that writes one file per session."""

    ext: str = ""

    def file_name(self, session: Any, configuration: Mapping[str, str]) -> str:
        """Path of the file for the session, named after it or after its start time."""
        directory = configuration.get("directory", "")
        if configuration.get("output_name", "") == "name":
            stem = str(session.name)
        else:
            stem = (
                f"{session.year}{session.month:02d}{session.day:02d}_"
                f"{session.hour:02d}{session.minutes:02d}{session.seconds:02d}"
            )
        return f"{directory}/{stem}.{self.ext}"

    def dump(self, session: Any, configuration: Mapping[str, str]) -> None:
        filename = self.file_name(session, configuration)
        with open(filename, "w", encoding="utf-8", newline="") as out:
            print(f"Creating {filename}")
            self.dump_content(out, session, configuration)

    def exists(self, session: Any, configuration: Mapping[str, str]) -> bool:
        return os.path.exists(self.file_name(session, configuration))

    @abstractmethod
    def dump_content(self, out: TextIO, session: Any, configuration: Mapping[str, str]) -> None:
        """Write the session to an open text stream."""