"""CSV export: elapsed time, cumulated distance and altitude per point."""

from __future__ import annotations

import math
from typing import Any, Mapping, TextIO

from .output import OUTPUTS, FileOutput, format_number
from .registry import registered

_EARTH_RADIUS = 6371000.0


def _haversine(first: Any, second: Any) -> float:
    d_lat = (second.latitude - first.latitude) * math.pi / 180.0
    d_lon = (second.longitude - first.longitude) * math.pi / 180.0
    lat1 = first.latitude * math.pi / 180.0
    lat2 = second.latitude * math.pi / 180.0
    a = math.sin(d_lat / 2) ** 2 + math.sin(d_lon / 2) ** 2 * math.cos(lat1) * math.cos(lat2)
    return _EARTH_RADIUS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _has_position(point: Any) -> bool:
    return point.latitude is not None and point.longitude is not None


@registered(OUTPUTS)
class CSVOutput(FileOutput):
    """Writes ``time,distance,altitude`` rows, distances in whole meters."""

    name = "CSV"
    ext = "csv"

    def dump_content(self, out: TextIO, session: Any, configuration: Mapping[str, str]) -> None:
        points = list(session.points)
        if not points:
            raise ValueError("session has no points")
        out.write(
            f"Time (s),Distance {session.name} (m),Altitude {session.name} (m)\n"
        )
        distance = 0
        time_begin = points[0].time
        previous = None
        for point in points:
            if previous is not None:
                if _has_position(point) and _has_position(previous):
                    step = _haversine(previous, point)
                else:
                    step = (point.time - previous.time) * (point.speed or 0.0) / 3.6
                distance = int(distance + step)
            previous = point
            out.write(
                f"{point.time - time_begin},{distance},{format_number(point.altitude, 8)}\n"
            )