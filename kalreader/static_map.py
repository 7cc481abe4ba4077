"""Export a session as a static map image URL."""

from __future__ import annotations

import sys
from typing import Any, Mapping, TextIO

from .output import OUTPUTS, FileOutput, format_number
from .registry import registered

_BASE_URL = (
    "http://maps.googleapis.com/maps/api/staticmap"
    "?size=640x640&maptype=hybrid&sensor=true&path=weight:5"
)
# Static map URLs are limited to 2048 characters: 22 per point and per lap
# plus a fixed part leaves room for 89 coordinates in total.
_MAX_COORDINATES = 89


def _position(point: Any) -> str:
    return f"%7C{format_number(point.latitude, 8)},{format_number(point.longitude, 8)}"


@registered(OUTPUTS)
class GoogleStaticMapOutput(FileOutput):
    """Writes one URL with the (thinned) path and a marker at each lap start."""

    name = "GoogleStaticMap"
    ext = "lnk"

    def dump_content(self, out: TextIO, session: Any, configuration: Mapping[str, str]) -> None:
        points = list(session.points)
        laps = list(session.laps)
        room = _MAX_COORDINATES - len(laps)
        step = 1 + len(points) // room if room > 0 else 1
        out.write(_BASE_URL)
        out.write("".join(_position(point) for point in points[::step]))
        out.write("&markers=")
        for lap in laps:
            if lap.start_point is None:
                print(
                    "Start point of lap is None - This deserves a bug report !",
                    file=sys.stderr,
                )
                continue
            out.write(_position(lap.start_point))
        out.write("\n")