"""Export to KML, with lap placemarks, the track and an animated tour."""

from __future__ import annotations

from typing import Any, Mapping, TextIO

from .output import OUTPUTS, FileOutput, duration_as_string, format_number, optional
from .registry import registered

_PRECISION = 8
_STEP_DURATION = 0.1

_STYLES = """<Style id="kalenji_lap">
<IconStyle>
<color>ff00ffff</color>
<scale>0.7</scale>
<Icon>
<href>http://maps.google.com/mapfiles/kml/pal4/icon28.png</href>
</Icon>
</IconStyle>
</Style>
<Style id="kalenji_runner">
<IconStyle>
<color>ff0000ff</color>
<scale>1.0</scale>
<Icon>
<href>http://maps.google.com/mapfiles/kml/pal2/icon57.png</href>
</Icon>
</IconStyle>
</Style>
<Style id="kalenji_trajet">
<IconStyle>
<scale>1.1</scale>
<Icon>
<href>http://maps.google.com/mapfiles/kml/pushpin/ylw-pushpin.png</href>
</Icon>
<hotSpot x="20" y="2" xunits="pixels" yunits="pixels"/>
</IconStyle>
<LineStyle>
<color>ff00ffff</color>
<width>3</width>
</LineStyle>
</Style>
"""


def _num(value: Any) -> str:
    return format_number(value, _PRECISION)


def _opt(value: Any, prefix: str, suffix: str) -> str:
    return optional(value, prefix, suffix, _PRECISION)


def _coordinates(point: Any) -> str:
    return f"{_num(point.longitude)},{_num(point.latitude)},{_num(point.altitude)}"


@registered(OUTPUTS)
class KMLOutput(FileOutput):
    """Writes a KML document to be played back in a globe viewer."""

    name = "KML"
    ext = "kml"

    def dump_content(self, out: TextIO, session: Any, configuration: Mapping[str, str]) -> None:
        points = list(session.points)
        if not points:
            raise ValueError("session has no points")
        write = out.write
        write('<?xml version="1.0" encoding="UTF-8"?>\n')
        write(
            '<kml xmlns="http://www.opengis.net/kml/2.2" '
            'xmlns:gx="http://www.google.com/kml/ext/2.2" '
            'xmlns:kml="http://www.opengis.net/kml/2.2" '
            'xmlns:atom="http://www.w3.org/2005/Atom">\n'
        )
        write("<Document>\n")
        write(f"<name>{session.name}</name>\n")
        write("<open>1</open>\n")
        write(_STYLES)

        for number, lap in enumerate(session.laps, start=1):
            if lap.end_point is None:
                continue
            write("<Placemark>\n")
            write(f"<name>Lap {number}</name>\n")
            write("<styleUrl>kalenji_lap</styleUrl>\n")
            write("<description>\n")
            write(f"<b>Distance:</b> {_num(lap.distance / 1000.0)} km<br/>")
            write(f"<b>Time:</b> {duration_as_string(lap.duration)}<br/>")
            write(_opt(lap.avg_speed, "<b>Average speed:</b> ", " km/h<br/>"))
            write(_opt(lap.max_speed, "<b>Maximum speed:</b> ", " km/h<br/>"))
            write(_opt(lap.avg_heartrate, "<b>Average heartrate:</b> ", " bpm<br/>"))
            write(_opt(lap.max_heartrate, "<b>Maximum heartrate:</b> ", " bpm<br/>"))
            write("</description>\n")
            write("<Point>\n")
            write(f"<coordinates>{_coordinates(lap.end_point)}</coordinates>\n")
            write("</Point>\n")
            write("</Placemark>\n")

        write("<Placemark>\n")
        write("<name>Trajet</name>\n")
        write("<styleUrl>#kalenji_trajet</styleUrl>\n")
        write("<LineString>\n")
        write("<tessellate>1</tessellate>\n")
        write("<coordinates>\n")
        write("".join(f"{_coordinates(point)} " for point in points))
        write("</coordinates>\n")
        write("</LineString>\n")
        write("</Placemark>\n")

        write("<Placemark>\n")
        write("<name>Runner</name>\n")
        write("<styleUrl>kalenji_runner</styleUrl>\n")
        write('<Point id="runner">\n')
        write(f"<coordinates>{_coordinates(points[0])}</coordinates>\n")
        write("</Point>\n")
        write("</Placemark>\n\n")

        duration = _num(_STEP_DURATION)
        write("<gx:Tour>\n")
        write("<name>Animation</name>\n")
        write("<gx:Playlist>\n")
        for point in points:
            write("<gx:AnimatedUpdate>\n")
            write(f"<gx:duration>{duration}</gx:duration>\n")
            write("<Update>\n")
            write("<targetHref></targetHref>\n")
            write("<Change>\n")
            write('<Point targetId="runner"> \n')
            write(f"<coordinates>{_coordinates(point)}</coordinates> \n")
            write("</Point>\n")
            write("</Change> \n")
            write("</Update>\n")
            write("<gx:delayedStart>0</gx:delayedStart>\n")
            write("</gx:AnimatedUpdate>\n\n")
            write("<gx:Wait>\n")
            write(f"<gx:duration>{duration}</gx:duration>\n")
            write("</gx:Wait>\n")
        write("</gx:Playlist>\n")
        write("</gx:Tour>\n")
        write("</Document>\n")
        write("</kml>\n")