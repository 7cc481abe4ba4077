"""Export to GPX 1.1, optionally with gpxdata and gpxtpx extensions."""

from __future__ import annotations

import sys
from typing import Any, Mapping, TextIO

from .output import OUTPUTS, FileOutput, format_number, optional
from .registry import registered

_PRECISION = 8


def _num(value: Any) -> str:
    return format_number(value, _PRECISION)


def _opt(value: Any, prefix: str, suffix: str) -> str:
    return optional(value, prefix, suffix, _PRECISION)


def _has_position(point: Any) -> bool:
    return point.latitude is not None and point.longitude is not None


@registered(OUTPUTS)
class GPXOutput(FileOutput):
    """Writes a track; ``gpx_extensions`` may name ``gpxdata`` and ``gpxtpx``."""

    name = "GPX"
    ext = "gpx"

    def dump_content(self, out: TextIO, session: Any, configuration: Mapping[str, str]) -> None:
        extensions = configuration.get("gpx_extensions", "")
        gpxdata = "gpxdata" in extensions
        gpxtpx = "gpxtpx" in extensions
        has_extension = gpxdata or gpxtpx
        write = out.write

        write('<?xml version="1.0"?>\n')
        write('<gpx version="1.1"\n')
        write('     creator="Kalenji Reader"\n')
        write('     xmlns="http://www.topografix.com/GPX/1/1"\n')
        write('     xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"\n')
        if gpxdata:
            write('     xmlns:gpxdata="http://www.cluetrust.com/XML/GPXDATA/1/0"\n')
        if gpxtpx:
            write('     xmlns:gpxtpx="http://www.garmin.com/xmlschemas/TrackPointExtension/v1"\n')
        write('     xsi:schemaLocation="http://www.topografix.com/GPX/1/1\n')
        write('                          http://www.topografix.com/GPX/1/1/gpx.xsd">\n')

        write("  <metadata>\n")
        write(f"    <name>{session.name}</name>\n")
        write(f"    <time>{session.begin_time}</time>\n")
        write("  </metadata>\n")

        write("  <trk>\n")
        write("    <trkseg>\n")
        for point in session.points:
            write(
                "      <trkpt "
                + _opt(point.latitude, 'lat="', '" ')
                + _opt(point.longitude, 'lon="', '" ')
                + ">\n"
            )
            write(_opt(point.altitude, "        <ele>", "</ele>") + "\n")
            write(f"        <time>{point.time_as_string()}</time>\n")
            if has_extension:
                write("        <extensions>\n")
                write(_opt(point.power, "          <power>", "</power>\n"))
            if gpxdata:
                write(_opt(point.heart_rate, "          <gpxdata:hr>", "</gpxdata:hr>\n"))
                write(_opt(point.cadence, "          <gpxdata:cadence>", "</gpxdata:cadence>\n"))
            if gpxtpx:
                write("          <gpxtpx:TrackPointExtension>\n")
                write(_opt(point.heart_rate, "            <gpxtpx:hr>", "</gpxtpx:hr>\n"))
                write(_opt(point.cadence, "            <gpxtpx:cad>", "</gpxtpx:cad>\n"))
                write("          </gpxtpx:TrackPointExtension>\n")
            if has_extension:
                write("        </extensions>\n")
            write("      </trkpt>\n")
        write("    </trkseg>\n")
        write("  </trk>\n")

        if gpxdata:
            write("  <extensions>\n")
            self._write_laps(write, session, configuration)
            write("  </extensions>\n")
        write("</gpx>\n")

    @staticmethod
    def _write_laps(write, session: Any, configuration: Mapping[str, str]) -> None:
        index = 0
        for lap in session.laps:
            start, end = lap.start_point, lap.end_point
            if start is None or end is None:
                missing = "start" if start is None else "end"
                print(
                    f"Oups ! I've got a lap without {missing} point: "
                    f"({lap.first_point_id} - {lap.last_point_id}). "
                    "This shouldn't happen ! Report a bug ...",
                    file=sys.stderr,
                )
                continue
            index += 1
            write("    <gpxdata:lap>\n")
            write(f"      <gpxdata:index>{index}</gpxdata:index>\n")
            if _has_position(start):
                write(
                    f'      <gpxdata:startPoint lat="{_num(start.latitude)}" '
                    f'lon="{_num(start.longitude)}"/>\n'
                )
            if _has_position(end):
                write(
                    f'      <gpxdata:endPoint lat="{_num(end.latitude)}" '
                    f'lon="{_num(end.longitude)}" />\n'
                )
            write(f"      <gpxdata:startTime>{start.time_as_string()}</gpxdata:startTime>\n")
            write(f"      <gpxdata:elapsedTime>{_num(lap.duration)}</gpxdata:elapsedTime>\n")
            write(_opt(lap.calories, "      <gpxdata:calories>", "</gpxdata:calories>\n"))
            write(f"      <gpxdata:distance>{_num(lap.distance)}</gpxdata:distance>\n")
            write(_opt(
                lap.avg_speed,
                '      <gpxdata:summary name="AverageSpeed" kind="avg">', "</gpxdata:summary>\n",
            ))
            write(_opt(
                lap.max_speed,
                '      <gpxdata:summary name="MaximumSpeed" kind="max">', "</gpxdata:summary>\n",
            ))
            write(_opt(
                lap.avg_heartrate,
                '      <gpxdata:summary name="AverageHeartRateBpm" kind="avg">',
                "</gpxdata:summary>\n",
            ))
            write(_opt(
                lap.max_heartrate,
                '      <gpxdata:summary name="MaximumHeartRateBpm" kind="max">',
                "</gpxdata:summary>\n",
            ))
            write(f"      <gpxdata:trigger>{configuration.get('trigger', '')}</gpxdata:trigger>\n")
            write("      <gpxdata:intensity>active</gpxdata:intensity>\n")
            write("    </gpxdata:lap>\n")