"""Export to the Fitlog fitness workbook XML format."""

from __future__ import annotations

from typing import Any, Mapping, TextIO

from .output import OUTPUTS, FileOutput, format_number, optional
from .registry import registered

_PRECISION = 8


def _num(value: Any) -> str:
    return format_number(value, _PRECISION)


def _opt(value: Any, prefix: str, suffix: str) -> str:
    return optional(value, prefix, suffix, _PRECISION)


@registered(OUTPUTS)
class FitlogOutput(FileOutput):
    """Writes one activity with its laps and track points."""

    name = "Fitlog"
    ext = "fit"

    def dump_content(self, out: TextIO, session: Any, configuration: Mapping[str, str]) -> None:
        points = list(session.points)
        if not points:
            raise ValueError("session has no points")
        write = out.write
        write('<?xml version="1.0" encoding="utf-8"?>\n')
        write(
            '<FitnessWorkbook xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            'xmlns:xsd="http://www.w3.org/2001/XMLSchema" '
            'xmlns="http://www.zonefivesoftware.com/xmlschemas/FitnessLogbook/v2">\n'
        )
        write(" <AthleteLog>\n")
        write("  <Athlete />\n")
        write(f'  <Activity StartTime="{session.begin_time}">\n')
        write(f'   <Duration TotalSeconds="{_num(session.duration)}" />\n')
        write(f'   <Distance TotalMeters="{_num(session.distance)}" />\n')
        if session.avg_heartrate is not None or session.max_heartrate is not None:
            write(
                "   <HeartRate "
                + _opt(session.avg_heartrate, 'AverageBPM="', '" ')
                + _opt(session.max_heartrate, 'MaximumBPM="', '" ')
                + "/>\n"
            )
        write("   <Laps>\n")
        for lap in session.laps:
            write(
                f'    <Lap StartTime="{lap.start_point.time_as_string()}" '
                f'DurationSeconds="{_num(lap.duration)}" >\n'
            )
            write(f'     <Distance TotalMeters="{_num(lap.distance)}" />\n')
            write(_opt(lap.avg_heartrate, '     <HeartRate AverageBPM="', '" />\n'))
            write(_opt(lap.calories, '     <Calories TotalCal="', '" />\n'))
            write("    </Lap>\n")
        write("   </Laps>\n")

        write(f'   <Track StartTime="{session.begin_time}">\n')
        first_time = previous_time = points[0].time
        total_dist = 0.0
        for point in points:
            elapsed = point.time - first_time
            total_dist += (point.time - previous_time) * (point.speed or 0.0) / 3.6
            write(
                f'    <pt tm="{int(elapsed)}" dist="{_num(total_dist)}" '
                + _opt(point.heart_rate, 'hr="', '" ')
                + _opt(point.latitude, 'lat="', '" ')
                + _opt(point.longitude, 'lon="', '" ')
                + _opt(point.altitude, 'ele="', '" ')
                + "/>\n"
            )
            previous_time = point.time
        write("   </Track>\n")
        write("  </Activity>\n")
        write(" </AthleteLog>\n")
        write("</FitnessWorkbook>\n")