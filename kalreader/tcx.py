"""Export to the Training Center XML (TCX) format.

Besides the attributes listed in :mod:`kalreader.output`, points must provide
``distance_from_in_meters(other)``.
"""

from __future__ import annotations

from typing import Any, Mapping, TextIO

from .output import OUTPUTS, FileOutput, format_number, optional
from .registry import registered

_PRECISION = 12

_HEADER = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<TrainingCenterDatabase xmlns="http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"'
    ' xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:schemaLocation='
    '"http://www.garmin.com/xmlschemas/ActivityExtension/v2 '
    "http://www.garmin.com/xmlschemas/ActivityExtensionv2.xsd "
    "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2 "
    'http://www.garmin.com/xmlschemas/TrainingCenterDatabasev2.xsd">\n'
)


def _num(value: Any) -> str:
    return format_number(value, _PRECISION)


def _opt(value: Any, prefix: str = "", suffix: str = "") -> str:
    return optional(value, prefix, suffix, _PRECISION)


@registered(OUTPUTS)
class TCXOutput(FileOutput):
    """Writes one activity whose laps each carry their track points."""

    name = "TCX"
    ext = "tcx"

    def dump_content(self, out: TextIO, session: Any, configuration: Mapping[str, str]) -> None:
        points = list(session.points)
        if not points:
            raise ValueError("session has no points")
        write = out.write
        write(_HEADER)
        write(" <Activities>\n")
        write(f'  <Activity Sport="{configuration.get("tcx_sport", "")}">\n')
        write(f"   <Id>{session.begin_time}</Id>\n")

        index = 0
        total_dist = 0.0
        previous = points[0]
        for lap in session.laps:
            if lap.start_point is not None:
                write(f'   <Lap StartTime="{lap.start_point.time_as_string()}">\n')
            else:
                write("   <Lap>\n")
            write(f"    <TotalTimeSeconds>{_num(lap.duration)}</TotalTimeSeconds>\n")
            write(f"    <DistanceMeters>{_num(lap.distance)}</DistanceMeters>\n")
            write(f"    <MaximumSpeed>{_num(lap.max_speed)}</MaximumSpeed>\n")
            write(f"    <Calories>{_num(lap.calories)}</Calories>\n")
            write(
                '    <AverageHeartRateBpm xsi:type="HeartRateInBeatsPerMinute_t"><Value>'
                f"{_num(lap.avg_heartrate)}</Value></AverageHeartRateBpm>\n"
            )
            write(
                '    <MaximumHeartRateBpm xsi:type="HeartRateInBeatsPerMinute_t"><Value>'
                f"{_num(lap.max_heartrate)}</Value></MaximumHeartRateBpm>\n"
            )
            write(_opt(lap.avg_cadence, "    <Cadence>", "</Cadence>\n"))
            write("    <Intensity>Active</Intensity>\n")
            write("    <TriggerMethod>Manual</TriggerMethod>\n")

            while index < lap.first_point_id and index < len(points):
                index += 1

            write("    <Track>\n")
            while index < len(points):
                point = points[index]
                total_dist += point.distance_from_in_meters(previous)
                self._write_trackpoint(write, point, total_dist)
                previous = point
                # The lap's last point is also the next lap's first one.
                if index == lap.last_point_id:
                    break
                index += 1
            write("    </Track>\n")
            write("   </Lap>\n")

        write("  </Activity>\n")
        write(" </Activities>\n")
        write("</TrainingCenterDatabase>\n")

    @staticmethod
    def _write_trackpoint(write, point: Any, total_dist: float) -> None:
        write("     <Trackpoint>\n")
        write(f"      <Time>{point.time_as_string()}</Time>\n")
        if point.latitude is not None and point.longitude is not None:
            write(
                "      <Position>"
                + _opt(point.latitude, "<LatitudeDegrees>", "</LatitudeDegrees>")
                + _opt(point.longitude, "<LongitudeDegrees>", "</LongitudeDegrees>")
                + "</Position>\n"
            )
        write(f"      <AltitudeMeters>{_opt(point.altitude)}</AltitudeMeters>\n")
        write(f"      <DistanceMeters>{_num(total_dist)}</DistanceMeters>\n")
        write(
            _opt(
                point.heart_rate,
                '      <HeartRateBpm xsi:type="HeartRateInBeatsPerMinute_t"><Value>',
                "</Value></HeartRateBpm>",
            )
            + "\n"
        )
        write(_opt(point.cadence, "      <Cadence>", "</Cadence>\n"))
        write("      <Extensions>\n")
        write(
            '       <TPX xmlns="http://www.garmin.com/xmlschemas/ActivityExtension/v2" '
            'CadenceSensor="Footpod">\n'
        )
        if point.speed is not None:
            write(f"         <Speed>{_num(point.speed / 3.6)}</Speed>\n")
        write(_opt(point.power, "         <Watts>", "</Watts>\n"))
        write("       </TPX>\n")
        write("      </Extensions>\n")
        write("     </Trackpoint>\n")