"""Export a session as an HTML page with an interactive map and graphs.

Besides the attributes listed in :mod:`kalreader.output`, the session must
provide ``time_t`` (start time in seconds) and
``ensure_point_distance_are_ok()``. Points must provide ``distance``, and
their ``time_as_string`` must accept two boolean arguments.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Mapping, TextIO

from .output import OUTPUTS, FileOutput, duration_as_string, format_number, optional
from .registry import registered

_PRECISION = 8
_SUMMARY_PRECISION = 6


def _lines(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines)


_HEAD_STYLE = _lines(
    "<style media='screen' type='text/css'>",
    ".dygraph-legend {",
    "    width: 100px;",
    "    background-color: transparent !important;",
    "    left: 75px !important;",
    "    top: 5px !important;",
    "    width: 400px !important;",
    "    ",
    "}",
    "</style>",
)

_POPUP_SCRIPT = _lines(
    '<script type="text/javascript">',
    "popupGlobal = null;",
    "highlightedPoint = null;",
    "function lap_popup_callback(event, dataLapPoint)",
    "{",
    "    var popup = new google.maps.InfoWindow({position: event.latLng, content: dataLapPoint.infos});",
    "    popup.open(map);",
    "    return popup;",
    "}",
    "function point_popup_callback(event,dataPoint)",
    "{",
    "    var popup = new google.maps.InfoWindow({position: event.latLng, ",
    '                                            content: "<b>Time:</b> " + dataPoint.time'
    ' + "<br /><b>Elapsed:</b> " + dataPoint.duration +"<br /><b>Speed:</b> " + dataPoint.speed'
    ' + " km/h<br /><b>Heartrate:</b> " + dataPoint.heartrate +" bpm<br/><b>Elevation:</b> "'
    '+ dataPoint.altitude + " m"});',
    "    popup.open(map);",
    "    return popup;",
    "}",
    "pointsList = Array(",
)

_MAP_SCRIPT = _lines(
    "var graph;",
    "var XValueToPointId = {};",
    "var PointIdToXValue = {};",
    'var xAxisAttribute = "elapsed";',
    "function loadMap() ",
    "{",
    "\tvar centerLatLng = new google.maps.LatLng(pointsList[0].lat, pointsList[0].long);",
    "\tvar myOptions = {",
    "\t      zoom: 14,",
    "\t      center: centerLatLng,",
    "\t      scaleControl: true,",
    "\t      mapTypeId: google.maps.MapTypeId.HYBRID",
    "\t};",
    "",
    '\tmap = new google.maps.Map(document.getElementById("map"), myOptions);',
    "   highlightedPoint = new google.maps.Marker({position: centerLatLng, map: map, zIndex: 1});",
    "\tvar image_size = new google.maps.Size(32, 32);",
    "\tvar image_origin = new google.maps.Point(0, 0);",
    "\tvar image_anchor = new google.maps.Point(3, 25);",
    "\tfor (i=0; i<waypointsList.length; i++)",
    "\t{",
    "\t        var dataLapPoint = waypointsList[i];",
    "\t\tvar point = new google.maps.LatLng(dataLapPoint.lat, dataLapPoint.long);",
    '\t\tvar markerImage = new google.maps.MarkerImage('
    '"http://www.icone-gif.com/icone/isometrique/32x32/green-flag.png",'
    " image_size, image_origin, image_anchor);",
    "\t\tvar markerOptions = {",
    "\t\t\ticon: markerImage,",
    "\t\t\tposition: point}",
    "\t\tvar markerD = new google.maps.Marker(markerOptions); ",
    "\t\tmarkerD.setMap(map);",
    "\t\tattachLapPopupHandler(markerD, dataLapPoint);",
    "\t}",
    "",
    "\tfor (i=0; i<pointsList.length; i++)",
    "\t{",
    "\t\tif(i > 0)",
    "\t\t{",
    "\t\t\tvar previousDataPoint = pointsList[i-1];",
    "\t\t\tvar currentDataPoint = pointsList[i];",
    "\t\t\tvar startPoint = new google.maps.LatLng(previousDataPoint.lat, previousDataPoint.long);",
    "\t\t\tvar endPoint = new google.maps.LatLng(currentDataPoint.lat, currentDataPoint.long);",
    "\t\t\tvar pathArray = Array(startPoint, endPoint);",
    "\t\t\tvar polyline = new google.maps.Polyline({path: pathArray,",
    "\t\t\t\t\tstrokeColor: currentDataPoint.color,",
    "\t\t\t\t\tstrokeOpacity: 0.9,",
    "\t\t\t\t\tstrokeWeight: 5,",
    "\t\t\t\t\t});",
    "\t\t\tpolyline.setMap(map);",
    "\t\t\tattachPopupHandler(polyline, currentDataPoint);",
    "\t\t        attachMouseOverHandler(polyline, i);",
    "\t\t}",
    "\t}",
    "}",
    "function attachLapPopupHandler(mapElement, dataLapPoint) {",
    "     google.maps.event.addListener(mapElement, 'click', function(evt) "
    "{lap_popup_callback(evt,dataLapPoint);});",
    "}",
    "function attachPopupHandler(mapElement, dataPoint) {",
    "     google.maps.event.addListener(mapElement, 'click', function(evt) "
    "{point_popup_callback(evt,dataPoint);});",
    "}",
    "function attachMouseOverHandler(mapElement, point) {",
    "     google.maps.event.addListener(mapElement, 'mouseover', function() "
    "{graph.setSelection(point);});",
    "}",
    "//]]>",
    "</script>",
    '<script type="text/javascript" src="http://dygraphs.com/1.0.1/dygraph-combined.js"></script>',
    '<script type="text/javascript">',
    "// point ID, elapsed time (ms), speed (km/h), heartrate (bpm), elevation (m)",
)

_GRAPH_SCRIPT = _lines(
    "var displayData = [true, true, true];",
    'var labelsData = ["Speed", "Heart Rate", "Altitude"];',
    "var XAxisValueFormater = {",
    '    "elapsed": function(ms,multiline) {',
    "\t     var h = Math.floor(ms / (61 * 60 * 1000));",
    "\t     ms = ms - h * (60 * 60 * 1000);",
    "\t     var m = Math.floor(ms / (60 * 1000));",
    "\t     ms = ms - m * (60 * 1000);",
    "\t     var s = Math.floor(ms / 1000);",
    "\t     ms = ms - (s * 1000);",
    "\t     ths = Math.floor(ms / 10);",
    '\t     var r = "";',
    '\t     if(h!==0) {r = r + h +"h"; if(multiline) {r = r +"<br/>"}}',
    '\t     r = r + m + "mn"; if(multiline) {r = r +"<br/>"}',
    '\t     r = r + s + "." + ths +"s";',
    "\t     return r;",
    "    },",
    '    "distance": function(dInMeter,multiline) {',
    "\t     var tm = Math.floor(dInMeter / 100);",
    '\t     var r = "" + (tm / 10.);',
    '\t     if(multiline) {r = r +"<br/>"};',
    '\t     r = r + "Km";',
    "\t     return r;",
    "    }",
    "}",
    "function loadGraph() ",
    "{",
    '        if(document.getElementById("xAxisAttributeDistance").checked) {',
    '           xAxisAttribute = "distance";',
    "        }",
    "        else {",
    '           xAxisAttribute = "elapsed";',
    "        }",
    "   var lapsXValues = [];",
    "\tvar graphDatas=[];",
    "\tvar labels=[];",
    "\tvar iLaps = 0;",
    "\tfor(var i = 0; i < pointsList.length; i++)",
    "\t{",
    "\t\tvar col = 0;",
    "\t\tgraphDatas[i] = [];",
    '\t\tlabels[col] = "Point ID";',
    "\t\tvar xValue = pointsList[i][xAxisAttribute];",
    "\t\tgraphDatas[i][col++] = xValue;",
    "\t\tXValueToPointId[xValue] = i;",
    "\t\tPointIdToXValue[i] = xValue;",
    '\t\tlabels[col] = "Laps";',
    "\t\tgraphDatas[i][col++] = null;",
    "\t\tif(displayData[0]) { //speed",
    "\t\t    labels[col] = labelsData[0];",
    "\t\t    graphDatas[i][col++] = pointsList[i].speed;",
    "\t        }",
    "\t\tif(displayData[1]) { //heartrate",
    "\t\t    labels[col] = labelsData[1];",
    "\t\t    graphDatas[i][col++] = pointsList[i].heartrate;",
    "\t        }",
    "\t\tif(displayData[2]) { //altitude",
    "\t\t    labels[col] = labelsData[2];",
    "\t\t    graphDatas[i][col++] = pointsList[i].altitude;",
    "\t        }",
    "\t        ",
    "\t        if(i === laps[iLaps]) {",
    "\t            lapsXValues.push(xValue);",
    "\t            iLaps = iLaps + 1;",
    "\t        }",
    "\t}",
    "\tgraph = new Dygraph(",
    '\tdocument.getElementById("graph")',
    "\t,graphDatas",
    "\t,{",
    "\tlabels: labels,",
    "\t'Speed': { axis: {includeZero:true}},",
    '   colors: ["#000000", "#0000FF", "#00AA00", "#FF0000"],',
    "\taxes: { ",
    "\tx: {",
    "\t valueFormatter: function(xValue) "
    "{return XAxisValueFormater[xAxisAttribute](xValue,false);}",
    "\t ,axisLabelFormatter: function(xValue) "
    "{return XAxisValueFormater[xAxisAttribute](xValue,true);}",
    "\t}",
    "\t}",
    "\t,ylabel: 'Altitude (m) / Heart rate (bpm)'",
    "\t,y2label: 'Speed (km/h)'",
    "\t}",
    "\t);",
    "\tgraph.updateOptions({clickCallback : function(e, x, points) { if(popupGlobal) "
    "popupGlobal.close(); e.latLng = new google.maps.LatLng(pointsList[XValueToPointId[x]].lat, "
    "pointsList[XValueToPointId[x]].long); popupGlobal = "
    "point_popup_callback(e,pointsList[XValueToPointId[x]]); } });",
    "\tgraph.updateOptions({highlightCallback : function(e, x, points) { center = new "
    "google.maps.LatLng(pointsList[XValueToPointId[x]].lat, pointsList[XValueToPointId[x]].long); "
    "map.setCenter(center); highlightedPoint.setPosition(center); } });",
    "\tgraph.updateOptions({annotationClickHandler : function(ann, pt, dg, e) { if(popupGlobal) "
    "popupGlobal.close(); e.latLng = new google.maps.LatLng(pointsList[XValueToPointId[ann.xval]].lat, "
    "pointsList[XValueToPointId[ann.xval]].long); popupGlobal = "
    "lap_popup_callback(e,waypointsList[ann.shortText-1]); } });",
    "\tgraph.updateOptions({underlayCallback: function(canvas, area, g) {",
    "\t\t\tfor(var i = 0; i+1 < lapsXValues.length; i+=2)",
    "\t\t\t{",
    "              var left = graph.toDomCoords(lapsXValues[i], 0)[0];",
    "              var right = graph.toDomCoords(lapsXValues[i+1], 0)[0];",
    '              canvas.fillStyle = "rgba(220, 220, 220, 1.0)";',
    "              canvas.fillRect(left, area.y, right - left, area.h);",
    "\t\t\t}",
    "\t\t}});",
    "\tannotations = [];",
    "\tfor(var i = 0; i < lapsXValues.length; ++i)",
    "\t{",
    "\t\tannotations.push({",
    "\t\t\tseries: 'Laps',",
    "\t\t\txval: lapsXValues[i],",
    "\t\t\tattachAtBottom: true,",
    "\t\t\tshortText: (i+1),",
    "\t\t\ttext: 'Lap ' + (i+1)",
    "\t\t});",
    "\t}",
    "\tgraph.setAnnotations(annotations);",
    "}",
    "function toggleDisplay(i)",
    "{",
    "\tdisplayData[i] = !displayData[i];",
    "\tloadGraph();",
    "}",
    "function load()",
    "{",
    "\tloadGraph();",
    "\tloadMap();",
    "}",
    "</script>",
    "</head>",
    '<body onload="load()" style="cursor:crosshair" border="0">',
)

_CONTROLS = _lines(
    '<div id="graph" style="width: 100%; height: 300px; top: 0px; left: 0px"></div>',
    '<div id="spacer" style="height: 25px"></div>',
    '<div id="controls" style="width: 100%; text-align:center">'
    '<input type="checkbox" name="Speed" onchange="toggleDisplay(0)" checked="checked">Speed</input>'
    '<input type="checkbox" name="Heartrate" onchange="toggleDisplay(1)" checked="checked">'
    "Heartrate</input>"
    '<input type="checkbox" name="Elevation" onchange="toggleDisplay(2)" checked="checked">'
    "Elevation</input>",
    '  <div id="xAxisOptions">',
    "  <span>X Axis:</span>&nbsp;",
    '    <input id="xAxisAttributeTime" type="radio" name="group1" value="elapsed" checked '
    'onChange="loadGraph();">Time</input>',
    '    <input id="xAxisAttributeDistance" type="radio" name="group1" value="distance" '
    'onChange="loadGraph();">Distance</input>',
    "  </div>",
)

_FOOTER = _lines("</div>", "</body>", "</html>")


def _num(value: Any, precision: int = _PRECISION) -> str:
    return format_number(value, precision)


def _opt(value: Any, prefix: str, suffix: str) -> str:
    return optional(value, prefix, suffix, _PRECISION)


def _speed(point: Any) -> float:
    return 0.0 if point.speed is None else float(point.speed)


def _factor(difference: float) -> float:
    if difference == 0:
        return math.copysign(math.inf, difference)
    return 255.0 / difference


def _intensity(value: float) -> int:
    """Truncate to an int clamped to 0..255; non-representable values give 0."""
    if not math.isfinite(value) or not -(2**31) <= value < 2**31:
        return 0
    return min(max(int(value), 0), 0xFF)


def _optional_cell(value: Any, width: int, units: str, precision: int) -> str:
    if value is None:
        return f"<td>{'N/A':>{width}}</td>"
    return f"<td>{format_number(value, precision):>{width}} {units}</td>"


@registered(OUTPUTS)
class GoogleMapOutput(FileOutput):
    """Writes an HTML page showing the track on a map alongside speed, heart rate
    and altitude graphs. Requires ``google_api_key`` in the configuration."""

    name = "GoogleMap"
    ext = "html"

    def dump_content(self, out: TextIO, session: Any, configuration: Mapping[str, str]) -> None:
        if "google_api_key" not in configuration:
            print("Using GoogleMap output requires a Google API Key.", file=sys.stderr)
            return
        session.ensure_point_distance_are_ok()
        points = list(session.points)
        laps = list(session.laps)
        write = out.write

        write(
            '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
            '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">\n'
        )
        write(
            '<html xmlns="http://www.w3.org/1999/xhtml"  '
            'xmlns:v="urn:schemas-microsoft-com:vml">\n'
        )
        write("<head>\n")
        write('<meta http-equiv="content-type" content="text/html; charset=utf-8"/>\n')
        write(f"<title>Session from {session.begin_time}</title>\n")
        write(_HEAD_STYLE)
        write(
            '<script type="text/javascript" src="http://maps.google.com/maps/api/js?key='
            f'{configuration["google_api_key"]}&sensor=false"></script>\n'
        )
        write(_POPUP_SCRIPT)
        self._write_points(write, session, points)
        write(");\n")
        self._write_waypoints(write, laps)
        write(_MAP_SCRIPT)
        write("var laps = [" + ",".join(str(i) for i in self._lap_end_indices(points, laps)) + "];\n")
        write(_GRAPH_SCRIPT)
        write(
            '<div id="map" style="width: 100%; height: '
            f'{configuration.get("google_map_height", "")}px; top: 0px; left: 0px"></div>\n'
        )
        write(_CONTROLS)
        self._write_summary(out, session, _PRECISION)
        write(_FOOTER)

    def dump_session_summary(self, out: TextIO, session: Any) -> None:
        """Write the session totals and, if any, a table of its laps."""
        self._write_summary(out, session, _SUMMARY_PRECISION)

    @staticmethod
    def _write_points(write, session: Any, points: list) -> None:
        avg_speed = 0.0 if session.avg_speed is None else float(session.avg_speed)
        if len(points) > 1:
            speeds = sorted(_speed(point) for point in points)
            min_speed = speeds[int(len(speeds) * 0.1)]
            max_speed = speeds[int(len(speeds) * 0.9)]
        else:
            min_speed = max_speed = avg_speed
        max_factor = _factor(max_speed - avg_speed)
        min_factor = _factor(avg_speed - min_speed)

        for number, point in enumerate(points):
            speed = _speed(point)
            if math.isnan(speed):
                speed = 0.0
            if speed > avg_speed:
                level = _intensity((speed - avg_speed) * max_factor)
                color = ((256 - level) << 8) + (level << 16)
            else:
                level = _intensity((avg_speed - speed) * min_factor)
                color = ((256 - level) << 8) + level
            offset = point.time - session.time_t
            elapsed = int(offset * 1000) & 0xFFFFFFFF
            heart_rate = "0" if point.heart_rate is None else _num(point.heart_rate)
            altitude = "0" if point.altitude is None else _num(point.altitude)
            write(
                ("," if number else "")
                + f"{{lat:{_num(point.latitude)}, long:{_num(point.longitude)}, "
                f"distance:{_num(point.distance)}, "
                f'color: "#{color:06x}"'
                f", elapsed: {elapsed}"
                f', time: "{point.time_as_string(True, True)}"'
                f', duration: "{duration_as_string(offset)}"'
                f", speed: {_num(speed)}"
                f", heartrate: {heart_rate}"
                f", altitude: {altitude}"
                "}\n"
            )

    @staticmethod
    def _write_waypoints(write, laps: list) -> None:
        write("waypointsList = Array (")
        first = True
        for lap in laps:
            end = lap.end_point
            if end is None:
                continue
            write("\n")
            if not first:
                write(",")
            first = False
            number = lap.lap_num + 1
            write(
                f"{{lat:{_num(end.latitude)}, long:{_num(end.longitude)}, lap:{number}"
                ', infos: "'
                f'<h3 style=\\"padding:0; margin:0\\">Lap {number}</h3>'
                f"<b>Distance:</b> {_num(lap.distance / 1000.0)} km<br/>"
                f"<b>Time:</b> {duration_as_string(lap.duration)}<br/>"
                + _opt(lap.avg_speed, "<b>Average speed:</b> ", " km/h<br/>")
                + _opt(lap.max_speed, "<b>Maximum speed:</b> ", " km/h<br/>")
                + _opt(lap.avg_heartrate, "<b>Average heartrate:</b> ", " bpm<br/>")
                + _opt(lap.max_heartrate, "<b>Maximum heartrate:</b> ", " bpm<br/>")
                + '"}'
            )
        write(");\n\n")

    @staticmethod
    def _lap_end_indices(points: list, laps: list) -> list[int]:
        """Indices of the points ending each lap, in lap order."""
        indices: list[int] = []
        lap_index = 0
        for index, point in enumerate(points):
            if lap_index >= len(laps):
                break
            while laps[lap_index].end_point is point:
                indices.append(index)
                lap_index += 1
                if lap_index >= len(laps):
                    break
        return indices

    @staticmethod
    def _write_summary(out: TextIO, session: Any, precision: int) -> None:
        write = out.write
        write('<div id="summary" style="width: 100% ; text-align:left">\n')
        write("<b>Session summary:</b><br>\n")
        write(f"Time: {duration_as_string(session.duration)}, ")
        write(f"Distance: {format_number(session.distance / 1000.0, precision)} km")
        write(optional(session.max_speed, ", MaxSpeed: ", " km/h", precision))
        write(optional(session.avg_speed, ", AvgSpeed: ", " km/h", precision))
        write(".</div>\n")
        laps = list(session.laps)
        if not laps:
            return
        write('<div id="lap_info" style="width: 100% ; text-align:left">\n')
        write("<b>Lap details:</b><br>\n")
        write(
            "<table border='1'><tr><th>lap</th><th>time</th><th>distance</th>"
            "<th>average speed</th><th>max speed</th><th>average heartrate</th>"
            "<th>max heartrate</th></tr>\n"
        )
        for lap in laps:
            write(
                "<tr>"
                f"<td>{lap.lap_num + 1:>3}</td>"
                f"<td>{duration_as_string(lap.duration):>10}</td>"
                f"<td>{format_number(lap.distance / 1000.0, precision):>4} km</td>"
                + _optional_cell(lap.avg_speed, 6, "km/h", precision)
                + _optional_cell(lap.max_speed, 6, "km/h", precision)
                + _optional_cell(lap.avg_heartrate, 4, "bpm", precision)
                + _optional_cell(lap.max_heartrate, 4, "bpm", precision)
                + "</tr>\n"
            )
        write("</table></div>")