# kalreader

kalreader is a library that writes GPS training sessions out in formats
that mapping and training tools understand. It also has data sources that
replay recorded device traffic or log it.

It is made of three layers:

- **Sources** (`kalreader.source.Source`) provide raw data frames.
  `read_data(endpoint)` returns a pair `(data, more)`. `data` holds bytes
  and `more` tells whether more frames follow.
  - `FileSource` (`kalreader.file_source`) replays a file one line at a
    time.
  - `HexdumpFileSource` (`kalreader.hexdump_source`) replays the ` <= `
    lines of a hex dump log and decodes them to bytes.
  - `LoggingSource` (`kalreader.logger`) wraps another source. It passes
    every call on to that source and adds each frame it reads (` <= `) or
    writes (` => `) to a log file as hex. If you give it `None` as the
    source, it raises `ValueError`.

  Both file sources raise `OSError` from `init` when the file cannot be
  read. They ignore writes and control transfers.
- **Devices** (`kalreader.device`) have the interface for a watch:
  - `Device` is an abstract base class. It is built from a configuration
    mapping and a source. Its abstract methods are `init`, `release`,
    `get_sessions_list`, `export_session` and `get_sessions_details`.
    `log_verbose` prints a message when `verbose` is `"true"`.
  - `DeviceId` holds a vendor id and a product id.
  - `DeviceTarget` is `RUNNING` or `BIKING`.
- **Outputs** write a session out:

  | Class                   | Module                 | Extension | Content                                 |
  |-------------------------|------------------------|-----------|-----------------------------------------|
  | `GPXOutput`             | `kalreader.gpx`        | `.gpx`    | GPX 1.1 track, with optional extensions |
  | `TCXOutput`             | `kalreader.tcx`        | `.tcx`    | Training Center laps and trackpoints    |
  | `KMLOutput`             | `kalreader.kml`        | `.kml`    | KML placemarks, track and animated tour |
  | `FitlogOutput`          | `kalreader.fitlog`     | `.fit`    | Fitlog activity with laps and track     |
  | `CSVOutput`             | `kalreader.csv_output` | `.csv`    | time, distance and altitude per point   |
  | `GoogleStaticMapOutput` | `kalreader.static_map` | `.lnk`    | a static map URL for the route          |
  | `GoogleMapOutput`       | `kalreader.google_map` | `.html`   | an interactive map page with graphs     |

When you import an output module, an instance of its class is registered
under its `name` (for example `"GPX"`) in the `LayerRegistry` named
`kalreader.output.OUTPUTS`:

```python
import kalreader.gpx
from kalreader.output import OUTPUTS

gpx = OUTPUTS.get("GPX")
```

`LayerRegistry` (in `kalreader.registry`) keeps the first object that is
registered under a name. It ignores any later object with the same name.
The `registered(registry)` class decorator creates an instance of a class
and registers it.

## Installation

```
pip install .
```

The package has no run-time dependencies. To run the test suite, install
the `test` extra:

```
pip install ".[test]"
pytest
```

## Sessions

The outputs do not define their own session type. Any object that has the
attributes they read will work.

- A session has `name`, `begin_time` (text), `duration`, `distance`,
  `avg_heartrate`, `max_heartrate`, `avg_speed`, `max_speed`, `points`,
  `laps` and the start date parts `year`, `month`, `day`, `hour`,
  `minutes` and `seconds`.
- A point has `latitude`, `longitude`, `altitude`, `speed`, `heart_rate`,
  `cadence`, `power`, `time` (seconds) and a `time_as_string()` method.
- A lap has `start_point`, `end_point`, `first_point_id`, `last_point_id`,
  `lap_num`, `duration`, `distance`, `calories`, `avg_speed`, `max_speed`,
  `avg_heartrate`, `max_heartrate` and `avg_cadence`.

Set an optional value to `None` when it is not known.

Some outputs need more:

- `TCXOutput` needs `point.distance_from_in_meters(other)`.
- `GoogleMapOutput` needs `session.time_t`,
  `session.ensure_point_distance_are_ok()` and `point.distance`, and it
  calls `time_as_string` with two boolean arguments.

`CSVOutput`, `FitlogOutput`, `KMLOutput` and `TCXOutput` raise
`ValueError` for a session that has no points.

## Writing a session

Every file output derives from `FileOutput`:

- `dump` builds the path with `file_name`, prints `Creating <path>`, and
  writes the file with `dump_content`.
- `exists` tells you whether that path is already there.

```python
from kalreader.gpx import GPXOutput

configuration = {
    "directory": "/tmp/sessions",
    "output_name": "date",          # or "name" to use the session name
    "gpx_extensions": "gpxdata,gpxtpx",
    "trigger": "manual",
}

output = GPXOutput()
if not output.exists(session, configuration):
    output.dump(session, configuration)
```

If you pass `dump_content` a text stream, the document goes to that stream
and no file is created:

```python
import io
from kalreader.tcx import TCXOutput

buffer = io.StringIO()
TCXOutput().dump_content(buffer, session, {"tcx_sport": "Running"})
print(buffer.getvalue())
```

## Configuration keys

| Key                 | Used by           | Meaning                                             |
|---------------------|-------------------|-----------------------------------------------------|
| `directory`         | all file outputs  | directory that files are written to                 |
| `output_name`       | all file outputs  | `name` names files after the session; otherwise `YYYYMMDD_HHMMSS` |
| `gpx_extensions`    | `GPXOutput`       | may contain `gpxdata` and/or `gpxtpx`               |
| `trigger`           | `GPXOutput`       | lap trigger written with `gpxdata` laps             |
| `tcx_sport`         | `TCXOutput`       | `Sport` attribute of the activity                   |
| `google_api_key`    | `GoogleMapOutput` | key for the map script; without it a message goes to stderr and nothing is written |
| `google_map_height` | `GoogleMapOutput` | height of the map in pixels                         |
| `verbose`           | `Device`          | `"true"` turns on `log_verbose` messages            |

An example for the interactive map page:

```python
from kalreader.google_map import GoogleMapOutput

configuration = {
    "directory": "/tmp/sessions",
    "google_api_key": "placeholder",
    "google_map_height": "600",
}
GoogleMapOutput().dump(session, configuration)
```

`GoogleMapOutput.dump_session_summary(out, session)` writes only the HTML
summary of the session totals. When the session has laps, it also writes a
table of the laps.

## Replaying and logging captures

```python
from kalreader.hexdump_source import HexdumpFileSource
from kalreader.logger import LoggingSource

source = LoggingSource(HexdumpFileSource("capture.log"), "/tmp/replay.log")
source.init(0, 0)                 # file sources ignore the ids
data, more = source.read_data(0x81)
```

`HexdumpFileSource` replays only the ` <= ` lines of a log, which are the
frames that were read. It skips the ` => ` lines, which are the frames
that were written.

## Helpers

`kalreader.output` also has the formatting helpers that the outputs share:

- `format_number(value, precision)` writes a number with at most
  `precision` significant digits.
- `optional(value, prefix, suffix, precision)` gives an empty string for
  `None`. Otherwise it gives the prefix, the value and the suffix.
- `duration_as_string(seconds, with_ms)` formats a duration. For example,
  `duration_as_string(891740, False)` gives `"10d 7h42m20s"`.

## What the package does not do

- It does not talk to USB hardware. There is no USB source.
- It has no concrete watch drivers. `Device` is only an abstract
  interface, so nothing here downloads sessions from a watch or uploads
  them to one.
- It does not define session, point or lap classes. It does not compute
  session statistics or filter sessions.
- There is no command-line program. You use the package as a library.