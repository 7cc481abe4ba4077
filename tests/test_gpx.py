import io
from dataclasses import dataclass, field

from kalreader.gpx import GPXOutput
from kalreader.output import OUTPUTS


@dataclass
class FakePoint:
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    heart_rate: int | None = None
    cadence: int | None = None
    power: int | None = None
    time: int = 0

    def time_as_string(self, with_ms=False, local=False):
        return f"T{self.time}"


@dataclass
class FakeLap:
    start_point: FakePoint | None = None
    end_point: FakePoint | None = None
    first_point_id: int = 0
    last_point_id: int = 0
    duration: float = 0
    distance: int = 0
    calories: int | None = None
    avg_speed: float | None = None
    max_speed: float | None = None
    avg_heartrate: int | None = None
    max_heartrate: int | None = None


@dataclass
class FakeSession:
    name: str = "track"
    begin_time: str = "2000-12-31T00:00:00Z"
    points: list = field(default_factory=list)
    laps: list = field(default_factory=list)


def render(session, configuration=None):
    out = io.StringIO()
    GPXOutput().dump_content(out, session, configuration or {})
    return out.getvalue()


def test_envelope_and_metadata():
    text = render(FakeSession(name="evening"))
    assert text.startswith('<?xml version="1.0"?>\n<gpx version="1.1"\n')
    assert '     creator="Kalenji Reader"\n' in text
    assert "    <name>evening</name>\n" in text
    assert text.endswith("</gpx>\n")


def test_track_point_without_extensions():
    point = FakePoint(latitude=48.85341, longitude=2.3488, altitude=35.5, time=9)
    text = render(FakeSession(points=[point]))
    assert '      <trkpt lat="48.85341" lon="2.3488" >\n' in text
    assert "        <ele>35.5</ele>\n" in text
    assert "        <time>T9</time>\n" in text
    assert "<extensions>" not in text
    assert "xmlns:gpxdata" not in text


def test_undefined_elevation_is_omitted():
    text = render(FakeSession(points=[FakePoint()]))
    assert "<ele>" not in text


def test_gpxtpx_extension():
    point = FakePoint(heart_rate=140, cadence=85)
    text = render(FakeSession(points=[point]), {"gpx_extensions": "gpxtpx"})
    assert "xmlns:gpxtpx=" in text
    assert "            <gpxtpx:hr>140</gpxtpx:hr>\n" in text
    assert "            <gpxtpx:cad>85</gpxtpx:cad>\n" in text
    assert "gpxdata:hr" not in text


def test_gpxdata_laps():
    start = FakePoint(latitude=1.5, longitude=2.5, time=3)
    end = FakePoint(latitude=1.75, longitude=2.75, time=33)
    lap = FakeLap(start_point=start, end_point=end, duration=30, distance=500)
    configuration = {"gpx_extensions": "gpxdata", "trigger": "manual"}
    text = render(FakeSession(points=[start, end], laps=[lap]), configuration)
    assert "      <gpxdata:index>1</gpxdata:index>\n" in text
    assert '      <gpxdata:startPoint lat="1.5" lon="2.5"/>\n' in text
    assert "      <gpxdata:startTime>T3</gpxdata:startTime>\n" in text
    assert "      <gpxdata:trigger>manual</gpxdata:trigger>\n" in text
    assert text.count("<gpxdata:lap>") == 1


def test_lap_without_end_point_is_skipped(capsys):
    start = FakePoint(time=3)
    laps = [FakeLap(start_point=start, first_point_id=4, last_point_id=8)]
    text = render(FakeSession(points=[start], laps=laps), {"gpx_extensions": "gpxdata"})
    assert "<gpxdata:lap>" not in text
    assert "without end point: (4 - 8)" in capsys.readouterr().err


def test_registered_under_its_name():
    assert OUTPUTS.get("GPX").ext == "gpx"