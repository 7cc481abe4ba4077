import io
from dataclasses import dataclass, field

from kalreader.output import OUTPUTS
from kalreader.static_map import GoogleStaticMapOutput

BASE = (
    "http://maps.googleapis.com/maps/api/staticmap"
    "?size=640x640&maptype=hybrid&sensor=true&path=weight:5"
)


@dataclass
class FakePoint:
    latitude: float | None = None
    longitude: float | None = None
    time: int = 0


@dataclass
class FakeLap:
    start_point: FakePoint | None = None


@dataclass
class FakeSession:
    points: list = field(default_factory=list)
    laps: list = field(default_factory=list)


def render(session):
    out = io.StringIO()
    GoogleStaticMapOutput().dump_content(out, session, {})
    return out.getvalue()


def path_part(text):
    return text[len(BASE):text.index("&markers=")]


def test_url_shape():
    text = render(FakeSession(points=[FakePoint(1.5, 2.5)]))
    assert text.startswith(BASE)
    assert text.endswith("&markers=\n")
    assert path_part(text) == "%7C1.5,2.5"


def test_small_path_keeps_every_point():
    points = [FakePoint(45.0 + i * 0.001, 3.0) for i in range(10)]
    text = render(FakeSession(points=points))
    assert path_part(text).count("%7C") == len(points)


def test_long_path_is_thinned_to_fit():
    points = [FakePoint(45.0 + i * 0.0001, 3.0) for i in range(500)]
    laps = [FakeLap(points[0]), FakeLap(points[250])]
    text = render(FakeSession(points=points, laps=laps))
    kept = path_part(text).count("%7C")
    assert 0 < kept <= 89 - len(laps)
    assert path_part(text).startswith("%7C45,3")


def test_markers_at_lap_starts():
    laps = [FakeLap(FakePoint(1.5, 2.5)), FakeLap(FakePoint(1.75, 2.75))]
    text = render(FakeSession(points=[FakePoint(1.5, 2.5)], laps=laps))
    assert text.endswith("&markers=%7C1.5,2.5%7C1.75,2.75\n")


def test_lap_without_start_point_is_reported(capsys):
    text = render(FakeSession(points=[FakePoint(1.5, 2.5)], laps=[FakeLap(None)]))
    assert text.endswith("&markers=\n")
    assert "Start point of lap is None" in capsys.readouterr().err


def test_registered_under_its_name():
    assert OUTPUTS.get("GoogleStaticMap").ext == "lnk"