import io
from dataclasses import dataclass, field

import pytest

from kalreader.csv_output import CSVOutput
from kalreader.output import OUTPUTS


@dataclass
class FakePoint:
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    speed: float | None = None
    time: int = 0

    def time_as_string(self, with_ms=False, local=False):
        return f"T{self.time}"


@dataclass
class FakeSession:
    name: str = "track"
    points: list = field(default_factory=list)
    laps: list = field(default_factory=list)


def render(session):
    out = io.StringIO()
    CSVOutput().dump_content(out, session, {})
    return out.getvalue().splitlines()


def test_header_names_the_session():
    lines = render(FakeSession(name="evening", points=[FakePoint(time=5)]))
    assert lines[0] == "Time (s),Distance evening (m),Altitude evening (m)"


def test_first_row_starts_at_zero():
    lines = render(FakeSession(points=[FakePoint(altitude=12, time=1000)]))
    assert lines[1] == "0,0,12"


def test_time_column_is_relative_to_first_point():
    times = [1000, 1007, 1030]
    lines = render(FakeSession(points=[FakePoint(time=t) for t in times]))
    assert [int(line.split(",")[0]) for line in lines[1:]] == [t - times[0] for t in times]


def test_distance_between_positions_uses_earth_radius():
    paris = FakePoint(latitude=48.8534100, longitude=2.3488000, time=0)
    london = FakePoint(latitude=51.5085300, longitude=-0.1257400, time=10)
    lines = render(FakeSession(points=[paris, london]))
    assert abs(int(lines[2].split(",")[1]) - 343867) < 500


def test_distance_falls_back_to_speed_without_positions():
    points = [FakePoint(time=0, speed=10.0), FakePoint(time=36, speed=10.0)]
    lines = render(FakeSession(points=points))
    assert int(lines[2].split(",")[1]) in (99, 100)


def test_distance_never_decreases():
    points = [
        FakePoint(latitude=45.0 + i * 0.001, longitude=3.0 - i * 0.002, time=i * 10)
        for i in range(20)
    ]
    lines = render(FakeSession(points=points))
    distances = [int(line.split(",")[1]) for line in lines[1:]]
    assert distances == sorted(distances)
    assert len(distances) == len(points)


def test_undefined_altitude_is_left_empty():
    lines = render(FakeSession(points=[FakePoint(time=3)]))
    assert lines[1].endswith(",")


def test_empty_session_is_rejected():
    with pytest.raises(ValueError):
        render(FakeSession())


def test_registered_under_its_name():
    assert OUTPUTS.get("CSV").ext == "csv"