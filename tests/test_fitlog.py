import io
from dataclasses import dataclass, field

import pytest

from kalreader.fitlog import FitlogOutput
from kalreader.output import OUTPUTS


@dataclass
class FakePoint:
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    speed: float | None = None
    heart_rate: int | None = None
    time: int = 0

    def time_as_string(self, with_ms=False, local=False):
        return f"T{self.time}"


@dataclass
class FakeLap:
    start_point: FakePoint | None = None
    end_point: FakePoint | None = None
    duration: float = 0
    distance: int = 0
    calories: int | None = None
    avg_heartrate: int | None = None


@dataclass
class FakeSession:
    name: str = "track"
    begin_time: str = "2000-12-31T00:00:00Z"
    duration: float = 120
    distance: int = 1000
    avg_heartrate: int | None = None
    max_heartrate: int | None = None
    points: list = field(default_factory=list)
    laps: list = field(default_factory=list)


def render(session):
    out = io.StringIO()
    FitlogOutput().dump_content(out, session, {})
    return out.getvalue()


def test_document_envelope():
    text = render(FakeSession(points=[FakePoint()]))
    assert text.startswith('<?xml version="1.0" encoding="utf-8"?>\n')
    assert text.endswith("</FitnessWorkbook>\n")


def test_activity_totals():
    text = render(FakeSession(points=[FakePoint()], duration=120, distance=1000))
    assert '   <Duration TotalSeconds="120" />\n' in text
    assert '   <Distance TotalMeters="1000" />\n' in text


def test_heart_rate_omitted_when_unknown():
    text = render(FakeSession(points=[FakePoint()]))
    assert "<HeartRate" not in text


def test_heart_rate_written_when_known():
    text = render(FakeSession(points=[FakePoint()], avg_heartrate=150))
    assert '   <HeartRate AverageBPM="150" />\n' in text


def test_one_lap_element_per_lap():
    start = FakePoint(time=7)
    laps = [FakeLap(start_point=start, duration=30, distance=500, calories=42) for _ in range(3)]
    text = render(FakeSession(points=[start], laps=laps))
    assert text.count("    <Lap StartTime=") == len(laps)
    assert '<Lap StartTime="T7" DurationSeconds="30" >' in text
    assert text.count('     <Calories TotalCal="42" />\n') == len(laps)


def test_track_point_times_are_elapsed():
    points = [FakePoint(time=100, heart_rate=140), FakePoint(time=110)]
    text = render(FakeSession(points=points))
    assert '    <pt tm="0" dist="0" hr="140" />\n' in text
    assert '    <pt tm="10" dist="0" />\n' in text


def test_track_point_position():
    text = render(FakeSession(points=[FakePoint(latitude=48.85341, longitude=2.3488)]))
    assert 'lat="48.85341" lon="2.3488" ' in text


def test_empty_session_is_rejected():
    with pytest.raises(ValueError):
        render(FakeSession())


def test_registered_under_its_name():
    assert OUTPUTS.get("Fitlog").ext == "fit"