from __future__ import annotations

import datetime as dt
import json

import pytest

from fetch.service import RetryExhausted
from fetch.sources import HorizonsError
from horizons_fetcher import cli
from horizons_fetcher.cli import common
from horizons_fetcher.core import (
    Body,
    MalformedRecord,
    OrbitalElementsItem,
    Properties,
    PropertyNotFound,
    VectorItem,
)

UTC = dt.timezone.utc

VECTOR = VectorItem(
    time=dt.datetime(2022, 8, 13, 19, 55, 56, tzinfo=UTC),
    position=(187.001042798584, 2484.687803242536, -5861.602653492581),
    velocity=(-0.3362664133558439, 0.01344100266143978, -0.005030275220358716),
)

ELEMENTS = OrbitalElementsItem(
    time=dt.datetime(2022, 6, 19, 18, 0, tzinfo=UTC),
    eccentricity=0.01711794334680415,
    periapsis_distance=146988552.0304013,
    inclination=0.00313474690232042,
    longitude_of_ascending_node=163.389613746643,
    argument_of_perifocus=300.6492364709574,
    time_of_periapsis=2459584.392523936927,
    mean_motion=1.141316101270797e-05,
    mean_anomaly=163.5515780663357,
    true_anomaly=164.0958153023696,
    semi_major_axis=149548515.0384278,
    apoapsis_distance=152108478.0464543,
    sidereal_period=31542532.30977451,
)


class FakeService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls = []

    def _answer(self, name, value, *args):
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error
        return value

    def major_bodies(self):
        return self._answer("major_bodies", [Body(0, "Solar System Barycenter"), Body(399, "Earth")])

    def ephemeris_vector(self, body_id, start, stop):
        return self._answer("ephemeris_vector", [VECTOR], body_id, start, stop)

    def ephemeris_orbital_elements(self, body_id, start, stop):
        return self._answer("ephemeris_orbital_elements", [ELEMENTS], body_id, start, stop)

    def geophysical_properties(self, body_id):
        return self._answer("geophysical_properties", Properties(mass=5.97219e24), body_id)


@pytest.fixture
def fake_service(monkeypatch):
    service = FakeService()
    seen = []

    def build(ns):
        seen.append(ns)
        return service

    monkeypatch.setattr(common, "build_service", build)
    service.namespaces = seen
    return service


def test_no_command_prints_help(capsys) -> None:
    assert cli.main([]) == common.EXIT_USAGE
    assert "horizons-fetcher" in capsys.readouterr().out


def test_bodies_text_output(fake_service, capsys) -> None:
    assert cli.main(["bodies"]) == common.EXIT_OK
    out = capsys.readouterr().out.splitlines()
    assert out == ["        0  Solar System Barycenter", "      399  Earth"]


def test_bodies_json_filtered_by_name(fake_service, capsys) -> None:
    assert cli.main(["bodies", "--json", "--name", "earth"]) == common.EXIT_OK
    out = capsys.readouterr().out.splitlines()
    assert [json.loads(line) for line in out] == [{"id": 399, "name": "Earth"}]


def test_bodies_unknown_name_fails(fake_service, capsys) -> None:
    assert cli.main(["bodies", "--name", "Vulcan"]) == common.EXIT_FAILURE
    assert capsys.readouterr().out == ""


def test_bodies_transport_failure(fake_service, capsys) -> None:
    fake_service.error = RetryExhausted(3, HorizonsError("down"))
    assert cli.main(["bodies"]) == common.EXIT_FAILURE
    assert "bodies failed" in capsys.readouterr().err


def test_vectors_json_with_window(fake_service, capsys) -> None:
    argv = ["vectors", "399", "--start", "2022-08-13T19:00:00Z", "--stop", "2022-08-13T23:00:00", "--json"]
    assert cli.main(argv) == common.EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["time"] == "2022-08-13T19:55:56+00:00"
    assert payload["position"] == list(VECTOR.position)
    name, (body_id, start, stop) = fake_service.calls[0]
    assert name == "ephemeris_vector"
    assert body_id == 399
    assert start == dt.datetime(2022, 8, 13, 19, 0, tzinfo=UTC)
    assert stop == dt.datetime(2022, 8, 13, 23, 0, tzinfo=UTC)


def test_vectors_si_json_reports_metres(fake_service, capsys) -> None:
    argv = ["vectors", "399", "--start", "2022-08-13", "--stop", "2022-08-14", "--si", "--json"]
    assert cli.main(argv) == common.EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["position"] == pytest.approx([value * 1000 for value in VECTOR.position])
    assert payload["velocity"] == pytest.approx([value * 1000 for value in VECTOR.velocity])


def test_vectors_center_reaches_service_builder(fake_service) -> None:
    cli.main(["vectors", "301", "--center", "500@399", "--start", "2022-08-13", "--stop", "2022-08-14"])
    assert fake_service.namespaces[0].center == "500@399"


def test_vectors_reject_inverted_window(fake_service) -> None:
    argv = ["vectors", "399", "--start", "2022-08-14", "--stop", "2022-08-13"]
    assert cli.main(argv) == common.EXIT_USAGE
    assert fake_service.calls == []


def test_vectors_reject_unparseable_dates(fake_service, capsys) -> None:
    assert cli.main(["vectors", "399", "--start", "yesterday"]) == common.EXIT_USAGE
    assert fake_service.calls == []
    assert "Invalid datetime" in capsys.readouterr().err


def test_elements_text_output(fake_service, capsys) -> None:
    argv = ["elements", "399", "--start", "2022-06-19", "--stop", "2022-06-20"]
    assert cli.main(argv) == common.EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("2022-06-19T18:00:00+00:00  e=0.01711794334680415")


def test_elements_decode_failure(fake_service, capsys) -> None:
    fake_service.error = MalformedRecord(4, " OM=garbage")
    argv = ["elements", "399", "--start", "2022-06-19", "--stop", "2022-06-20"]
    assert cli.main(argv) == common.EXIT_FAILURE


def test_properties_text_and_json(fake_service, capsys) -> None:
    assert cli.main(["properties", "399"]) == common.EXIT_OK
    assert capsys.readouterr().out.strip() == "mass 5.972190e+24 kg"
    assert cli.main(["properties", "399", "--json"]) == common.EXIT_OK
    assert json.loads(capsys.readouterr().out) == {"mass": 5.97219e24}


def test_properties_without_mass(fake_service, capsys) -> None:
    fake_service.error = PropertyNotFound("mass")
    assert cli.main(["properties", "0"]) == common.EXIT_FAILURE
    assert "no mass published" in capsys.readouterr().err


def test_build_service_applies_overrides(monkeypatch) -> None:
    monkeypatch.setenv("HORIZONS_API_URL", "http://horizons.test/api")
    parser = cli.build_parser()
    ns = parser.parse_args(["properties", "399", "--timeout", "4", "--retries", "2", "--backoff", "0"])
    service = common.build_service(ns)
    assert service.source.url == "http://horizons.test/api"
    assert service.source.timeout == 4.0
    assert service.retries == 2
    assert service.backoff == 0.0


def test_parse_datetime_normalises_to_utc() -> None:
    parsed = common.parse_datetime("2022-08-13T21:00:00+02:00")
    assert parsed == dt.datetime(2022, 8, 13, 19, 0, tzinfo=UTC)
    assert parsed.tzinfo == UTC


def test_text_log_format_on_stderr(fake_service, capsys) -> None:
    fake_service.error = HorizonsError("HTTP 503")
    assert cli.main(["bodies", "--log-format", "text"]) == common.EXIT_FAILURE
    err = capsys.readouterr().err.strip()
    assert " ERROR horizons_fetcher.cli: bodies failed: HTTP 503" in err
    assert not err.startswith("{")


@pytest.mark.parametrize(
    "option, value, message",
    [
        ("--retries", "0", "must be at least 1"),
        ("--retries", "two", "expected an integer"),
        ("--timeout", "-1", "must not be negative"),
        ("--backoff", "soon", "expected a number"),
    ],
)
def test_invalid_numeric_options_are_usage_errors(fake_service, capsys, option, value, message) -> None:
    assert cli.main(["bodies", option, value]) == common.EXIT_USAGE
    assert message in capsys.readouterr().err
    assert fake_service.namespaces == []


@pytest.mark.parametrize(
    "variable, value",
    [("HORIZONS_RETRIES", "abc"), ("HORIZONS_TIMEOUT", "-5"), ("HORIZONS_LOG_FORMAT", "xml")],
)
def test_invalid_environment_is_usage_error(fake_service, capsys, monkeypatch, variable, value) -> None:
    monkeypatch.setenv(variable, value)
    assert cli.main(["bodies"]) == common.EXIT_USAGE
    assert variable in capsys.readouterr().err
    assert fake_service.namespaces == []


def test_help_exits_cleanly(capsys) -> None:
    assert cli.main(["bodies", "--help"]) == common.EXIT_OK
    assert "--retries" in capsys.readouterr().out
