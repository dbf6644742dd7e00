"""Record machines for ``EPHEM_TYPE=VECTORS`` and ``EPHEM_TYPE=ELEMENTS`` output.

Both tables sit between the ``$$SOE`` and ``$$EOE`` sentinels and spread one
record over several lines: a date line followed by rows of labeled 22
character fields::

    $$SOE
    2459805.372175926 = A.D. 2022-Aug-13 20:55:56.0000 TDB
     X = 1.870010427985840E+02 Y = 2.484687803242536E+03 Z =-5.861602653492581E+03
     VX=-3.362664133558439E-01 VY= 1.344100266143978E-02 VZ=-5.030275220358716E-03
     LT= 2.133834278213479E-02 RG= 6.397078817882271E+03 RR= 1.119049591233663E-02
    $$EOE

Each machine is a one-shot iterator. Its progress lives in a tagged state
object that carries only the values accumulated so far; nothing is emitted
until every line of a record decoded. A truncated trailing record is dropped.
A malformed line raises :class:`MalformedRecord` and ends the iteration;
records yielded before it stay valid.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from ..logging import get_logger
from .errors import DecodeError, MalformedRecord
from .slicing import take_labeled_float
from .timestamp import parse_timestamp
from .types import OrbitalElementsItem, Vector3, VectorItem

LOGGER = get_logger("core.ephemeris")

START_OF_EPHEMERIS = "$$SOE"
END_OF_EPHEMERIS = "$$EOE"
FIELD_WIDTH = 22

POSITION_LABELS = (" X =", " Y =", " Z =")
VELOCITY_LABELS = (" VX=", " VY=", " VZ=")
ELEMENT_LABELS = (
    (" EC=", " QR=", " IN="),
    (" OM=", " W =", " Tp="),
    (" N =", " MA=", " TA="),
    (" A =", " AD=", " PR="),
)

Row = Tuple[float, float, float]


def read_row(line: str, labels: Sequence[str]) -> Row:
    """Decode three labeled fixed-width fields from ``line``."""

    values = []
    rest = line
    for label in labels:
        value, rest = take_labeled_float(rest, label, FIELD_WIDTH)
        values.append(value)
    return values[0], values[1], values[2]


# --------------------------------------------------------------- shared states
@dataclass(frozen=True)
class _AwaitingStart:
    pass


@dataclass(frozen=True)
class _AwaitingDate:
    pass


@dataclass(frozen=True)
class _Done:
    pass


class _RecordParser:
    """Drive a line iterator through sentinel handling and per-line steps."""

    kind = "record"

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)
        self._state: object = _AwaitingStart()
        self._line_number = 0

    def __iter__(self) -> "_RecordParser":
        return self

    def __next__(self):
        while not isinstance(self._state, _Done):
            try:
                raw = next(self._lines)
            except StopIteration:
                self._finish("end of input")
                raise
            self._line_number += 1
            line = raw.rstrip("\r\n")
            try:
                item = self._step(line)
            except DecodeError as exc:
                self._state = _Done()
                LOGGER.warning(
                    "malformed %s",
                    self.kind,
                    extra={"line_number": self._line_number, "error": str(exc)},
                )
                raise MalformedRecord(self._line_number, line, str(exc)) from exc
            if item is not None:
                return item
        raise StopIteration

    def _step(self, line: str):
        state = self._state
        if isinstance(state, _AwaitingStart):
            if line == START_OF_EPHEMERIS:
                LOGGER.debug("start of %s table", self.kind, extra={"line_number": self._line_number})
                self._state = _AwaitingDate()
            return None
        if isinstance(state, _AwaitingDate):
            if line == END_OF_EPHEMERIS:
                LOGGER.debug("end of %s table", self.kind, extra={"line_number": self._line_number})
                self._state = _Done()
                return None
            self._state = self._begin(parse_timestamp(line))
            return None
        if line == END_OF_EPHEMERIS:
            self._finish("end sentinel")
            return None
        return self._advance(state, line)

    def _finish(self, reason: str) -> None:
        if not isinstance(self._state, (_AwaitingStart, _AwaitingDate, _Done)):
            LOGGER.debug("dropping incomplete %s at %s", self.kind, reason)
        self._state = _Done()

    def _begin(self, time: Optional[dt.datetime]) -> object:
        raise NotImplementedError

    def _advance(self, state: object, line: str):
        raise NotImplementedError


# ---------------------------------------------------------------- vector table
@dataclass(frozen=True)
class _AwaitingPosition:
    time: Optional[dt.datetime]


@dataclass(frozen=True)
class _AwaitingVelocity:
    time: Optional[dt.datetime]
    position: Vector3


@dataclass(frozen=True)
class _Ready:
    time: Optional[dt.datetime]
    position: Vector3
    velocity: Vector3


class VectorParser(_RecordParser):
    """Yield :class:`VectorItem` from a state-vector table.

    A record is a date line, a position line (``X``/``Y``/``Z``), a velocity
    line (``VX``/``VY``/``VZ``) and a light-time line (``LT``/``RG``/``RR``).
    The light-time line is consumed without being read: it only marks the
    end of the record.
    """

    kind = "vector record"

    def __iter__(self) -> "VectorParser":
        return self

    def __next__(self) -> VectorItem:
        return super().__next__()

    def _begin(self, time: Optional[dt.datetime]) -> object:
        return _AwaitingPosition(time)

    def _advance(self, state: object, line: str) -> Optional[VectorItem]:
        if isinstance(state, _AwaitingPosition):
            self._state = _AwaitingVelocity(state.time, read_row(line, POSITION_LABELS))
            return None
        if isinstance(state, _AwaitingVelocity):
            self._state = _Ready(state.time, state.position, read_row(line, VELOCITY_LABELS))
            return None
        if isinstance(state, _Ready):
            # LT/RG/RR line: skipped on purpose.
            self._state = _AwaitingDate()
            return VectorItem(time=state.time, position=state.position, velocity=state.velocity)
        raise AssertionError(f"unexpected state {state!r}")


# ------------------------------------------------------- orbital element table
@dataclass(frozen=True)
class _AwaitingFirst:
    time: Optional[dt.datetime]


@dataclass(frozen=True)
class _HaveFirst:
    time: Optional[dt.datetime]
    first: Row


@dataclass(frozen=True)
class _HaveSecond:
    time: Optional[dt.datetime]
    first: Row
    second: Row


@dataclass(frozen=True)
class _HaveThird:
    time: Optional[dt.datetime]
    first: Row
    second: Row
    third: Row


class OrbitalElementsParser(_RecordParser):
    """Yield :class:`OrbitalElementsItem` from an osculating elements table.

    A record is a date line followed by four rows::

         EC= 1.711794334680415E-02 QR= 1.469885520304013E+08 IN= 3.134746902320420E-03
         OM= 1.633896137466430E+02 W = 3.006492364709574E+02 Tp=  2459584.392523936927
         N = 1.141316101270797E-05 MA= 1.635515780663357E+02 TA= 1.640958153023696E+02
         A = 1.495485150384278E+08 AD= 1.521084780464543E+08 PR= 3.154253230977451E+07
    """

    kind = "orbital elements record"

    def __iter__(self) -> "OrbitalElementsParser":
        return self

    def __next__(self) -> OrbitalElementsItem:
        return super().__next__()

    def _begin(self, time: Optional[dt.datetime]) -> object:
        return _AwaitingFirst(time)

    def _advance(self, state: object, line: str) -> Optional[OrbitalElementsItem]:
        if isinstance(state, _AwaitingFirst):
            self._state = _HaveFirst(state.time, read_row(line, ELEMENT_LABELS[0]))
            return None
        if isinstance(state, _HaveFirst):
            self._state = _HaveSecond(state.time, state.first, read_row(line, ELEMENT_LABELS[1]))
            return None
        if isinstance(state, _HaveSecond):
            self._state = _HaveThird(
                state.time, state.first, state.second, read_row(line, ELEMENT_LABELS[2])
            )
            return None
        if isinstance(state, _HaveThird):
            fourth = read_row(line, ELEMENT_LABELS[3])
            self._state = _AwaitingDate()
            eccentricity, periapsis_distance, inclination = state.first
            longitude_of_ascending_node, argument_of_perifocus, time_of_periapsis = state.second
            mean_motion, mean_anomaly, true_anomaly = state.third
            semi_major_axis, apoapsis_distance, sidereal_period = fourth
            return OrbitalElementsItem(
                time=state.time,
                eccentricity=eccentricity,
                periapsis_distance=periapsis_distance,
                inclination=inclination,
                longitude_of_ascending_node=longitude_of_ascending_node,
                argument_of_perifocus=argument_of_perifocus,
                time_of_periapsis=time_of_periapsis,
                mean_motion=mean_motion,
                mean_anomaly=mean_anomaly,
                true_anomaly=true_anomaly,
                semi_major_axis=semi_major_axis,
                apoapsis_distance=apoapsis_distance,
                sidereal_period=sidereal_period,
            )
        raise AssertionError(f"unexpected state {state!r}")


def parse_vectors(lines: Iterable[str]) -> Iterator[VectorItem]:
    return VectorParser(lines)


def parse_orbital_elements(lines: Iterable[str]) -> Iterator[OrbitalElementsItem]:
    return OrbitalElementsParser(lines)


__all__ = [
    "END_OF_EPHEMERIS",
    "FIELD_WIDTH",
    "OrbitalElementsParser",
    "START_OF_EPHEMERIS",
    "VectorParser",
    "parse_orbital_elements",
    "parse_vectors",
    "read_row",
]
