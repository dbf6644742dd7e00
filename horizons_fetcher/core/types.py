"""Shared dataclasses for decoded Horizons records."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

Vector3 = Tuple[float, float, float]


def _iso(value: Optional[dt.datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Body:
    """Planet, natural satellite, spacecraft, Sun, barycenter, or other
    object with a pre-computed trajectory.

    ``name`` is truncated by the service when it exceeds the catalog column.
    """

    id: int
    name: str

    def as_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class VectorItem:
    """Position (km) and velocity (km/s) of a body at ``time``.

    ``time`` is the service's TDB calendar stamp read as UTC, without any
    TDB to UTC correction.
    """

    time: Optional[dt.datetime]
    position: Vector3
    velocity: Vector3

    def as_dict(self) -> Dict[str, Any]:
        return {
            "time": _iso(self.time),
            "position": list(self.position),
            "velocity": list(self.velocity),
        }


@dataclass(frozen=True)
class OrbitalElementsItem:
    """Osculating orbital elements of a body. Units are km, s and degrees.

    | Horizons | Field                          | Unit              |
    |----------|--------------------------------|-------------------|
    | EC       | ``eccentricity``               |                   |
    | QR       | ``periapsis_distance``         | km                |
    | IN       | ``inclination``                | degrees           |
    | OM       | ``longitude_of_ascending_node``| degrees           |
    | W        | ``argument_of_perifocus``      | degrees           |
    | Tp       | ``time_of_periapsis``          | Julian day number |
    | N        | ``mean_motion``                | degrees/sec       |
    | MA       | ``mean_anomaly``               | degrees           |
    | TA       | ``true_anomaly``               | degrees           |
    | A        | ``semi_major_axis``            | km                |
    | AD       | ``apoapsis_distance``          | km                |
    | PR       | ``sidereal_period``            | sec               |

    ``time`` carries the same uncorrected TDB stamp as :class:`VectorItem`.
    """

    time: Optional[dt.datetime]
    eccentricity: float
    periapsis_distance: float
    inclination: float
    longitude_of_ascending_node: float
    argument_of_perifocus: float
    time_of_periapsis: float
    mean_motion: float
    mean_anomaly: float
    true_anomaly: float
    semi_major_axis: float
    apoapsis_distance: float
    sidereal_period: float

    def as_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["time"] = _iso(self.time)
        return payload


@dataclass(frozen=True)
class Properties:
    """Geophysical properties of a body; ``mass`` is in kg."""

    mass: float

    def as_dict(self) -> Dict[str, Any]:
        return {"mass": self.mass}


__all__ = ["Body", "OrbitalElementsItem", "Properties", "VectorItem", "Vector3"]
