"""Convert decoded records from Horizons' native units to SI quantities.

Native units are km, km/s, degrees, degrees/s, seconds and Julian days.
Quantities are :mod:`astropy.units` objects, so callers can still convert
them further with ``.to(...)``.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import astropy.units as u

from .core.types import OrbitalElementsItem, VectorItem


@dataclass(frozen=True)
class SiVectorItem:
    time: Optional[dt.datetime]
    position: Tuple[u.Quantity, u.Quantity, u.Quantity]
    velocity: Tuple[u.Quantity, u.Quantity, u.Quantity]


@dataclass(frozen=True)
class SiOrbitalElementsItem:
    """Orbital elements as SI quantities.

    ``time_of_periapsis`` is the Julian day count expressed in seconds;
    ``eccentricity`` stays a plain float.
    """

    time: Optional[dt.datetime]
    eccentricity: float
    periapsis_distance: u.Quantity
    inclination: u.Quantity
    longitude_of_ascending_node: u.Quantity
    argument_of_perifocus: u.Quantity
    time_of_periapsis: u.Quantity
    mean_motion: u.Quantity
    mean_anomaly: u.Quantity
    true_anomaly: u.Quantity
    semi_major_axis: u.Quantity
    apoapsis_distance: u.Quantity
    sidereal_period: u.Quantity


def _length(km: float) -> u.Quantity:
    return (km * u.km).to(u.m)


def _angle(degrees: float) -> u.Quantity:
    return (degrees * u.deg).to(u.rad)


def vector_to_si(item: VectorItem) -> SiVectorItem:
    x, y, z = (_length(value) for value in item.position)
    vx, vy, vz = ((value * u.km / u.s).to(u.m / u.s) for value in item.velocity)
    return SiVectorItem(time=item.time, position=(x, y, z), velocity=(vx, vy, vz))


def elements_to_si(item: OrbitalElementsItem) -> SiOrbitalElementsItem:
    return SiOrbitalElementsItem(
        time=item.time,
        eccentricity=item.eccentricity,
        periapsis_distance=_length(item.periapsis_distance),
        inclination=_angle(item.inclination),
        longitude_of_ascending_node=_angle(item.longitude_of_ascending_node),
        argument_of_perifocus=_angle(item.argument_of_perifocus),
        time_of_periapsis=(item.time_of_periapsis * u.day).to(u.s),
        mean_motion=(item.mean_motion * u.deg / u.s).to(u.rad / u.s),
        mean_anomaly=_angle(item.mean_anomaly),
        true_anomaly=_angle(item.true_anomaly),
        semi_major_axis=_length(item.semi_major_axis),
        apoapsis_distance=_length(item.apoapsis_distance),
        sidereal_period=item.sidereal_period * u.s,
    )


def to_si(item: Union[VectorItem, OrbitalElementsItem]) -> Union[SiVectorItem, SiOrbitalElementsItem]:
    """Dispatch to :func:`vector_to_si` or :func:`elements_to_si`."""

    if isinstance(item, VectorItem):
        return vector_to_si(item)
    if isinstance(item, OrbitalElementsItem):
        return elements_to_si(item)
    raise TypeError(f"cannot convert {type(item).__name__} to SI units")


__all__ = ["SiOrbitalElementsItem", "SiVectorItem", "elements_to_si", "to_si", "vector_to_si"]
