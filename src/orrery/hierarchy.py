'''Planar Keplerian orbits for a hierarchical body model
Hierarchy construction: spheres of influence and two-body barycenters'''

import logging
import math
from typing import Iterable, List
from .config import config
from .bodies import Orbiter, Orbitable, Body, Barycenter, SOI_UNBOUNDED

logger = logging.getLogger(__name__)


def _semi_major_axis(node: Orbiter) -> float:
    return node.orbit.a


def _check_preconditions(central_body, satellites: List[Orbiter]):
    """Programmer errors in the system definition, all fatal."""
    if not isinstance(central_body, Body):
        raise TypeError(
            f"central_body must be a Body, got {type(central_body).__name__}")
    if central_body.is_configured:
        raise RuntimeError(
            f"Satellites already set for '{central_body.name}'")
    if central_body.parent is not None:
        raise RuntimeError(
            f"'{central_body.name}' already orbits '{central_body.parent.name}'; "
            f"build its system before placing it in a parent system")
    if central_body.mass <= 0:
        raise ValueError(
            f"Central body mass must be positive, got {central_body.mass}")
    if not satellites:
        raise ValueError(
            f"System around '{central_body.name}' requires at least one satellite")

    seen = set()
    for sat in satellites:
        if not isinstance(sat, Orbiter):
            raise TypeError(f"Satellites must be Orbiter nodes, got {type(sat).__name__}")
        if sat is central_body:
            raise ValueError(f"'{sat.name}' cannot orbit itself")
        if id(sat) in seen:
            raise ValueError(f"Satellite '{sat.name}' listed more than once")
        if sat.parent is not None:
            raise RuntimeError(
                f"Satellite '{sat.name}' already orbits '{sat.parent.name}'")
        seen.add(id(sat))


def build_system(central_body: Body, satellites: Iterable[Orbiter]) -> Orbitable:
    """
    Attach satellites to a central body, inserting a barycenter if needed.

    Runs once per central body, bottom-up: build each planet's system first,
    then pass the returned roots as satellites of the star. The nodes passed
    in are consumed by the builder (parent links, spheres of influence and
    possibly orbits are rewritten) and the returned tree is read-only.

    Algorithm
    ---------
    1. Sort satellites by ascending semi-major axis.
    2. For every satellite compute its sphere of influence
       soi = a * (m / M)**SOI_EXPONENT and its barycenter offset from the
       central body r = a / (1 + M / m). The satellite with the largest
       offset is the dominant satellite.
    3. If max(r) < BARYCENTER_THRESHOLD * R the central body is the root:
       all satellites attach to it and its SOI is unbounded.
    4. Otherwise a Barycenter node takes over the central body's orbit.
       Satellites inside the dominant satellite's influence boundary
       (a < a_d - soi_d) stay on the central body, the rest (and the
       central body itself) orbit the barycenter. The central body moves
       onto the dominant satellite's orbit at a = max(r), half a
       revolution out of phase, and the dominant satellite's semi-major
       axis shrinks by max(r).

    Parameters
    ----------
    central_body : Body
        Body at the center of the system, not yet configured
    satellites : iterable of Orbiter
        Bodies, barycenters (roots of previously built systems) or crafts
        orbiting the central body. Crafts are massless.

    Returns
    -------
    Orbitable
        Root of the system: the central body itself, or a new Barycenter.
        Either way its soi_radius is SOI_UNBOUNDED (-1).

    Raises
    ------
    TypeError
        If central_body is not a Body or a satellite is not an Orbiter
    RuntimeError
        If the central body was already configured or a node already has
        a parent
    ValueError
        If no satellites are given, a satellite is repeated, or the central
        body has no mass
    """
    satellites = list(satellites)
    _check_preconditions(central_body, satellites)

    # sort() is stable, equal semi-major axes keep their given order
    satellites.sort(key=_semi_major_axis)

    central_mass = central_body.mass
    dominant = None
    max_offset = 0.0
    for sat in satellites:
        sat._set_parent(central_body)
        # crafts and massless bodies have no influence and no offset
        if not isinstance(sat, Orbitable) or sat.mass <= 0:
            if isinstance(sat, Orbitable):
                sat._soi = 0.0
            continue

        a = sat.orbit.a
        sat._soi = a * (sat.mass / central_mass) ** config.SOI_EXPONENT
        offset = a / (1 + central_mass / sat.mass)
        logger.debug("%s: soi=%.6g, barycenter offset=%.6g",
                     sat.name, sat.soi_radius, offset)
        if offset > max_offset:
            max_offset = offset
            dominant = sat

    if dominant is None or max_offset < config.BARYCENTER_THRESHOLD * central_body.radius:
        central_body._soi = SOI_UNBOUNDED
        central_body._satellites = satellites
        logger.info("%s: %d satellite(s) attached directly",
                    central_body.name, len(satellites))
        return central_body

    boundary = dominant.orbit.a - dominant.soi_radius

    # barycenter takes over the central body's slot in the larger system
    barycenter = Barycenter(
        f"{central_body.name} - {dominant.name} Barycenter",
        radius=max_offset,
        mass=central_mass + dominant.mass,
        orbit=central_body.orbit,
    )
    barycenter._soi = SOI_UNBOUNDED

    inner = []
    outer = [central_body]
    for sat in satellites:
        if sat.orbit.a < boundary:
            inner.append(sat)
        else:
            outer.append(sat)
            sat._set_parent(barycenter)

    dominant_orbit = dominant.orbit
    central_body._set_parent(barycenter)
    central_body._soi = boundary
    central_body._satellites = inner
    central_body._orbit = dominant_orbit.replace(a=max_offset,
                                                 m0=dominant_orbit.m0 + math.pi)
    dominant._orbit = dominant_orbit.replace(a=dominant_orbit.a - max_offset)

    # orbits changed, restore the ordering (central body stays first on ties)
    outer.sort(key=_semi_major_axis)
    barycenter._satellites = outer

    logger.info("%s: inserting '%s' (offset %.6g >= %.3g radii), "
                "%d inner / %d outer satellite(s)",
                central_body.name, barycenter.name, max_offset,
                config.BARYCENTER_THRESHOLD, len(inner), len(outer) - 1)
    return barycenter
