from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple

from geopandas import GeoDataFrame, GeoSeries
from pyproj import CRS
from pyproj.exceptions import CRSError

from geoadvisor.constructs.crs_descriptor import CRSDescriptor, CRSKind, Unit
from geoadvisor.utils.crs import (
    DEGREE_UNIT_NAMES,
    FOOT_UNIT_NAMES,
    METER_UNIT_NAMES,
    OTHER_ANGULAR_UNIT_NAMES,
    OTHER_LINEAR_UNIT_NAMES,
    US_SURVEY_FOOT_UNIT_NAMES,
    utm_hemisphere_from_epsg,
)
from geoadvisor.utils.exceptions import MalformedCRSError
from geoadvisor.utils.keys import EPSG_KEYS, KIND_KEYS, UNIT_KEYS

log = logging.getLogger(__name__)

ANGULAR = "angular"
LINEAR = "linear"

# PROJJSON "type" values are accepted too
GEOGRAPHIC_KIND_NAMES = frozenset(
    ["geographic", "geodetic", "geographic 2d", "geographic 3d", "geographiccrs", "geodeticcrs"]
)
PROJECTED_KIND_NAMES = frozenset(["projected", "planar", "projectedcrs"])
UNKNOWN_KIND_NAMES = frozenset(["unknown", "none"])


def _parse_unit_name(name: str) -> Optional[Tuple[str, Unit]]:
    """
    Map a unit name onto its category (angular or linear) and its Unit.

    Returns None when the name is not recognised.
    """
    n = name.strip().lower()

    if n in DEGREE_UNIT_NAMES:
        return ANGULAR, Unit.DEGREE
    if n in OTHER_ANGULAR_UNIT_NAMES:
        return ANGULAR, Unit.UNSPECIFIED
    if n in METER_UNIT_NAMES:
        return LINEAR, Unit.METER
    if n in US_SURVEY_FOOT_UNIT_NAMES:
        return LINEAR, Unit.US_SURVEY_FOOT
    if n in FOOT_UNIT_NAMES:
        return LINEAR, Unit.FOOT
    if n in OTHER_LINEAR_UNIT_NAMES:
        return LINEAR, Unit.UNSPECIFIED

    # PROJ has many named variants, e.g. "Clarke's foot" or "German legal metre"
    if "foot" in n or "feet" in n:
        if "survey" in n:
            return LINEAR, Unit.US_SURVEY_FOOT
        return LINEAR, Unit.FOOT
    if "metre" in n or "meter" in n:
        return LINEAR, Unit.METER
    if "degree" in n:
        return ANGULAR, Unit.DEGREE

    return None


def _resolve_units(parsed: List[Tuple[str, Unit]]) -> Tuple[Optional[str], Unit]:
    """Reduce per-axis units to a single category and unit, rejecting contradictions."""
    categories: Set[str] = {category for category, _ in parsed}
    if len(categories) > 1:
        raise MalformedCRSError(
            "CRS metadata declares both angular and linear units: "
            f"{sorted(u.value for _, u in parsed)}"
        )

    units: Set[Unit] = {unit for _, unit in parsed}
    if len(units) > 1:
        raise MalformedCRSError(
            f"CRS metadata declares several different units: {sorted(u.value for u in units)}"
        )

    if not parsed:
        return None, Unit.UNSPECIFIED

    return categories.pop(), units.pop()


def _first_present(metadata: Mapping, keys: Iterable[str]) -> Any:
    for key in keys:
        value = metadata.get(key)
        if value is not None:
            return value
    return None


def _parse_epsg(value: Any) -> Optional[int]:
    if value is None:
        return None

    if isinstance(value, str):
        text = value.strip()
        if text.upper().startswith("EPSG:"):
            text = text[len("EPSG:"):]
        value = text

    try:
        code = int(value)
    except (TypeError, ValueError) as e:
        raise MalformedCRSError(f"could not parse EPSG code {value!r}") from e

    if code <= 0:
        raise MalformedCRSError(f"EPSG codes are positive integers but found {code}")

    return code


def _parse_kind(value: Any) -> Optional[CRSKind]:
    if value is None:
        return None
    if isinstance(value, CRSKind):
        return value

    name = str(value).strip().lower()
    if name in GEOGRAPHIC_KIND_NAMES:
        return CRSKind.GEOGRAPHIC
    if name in PROJECTED_KIND_NAMES:
        return CRSKind.PROJECTED
    if name in UNKNOWN_KIND_NAMES:
        return CRSKind.UNKNOWN

    raise MalformedCRSError(f"unrecognised CRS kind {value!r}")


def _kind_for_category(category: Optional[str]) -> Optional[CRSKind]:
    if category == ANGULAR:
        return CRSKind.GEOGRAPHIC
    if category == LINEAR:
        return CRSKind.PROJECTED
    return None


def _classify_pyproj(crs: CRS) -> CRSDescriptor:
    # earth-centred XYZ and height-only systems have no horizontal plane to advise on
    if crs.is_geocentric:
        raise MalformedCRSError(f"{crs.name} is a geocentric CRS, not geographic or projected")
    if crs.is_vertical and not (crs.is_geographic or crs.is_projected):
        raise MalformedCRSError(f"{crs.name} is a vertical CRS with no horizontal axes")

    # only the horizontal axes; a vertical axis in metres does not make a CRS projected
    parsed = []
    for axis in crs.axis_info[:2]:
        unit = _parse_unit_name(axis.unit_name)
        if unit is None:
            # PROJ knows the unit even if we don't; fall back on the nature of the CRS
            unit = (ANGULAR if crs.is_geographic else LINEAR, Unit.UNSPECIFIED)
        parsed.append(unit)

    category, unit = _resolve_units(parsed)

    if crs.is_geographic:
        kind = CRSKind.GEOGRAPHIC
    elif crs.is_projected:
        kind = CRSKind.PROJECTED
    else:
        kind = _kind_for_category(category)
        if kind is None:
            raise MalformedCRSError(f"cannot tell whether {crs.name} is geographic or projected")

    inferred = _kind_for_category(category)
    if inferred is not None and inferred is not kind:
        raise MalformedCRSError(
            f"{crs.name} is {kind.value} but its axes are in {unit.value}"
        )

    if kind is CRSKind.GEOGRAPHIC and category is None:
        unit = Unit.DEGREE

    epsg_code = crs.to_epsg()
    utm_zone = crs.utm_zone
    if utm_zone is not None:
        southern = utm_zone.upper().endswith("S")
    else:
        southern = utm_hemisphere_from_epsg(epsg_code) == "S"

    return CRSDescriptor(
        kind=kind,
        unit=unit,
        epsg_code=epsg_code,
        is_southern_hemisphere_utm=southern and kind is CRSKind.PROJECTED,
    )


def _classify_mapping(metadata: Mapping) -> CRSDescriptor:
    declared_kind = _parse_kind(_first_present(metadata, KIND_KEYS))
    raw_units = _first_present(metadata, UNIT_KEYS)
    epsg_code = _parse_epsg(_first_present(metadata, EPSG_KEYS))

    if declared_kind is None and raw_units is None and epsg_code is None:
        return CRSDescriptor.unknown()

    if isinstance(raw_units, (str, Unit)):
        raw_units = [raw_units]
    elif raw_units is None:
        raw_units = []

    parsed = []
    for raw in raw_units:
        if isinstance(raw, Unit):
            if raw is Unit.UNSPECIFIED:
                continue
            raw = raw.value
        unit = _parse_unit_name(str(raw))
        if unit is None:
            raise MalformedCRSError(f"unrecognised unit name {raw!r}")
        parsed.append(unit)

    category, unit = _resolve_units(parsed)
    inferred_kind = _kind_for_category(category)

    if declared_kind is not None and inferred_kind is not None and declared_kind is not inferred_kind:
        raise MalformedCRSError(
            f"CRS metadata declares a {declared_kind.value} CRS with {category} units ({unit.value})"
        )

    kind = declared_kind or inferred_kind

    if kind is None and epsg_code is None:
        return CRSDescriptor.unknown()

    if epsg_code is not None:
        # PROJ knows what the code is; declared kind and units must agree with it
        try:
            looked_up = _classify_pyproj(CRS.from_epsg(epsg_code))
        except CRSError as e:
            raise MalformedCRSError(f"unknown EPSG code: {epsg_code}") from e

        if kind is not None and kind is not looked_up.kind:
            raise MalformedCRSError(
                f"CRS metadata declares a {kind.value} CRS but EPSG:{epsg_code} is {looked_up.kind.value}"
            )
        if (
            unit is not Unit.UNSPECIFIED
            and looked_up.unit is not Unit.UNSPECIFIED
            and unit is not looked_up.unit
        ):
            raise MalformedCRSError(
                f"CRS metadata declares {unit.value} units but EPSG:{epsg_code} is in {looked_up.unit.value}"
            )

        return looked_up

    if kind is CRSKind.GEOGRAPHIC and category is None:
        unit = Unit.DEGREE

    return CRSDescriptor(kind=kind, unit=unit)


def classify(crs_metadata: Any) -> CRSDescriptor:
    """
    Classify CRS metadata as geographic, projected or unknown.

    "Unknown" means no CRS was set at all and is never conflated with "geographic",
    which means a CRS was set and its axes are angular. This function is pure: the
    same metadata always yields an equal descriptor.

    Args:
        crs_metadata: One of:
            - None, or an empty mapping or blank string: no CRS metadata at all
            - a CRSDescriptor, returned unchanged
            - a mapping with any of the keys `kind`, `units` (a unit name or a list of
              names, one per axis) and `epsg`
            - a pyproj CRS, or anything pyproj.CRS.from_user_input accepts
              (an EPSG integer, 'EPSG:32633', WKT, a PROJ string)
            - a geopandas GeoDataFrame or GeoSeries, whose `.crs` is classified

    Returns:
        The CRSDescriptor for the metadata

    Raises:
        MalformedCRSError: If the metadata declares contradictory units or kinds, declares
            a kind or unit that disagrees with its EPSG code, names a geocentric or
            vertical-only CRS, or cannot be parsed

    Examples:
        >>> classify({"units": "degree"}).kind
        <CRSKind.GEOGRAPHIC: 'geographic'>
        >>> classify({"units": ["metre", "metre"]}).kind
        <CRSKind.PROJECTED: 'projected'>
        >>> classify(None).kind
        <CRSKind.UNKNOWN: 'unknown'>
        >>> classify("EPSG:32760").is_southern_hemisphere_utm
        True
    """
    if isinstance(crs_metadata, CRSDescriptor):
        return crs_metadata

    if isinstance(crs_metadata, (GeoDataFrame, GeoSeries)):
        return classify(crs_metadata.crs)

    if crs_metadata is None:
        descriptor = CRSDescriptor.unknown()
    elif isinstance(crs_metadata, CRS):
        descriptor = _classify_pyproj(crs_metadata)
    elif isinstance(crs_metadata, Mapping):
        descriptor = _classify_mapping(crs_metadata)
    elif isinstance(crs_metadata, str) and not crs_metadata.strip():
        descriptor = CRSDescriptor.unknown()
    elif isinstance(crs_metadata, (str, int)) and not isinstance(crs_metadata, bool):
        try:
            crs = CRS.from_user_input(crs_metadata)
        except CRSError as e:
            raise MalformedCRSError(f"could not parse CRS from {crs_metadata!r}") from e
        descriptor = _classify_pyproj(crs)
    else:
        raise MalformedCRSError(
            f"cannot classify CRS metadata of type {type(crs_metadata).__name__}"
        )

    log.debug(f"classified {crs_metadata!r} as {descriptor}")

    return descriptor
