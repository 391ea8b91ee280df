from __future__ import annotations

import logging
import math
from typing import NamedTuple, Tuple

from pyproj import CRS
from shapely.geometry import Point

from geoadvisor.constructs.coordinate import Coordinate
from geoadvisor.constructs.crs_descriptor import CRSDescriptor, CRSKind, Unit
from geoadvisor.constructs.extent import Extent
from geoadvisor.utils.crs import (
    POLAR_LATITUDE_LIMIT,
    UTM_NORTH_BASE,
    UTM_SOUTH_BASE,
    UTM_ZONE_COUNT,
    UTM_ZONE_WIDTH,
)

log = logging.getLogger(__name__)


class UTMSelection(NamedTuple):
    """
    The UTM zone chosen for a position on Earth.

    Attributes:
        zone_number: The UTM zone, 1 to 60
        epsg_code: The WGS84 UTM EPSG code, 326xx in the north and 327xx in the south
        polar_warning: True when the position lies beyond 84 degrees of latitude, where
            UPS rather than UTM is the recommended system
    """

    zone_number: int
    epsg_code: int
    polar_warning: bool = False

    @property
    def hemisphere(self) -> str:
        return "S" if self.epsg_code > UTM_SOUTH_BASE else "N"

    def to_crs(self) -> CRS:
        return CRS.from_epsg(self.epsg_code)

    def to_descriptor(self) -> CRSDescriptor:
        """Manufacture the descriptor of the selected UTM system."""
        return CRSDescriptor(
            kind=CRSKind.PROJECTED,
            unit=Unit.METER,
            epsg_code=self.epsg_code,
            is_southern_hemisphere_utm=self.hemisphere == "S",
        )


def select_utm_for_coordinate(coordinate: Coordinate) -> UTMSelection:
    """
    Select the UTM zone and EPSG code for a coordinate.

    The zone is floor((lon + 180) / 6) mod 60, plus one, so longitude 180 wraps to
    zone 1 just like longitude -180. Latitudes above zero select the northern EPSG
    range (326xx); latitudes at or below zero, the equator included, select the
    southern range (327xx).

    The irregular zones around Norway and Svalbard are not applied, and positions
    beyond 84 degrees of latitude still get a nominal zone but are flagged with
    polar_warning.

    Args:
        coordinate: The position to select a zone for

    Returns:
        A UTMSelection

    Examples:
        >>> select_utm_for_coordinate(Coordinate(174.7, -36.9))
        UTMSelection(zone_number=60, epsg_code=32760, polar_warning=False)
    """
    zone_number = (
        math.floor((coordinate.lon + 180) / UTM_ZONE_WIDTH) % UTM_ZONE_COUNT + 1
    )

    if coordinate.lat > 0:
        epsg_code = UTM_NORTH_BASE + zone_number
    else:
        epsg_code = UTM_SOUTH_BASE + zone_number

    polar_warning = abs(coordinate.lat) > POLAR_LATITUDE_LIMIT
    if polar_warning:
        log.warning(
            f"latitude {coordinate.lat} is beyond +/-{POLAR_LATITUDE_LIMIT:g} degrees; "
            f"UTM zone {zone_number} is nominal and UPS is recommended there"
        )

    return UTMSelection(zone_number, epsg_code, polar_warning)


def select_utm(longitude: float, latitude: float) -> UTMSelection:
    """
    Select the UTM zone and EPSG code for a longitude/latitude pair in degrees.

    Args:
        longitude: The longitude in decimal degrees (range: -180 to 180)
        latitude: The latitude in decimal degrees (range: -90 to 90)

    Returns:
        A UTMSelection

    Raises:
        InvalidCoordinateError: If either value is out of range

    Examples:
        >>> select_utm(-0.1, 51.5)
        UTMSelection(zone_number=30, epsg_code=32630, polar_warning=False)
    """
    return select_utm_for_coordinate(Coordinate(longitude, latitude))


def select_utm_for_extent(extent: Extent) -> UTMSelection:
    """
    Select the UTM zone for the centre of a geographic extent.

    Args:
        extent: An extent in a geographic CRS

    Returns:
        The UTMSelection of the extent's centroid

    Raises:
        ValueError: If the extent is not geographic
    """
    return select_utm_for_coordinate(extent.centroid())


def project_to_utm(coordinate: Coordinate) -> Tuple[Point, UTMSelection]:
    """
    Project a coordinate into its own UTM zone.

    Args:
        coordinate: The coordinate to project

    Returns:
        The projected (easting, northing) point in metres and the zone it was projected into

    Examples:
        >>> point, selection = project_to_utm(Coordinate(-0.1, 51.5))
        >>> selection.epsg_code
        32630
    """
    selection = select_utm_for_coordinate(coordinate)

    return coordinate.to_crs(selection.to_crs()), selection
