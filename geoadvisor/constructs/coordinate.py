from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError
from shapely.geometry import Point

from geoadvisor.utils.crs import LATLON_CRS
from geoadvisor.utils.exceptions import InvalidCoordinateError


def _check_range(name: str, value: Any, limit: float) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidCoordinateError(f"{name} must be a number but found {value!r}")

    value = float(value)
    if math.isnan(value) or not -limit <= value <= limit:
        raise InvalidCoordinateError(
            f"{name} must be within [-{limit:g}, {limit:g}] but found {value}"
        )

    return value


@dataclass(frozen=True)
class Coordinate:
    """
    A single WGS84 (EPSG:4326) longitude/latitude position in decimal degrees.

    A Coordinate is immutable and validated at construction: longitude must lie in
    [-180, 180] and latitude in [-90, 90]. Out of range values are rejected, never
    clamped.

    Attributes:
        lon: The longitude in decimal degrees
        lat: The latitude in decimal degrees
        coordinate_id: An optional identifier (any hashable value)

    Raises:
        InvalidCoordinateError: If a value is not a number or is out of range

    Examples:
        >>> from geoadvisor.constructs.coordinate import Coordinate
        >>> auckland = Coordinate(174.7, -36.9)
        >>> auckland.geom.x
        174.7
        >>> Coordinate(200.0, 0.0)
        Traceback (most recent call last):
            ...
        geoadvisor.utils.exceptions.InvalidCoordinateError: longitude must be within [-180, 180] but found 200.0
    """

    lon: float
    lat: float
    coordinate_id: Any = None

    def __post_init__(self):
        # frozen dataclass; normalised values are written through object.__setattr__
        object.__setattr__(self, "lon", _check_range("longitude", self.lon, 180.0))
        object.__setattr__(self, "lat", _check_range("latitude", self.lat, 90.0))

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float, coordinate_id: Any = None) -> Coordinate:
        """
        Create a coordinate from latitude and longitude values, in that order.

        Args:
            lat: The latitude in decimal degrees (range: -90 to 90)
            lon: The longitude in decimal degrees (range: -180 to 180)
            coordinate_id: An optional identifier

        Returns:
            A new Coordinate
        """
        return cls(lon=lon, lat=lat, coordinate_id=coordinate_id)

    @classmethod
    def from_point(cls, point: Point, coordinate_id: Any = None) -> Coordinate:
        """Create a coordinate from a shapely Point whose x is longitude and y is latitude."""
        return cls(lon=point.x, lat=point.y, coordinate_id=coordinate_id)

    @property
    def geom(self) -> Point:
        return Point(self.lon, self.lat)

    @property
    def crs(self) -> CRS:
        return LATLON_CRS

    def to_crs(self, new_crs: Any) -> Point:
        """
        Transform this coordinate into a different coordinate reference system.

        Args:
            new_crs: The target CRS. Can be a pyproj.CRS object, an EPSG code as a string
                (e.g., 'EPSG:32633'), an integer EPSG code, or any CRS format that pyproj.CRS() accepts

        Returns:
            A shapely Point holding the (x, y) position in the target CRS

        Raises:
            ValueError: If the new_crs cannot be parsed into a valid CRS, or if the
                transformation results in infinite coordinate values

        Examples:
            >>> coord = Coordinate(-0.1, 51.5)
            >>> utm = coord.to_crs(32630)  # UTM Zone 30N
        """
        # convert the incoming crs to an pyproj.crs.CRS object; this could fail
        try:
            new_crs = CRS(new_crs)
        except (CRSError, ProjError) as e:
            raise ValueError(
                f"Could not parse incoming `new_crs` parameter: {new_crs}"
            ) from e

        if new_crs == self.crs:
            return self.geom

        transformer = Transformer.from_crs(self.crs, new_crs, always_xy=True)
        new_x, new_y = transformer.transform(self.lon, self.lat)

        if math.isinf(new_x) or math.isinf(new_y):
            raise ValueError(
                f"Unable to convert {self.crs} ({self.lon}, {self.lat}) -> {new_crs} ({new_x}, {new_y})"
            )

        return Point(new_x, new_y)
