from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable

from geopandas import GeoDataFrame
from pyproj import Geod
from shapely.geometry.base import BaseGeometry

from geoadvisor.constructs.coordinate import Coordinate
from geoadvisor.constructs.crs_descriptor import CRSDescriptor, CRSKind, Unit
from geoadvisor.utils.crs import LATLON_CRS, METERS_PER_FOOT, METERS_PER_US_SURVEY_FOOT

WGS84_GEOD = Geod(ellps="WGS84")

METERS_TO_KM = 1 / 1000


@dataclass(frozen=True)
class Extent:
    """
    A bounding box together with the CRS its numbers are expressed in.

    The extent is what the safety advisor compares against its threshold: large
    projected extents accumulate distortion away from the projection's centre.

    Attributes:
        min_x: The western bound (longitude or easting)
        min_y: The southern bound (latitude or northing)
        max_x: The eastern bound
        max_y: The northern bound
        crs: The descriptor of the CRS of the bounds

    Examples:
        >>> from shapely.geometry import LineString
        >>> line = LineString([(-0.5, 51.2), (0.3, 51.7)])
        >>> extent = Extent.from_geometry(line, 4326)
        >>> km = extent.diagonal_km()  # roughly 79 km
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    crs: CRSDescriptor

    def __post_init__(self):
        bounds = (self.min_x, self.min_y, self.max_x, self.max_y)
        if any(math.isnan(b) for b in bounds):
            raise ValueError(f"extent bounds cannot be NaN but found {bounds}")
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(f"extent minimums exceed maximums: {bounds}")

        if self.crs.is_geographic:
            # both corners must be valid positions on Earth
            Coordinate(self.min_x, self.min_y)
            Coordinate(self.max_x, self.max_y)

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry, crs: Any) -> Extent:
        """
        Create an extent from the bounds of a shapely geometry.

        Args:
            geometry: Any non-empty shapely geometry
            crs: The CRS of the geometry; a CRSDescriptor or anything geoadvisor.classify accepts

        Returns:
            A new Extent

        Raises:
            ValueError: If the geometry is empty
        """
        from geoadvisor.classifiers.crs_classifier import classify

        if geometry.is_empty:
            raise ValueError("cannot compute the extent of an empty geometry")

        min_x, min_y, max_x, max_y = geometry.bounds

        return cls(min_x, min_y, max_x, max_y, classify(crs))

    @classmethod
    def from_coordinates(cls, coords: Iterable[Coordinate]) -> Extent:
        """Create a WGS84 extent spanning a collection of coordinates."""
        from geoadvisor.classifiers.crs_classifier import classify

        coords = list(coords)
        if not coords:
            raise ValueError("cannot compute the extent of zero coordinates")

        lons = [c.lon for c in coords]
        lats = [c.lat for c in coords]

        return cls(min(lons), min(lats), max(lons), max(lats), classify(LATLON_CRS))

    @classmethod
    def from_geo_dataframe(cls, frame: GeoDataFrame) -> Extent:
        """
        Create an extent from the total bounds of a GeoDataFrame, in the frame's CRS.

        Args:
            frame: A GeoDataFrame with at least one non-empty geometry

        Returns:
            A new Extent; its descriptor is UNKNOWN when the frame has no CRS

        Raises:
            ValueError: If the frame holds no geometries
        """
        from geoadvisor.classifiers.crs_classifier import classify

        if frame.empty or frame.geometry.is_empty.all():
            raise ValueError("cannot compute the extent of an empty GeoDataFrame")

        min_x, min_y, max_x, max_y = (float(b) for b in frame.total_bounds)

        return cls(min_x, min_y, max_x, max_y, classify(frame.crs))

    def diagonal_km(self) -> float:
        """
        Compute the length of the bounding box diagonal in kilometres.

        Geographic extents are measured along the WGS84 ellipsoid; projected extents
        are measured in the plane and scaled by their unit.

        Returns:
            The diagonal length in kilometres

        Raises:
            ValueError: If the CRS is unknown or its unit has no known length
        """
        if self.crs.kind is CRSKind.UNKNOWN:
            raise ValueError("cannot measure an extent whose CRS is unknown")

        if self.crs.kind is CRSKind.GEOGRAPHIC:
            if self.crs.unit is not Unit.DEGREE:
                raise ValueError(f"cannot measure a geographic extent in {self.crs.unit.value}")
            _, _, meters = WGS84_GEOD.inv(self.min_x, self.min_y, self.max_x, self.max_y)
            return meters * METERS_TO_KM

        planar = math.hypot(self.max_x - self.min_x, self.max_y - self.min_y)
        if self.crs.unit is Unit.METER:
            return planar * METERS_TO_KM
        elif self.crs.unit is Unit.FOOT:
            return planar * METERS_PER_FOOT * METERS_TO_KM
        elif self.crs.unit is Unit.US_SURVEY_FOOT:
            return planar * METERS_PER_US_SURVEY_FOOT * METERS_TO_KM

        raise ValueError("cannot measure a projected extent with unspecified units")

    def centroid(self) -> Coordinate:
        """
        Get the centre of a geographic extent as a Coordinate.

        Note:
            Extents crossing the antimeridian are not detected; their centre is taken
            naively between the western and eastern bounds.

        Raises:
            ValueError: If the extent is not geographic
        """
        if not self.crs.is_geographic:
            raise ValueError("only geographic extents have a longitude/latitude centroid")

        return Coordinate(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2,
        )
