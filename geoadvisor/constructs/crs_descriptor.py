from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pyproj import CRS
from pyproj.exceptions import CRSError

from geoadvisor.utils.crs import utm_hemisphere_from_epsg
from geoadvisor.utils.exceptions import MalformedCRSError


class CRSKind(Enum):
    """
    The nature of a coordinate reference system.

    Values:
        GEOGRAPHIC: CRS metadata is set and the horizontal axes are angular
        PROJECTED: CRS metadata is set and the horizontal axes are linear
        UNKNOWN: no CRS metadata was set at all
    """

    GEOGRAPHIC = "geographic"
    PROJECTED = "projected"
    UNKNOWN = "unknown"


class Unit(Enum):
    """Unit of the horizontal axes of a CRS."""

    DEGREE = "degree"
    METER = "metre"
    FOOT = "foot"
    US_SURVEY_FOOT = "US survey foot"
    UNSPECIFIED = "unspecified"

    @property
    def is_linear(self) -> bool:
        return self in (Unit.METER, Unit.FOOT, Unit.US_SURVEY_FOOT)


@dataclass(frozen=True)
class CRSDescriptor:
    """
    An immutable description of a coordinate reference system.

    A CRSDescriptor is created when a dataset's CRS is classified or when the UTM
    selector manufactures one, and is passed alongside data rather than attached to
    it. It is validated at construction and never mutated afterwards.

    Attributes:
        kind: Whether the CRS is geographic, projected or unknown
        unit: The unit of the horizontal axes
        epsg_code: The EPSG code of the CRS, if one is known
        is_southern_hemisphere_utm: True for southern-hemisphere UTM systems (EPSG:327xx)

    Raises:
        MalformedCRSError: If the attributes contradict each other

    Examples:
        >>> from geoadvisor.constructs.crs_descriptor import CRSDescriptor
        >>> wgs84 = CRSDescriptor.from_epsg(4326)
        >>> wgs84.kind
        <CRSKind.GEOGRAPHIC: 'geographic'>
        >>> CRSDescriptor.unknown().is_known
        False
    """

    kind: CRSKind
    unit: Unit = Unit.UNSPECIFIED
    epsg_code: Optional[int] = None
    is_southern_hemisphere_utm: bool = False

    def __post_init__(self):
        if not isinstance(self.kind, CRSKind):
            raise MalformedCRSError(f"kind must be a CRSKind but found {self.kind!r}")
        if not isinstance(self.unit, Unit):
            raise MalformedCRSError(f"unit must be a Unit but found {self.unit!r}")

        if self.kind is CRSKind.UNKNOWN:
            if self.epsg_code is not None or self.unit is not Unit.UNSPECIFIED:
                raise MalformedCRSError(
                    "an unknown CRS cannot carry an EPSG code or a unit; "
                    f"found epsg_code={self.epsg_code}, unit={self.unit.value}"
                )
        elif self.kind is CRSKind.GEOGRAPHIC and self.unit.is_linear:
            raise MalformedCRSError(
                f"a geographic CRS cannot have linear unit {self.unit.value}"
            )
        elif self.kind is CRSKind.PROJECTED and self.unit is Unit.DEGREE:
            raise MalformedCRSError("a projected CRS cannot have angular units")

        if self.is_southern_hemisphere_utm and self.kind is not CRSKind.PROJECTED:
            raise MalformedCRSError(
                "only a projected CRS can be a southern hemisphere UTM system"
            )

        hemisphere = utm_hemisphere_from_epsg(self.epsg_code)
        if hemisphere is not None and self.is_southern_hemisphere_utm != (hemisphere == "S"):
            raise MalformedCRSError(
                f"EPSG:{self.epsg_code} is a UTM {hemisphere} system but "
                f"is_southern_hemisphere_utm={self.is_southern_hemisphere_utm}"
            )

    def __str__(self):
        epsg = f"EPSG:{self.epsg_code}" if self.epsg_code is not None else "no EPSG"
        return f"CRSDescriptor({self.kind.value}, {self.unit.value}, {epsg})"

    @classmethod
    def unknown(cls) -> CRSDescriptor:
        """A descriptor for data that has no CRS metadata at all."""
        return cls(kind=CRSKind.UNKNOWN)

    @classmethod
    def from_epsg(cls, epsg_code: int) -> CRSDescriptor:
        """
        Build a descriptor from an EPSG code by looking it up in the PROJ database.

        Args:
            epsg_code: The EPSG code, e.g. 4326 or 32633

        Returns:
            A descriptor classified from the CRS the code names

        Raises:
            MalformedCRSError: If PROJ does not know the code
        """
        # deferred to avoid a circular import with the classifier
        from geoadvisor.classifiers.crs_classifier import classify

        try:
            crs = CRS.from_epsg(epsg_code)
        except CRSError as e:
            raise MalformedCRSError(f"unknown EPSG code: {epsg_code}") from e

        return classify(crs)

    @property
    def is_known(self) -> bool:
        return self.kind is not CRSKind.UNKNOWN

    @property
    def is_geographic(self) -> bool:
        return self.kind is CRSKind.GEOGRAPHIC

    @property
    def is_projected(self) -> bool:
        return self.kind is CRSKind.PROJECTED

    @property
    def utm_hemisphere(self) -> Optional[str]:
        """The UTM hemisphere ("N" or "S") when the EPSG code is a WGS84 UTM code."""
        return utm_hemisphere_from_epsg(self.epsg_code)

    @property
    def utm_zone(self) -> Optional[int]:
        """The UTM zone number when the EPSG code is a WGS84 UTM code."""
        if self.utm_hemisphere is None:
            return None
        return self.epsg_code % 100

    def to_crs(self) -> CRS:
        """
        Get the pyproj CRS this descriptor refers to.

        Returns:
            A pyproj CRS built from the EPSG code

        Raises:
            MalformedCRSError: If the descriptor has no EPSG code
        """
        if self.epsg_code is None:
            raise MalformedCRSError(f"{self} has no EPSG code to build a CRS from")

        try:
            return CRS.from_epsg(self.epsg_code)
        except CRSError as e:
            raise MalformedCRSError(f"unknown EPSG code: {self.epsg_code}") from e
