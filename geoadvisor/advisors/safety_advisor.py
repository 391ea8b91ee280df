from __future__ import annotations

import logging
import math
from typing import Any, Optional

from geopandas import GeoDataFrame

from geoadvisor.advisors.advisor_interface import AdvisorInterface
from geoadvisor.classifiers.crs_classifier import classify
from geoadvisor.constructs.crs_descriptor import CRSKind, Unit
from geoadvisor.constructs.extent import Extent
from geoadvisor.constructs.operation import OperationKind, OperationRequest
from geoadvisor.constructs.verdict import AdvisoryVerdict, ReasonCode, Verdict
from geoadvisor.utils.exceptions import UnsupportedOperationKindError

log = logging.getLogger(__name__)

DEFAULT_EXTENT_THRESHOLD_KM = 500.0

# operations whose planar result on degree units is distorted
DEGREE_SENSITIVE_OPERATIONS = frozenset(
    [
        OperationKind.DISTANCE_BUFFER,
        OperationKind.AREA_COMPUTATION,
        OperationKind.DIRECTION_COMPUTATION,
    ]
)


class SafetyAdvisor(AdvisorInterface):
    """
    Advisor that decides whether an operation is numerically sound for its CRS.

    The decision table:

    - no CRS declared: reprojection recommended, whatever the operation
    - geographic CRS, topological predicate: safe, predicates do not depend on the CRS
    - geographic CRS, distance, area or direction: spherical geometry recommended,
      unless the caller declares a spherical engine is available, in which case safe
    - projected CRS without a declared unit: reprojection recommended
    - projected CRS with linear units: safe, unless the data spans more than the
      extent threshold, in which case reprojection recommended

    Args:
        extent_threshold_km: The bounding box diagonal (in kilometres) beyond which a
            projected CRS is no longer trusted. Default is 500 km.

    Examples:
        >>> from geoadvisor.advisors.safety_advisor import SafetyAdvisor
        >>> from geoadvisor.classifiers.crs_classifier import classify
        >>>
        >>> advisor = SafetyAdvisor(extent_threshold_km=250)
        >>> request = OperationRequest(OperationKind.DISTANCE_BUFFER, classify(32633), extent_diagonal_km=50)
        >>> advisor.advise(request).verdict
        <Verdict.SAFE: 'safe'>
    """

    def __init__(self, extent_threshold_km: float = DEFAULT_EXTENT_THRESHOLD_KM):
        threshold = float(extent_threshold_km)
        if math.isnan(threshold) or threshold <= 0:
            raise ValueError(
                f"extent_threshold_km must be greater than 0 but found {extent_threshold_km}"
            )
        self.extent_threshold_km = threshold

    def __repr__(self):
        return f"SafetyAdvisor(extent_threshold_km={self.extent_threshold_km})"

    def advise(self, request: OperationRequest) -> AdvisoryVerdict:
        if not isinstance(request, OperationRequest):
            raise TypeError(
                f"request must be an OperationRequest but found {type(request).__name__}"
            )
        if not isinstance(request.kind, OperationKind):
            raise UnsupportedOperationKindError(
                f"unsupported operation kind {request.kind!r}"
            )

        verdict = self._decide(request)

        log.debug(f"{request.kind.name} on {request.crs}: {verdict}")

        return verdict

    def _decide(self, request: OperationRequest) -> AdvisoryVerdict:
        crs = request.crs

        if crs.kind is CRSKind.UNKNOWN:
            return AdvisoryVerdict(
                Verdict.UNSAFE_REPROJECT_RECOMMENDED, ReasonCode.NO_CRS_DECLARED
            )

        if crs.kind is CRSKind.GEOGRAPHIC:
            if request.kind is OperationKind.TOPOLOGICAL_PREDICATE:
                return AdvisoryVerdict(Verdict.SAFE, ReasonCode.TOPOLOGY_CRS_INVARIANT)
            elif request.kind in DEGREE_SENSITIVE_OPERATIONS:
                if request.spherical_engine_available:
                    return AdvisoryVerdict(
                        Verdict.SAFE, ReasonCode.SPHERICAL_ENGINE_COMPENSATES
                    )
                return AdvisoryVerdict(
                    Verdict.UNSAFE_SPHERICAL_RECOMMENDED, ReasonCode.PLANAR_DEGREE_UNITS
                )
            raise UnsupportedOperationKindError(
                f"no rule for {request.kind!r} on a geographic CRS"
            )

        # projected
        if crs.unit is Unit.UNSPECIFIED:
            return AdvisoryVerdict(
                Verdict.UNSAFE_REPROJECT_RECOMMENDED,
                ReasonCode.UNSPECIFIED_LINEAR_UNITS,
            )

        extent = request.extent_diagonal_km
        if extent is not None and extent > self.extent_threshold_km:
            return AdvisoryVerdict(
                Verdict.UNSAFE_REPROJECT_RECOMMENDED,
                ReasonCode.LARGE_EXTENT_DISTORTION,
            )

        return AdvisoryVerdict(Verdict.SAFE, ReasonCode.PROJECTED_LINEAR_UNITS)

    def advise_frame(
        self,
        frame: GeoDataFrame,
        operation_kind: Any,
        spherical_engine_available: bool = False,
    ) -> AdvisoryVerdict:
        """
        Judge an operation about to be run on a GeoDataFrame.

        The frame's CRS is classified and, for projected frames, the diagonal of its
        total bounds is measured and compared against the extent threshold.

        Args:
            frame: The data the operation will run on
            operation_kind: An OperationKind, or its name or value
            spherical_engine_available: Whether the geometry engine computes on the sphere

        Returns:
            An AdvisoryVerdict

        Examples:
            >>> gdf = geopandas.read_file('parcels.gpkg')
            >>> verdict = SafetyAdvisor().advise_frame(gdf, "distance_buffer")
            >>> if not verdict.is_safe:
            ...     print(verdict.message)
        """
        descriptor = classify(frame)

        extent_km: Optional[float] = None
        has_geometries = not (frame.empty or frame.geometry.is_empty.all())
        if descriptor.is_projected and descriptor.unit.is_linear and has_geometries:
            extent_km = Extent.from_geo_dataframe(frame).diagonal_km()

        request = OperationRequest(
            kind=operation_kind,
            crs=descriptor,
            extent_diagonal_km=extent_km,
            spherical_engine_available=spherical_engine_available,
        )

        return self.advise(request)


def advise(
    operation_kind: Any,
    crs: Any,
    extent_diagonal_km: Optional[float] = None,
    spherical_engine_available: bool = False,
    extent_threshold_km: float = DEFAULT_EXTENT_THRESHOLD_KM,
) -> AdvisoryVerdict:
    """
    Judge whether an operation is numerically sound for the CRS of its input data.

    Args:
        operation_kind: An OperationKind, or its name or value (e.g. "distance_buffer")
        crs: A CRSDescriptor, or any CRS metadata geoadvisor.classify accepts
        extent_diagonal_km: The diagonal of the data's bounding box in kilometres, if known
        spherical_engine_available: Whether the geometry engine computes on the sphere
        extent_threshold_km: The extent beyond which a projected CRS is no longer trusted

    Returns:
        An AdvisoryVerdict

    Raises:
        UnsupportedOperationKindError: If operation_kind is not a known kind
        MalformedCRSError: If the CRS metadata is contradictory or unparseable

    Examples:
        >>> advise("distance_buffer", None).verdict
        <Verdict.UNSAFE_REPROJECT_RECOMMENDED: 'unsafe_reproject_recommended'>
        >>> advise(OperationKind.TOPOLOGICAL_PREDICATE, "EPSG:4326").verdict
        <Verdict.SAFE: 'safe'>
    """
    request = OperationRequest(
        kind=operation_kind,
        crs=classify(crs),
        extent_diagonal_km=extent_diagonal_km,
        spherical_engine_available=spherical_engine_available,
    )

    return SafetyAdvisor(extent_threshold_km).advise(request)
