import math
from unittest import TestCase

import geopandas as gpd
from shapely.geometry import Point

from geoadvisor.advisors.safety_advisor import (
    DEFAULT_EXTENT_THRESHOLD_KM,
    SafetyAdvisor,
    advise,
)
from geoadvisor.constructs.crs_descriptor import CRSDescriptor, CRSKind, Unit
from geoadvisor.constructs.operation import OperationKind, OperationRequest
from geoadvisor.constructs.verdict import AdvisoryVerdict, ReasonCode, Verdict
from geoadvisor.utils.exceptions import MalformedCRSError, UnsupportedOperationKindError

UNKNOWN = CRSDescriptor.unknown()
GEOGRAPHIC = CRSDescriptor(CRSKind.GEOGRAPHIC, Unit.DEGREE, 4326)
PROJECTED = CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 32630)


class TestDecisionTable(TestCase):
    """The verdicts of the default safety advisor"""

    def test_unknown_crs_always_needs_reprojection(self):
        for kind in OperationKind:
            v = advise(kind, UNKNOWN)
            self.assertEqual(
                v,
                AdvisoryVerdict(Verdict.UNSAFE_REPROJECT_RECOMMENDED, ReasonCode.NO_CRS_DECLARED),
            )
        self.assertEqual(
            advise(OperationKind.DISTANCE_BUFFER, UNKNOWN).message,
            "no CRS declared; operation assumes planar units of unknown meaning",
        )

    def test_geographic_buffer_needs_spherical_engine(self):
        v = advise(OperationKind.DISTANCE_BUFFER, GEOGRAPHIC)

        self.assertIs(v.verdict, Verdict.UNSAFE_SPHERICAL_RECOMMENDED)
        self.assertIs(v.reason, ReasonCode.PLANAR_DEGREE_UNITS)
        self.assertFalse(v.is_safe)

    def test_geographic_buffer_with_spherical_engine_is_safe(self):
        v = advise(OperationKind.DISTANCE_BUFFER, GEOGRAPHIC, spherical_engine_available=True)

        self.assertTrue(v.is_safe)
        self.assertEqual(v.message, "spherical engine compensates for degree units")

    def test_geographic_area_and_direction(self):
        for kind in (OperationKind.AREA_COMPUTATION, OperationKind.DIRECTION_COMPUTATION):
            self.assertIs(advise(kind, GEOGRAPHIC).verdict, Verdict.UNSAFE_SPHERICAL_RECOMMENDED)
            self.assertIs(
                advise(kind, GEOGRAPHIC, spherical_engine_available=True).verdict, Verdict.SAFE
            )

    def test_geographic_topology_is_safe_regardless_of_extent(self):
        for extent in (None, 0, 50, 20000):
            v = advise(OperationKind.TOPOLOGICAL_PREDICATE, GEOGRAPHIC, extent_diagonal_km=extent)
            self.assertEqual(v, AdvisoryVerdict(Verdict.SAFE, ReasonCode.TOPOLOGY_CRS_INVARIANT))

    def test_projected_small_extent_is_safe(self):
        v = advise(OperationKind.DISTANCE_BUFFER, PROJECTED, extent_diagonal_km=50)

        self.assertEqual(v, AdvisoryVerdict(Verdict.SAFE, ReasonCode.PROJECTED_LINEAR_UNITS))

    def test_projected_without_extent_is_safe(self):
        for kind in OperationKind:
            self.assertIs(advise(kind, PROJECTED).verdict, Verdict.SAFE)

    def test_projected_large_extent_needs_reprojection(self):
        v = advise(OperationKind.AREA_COMPUTATION, PROJECTED, extent_diagonal_km=600)

        self.assertIs(v.verdict, Verdict.UNSAFE_REPROJECT_RECOMMENDED)
        self.assertEqual(v.message, "projected CRS accuracy degrades over large extents")

    def test_threshold_itself_is_safe(self):
        v = advise(OperationKind.DISTANCE_BUFFER, PROJECTED, extent_diagonal_km=DEFAULT_EXTENT_THRESHOLD_KM)

        self.assertTrue(v.is_safe)

    def test_projected_feet_are_linear(self):
        feet = CRSDescriptor(CRSKind.PROJECTED, Unit.US_SURVEY_FOOT, 2263)

        self.assertTrue(advise(OperationKind.DISTANCE_BUFFER, feet, extent_diagonal_km=20).is_safe)

    def test_projected_without_unit_needs_reprojection(self):
        v = advise(OperationKind.DISTANCE_BUFFER, CRSDescriptor(CRSKind.PROJECTED))

        self.assertEqual(
            v,
            AdvisoryVerdict(Verdict.UNSAFE_REPROJECT_RECOMMENDED, ReasonCode.UNSPECIFIED_LINEAR_UNITS),
        )

    def test_raw_crs_metadata_is_classified(self):
        self.assertIs(advise("distance_buffer", "EPSG:4326").verdict, Verdict.UNSAFE_SPHERICAL_RECOMMENDED)
        self.assertIs(advise("distance_buffer", None).verdict, Verdict.UNSAFE_REPROJECT_RECOMMENDED)
        self.assertIs(advise("DISTANCE_BUFFER", {"units": "metre"}).verdict, Verdict.SAFE)

    def test_contradictory_metadata_is_rejected_not_advised(self):
        # metric units on a degree-based EPSG code must not come back SAFE
        with self.assertRaises(MalformedCRSError):
            advise("distance_buffer", {"units": "metre", "epsg": 4326})
        with self.assertRaises(MalformedCRSError):
            advise("distance_buffer", {"kind": "projected", "epsg": 4326})

    def test_geocentric_crs_is_rejected_not_advised(self):
        with self.assertRaises(MalformedCRSError):
            advise("distance_buffer", "EPSG:4978")

    def test_unsupported_operation_kind(self):
        for bad in ("rasterize", 7, None):
            with self.assertRaises(UnsupportedOperationKindError):
                advise(bad, PROJECTED)


class TestSafetyAdvisor(TestCase):
    def test_custom_threshold(self):
        advisor = SafetyAdvisor(extent_threshold_km=100)
        request = OperationRequest(OperationKind.DISTANCE_BUFFER, PROJECTED, extent_diagonal_km=150)

        self.assertIs(advisor.advise(request).reason, ReasonCode.LARGE_EXTENT_DISTORTION)
        self.assertTrue(SafetyAdvisor().advise(request).is_safe)

    def test_invalid_threshold(self):
        for bad in (0, -5, math.nan):
            with self.assertRaises(ValueError):
                SafetyAdvisor(extent_threshold_km=bad)

    def test_request_type_is_checked(self):
        with self.assertRaises(TypeError):
            SafetyAdvisor().advise({"kind": "distance_buffer"})

    def test_advise_does_not_mutate_request(self):
        request = OperationRequest(OperationKind.DISTANCE_BUFFER, PROJECTED, extent_diagonal_km=900)
        before = OperationRequest(OperationKind.DISTANCE_BUFFER, PROJECTED, extent_diagonal_km=900)

        SafetyAdvisor().advise(request)

        self.assertEqual(request, before)

    def test_advise_many_preserves_order(self):
        requests = [
            OperationRequest(OperationKind.DISTANCE_BUFFER, UNKNOWN),
            OperationRequest(OperationKind.TOPOLOGICAL_PREDICATE, GEOGRAPHIC),
            OperationRequest(OperationKind.AREA_COMPUTATION, PROJECTED, extent_diagonal_km=1000),
        ]

        verdicts = SafetyAdvisor().advise_many(requests)

        self.assertEqual(
            [v.reason for v in verdicts],
            [
                ReasonCode.NO_CRS_DECLARED,
                ReasonCode.TOPOLOGY_CRS_INVARIANT,
                ReasonCode.LARGE_EXTENT_DISTORTION,
            ],
        )

    def test_verdicts_are_logged(self):
        request = OperationRequest(OperationKind.DISTANCE_BUFFER, UNKNOWN)

        with self.assertLogs("geoadvisor.advisors.safety_advisor", level="DEBUG") as logs:
            SafetyAdvisor().advise(request)

        self.assertIn("DISTANCE_BUFFER", logs.output[0])


class TestAdviseFrame(TestCase):
    def test_geographic_frame(self):
        gdf = gpd.GeoDataFrame(geometry=[Point(-0.12, 51.5), Point(-0.01, 51.48)], crs="EPSG:4326")

        v = SafetyAdvisor().advise_frame(gdf, "distance_buffer")

        self.assertIs(v.verdict, Verdict.UNSAFE_SPHERICAL_RECOMMENDED)

    def test_small_projected_frame(self):
        gdf = gpd.GeoDataFrame(
            geometry=[Point(699000, 5710000), Point(705000, 5714000)], crs="EPSG:32630"
        )

        self.assertTrue(SafetyAdvisor().advise_frame(gdf, OperationKind.DISTANCE_BUFFER).is_safe)

    def test_large_projected_frame(self):
        gdf = gpd.GeoDataFrame(geometry=[Point(0, 0), Point(1e6, 1e6)], crs="EPSG:3857")

        v = SafetyAdvisor().advise_frame(gdf, OperationKind.AREA_COMPUTATION)

        self.assertIs(v.reason, ReasonCode.LARGE_EXTENT_DISTORTION)

    def test_frame_without_crs(self):
        gdf = gpd.GeoDataFrame(geometry=[Point(0, 0), Point(1, 1)])

        v = SafetyAdvisor().advise_frame(gdf, OperationKind.TOPOLOGICAL_PREDICATE)

        self.assertIs(v.reason, ReasonCode.NO_CRS_DECLARED)

    def test_empty_projected_frame_is_safe(self):
        gdf = gpd.GeoDataFrame(geometry=gpd.GeoSeries([], crs="EPSG:32630"))

        self.assertTrue(SafetyAdvisor().advise_frame(gdf, OperationKind.DISTANCE_BUFFER).is_safe)
