from dataclasses import FrozenInstanceError
from unittest import TestCase

from geoadvisor.constructs.crs_descriptor import CRSDescriptor, CRSKind, Unit
from geoadvisor.utils.exceptions import MalformedCRSError


class TestCRSDescriptor(TestCase):
    def test_unknown_descriptor(self):
        d = CRSDescriptor.unknown()

        self.assertIs(d.kind, CRSKind.UNKNOWN)
        self.assertIs(d.unit, Unit.UNSPECIFIED)
        self.assertIsNone(d.epsg_code)
        self.assertFalse(d.is_known)

    def test_unknown_cannot_carry_epsg_or_unit(self):
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor(CRSKind.UNKNOWN, epsg_code=4326)
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor(CRSKind.UNKNOWN, unit=Unit.METER)

    def test_geographic_cannot_have_linear_unit(self):
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor(CRSKind.GEOGRAPHIC, unit=Unit.METER)

    def test_projected_cannot_have_degree_unit(self):
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor(CRSKind.PROJECTED, unit=Unit.DEGREE)

    def test_only_projected_can_be_southern_utm(self):
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor(CRSKind.GEOGRAPHIC, Unit.DEGREE, is_southern_hemisphere_utm=True)

    def test_southern_flag_must_match_utm_epsg_code(self):
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 32733, is_southern_hemisphere_utm=False)
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 32633, is_southern_hemisphere_utm=True)

    def test_southern_flag_matching_utm_epsg_code(self):
        south = CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 32733, is_southern_hemisphere_utm=True)
        north = CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 32633)

        self.assertEqual(south.utm_hemisphere, "S")
        self.assertEqual(north.utm_hemisphere, "N")

    def test_kind_must_be_enum(self):
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor("geographic", Unit.DEGREE)

    def test_descriptor_is_immutable_and_comparable(self):
        a = CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 32633)
        b = CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 32633)

        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        with self.assertRaises(FrozenInstanceError):
            a.epsg_code = 4326

    def test_from_epsg_geographic(self):
        d = CRSDescriptor.from_epsg(4326)

        self.assertEqual(d, CRSDescriptor(CRSKind.GEOGRAPHIC, Unit.DEGREE, 4326))
        self.assertTrue(d.is_geographic)

    def test_from_epsg_southern_utm(self):
        d = CRSDescriptor.from_epsg(32760)

        self.assertTrue(d.is_projected)
        self.assertTrue(d.is_southern_hemisphere_utm)
        self.assertEqual(d.utm_zone, 60)
        self.assertEqual(d.utm_hemisphere, "S")

    def test_from_epsg_unknown_code(self):
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor.from_epsg(999999)

    def test_utm_zone_is_none_for_non_utm(self):
        d = CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 3857)

        self.assertIsNone(d.utm_zone)
        self.assertIsNone(d.utm_hemisphere)

    def test_to_crs(self):
        crs = CRSDescriptor(CRSKind.PROJECTED, Unit.METER, 32633).to_crs()

        self.assertEqual(crs.to_epsg(), 32633)

    def test_to_crs_without_epsg(self):
        with self.assertRaises(MalformedCRSError):
            CRSDescriptor(CRSKind.PROJECTED, Unit.METER).to_crs()
