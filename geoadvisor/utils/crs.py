"""Coordinate Reference System (CRS) constants used throughout geoadvisor.

This module defines the reference CRS objects and the lookup tables used to tell
angular units from linear ones:
- LATLON_CRS: WGS84 geographic coordinates (EPSG:4326)
- XY_CRS: Web Mercator projected coordinates (EPSG:3857)
"""

from pyproj import CRS

# WGS84 latitude/longitude coordinate system (EPSG:4326)
# Range: latitude [-90, 90], longitude [-180, 180]
LATLON_CRS = CRS(4326)

# Web Mercator projected coordinate system (EPSG:3857)
XY_CRS = CRS(3857)

# EPSG code ranges of the WGS84 UTM zones
UTM_NORTH_BASE = 32600
UTM_SOUTH_BASE = 32700
UTM_ZONE_COUNT = 60

# Width of a UTM zone in degrees of longitude
UTM_ZONE_WIDTH = 6

# Beyond this absolute latitude UTM gives way to UPS
POLAR_LATITUDE_LIMIT = 84.0

# Unit names (lower case) as they appear in metadata and in pyproj axis info
DEGREE_UNIT_NAMES = frozenset(
    [
        "degree",
        "degrees",
        "deg",
        "decimal degree",
        "decimal degrees",
        "arc-degree",
        "degree (supplier to define representation)",
    ]
)
METER_UNIT_NAMES = frozenset(["metre", "metres", "meter", "meters", "m"])
FOOT_UNIT_NAMES = frozenset(
    [
        "foot",
        "feet",
        "ft",
        "international foot",
    ]
)
US_SURVEY_FOOT_UNIT_NAMES = frozenset(["us survey foot", "us-ft", "ftus", "survey foot"])

# Angular and linear units that have no dedicated Unit member
OTHER_ANGULAR_UNIT_NAMES = frozenset(
    ["radian", "radians", "rad", "grad", "grads", "gon", "arc-minute", "arc-second"]
)
OTHER_LINEAR_UNIT_NAMES = frozenset(
    [
        "kilometre",
        "kilometer",
        "km",
        "centimetre",
        "centimeter",
        "millimetre",
        "millimeter",
        "yard",
        "mile",
        "statute mile",
        "nautical mile",
        "link",
        "chain",
    ]
)

# Length of one foot in metres (international foot)
METERS_PER_FOOT = 0.3048

# Length of one US survey foot in metres
METERS_PER_US_SURVEY_FOOT = 1200 / 3937


def utm_hemisphere_from_epsg(epsg_code):
    """
    Tell whether an EPSG code is a WGS84 UTM code and, if so, which hemisphere.

    Args:
        epsg_code: The EPSG code to inspect (may be None)

    Returns:
        "N" or "S" for WGS84 UTM codes, otherwise None
    """
    if epsg_code is None:
        return None
    if UTM_NORTH_BASE < epsg_code <= UTM_NORTH_BASE + UTM_ZONE_COUNT:
        return "N"
    if UTM_SOUTH_BASE < epsg_code <= UTM_SOUTH_BASE + UTM_ZONE_COUNT:
        return "S"
    return None
