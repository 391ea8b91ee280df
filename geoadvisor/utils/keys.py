"""Standard key names recognised in raw CRS metadata mappings.

These constants define the dictionary keys the classifier reads when it is handed a
plain mapping instead of a pyproj CRS. Each key has a list of accepted aliases.
"""

# Key declaring the nature of the CRS ("geographic" or "projected")
KIND_KEYS = ("kind", "type", "crs_type")

# Key declaring the axis unit name, or a list of unit names (one per axis)
UNIT_KEYS = ("units", "unit", "axis_units")

# Key declaring the numeric EPSG code
EPSG_KEYS = ("epsg", "epsg_code", "code")
