"""
# Advisor Example

An example of using geoadvisor to check whether a buffer is safe before running it,
and to pick a UTM zone to reproject into when it is not.
"""


def main():
    """
    First, we build a small dataset of points around London in plain longitude/latitude.
    Notice that the GeoDataFrame carries the EPSG:4326 coordinate reference system, which is geographic:
    its axes are in degrees, not metres.
    """

    import geopandas as gpd
    from shapely.geometry import Point

    gdf = gpd.GeoDataFrame(
        {"name": ["Westminster", "Greenwich", "Hampstead"]},
        geometry=[Point(-0.1276, 51.5007), Point(-0.0077, 51.4826), Point(-0.1780, 51.5560)],
        crs="EPSG:4326",
    )

    """
    Let's ask the advisor whether buffering these points by a linear distance is safe.
    Shapely computes in the plane, so a buffer of 500 on degree coordinates would be 500 degrees wide.
    """

    from geoadvisor import SafetyAdvisor, classify

    advisor = SafetyAdvisor()
    verdict = advisor.advise_frame(gdf, "distance_buffer")
    print(verdict)

    """
    The verdict is UNSAFE_SPHERICAL_RECOMMENDED. We could switch to a spherical engine,
    or reproject into the UTM zone that covers the data:
    """

    from geoadvisor.constructs.extent import Extent
    from geoadvisor.selectors.utm_selector import select_utm_for_extent

    selection = select_utm_for_extent(Extent.from_geo_dataframe(gdf))
    print(f"zone {selection.zone_number}{selection.hemisphere}, EPSG:{selection.epsg_code}")

    projected = gdf.to_crs(selection.epsg_code)
    print(classify(projected))

    """
    Now the data is projected with metre units and spans only a few kilometres, so the buffer is safe:
    """

    verdict = advisor.advise_frame(projected, "distance_buffer")
    print(verdict)

    buffered = projected.buffer(500)
    print(buffered.area)


if __name__ == "__main__":
    main()
