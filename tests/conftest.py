import numpy as np
import pytest

from geopoly_zone import GeoPolygon
from geopoly_filter import FixedBitSet, InMemoryGeoPointFieldData, SegmentReader


SQUARE = [(0, 0), (0, 10), (10, 10), (10, 0)]
TRIANGLE = [(0, 0), (0, 4), (4, 0)]


def star_polygon(rng, n, center=(0.0, 0.0), r_min=1.0, r_max=10.0):
    """Random simple polygon, star-shaped around center."""
    angles = np.sort(rng.uniform(0.0, 2.0 * np.pi, n))
    radii = rng.uniform(r_min, r_max, n)
    lats = center[0] + radii * np.sin(angles)
    lons = center[1] + radii * np.cos(angles)
    return GeoPolygon(vertices=np.column_stack([lats, lons]))


@pytest.fixture
def square():
    return GeoPolygon.from_points(SQUARE)


@pytest.fixture
def triangle():
    return GeoPolygon.from_points(TRIANGLE)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def single_valued_field():
    # doc 2 has no value
    return InMemoryGeoPointFieldData.from_documents([
        (5, 5),
        (15, 15),
        None,
        (1, 9),
        (-1, 5),
    ])


@pytest.fixture
def multi_valued_field():
    return InMemoryGeoPointFieldData.from_documents([
        [(10, 10), (1, 1)],
        [(10, 10), (20, 20)],
        [],
        (1, 1),
        [(3, 3), (0.5, 0.5), (2, 2)],
    ])


@pytest.fixture
def reader(single_valued_field):
    return SegmentReader(
        segment_id="seg-0",
        max_doc=5,
        fields={"location": single_valued_field},
    )


@pytest.fixture
def reader_with_deletes(single_valued_field):
    return SegmentReader(
        segment_id="seg-1",
        max_doc=5,
        fields={"location": single_valued_field},
        live_docs=FixedBitSet.excluding(5, [0]),
    )
