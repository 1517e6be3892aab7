"""
Smoke tests for the matplotlib plotter, rendered off-screen with Agg.
"""

import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from parcel_packer import models as m  # noqa: E402
from parcel_packer import packing as packing_core  # noqa: E402
from parcel_packer import plotter3d  # noqa: E402

MEDIUM = m.ParcelType("m", "Medium box", (1.0, 1.0, 1.0), color="#4682B4")


def test_draw_arrangement_adds_one_collection_per_parcel():
    container = m.Container(2, 1, 1)
    items = [m.PlacementItem.of(MEDIUM) for _ in range(3)]
    result = packing_core.arrange(container, items, rng=0)

    fig = plotter3d.draw_arrangement(container, result)
    try:
        ax = fig.axes[0]
        # container outline + two placed parcels
        assert len(ax.collections) == 3
        assert ax.get_title() == "2 parcels placed"
        assert "1 parcel of size 1x1x1" in fig.texts[0].get_text()
    finally:
        plt.close(fig)


def test_cuboid_faces_put_height_on_vertical_axis():
    faces = plotter3d._cuboid_faces(m.Cuboid(0, 0, 0, 1, 2, 3))

    assert len(faces) == 6
    top = faces[1]
    assert {v[2] for v in top} == {2}
    assert {v[1] for v in top} == {0, 3}


def test_arrangement_text_without_unplaced():
    container = m.Container(1, 1, 1)
    result = packing_core.arrange(container, [m.PlacementItem.of(MEDIUM)], rng=0)

    assert plotter3d.arrangement_text(result) == (
        "Total parcels placed: 1\n - Medium box (1x1x1): 1"
    )
