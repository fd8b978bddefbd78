import numpy as np
from shapely.geometry import Point, Polygon
from src.latticemorph.geometry import bisector_halfplane, voronoi_cell_in_box


def test_halfplane_sides():
    hp = bisector_halfplane([3.0, 5.0], [7.0, 5.0], reach=50.0)

    assert hp.contains(Point(3.0, 5.0))
    assert hp.contains(Point(4.9, -20.0))
    assert not hp.contains(Point(5.1, 5.0))
    assert not hp.contains(Point(7.0, 5.0))


def test_cell_without_neighbors_is_whole_box():
    cell = voronoi_cell_in_box([2.0, 2.0], np.zeros((0, 2)), 10.0, 5.0)

    assert np.isclose(Polygon(cell).area, 50.0)
    assert np.allclose(cell.min(axis=0), [0.0, 0.0])
    assert np.allclose(cell.max(axis=0), [10.0, 5.0])


def test_cell_keeps_half_of_square():
    cell = voronoi_cell_in_box([3.0, 5.0], np.array([[7.0, 5.0]]), 10.0, 10.0)

    assert np.isclose(Polygon(cell).area, 50.0)
    assert cell[:, 0].max() <= 5.0 + 1e-9


def test_cell_of_site_far_outside_box_is_empty():
    cell = voronoi_cell_in_box([-50.0, 5.0], np.array([[5.0, 5.0]]), 10.0, 10.0)
    assert cell.shape == (0, 2)


def test_reach_covers_neighbors_far_from_box():
    # bisector sits far away from the box; the whole box stays on the site's side
    cell = voronoi_cell_in_box([5.0, 5.0], np.array([[500.0, 400.0]]), 10.0, 10.0)
    assert np.isclose(Polygon(cell).area, 100.0)
