import math
from typing import Iterator, Tuple


SQRT3 = math.sqrt(3.0)


def hex_centers(width: float, height: float, size: float) -> Iterator[Tuple[int, int, float, float]]:
    """
    Pointy-top hexagon centers (col, row, x, y), row-major.

    One padding row/column on each side so hexagons of circumradius `size`
    cover the whole rectangle.
    """
    h_spacing = size * SQRT3
    v_spacing = size * 1.5

    n_rows = math.ceil(height / v_spacing + 1)
    n_cols = math.ceil(width / h_spacing + 1)
    for row in range(-1, n_rows):
        shift = 0.0 if row % 2 == 0 else h_spacing / 2
        for col in range(-1, n_cols):
            yield col, row, col * h_spacing + shift, row * v_spacing


def tri_centers(width: float, height: float, size: float) -> Iterator[Tuple[int, int, float, float, bool]]:
    """
    Alternating up/down triangle centers (col, row, x, y, inverted), row-major.
    Triangles have base `size`; each row advances by half a base.
    """
    t_height = size * math.sin(math.pi / 3)
    stride = size / 2

    n_rows = math.ceil(height / t_height + 1)
    n_cols = math.ceil((width + size) / stride)
    for row in range(n_rows):
        y = row * t_height
        for col in range(n_cols):
            yield col, row, col * stride, y, (row + col) % 2 != 0
