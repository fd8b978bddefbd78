from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

import numpy as np
from shapely.geometry import Polygon

from .alternation import AlternationPattern, grid_cell_for_point, pick_source
from .datastructures import Dot, Hexagon, PolygonShape, RenderItem, Triangle
from .defaults import MIN_DOT_RADIUS, STIPPLE_POINT_COUNT
from .lattice import SQRT3, hex_centers, tri_centers
from .pixels import as_pixel_buffer, luminance, sample_rgb
from .quantize import quantize_buffer
from .relax import relax
from .sampling import generate_random_points, lattice_points, point_count_for_size
from .voronoi import build_subdivision

log = logging.getLogger(__name__)


class RenderMode(str, Enum):
    HEX = "hex"
    TRI = "tri"
    VORONOI = "voronoi"
    STIPPLE = "stipple"


POINT_LAYOUTS = ("random", "lattice")


@dataclass(frozen=True)
class RenderParams:
    """
    Everything one render request needs besides the pixels.

    size is the hexagon circumradius / triangle base in lattice modes and the
    density scale in Voronoi and stipple modes. relax_iterations only applies
    to the Voronoi and stipple modes.
    """
    mode: Union[RenderMode, str] = RenderMode.HEX
    size: float = 12.0
    gap: float = 0.5
    pattern: Union[AlternationPattern, str] = AlternationPattern.CHECKERBOARD
    relax_iterations: int = 0
    quantize_colors: Optional[int] = None
    point_count: Optional[int] = None
    point_layout: str = "random"

    def __post_init__(self):
        object.__setattr__(self, "mode", RenderMode(self.mode))
        object.__setattr__(self, "pattern", AlternationPattern(self.pattern))
        if not self.size > 0:
            raise ValueError("size must be > 0")
        if self.gap < 0:
            raise ValueError("gap must be >= 0")
        if self.relax_iterations < 0:
            raise ValueError("relax_iterations must be >= 0")
        if self.point_count is not None and self.point_count < 0:
            raise ValueError("point_count must be >= 0")
        if self.point_layout not in POINT_LAYOUTS:
            raise ValueError(f"point_layout must be one of {POINT_LAYOUTS}")


def _prepare_sources(sources: Sequence[np.ndarray], quantize_colors: Optional[int]) -> List[np.ndarray]:
    if len(sources) == 0:
        raise ValueError("at least one source buffer is required")

    buffers = [as_pixel_buffer(s) for s in sources]
    shape = buffers[0].shape
    if any(b.shape != shape for b in buffers):
        raise ValueError("all source buffers must share the same size")

    if quantize_colors is not None:
        buffers = [quantize_buffer(b, quantize_colors) for b in buffers]
    return buffers


def _lattice_items(buffers, width, height, params: RenderParams) -> List[RenderItem]:
    items = []
    n = len(buffers)
    if params.mode is RenderMode.HEX:
        radius = max(params.size - params.gap, 0.0)
        for col, row, x, y in hex_centers(width, height, params.size):
            k = pick_source(col, row, params.pattern, n)
            items.append(RenderItem(Hexagon((x, y), radius), sample_rgb(buffers[k], x, y), k))
    else:
        radius = max(params.size / SQRT3 + 0.5 - params.gap, 0.0)
        for col, row, x, y, inverted in tri_centers(width, height, params.size):
            k = pick_source(col, row, params.pattern, n)
            items.append(RenderItem(Triangle((x, y), radius, inverted), sample_rgb(buffers[k], x, y), k))
    return items


def _seed_points(width, height, params: RenderParams, rng: np.random.Generator) -> np.ndarray:
    if params.point_layout == "lattice":
        return lattice_points(width, height, params.size)

    if params.point_count is not None:
        count = params.point_count
    elif params.mode is RenderMode.STIPPLE:
        count = STIPPLE_POINT_COUNT
    else:
        count = point_count_for_size(width, height, params.size)
    return generate_random_points(width, height, count, rng)


def _inset(vertices: np.ndarray, distance: float) -> Optional[np.ndarray]:
    if distance <= 0:
        return vertices
    shrunk = Polygon(vertices).buffer(-distance, join_style="mitre")
    if shrunk.is_empty:
        return None
    if shrunk.geom_type == "MultiPolygon":
        shrunk = max(shrunk.geoms, key=lambda g: g.area)
    return np.array(shrunk.exterior.coords[:-1], dtype=np.float64)


def _site_items(buffers, width, height, params: RenderParams, rng, should_stop) -> List[RenderItem]:
    points = _seed_points(width, height, params, rng)
    if params.relax_iterations > 0:
        # density always follows the first source
        points = relax(points, buffers[0], width, height, params.relax_iterations,
                       should_stop=should_stop)

    items = []
    n = len(buffers)
    if params.mode is RenderMode.STIPPLE:
        for x, y in points:
            col, row = grid_cell_for_point(x, y, params.size)
            k = pick_source(col, row, params.pattern, n)
            color = sample_rgb(buffers[k], x, y)
            radius = max(MIN_DOT_RADIUS, (1.0 - luminance(*color)) * (params.size / 4.0))
            items.append(RenderItem(Dot((float(x), float(y)), radius), color, k))
        return items

    if len(points) == 0:
        return items

    subdivision = build_subdivision(points, width, height)
    for cell in subdivision.cells:
        if cell.is_empty():
            continue
        vertices = _inset(cell.polygon, params.gap / 2.0)
        if vertices is None:
            continue
        x, y = subdivision.points[cell.index]
        col, row = grid_cell_for_point(x, y, params.size)
        k = pick_source(col, row, params.pattern, n)
        items.append(RenderItem(PolygonShape(vertices), sample_rgb(buffers[k], x, y), k))
    return items


def render(
    sources: Sequence[np.ndarray],
    params: RenderParams,
    *,
    rng: Optional[np.random.Generator] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> List[RenderItem]:
    """
    Turn equally sized RGBA sources into an ordered list of colored shapes.

    Canvas size is taken from the sources. Without an rng the random seeding
    uses default_rng(0), so identical requests give identical output.
    """
    buffers = _prepare_sources(sources, params.quantize_colors)
    height, width = buffers[0].shape[:2]
    if rng is None:
        rng = np.random.default_rng(0)

    if params.mode in (RenderMode.HEX, RenderMode.TRI):
        items = _lattice_items(buffers, width, height, params)
    else:
        items = _site_items(buffers, width, height, params, rng, should_stop)

    log.debug("render %s: %d items from %d sources (%dx%d)",
              params.mode.value, len(items), len(buffers), width, height)
    return items
