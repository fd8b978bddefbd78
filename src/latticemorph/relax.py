from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import numpy as np

from .datastructures import Subdivision
from .pixels import weight_field
from .voronoi import build_subdivision

log = logging.getLogger(__name__)


def relax_points(
    subdivision: Subdivision,
    weight_buffer: np.ndarray,
    width: int,
    height: int,
) -> np.ndarray:
    """
    One weighted Lloyd step: move every site to the darkness-weighted centroid of its cell.

    Only integer pixels inside each cell's bounding box are scanned. A cell with
    zero total weight (empty, or uniformly white) keeps its site where it was.
    Returns a new (N,2) array; subdivision.points is left untouched.
    """
    weights = weight_field(weight_buffer)
    old = subdivision.points
    new = np.array(old, dtype=np.float64, copy=True).reshape(-1, 2)

    for i in range(subdivision.cell_count()):
        bounds = subdivision.cell_bounds(i)
        if bounds is None:
            continue
        minx, miny, maxx, maxy = bounds

        x0 = math.floor(max(0.0, minx))
        x1 = math.ceil(min(width - 1.0, maxx))
        y0 = math.floor(max(0.0, miny))
        y1 = math.ceil(min(height - 1.0, maxy))
        if x1 < x0 or y1 < y0:
            continue

        ys, xs = np.mgrid[y0:y1 + 1, x0:x1 + 1]
        xs = xs.reshape(-1)
        ys = ys.reshape(-1)
        mask = subdivision.contains_mask(i, xs, ys)
        if not mask.any():
            continue

        xs = xs[mask]
        ys = ys[mask]
        w = weights[ys, xs]
        total = float(w.sum())
        if total <= 0.0:
            continue

        new[i, 0] = float(w @ xs) / total
        new[i, 1] = float(w @ ys) / total

    return new


def relax(
    points: np.ndarray,
    weight_buffer: np.ndarray,
    width: int,
    height: int,
    iterations: int,
    *,
    should_stop: Optional[Callable[[], bool]] = None,
) -> np.ndarray:
    """
    Run `iterations` relaxation steps, rebuilding the subdivision before each one.

    should_stop is polled between iterations; once it returns True the points
    from the last finished iteration are returned.
    """
    iterations = int(iterations)
    if iterations < 0:
        raise ValueError("iterations must be >= 0")

    current = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if iterations == 0 or len(current) == 0:
        return current

    for it in range(iterations):
        if should_stop is not None and should_stop():
            log.debug("relaxation stopped after %d of %d iterations", it, iterations)
            break
        subdivision = build_subdivision(current, width, height)
        nxt = relax_points(subdivision, weight_buffer, width, height)
        log.debug("relax iteration %d/%d: max shift %.4f", it + 1, iterations,
                  float(np.abs(nxt - current).max()))
        current = nxt

    return current
