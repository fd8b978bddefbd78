from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .lattice import hex_centers


def generate_random_points(
    width: float,
    height: float,
    count: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Uniform sampling in [0..width) x [0..height). No deduplication.
    """
    count = int(count)
    if count < 0:
        raise ValueError("count must be >= 0")
    pts = np.empty((count, 2), dtype=np.float64)
    pts[:, 0] = rng.random(count) * float(width)
    pts[:, 1] = rng.random(count) * float(height)
    return pts


def point_count_for_size(width: float, height: float, size: float) -> int:
    """
    Instead of 'n points', specify a cell size. We derive n ~ area / (2 * size^2).
    """
    if size <= 0:
        raise ValueError("size must be > 0")
    return int(math.floor(float(width) * float(height) / (float(size) * float(size) * 2.0)))


def lattice_points(
    width: float,
    height: float,
    size: float,
    *,
    rng: Optional[np.random.Generator] = None,
    jitter: float = 0.0,
) -> np.ndarray:
    """
    Hex lattice centers inside the rectangle, optionally jittered by up to jitter*size
    per axis and clamped back into bounds. Jitter needs an rng.
    """
    if size <= 0:
        raise ValueError("size must be > 0")
    if jitter < 0:
        raise ValueError("jitter must be >= 0")

    pts = [
        (x, y) for _, _, x, y in hex_centers(width, height, size)
        if 0.0 <= x <= width and 0.0 <= y <= height
    ]
    P = np.asarray(pts, dtype=np.float64).reshape(-1, 2)

    if jitter > 0 and len(P):
        if rng is None:
            raise ValueError("jitter requires an rng")
        P = P + rng.uniform(-jitter * size, jitter * size, size=P.shape)
        P[:, 0] = np.clip(P[:, 0], 0.0, float(width))
        P[:, 1] = np.clip(P[:, 1], 0.0, float(height))
    return P
