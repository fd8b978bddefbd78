from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np
from scipy.spatial import cKDTree


@dataclass
class Cell:
    index: int
    polygon: np.ndarray  # (K,2), empty for a duplicated site
    neighbors: List[int] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.polygon) == 0


@dataclass
class Subdivision:
    """
    Bounded Voronoi partition of [0,width] x [0,height].

    cells[i] belongs to points[i]; neighbors are Delaunay neighbors, which is
    exactly the set of sites whose bisectors shape the cell.
    """
    points: np.ndarray  # (N,2)
    width: float
    height: float
    cells: List[Cell]
    _tree: Optional[cKDTree] = field(default=None, init=False, repr=False, compare=False)

    def cell_count(self) -> int:
        return len(self.cells)

    def cell_polygon(self, i: int) -> Optional[np.ndarray]:
        if i < 0 or i >= len(self.cells):
            return None
        return self.cells[i].polygon

    def cell_bounds(self, i: int) -> Optional[Tuple[float, float, float, float]]:
        poly = self.cell_polygon(i)
        if poly is None or len(poly) == 0:
            return None
        mn = poly.min(axis=0)
        mx = poly.max(axis=0)
        return float(mn[0]), float(mn[1]), float(mx[0]), float(mx[1])

    def _site_tree(self) -> cKDTree:
        if self._tree is None:
            self._tree = cKDTree(self.points)
        return self._tree

    def _lowest_at_min_distance(self, i: int, P: np.ndarray, d_i: np.ndarray) -> np.ndarray:
        """
        For points already known to tie with a neighbor of i: True where i is the
        lowest-indexed non-empty cell among all sites at the minimal distance.
        Four or more cocircular sites can tie without all being Delaunay neighbors.
        """
        tree = self._site_tree()
        won = np.zeros(len(P), dtype=bool)
        for k, (p, d) in enumerate(zip(P, d_i)):
            cand = np.asarray(tree.query_ball_point(p, r=math.sqrt(d) * (1 + 1e-9) + 1e-9), dtype=np.int64)
            cand = cand[[not self.cells[j].is_empty() for j in cand]]
            dc = ((p - self.points[cand]) ** 2).sum(axis=1)
            best = dc.min()
            won[k] = d == best and int(cand[dc == best].min()) == i
        return won

    def contains_mask(self, i: int, xs, ys) -> np.ndarray:
        """
        Vectorized point-in-cell test.

        A point belongs to site i when it lies in the rectangle and no site is
        closer; exact ties go to the lowest index, so a pixel on a shared edge
        or vertex is counted once.
        """
        xs = np.asarray(xs, dtype=np.float64).reshape(-1)
        ys = np.asarray(ys, dtype=np.float64).reshape(-1)
        if i < 0 or i >= len(self.cells) or self.cells[i].is_empty():
            return np.zeros(len(xs), dtype=bool)

        inside = (xs >= 0.0) & (xs <= self.width) & (ys >= 0.0) & (ys <= self.height)

        nb = np.asarray(self.cells[i].neighbors, dtype=np.int64)
        if len(nb) == 0:
            return inside

        P = np.column_stack([xs, ys])
        d_i = ((P - self.points[i]) ** 2).sum(axis=1)
        d_nb = ((P[:, None, :] - self.points[nb][None, :, :]) ** 2).sum(axis=2)

        mask = inside & np.all(d_i[:, None] <= d_nb, axis=1)
        tied = mask & np.any(d_i[:, None] == d_nb, axis=1)
        if tied.any():
            mask[tied] = self._lowest_at_min_distance(i, P[tied], d_i[tied])
        return mask

    def contains(self, i: int, x: float, y: float) -> bool:
        return bool(self.contains_mask(i, [x], [y])[0])

    def delaunay_edges(self) -> List[Tuple[int, int]]:
        edges = set()
        for c in self.cells:
            for j in c.neighbors:
                edges.add((min(c.index, j), max(c.index, j)))
        return sorted(edges)


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Hexagon:
    center: Tuple[float, float]
    radius: float

    def vertices(self) -> np.ndarray:
        x, y = self.center
        angles = [math.pi / 3 * k + math.pi / 6 for k in range(6)]
        return np.array([[x + self.radius * math.cos(a), y + self.radius * math.sin(a)] for a in angles])


@dataclass(frozen=True)
class Triangle:
    center: Tuple[float, float]
    radius: float
    inverted: bool

    def vertices(self) -> np.ndarray:
        x, y = self.center
        offset = math.pi if self.inverted else 0.0
        angles = [2 * math.pi / 3 * k - math.pi / 2 + offset for k in range(3)]
        return np.array([[x + self.radius * math.cos(a), y + self.radius * math.sin(a)] for a in angles])


@dataclass(frozen=True, eq=False)
class PolygonShape:
    vertices: np.ndarray  # (K,2)


@dataclass(frozen=True)
class Dot:
    center: Tuple[float, float]
    radius: float


Shape = Union[Hexagon, Triangle, PolygonShape, Dot]


@dataclass(frozen=True)
class RenderItem:
    shape: Shape
    color: Color
    source_index: int
