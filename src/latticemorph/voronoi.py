import logging
from typing import Dict, List, Set

import numpy as np
from scipy.spatial import Delaunay, QhullError

from .datastructures import Cell, Subdivision
from .defaults import COLLINEAR_TOL
from .geometry import voronoi_cell_in_box

log = logging.getLogger(__name__)


def _line_neighbors(sites: np.ndarray) -> Dict[int, Set[int]]:
    """
    Neighbors of collinear sites: consecutive sites along the principal direction.
    """
    centered = sites - sites.mean(axis=0)
    _, _, vt = np.linalg.svd(centered, full_matrices=False)
    order = np.argsort(centered @ vt[0], kind="stable")

    nbs: Dict[int, Set[int]] = {k: set() for k in range(len(sites))}
    for a, b in zip(order[:-1], order[1:]):
        nbs[int(a)].add(int(b))
        nbs[int(b)].add(int(a))
    return nbs


def _all_pairs_neighbors(count: int) -> Dict[int, Set[int]]:
    return {k: set(range(count)) - {k} for k in range(count)}


def _is_collinear(sites: np.ndarray) -> bool:
    if len(sites) < 3:
        return True
    centered = sites - sites.mean(axis=0)
    s = np.linalg.svd(centered, compute_uv=False)
    return s[0] == 0.0 or s[1] <= COLLINEAR_TOL * s[0]


def _delaunay_neighbors(sites: np.ndarray) -> Dict[int, Set[int]]:
    """
    Site adjacency from the Delaunay triangulation of distinct sites.

    Falls back to consecutive-along-a-line neighbors for collinear input and to
    all pairs when Qhull cannot triangulate or silently drops sites.
    """
    m = len(sites)
    if _is_collinear(sites):
        return _line_neighbors(sites)

    try:
        tri = Delaunay(sites)
    except QhullError as exc:
        log.warning("Delaunay failed for %d sites (%s); using all-pairs neighbors", m, exc)
        return _all_pairs_neighbors(m)

    indptr, indices = tri.vertex_neighbor_vertices
    nbs = {k: set(int(j) for j in indices[indptr[k]:indptr[k + 1]]) for k in range(m)}

    dropped = [k for k in range(m) if not nbs[k]]
    if dropped:
        # coplanar points are left out of the triangulation; they still need bisectors
        log.warning("Delaunay dropped %d of %d sites; connecting them to all sites", len(dropped), m)
        for k in dropped:
            nbs[k] = set(range(m)) - {k}
            for j in nbs[k]:
                nbs[j].add(k)
    return nbs


def build_subdivision(points: np.ndarray, width: float, height: float) -> Subdivision:
    """
    Bounded Voronoi diagram of points inside [0,width] x [0,height].

    Key design detail:
    - Delaunay neighbors are the only sites whose bisectors bound a Voronoi cell,
      so each cell is the rectangle clipped by those bisector half-planes.
    - A site repeating an earlier site's coordinates gets an empty cell; the
      earlier index keeps the region.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")

    P = np.asarray(points, dtype=np.float64)
    if P.size == 0:
        P = P.reshape(0, 2)
    if P.ndim != 2 or P.shape[1] != 2:
        raise ValueError("points must be (N,2)")

    n = len(P)
    if n == 0:
        return Subdivision(points=P, width=float(width), height=float(height), cells=[])

    _, first, inverse = np.unique(P, axis=0, return_index=True, return_inverse=True)
    inverse = np.asarray(inverse).reshape(-1)
    owner = first[inverse]  # lowest index holding each point's coordinates

    distinct = np.sort(first)
    local_nbs = _delaunay_neighbors(P[distinct]) if len(distinct) > 1 else {0: set()}

    cells: List[Cell] = []
    for i in range(n):
        if owner[i] != i:
            cells.append(Cell(index=i, polygon=np.zeros((0, 2), dtype=np.float64), neighbors=[]))
            continue

        k = int(np.searchsorted(distinct, i))
        nbs = sorted(int(distinct[j]) for j in local_nbs[k])

        poly = voronoi_cell_in_box(P[i], P[nbs], width, height)
        cells.append(Cell(index=i, polygon=poly, neighbors=nbs))

    log.debug("subdivision: %d sites, %d distinct, %gx%g bounds", n, len(distinct), width, height)
    return Subdivision(points=P, width=float(width), height=float(height), cells=cells)
