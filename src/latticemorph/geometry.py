import numpy as np
from shapely.geometry import Polygon, box


def bisector_halfplane(site, other, reach: float) -> Polygon:
    """
    Half-plane of points at least as close to site as to other, as a square
    of side 2*reach sitting on the perpendicular bisector.
    reach must exceed the distance from the bisector midpoint to any clipped region.
    """
    si = np.asarray(site, dtype=np.float64)
    sj = np.asarray(other, dtype=np.float64)
    m = 0.5 * (si + sj)
    u = (sj - si) / np.linalg.norm(sj - si)  # points away from site
    t = np.array([-u[1], u[0]])

    return Polygon([
        m + t * reach,
        m - t * reach,
        m - t * reach - u * 2 * reach,
        m + t * reach - u * 2 * reach,
    ])


def voronoi_cell_in_box(site, neighbors, width: float, height: float) -> np.ndarray:
    """
    Box [0,width] x [0,height] intersected with the bisector half-planes of site
    against every neighbor. Returns (K,2) exterior coords, or (0,2) when nothing
    of positive area is left.
    """
    cell = box(0.0, 0.0, float(width), float(height))
    si = np.asarray(site, dtype=np.float64)
    center = np.array([width, height], dtype=np.float64) / 2
    reach = 2.0 * (float(width) + float(height))

    for sj in neighbors:
        m = 0.5 * (si + np.asarray(sj, dtype=np.float64))
        cell = cell.intersection(bisector_halfplane(si, sj, reach + float(np.linalg.norm(m - center))))
        if cell.is_empty:
            break

    # handle MultiPolygon / GeometryCollection by taking largest polygonal part
    if cell.geom_type != "Polygon":
        parts = [g for g in getattr(cell, "geoms", []) if g.geom_type == "Polygon"]
        cell = max(parts, key=lambda g: g.area) if parts else Polygon()

    if cell.is_empty or cell.area == 0.0:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array(cell.exterior.coords[:-1], dtype=np.float64)
