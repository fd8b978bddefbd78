from .datastructures import Cell, Subdivision, Hexagon, Triangle, PolygonShape, Dot, RenderItem
from .sampling import generate_random_points, point_count_for_size, lattice_points
from .voronoi import build_subdivision
from .relax import relax_points, relax
from .lattice import hex_centers, tri_centers
from .alternation import AlternationPattern, pick_source, grid_cell_for_point
from .pixels import as_pixel_buffer, sample_rgb, luminance, luminance_map, weight_field
from .quantize import build_palette, remap, quantize_buffer
from .compose import RenderMode, RenderParams, render

__all__ = [
    "Cell",
    "Subdivision",
    "Hexagon",
    "Triangle",
    "PolygonShape",
    "Dot",
    "RenderItem",
    "generate_random_points",
    "point_count_for_size",
    "lattice_points",
    "build_subdivision",
    "relax_points",
    "relax",
    "hex_centers",
    "tri_centers",
    "AlternationPattern",
    "pick_source",
    "grid_cell_for_point",
    "as_pixel_buffer",
    "sample_rgb",
    "luminance",
    "luminance_map",
    "weight_field",
    "build_palette",
    "remap",
    "quantize_buffer",
    "RenderMode",
    "RenderParams",
    "render",
]
