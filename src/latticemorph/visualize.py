import matplotlib.pyplot as plt


def plot_subdivision(subdivision, ax=None, *, show_sites: bool = True):
    if ax is None:
        fig, ax = plt.subplots()

    for cell in subdivision.cells:
        if cell.is_empty():
            continue
        p = cell.polygon
        ax.fill(*p.T, facecolor="none", edgecolor="k", linewidth=0.8)

    if show_sites and len(subdivision.points):
        ax.plot(*subdivision.points.T, ".r", markersize=2)

    ax.set_xlim(0, subdivision.width)
    ax.set_ylim(subdivision.height, 0)  # image rows grow downwards
    ax.set_aspect("equal")
    ax.set_title("Voronoi subdivision")
    return ax
