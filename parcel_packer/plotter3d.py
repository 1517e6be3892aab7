"""
3D visualization helpers for an arrangement.

Features:
- Translucent container outline with the placed parcels as colored cuboids.
- Text summary (placed counts per type + parcels that did not fit) inside the window.

The engine's y axis is the vertical one; matplotlib draws its z axis
upwards, so (x, y, z) coordinates are plotted as (x, z, y).

Requires:
    matplotlib
"""

import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from .models import ArrangeResult, Container, Cuboid
from .packing import format_placement_summary, format_unplaced_message


def set_axis_equal(ax):
    """
    Set 3D plot axes to equal scale.
    """
    x_limits = ax.get_xlim3d()
    y_limits = ax.get_ylim3d()
    z_limits = ax.get_zlim3d()

    x_middle = (x_limits[1] + x_limits[0]) / 2
    y_middle = (y_limits[1] + y_limits[0]) / 2
    z_middle = (z_limits[1] + z_limits[0]) / 2

    plot_radius = 0.5 * max(
        abs(x_limits[1] - x_limits[0]),
        abs(y_limits[1] - y_limits[0]),
        abs(z_limits[1] - z_limits[0]),
    )

    ax.set_xlim3d([x_middle - plot_radius, x_middle + plot_radius])
    ax.set_ylim3d([y_middle - plot_radius, y_middle + plot_radius])
    ax.set_zlim3d([z_middle - plot_radius, z_middle + plot_radius])


def _cuboid_faces(cuboid: Cuboid):
    """
    Return list of 6 faces (each face is 4 vertices) for a cuboid, in plot
    coordinates (engine y becomes the vertical axis).
    """
    x = [cuboid.x1, cuboid.x2]
    y = [cuboid.z1, cuboid.z2]  # depth
    z = [cuboid.y1, cuboid.y2]  # height

    return [
        # bottom
        [(x[0], y[0], z[0]), (x[1], y[0], z[0]), (x[1], y[1], z[0]), (x[0], y[1], z[0])],
        # top
        [(x[0], y[0], z[1]), (x[1], y[0], z[1]), (x[1], y[1], z[1]), (x[0], y[1], z[1])],
        # front
        [(x[0], y[0], z[0]), (x[1], y[0], z[0]), (x[1], y[0], z[1]), (x[0], y[0], z[1])],
        # back
        [(x[0], y[1], z[0]), (x[1], y[1], z[0]), (x[1], y[1], z[1]), (x[0], y[1], z[1])],
        # left
        [(x[0], y[0], z[0]), (x[0], y[1], z[0]), (x[0], y[1], z[1]), (x[0], y[0], z[1])],
        # right
        [(x[1], y[0], z[0]), (x[1], y[1], z[0]), (x[1], y[1], z[1]), (x[1], y[0], z[1])],
    ]


def draw_container(ax, container: Container, color="#0055ff", alpha=0.1):
    """
    Draw the container as a translucent cuboid.
    """
    faces = _cuboid_faces(container.bounds)
    box = Poly3DCollection(
        faces, facecolors=color, linewidths=1, edgecolors="k", alpha=alpha
    )
    ax.add_collection3d(box)
    return box


def draw_parcel(ax, cuboid: Cuboid, color: str, alpha=0.6):
    faces = _cuboid_faces(cuboid)
    parcel = Poly3DCollection(
        faces, facecolors=color, linewidths=0.5, edgecolors="k", alpha=alpha
    )
    ax.add_collection3d(parcel)
    return parcel


def arrangement_text(result: ArrangeResult) -> str:
    """
    Multi-line summary shown next to the plot.
    """
    text = format_placement_summary(result)
    message = format_unplaced_message(result)
    if message:
        text += "\n\n" + message
    return text


def draw_arrangement(container: Container, result: ArrangeResult, ax=None):
    """
    Draw `result` inside `container` and return the figure. Nothing is shown;
    call `show_arrangement` (or plt.show()) for an interactive window.
    """
    if ax is None:
        fig = plt.figure()
        ax = fig.add_subplot(111, projection="3d")
    else:
        fig = ax.figure

    draw_container(ax, container)
    for parcel in result.placed:
        draw_parcel(ax, parcel.cuboid, parcel.color)

    bounds = container.bounds
    ax.set_xlim(bounds.x1, bounds.x2)
    ax.set_ylim(bounds.z1, bounds.z2)
    ax.set_zlim(bounds.y1, bounds.y2)
    ax.set_xlabel("X (width)")
    ax.set_ylabel("Z (depth)")
    ax.set_zlabel("Y (height)")
    ax.set_title(f"{len(result.placed)} parcels placed")
    set_axis_equal(ax)

    fig.text(
        0.01,
        0.01,
        arrangement_text(result),
        fontsize=8,
        va="bottom",
        ha="left",
        bbox=dict(facecolor="white", alpha=0.7, edgecolor="gray"),
    )
    return fig


def show_arrangement(container: Container, result: ArrangeResult, ax=None) -> None:
    if not result.placed:
        print("No parcels to visualize.")
    draw_arrangement(container, result, ax=ax)
    plt.show()


__all__ = [
    "set_axis_equal",
    "draw_container",
    "draw_parcel",
    "arrangement_text",
    "draw_arrangement",
    "show_arrangement",
]
