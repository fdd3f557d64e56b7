# cg2d/plot.py
"""Попередній перегляд сітки через matplotlib (без GUI-бекенду)."""
from __future__ import annotations
from typing import Optional, Sequence, Tuple

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.tri import Triangulation as MplTriangulation

from .geom import Pt


def plot_mesh(points: Sequence[Pt], triangles: Sequence[Tuple[int, int, int]], ax=None):
    """
    Намалювати тріангуляцію на ax: заливка за висотою (z) + ребра.
    Без трикутників малює лише точки. Повертає ax.
    """
    if ax is None:
        fig = Figure(figsize=(7, 6))
        FigureCanvasAgg(fig)
        ax = fig.add_subplot(111)
    xs = np.array([p.x for p in points], dtype=float)
    ys = np.array([p.y for p in points], dtype=float)
    zs = np.array([p.z for p in points], dtype=float)
    if len(triangles):
        tri = MplTriangulation(xs, ys, np.asarray(triangles, dtype=int))
        shade = ax.tripcolor(tri, zs, shading="gouraud", cmap="terrain")
        ax.triplot(tri, color="k", linewidth=0.3)
        ax.figure.colorbar(shade, ax=ax, label="elevation")
    ax.plot(xs, ys, ".", color="tab:red", markersize=2)
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(f"{len(points)} vertices, {len(triangles)} triangles")
    return ax


def save_preview(path: str, points: Sequence[Pt], triangles: Sequence[Tuple[int, int, int]],
                 dpi: Optional[int] = 150) -> None:
    fig = Figure(figsize=(7, 6))
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(111)
    plot_mesh(points, triangles, ax=ax)
    fig.savefig(path, dpi=dpi)
