"""
cg2d — мінімальна бібліотека 2.5D тріангуляції знімальних точок (x, y, висота).
Зараз: інкрементальна Делоне (Bowyer–Watson) + AGD -> PLY/OFF конвертер.
"""
import logging

__version__ = "0.1.0"

from cg2d.geom import Pt, EPS, same_point, same_edge, check_points, unique_points
from cg2d.predicates import Circle, circumcircle, in_circumcircle, point_in_circumcircle, orient2d
from cg2d.mesh import Delaunay2D, Diagnostics, Triangulation, triangulate, triangulate_with_diagnostics

logging.getLogger("cg2d").addHandler(logging.NullHandler())

__all__ = [
    "Pt", "EPS", "same_point", "same_edge", "check_points", "unique_points",
    "Circle", "circumcircle", "in_circumcircle", "point_in_circumcircle", "orient2d",
    "Delaunay2D", "Diagnostics", "Triangulation", "triangulate", "triangulate_with_diagnostics",
    "__version__",
]
