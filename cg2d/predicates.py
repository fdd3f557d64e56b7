# cg2d/predicates.py
from __future__ import annotations
from typing import NamedTuple, Tuple

from .geom import Pt, EPS

class Circle(NamedTuple):
    cx: float
    cy: float
    r2: float          # квадрат радіуса
    degenerate: bool = False

# спільний «виродженний» круг: центр у нулі, радіус 0, нічого не містить
DEGENERATE = Circle(0.0, 0.0, 0.0, True)

def orient2d(a: Pt, b: Pt, c: Pt) -> float:
    """Подвоєна орієнтована площа (a,b,c) у площині xy: >0 якщо проти годинникової."""
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)

def circumcircle(a: Pt, b: Pt, c: Pt, eps: float = EPS) -> Circle:
    """
    Описане коло трикутника через визначник.
    |d| < eps (майже колінеарні вершини) -> DEGENERATE.
    """
    ax, ay = a.x, a.y
    bx, by = b.x, b.y
    cx, cy = c.x, c.y
    d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if abs(d) < eps:
        return DEGENERATE
    sa = ax * ax + ay * ay
    sb = bx * bx + by * by
    sc = cx * cx + cy * cy
    ux = (sa * (by - cy) + sb * (cy - ay) + sc * (ay - by)) / d
    uy = (sa * (cx - bx) + sb * (ax - cx) + sc * (bx - ax)) / d
    r2 = (ax - ux) * (ax - ux) + (ay - uy) * (ay - uy)
    return Circle(ux, uy, r2)

def in_circumcircle(p: Pt, circle: Circle) -> bool:
    """Замкнений тест: межа кола вважається «всередині». Вироджене коло не містить нічого."""
    if circle.degenerate:
        return False
    dx = p.x - circle.cx
    dy = p.y - circle.cy
    return dx * dx + dy * dy <= circle.r2

def point_in_circumcircle(p: Pt, a: Pt, b: Pt, c: Pt) -> bool:
    return in_circumcircle(p, circumcircle(a, b, c))

def strictly_in_circumcircle(p: Pt, circle: Circle, rel: float = 1e-9) -> bool:
    """
    Строгий тест для перевірки властивості Делоне: точка на колі (з відносною
    похибкою rel) не рахується.
    """
    if circle.degenerate:
        return False
    dx = p.x - circle.cx
    dy = p.y - circle.cy
    return dx * dx + dy * dy < circle.r2 * (1.0 - rel)

# ---------- супер-вершини «на нескінченності» ----------
# Трикутник із супер-вершиною s, винесеною на нескінченність у напрямку d, має
# за «описане коло» граничний круг: для однієї супер-вершини — півплощину за
# його реальним ребром, для двох — півплощину, дотичну в реальній вершині.

def in_ghost_edge(p: Pt, a: Pt, b: Pt) -> bool:
    """
    Трикутник (a, b, s∞) проти годинникової: s∞ ліворуч від a->b.
    p всередині, якщо строго ліворуч або на відкритому відрізку ab.
    """
    o = orient2d(a, b, p)
    if o != 0.0:
        return o > 0.0
    dx, dy = b.x - a.x, b.y - a.y
    t = (p.x - a.x) * dx + (p.y - a.y) * dy
    return 0.0 < t < dx * dx + dy * dy

def ghost_center(di: Tuple[float, float], dj: Tuple[float, float]) -> Tuple[float, float]:
    """Центр кола через 0, di, dj: дотичний напрям граничного круга (a, s_i∞, s_j∞)."""
    hi = 0.5 * (di[0] * di[0] + di[1] * di[1])
    hj = 0.5 * (dj[0] * dj[0] + dj[1] * dj[1])
    det = di[0] * dj[1] - di[1] * dj[0]
    return (hi * dj[1] - hj * di[1]) / det, (di[0] * hj - dj[0] * hi) / det

def in_ghost_apex(p: Pt, a: Pt, center: Tuple[float, float]) -> bool:
    """Трикутник (a, s_i∞, s_j∞): p всередині, якщо (p - a) · center > 0."""
    return (p.x - a.x) * center[0] + (p.y - a.y) * center[1] > 0.0
