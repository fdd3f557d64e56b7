from __future__ import annotations
from dataclasses import dataclass
from math import isfinite
from typing import Iterable, List, Sequence, Tuple, Union

EPS = 1e-10  # єдиний допуск для всіх порівнянь координат

PointLike = Union["Pt", Tuple[float, float, float], Sequence[float]]

@dataclass(frozen=True)
class Pt:
    x: float
    y: float
    z: float
    def __iter__(self):
        yield self.x; yield self.y; yield self.z

def as_points(points: Iterable[PointLike]) -> List[Pt]:
    out: List[Pt] = []
    for p in points:
        if isinstance(p, Pt):
            out.append(p)
        else:
            x, y, z = p
            out.append(Pt(float(x), float(y), float(z)))
    return out

def same_point(a: Pt, b: Pt, eps: float = EPS) -> bool:
    return abs(a.x - b.x) < eps and abs(a.y - b.y) < eps and abs(a.z - b.z) < eps

def same_edge(a0: Pt, a1: Pt, b0: Pt, b1: Pt, eps: float = EPS) -> bool:
    """Неорієнтоване ребро: кінці збігаються в будь-якому порядку."""
    return ((same_point(a0, b0, eps) and same_point(a1, b1, eps)) or
            (same_point(a0, b1, eps) and same_point(a1, b0, eps)))

def bounding_box(points: Iterable[Pt]) -> Tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y); z ігнорується."""
    it = iter(points)
    try:
        p = next(it)
    except StopIteration:
        raise ValueError("empty set") from None
    x0 = x1 = p.x
    y0 = y1 = p.y
    for p in it:
        if p.x < x0: x0 = p.x
        elif p.x > x1: x1 = p.x
        if p.y < y0: y0 = p.y
        elif p.y > y1: y1 = p.y
    return x0, y0, x1, y1

def _plan_sweep(points: Sequence[Pt], eps: float):
    """
    Пари точок, що збігаються в плані (|dx| < eps і |dy| < eps).
    Сортування за x + прохід вікном шириною eps, O(n log n) для розумних даних.
    Повертає пари (i, j), i < j — індекси у вхідній послідовності.
    """
    order = sorted(range(len(points)), key=lambda i: (points[i].x, points[i].y, i))
    for a in range(len(order)):
        i = order[a]
        pi = points[i]
        for b in range(a + 1, len(order)):
            j = order[b]
            pj = points[j]
            if pj.x - pi.x >= eps:
                break
            if abs(pj.y - pi.y) < eps:
                yield (i, j) if i < j else (j, i)

def check_points(points: Sequence[Pt], eps: float = EPS) -> None:
    """
    Явна перевірка вхідних даних перед тріангуляцією:
      - усі координати скінченні (без NaN / inf);
      - жодні дві точки не збігаються в плані.
    Кидає ValueError з індексом першої проблемної точки.
    """
    for i, p in enumerate(points):
        if not (isfinite(p.x) and isfinite(p.y) and isfinite(p.z)):
            raise ValueError(f"point {i} has a non-finite coordinate: {tuple(p)}")
    for i, j in _plan_sweep(points, eps):
        raise ValueError(f"points {i} and {j} coincide in plan: {tuple(points[i])}")

def unique_points(points: Sequence[Pt], eps: float = EPS) -> Tuple[List[Pt], List[int]]:
    """
    Дедуплікація в плані: з кожної групи точок, що збігаються, лишається перша.
    Повертає (унікальні точки, remap), де remap[i] — позиція вхідної точки i
    у списку унікальних.
    """
    keep_of = list(range(len(points)))
    for i, j in sorted(_plan_sweep(points, eps)):
        # j прилипає до найпершого представника групи
        root = keep_of[i]
        if root < keep_of[j]:
            keep_of[j] = root
    out: List[Pt] = []
    pos: dict[int, int] = {}
    remap: List[int] = []
    for i, p in enumerate(points):
        root = keep_of[i]
        while keep_of[root] != root:
            root = keep_of[root]
        if root not in pos:
            pos[root] = len(out)
            out.append(points[root])
        remap.append(pos[root])
    return out, remap
