# cg2d/mesh.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .geom import Pt, EPS, PointLike, as_points, bounding_box, check_points, same_point
from .predicates import (DEGENERATE, Circle, circumcircle, ghost_center, in_circumcircle, in_ghost_apex,
                         in_ghost_edge, orient2d, strictly_in_circumcircle)

logger = logging.getLogger(__name__)

UEdge = Tuple[int, int]              # неорієнтоване ребро (min(u,v), max(u,v))
TriIdx = Tuple[int, int, int]        # трикутник як індекси у вхідній послідовності
ProgressSink = Callable[[int, int, str], None]

PROGRESS_TOTAL = 100
PROGRESS_EVERY = 10                  # звітуємо про кожну 10-ту точку і останню

# напрямки супер-вершин (a: ліво-низ, b: право-низ, c: верх), проти годинникової
SUPER_DIRS = ((-1.0, -1.0), (1.0, -1.0), (0.0, 1.0))


@dataclass
class Tri:
    """
    Трикутник у сітці.
    v — три індекси вершин, орієнтовані проти годинникової стрілки (якщо не вироджений).
    circle — кешоване описане коло (рахується один раз при створенні).
    ghost — кількість супер-вершин; вони завжди стоять у v після реальних.
    """
    v: Tuple[int, int, int]
    circle: Circle
    alive: bool = True
    ghost: int = 0

    def directed_edges(self) -> Tuple[Tuple[int, int], Tuple[int, int], Tuple[int, int]]:
        a, b, c = self.v
        return (a, b), (b, c), (c, a)

    def edges(self) -> Tuple[UEdge, UEdge, UEdge]:
        return tuple((min(u, w), max(u, w)) for u, w in self.directed_edges())  # type: ignore[return-value]

    def has_vertex(self, i: int) -> bool:
        return i in self.v

    def has_point(self, q: Pt, points: Sequence[Pt], eps: float = EPS) -> bool:
        """Чи збігається якась вершина з q (з допуском по кожній осі)."""
        return any(same_point(points[i], q, eps) for i in self.v)


class TriMesh:
    """
    Індексована «арена» трикутників:
      - points: таблиця вершин (вхідні точки + супер-вершини в кінці)
      - tris: усі коли-небудь створені Tri (мертві не видаляються, лише alive=False)
      - active: ідентифікатори живих трикутників у порядку створення
      - super_dirs: супер-вершина -> напрямок, у якому вона «на нескінченності»
    """
    def __init__(self, points: List[Pt]):
        self.points: List[Pt] = points[:]
        self.tris: List[Tri] = []
        self.active: List[int] = []
        self.super_dirs: Dict[int, Tuple[float, float]] = {}
        self._ghost_centers: Dict[Tuple[int, int], Tuple[float, float]] = {}

    def set_super(self, dirs: Dict[int, Tuple[float, float]]) -> None:
        self.super_dirs = dict(dirs)
        self._ghost_centers = {(i, j): ghost_center(di, dj)
                               for i, di in dirs.items() for j, dj in dirs.items() if i != j}

    def add_tri(self, a: int, b: int, c: int) -> int:
        """
        Реальний трикутник орієнтується за координатами. Трикутник із супер-вершинами
        вже приходить проти годинникової (ребро порожнини + нова точка), його лише
        прокручуємо так, щоб супер-вершини стояли в кінці.
        """
        dirs = self.super_dirs
        ghost = (a in dirs) + (b in dirs) + (c in dirs)
        if ghost == 0:
            pa, pb, pc = self.points[a], self.points[b], self.points[c]
            # позитивна орієнтація: міняємо дві вершини, якщо трикутник за годинниковою
            if orient2d(pa, pb, pc) < 0:
                b, c = c, b
                pb, pc = pc, pb
            circle = circumcircle(pa, pb, pc)
        else:
            if ghost == 1:
                while c not in dirs:
                    a, b, c = b, c, a
            elif ghost == 2:
                while a in dirs:
                    a, b, c = b, c, a
            circle = DEGENERATE
        tid = len(self.tris)
        self.tris.append(Tri((a, b, c), circle, ghost=ghost))
        self.active.append(tid)
        return tid

    def in_circle(self, p: Pt, t: Tri) -> bool:
        """Замкнений тест «p в описаному колі t»; супер-вершини — на нескінченності."""
        if t.ghost == 0:
            return in_circumcircle(p, t.circle)
        a, b, c = t.v
        if t.ghost == 1:
            return in_ghost_edge(p, self.points[a], self.points[b])
        if t.ghost == 2:
            return in_ghost_apex(p, self.points[a], self._ghost_centers[(b, c)])
        return True

    def remove_tri(self, tid: int) -> None:
        """Позначити трикутник мертвим. Список active перебудовує власник."""
        if 0 <= tid < len(self.tris):
            self.tris[tid].alive = False

    def compact(self) -> None:
        self.active = [tid for tid in self.active if self.tris[tid].alive]

    def alive_tris(self) -> List[Tri]:
        return [self.tris[tid] for tid in self.active if self.tris[tid].alive]

    def edge_multiplicity(self) -> Dict[UEdge, int]:
        counts: Dict[UEdge, int] = {}
        for t in self.alive_tris():
            for e in t.edges():
                counts[e] = counts.get(e, 0) + 1
        return counts

    def validate(self) -> dict:
        """
        Швидка перевірка коректності сітки:
          - кожен живий реальний невироджений трикутник орієнтований проти годинникової;
          - кожне ребро має 1 (межа) або 2 (внутрішнє) інцидентні трикутники.
        Трикутники з супер-вершинами мають символьну геометрію — орієнтацію не перевіряємо.
        Повертає словник з діагностикою.
        """
        alive = [tid for tid in self.active if self.tris[tid].alive]
        bad_orientation: List[int] = []
        degenerate: List[int] = []
        for tid in alive:
            t = self.tris[tid]
            if t.ghost:
                continue
            if t.circle.degenerate:
                degenerate.append(tid)
                continue
            a, b, c = (self.points[i] for i in t.v)
            if orient2d(a, b, c) <= 0:
                bad_orientation.append(tid)
        bad_edges = [(e, k) for e, k in self.edge_multiplicity().items() if k not in (1, 2)]
        return {
            "tris_alive": len(alive),
            "bad_orientation": bad_orientation,          # tid з неправильною орієнтацією
            "degenerate": degenerate,                    # tid з виродженим описаним колом
            "bad_edge_multiplicity": bad_edges,          # [(edge, count not in 1/2), ...]
        }


@dataclass
class Diagnostics:
    """Лічильники аномалій одного запуску; запуск від них ніколи не падає."""
    inserted: int = 0
    not_inserted: int = 0          # точка не потрапила в жодне описане коло
    super_purged: int = 0          # трикутники з супер-вершинами
    degenerate_dropped: int = 0    # вироджені трикутники лише з реальних вершин
    unresolved_dropped: int = 0    # вершину не вдалося зіставити з вхідною точкою

    @property
    def dropped(self) -> int:
        return self.degenerate_dropped + self.unresolved_dropped


@dataclass(frozen=True)
class Triangulation:
    triangles: Tuple[TriIdx, ...]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def __iter__(self) -> Iterator[TriIdx]:
        return iter(self.triangles)

    def __len__(self) -> int:
        return len(self.triangles)


class Delaunay2D:
    """
    Інкрементальна 2D Делоне (Bowyer–Watson) по координатах x, y; z лише переноситься.
    Кожна вставка сканує всі живі трикутники, тому загальна робота O(n * #tris).

    Порядок детермінований: точки вставляються у вхідному порядку, active зберігає
    порядок створення, ребра порожнини обходяться в порядку першої появи.

    Супер-трикутник має скінченні координати (для очищення), але в тесті кола його
    вершини вважаються нескінченно віддаленими. Тому результат — точна Делоне
    для опуклої оболонки входу, без втрачених трикутників на краю.
    """
    def __init__(self, points: Iterable[PointLike], eps: float = EPS, validate: bool = True):
        self.eps = eps
        self.input: List[Pt] = as_points(points)
        if validate:
            check_points(self.input, eps)
        self.n = len(self.input)
        self.mesh = TriMesh(self.input)
        self.super_verts: Tuple[int, int, int] | None = None
        self.diagnostics = Diagnostics()

    # ---- супер-трикутник ----
    def _build_super_triangle(self, factor: float = 2.0) -> Tuple[int, int, int]:
        min_x, min_y, max_x, max_y = bounding_box(self.input)
        margin = factor * max(max_x - min_x, max_y - min_y)
        if margin == 0.0:
            margin = 1.0
        a = Pt(min_x - margin, min_y - margin, 0.0)
        b = Pt(max_x + margin, min_y - margin, 0.0)
        c = Pt((min_x + max_x) * 0.5, max_y + margin, 0.0)
        ia = len(self.mesh.points); self.mesh.points.append(a)
        ib = len(self.mesh.points); self.mesh.points.append(b)
        ic = len(self.mesh.points); self.mesh.points.append(c)
        # геометрія вище лише для виводу й очищення; у тестах кола супер-вершини
        # винесені на нескінченність у тих самих напрямках (проти годинникової)
        self.mesh.set_super({ia: SUPER_DIRS[0], ib: SUPER_DIRS[1], ic: SUPER_DIRS[2]})
        self.mesh.add_tri(ia, ib, ic)
        self.super_verts = (ia, ib, ic)
        logger.debug("super triangle %s %s %s (margin %g)", tuple(a), tuple(b), tuple(c), margin)
        return self.super_verts

    # ---- вставка однієї точки ----
    def insert(self, p_idx: int) -> int:
        """Вставити точку p_idx; повертає кількість нових трикутників."""
        mesh = self.mesh
        p = mesh.points[p_idx]

        # 1) «погані» трикутники: p всередині (або на) описаного кола
        keep: List[int] = []
        bad: List[int] = []
        for tid in mesh.active:
            if mesh.in_circle(p, mesh.tris[tid]):
                bad.append(tid)
            else:
                keep.append(tid)

        if not bad:
            # p лежить лише у вироджених трикутниках — вставити нікуди
            self.diagnostics.not_inserted += 1
            logger.debug("point %d was not inside any circumcircle", p_idx)
            return 0

        # 2) межа порожнини: ребра, що належать рівно одному поганому трикутнику
        count: Dict[UEdge, int] = {}
        first: Dict[UEdge, Tuple[int, int]] = {}
        for tid in bad:
            t = mesh.tris[tid]
            mesh.remove_tri(tid)
            for u, w in t.directed_edges():
                key = (u, w) if u < w else (w, u)
                count[key] = count.get(key, 0) + 1
                first.setdefault(key, (u, w))

        # 3) пришити нові трикутники (ребро межі + p)
        mesh.active = keep
        created = 0
        for key, k in count.items():
            if k == 1:
                u, w = first[key]
                mesh.add_tri(u, w, p_idx)
                created += 1
        self.diagnostics.inserted += 1
        return created

    def build(self, progress: Optional[ProgressSink] = None) -> None:
        """Побудувати тріангуляцію для всіх вхідних точок (окрім супер-вершин)."""
        if self.n < 3:
            return
        _report(progress, 0, "Initializing Delaunay triangulation...")
        self._build_super_triangle()
        _report(progress, 5, "Processing points...")
        n = self.n
        for i in range(n):
            self.insert(i)
            if i % PROGRESS_EVERY == 0 or i == n - 1:
                _report(progress, 5 + (i * 85) // n,
                        f"Processing point {i + 1}/{n} - {len(self.mesh.active)} triangles")

    def remove_super_triangle(self) -> None:
        """Прибрати всі трикутники, що мають вершину, яка збігається з супер-вершиною."""
        if not self.super_verts:
            return
        mesh = self.mesh
        supers = [mesh.points[s] for s in self.super_verts]
        for tid in mesh.active:
            t = mesh.tris[tid]
            if any(t.has_point(s, mesh.points, self.eps) for s in supers):
                mesh.remove_tri(tid)
                self.diagnostics.super_purged += 1
        mesh.compact()

    def _resolve(self, v: int) -> int:
        """Індекс у вхідній послідовності за координатами (з допуском), або -1."""
        p = self.mesh.points[v]
        if v < self.n and same_point(p, self.input[v], self.eps):
            return v
        return find_point_index(p, self.input, self.eps)

    def result(self) -> Triangulation:
        out: List[TriIdx] = []
        for t in self.mesh.alive_tris():
            if t.circle.degenerate:
                self.diagnostics.degenerate_dropped += 1
                continue
            idx = tuple(self._resolve(v) for v in t.v)
            if min(idx) < 0:
                self.diagnostics.unresolved_dropped += 1
                continue
            out.append(idx)  # type: ignore[arg-type]
        d = self.diagnostics
        if d.unresolved_dropped:
            logger.warning("%d triangles dropped: vertex not found among input points", d.unresolved_dropped)
        if d.degenerate_dropped:
            logger.info("%d degenerate triangles dropped", d.degenerate_dropped)
        return Triangulation(tuple(out), d)


# ---------- утиліти ----------
def _report(progress: Optional[ProgressSink], current: int, message: str) -> None:
    if progress is not None:
        progress(current, PROGRESS_TOTAL, message)

def find_point_index(p: Pt, points: Sequence[Pt], eps: float = EPS) -> int:
    for i, q in enumerate(points):
        if same_point(p, q, eps):
            return i
    return -1

def triangulate_with_diagnostics(points: Iterable[PointLike],
                                 progress: Optional[ProgressSink] = None) -> Triangulation:
    """
    Делоне-тріангуляція набору точок (x, y, z) у площині xy.
    Повертає Triangulation: індексні трійки у вхідну послідовність + лічильники аномалій.
    Менше 3 точок -> порожній результат. NaN/inf чи збіжні в плані точки -> ValueError.
    """
    d2 = Delaunay2D(points)
    if d2.n < 3:
        return Triangulation(())
    d2.build(progress)
    _report(progress, 90, "Removing super triangle...")
    d2.remove_super_triangle()
    _report(progress, 95, "Converting to indices...")
    res = d2.result()
    _report(progress, 100, f"Delaunay triangulation complete - {len(res)} triangles")
    logger.debug("triangulated %d points into %d triangles", d2.n, len(res))
    return res

def triangulate(points: Iterable[PointLike],
                progress: Optional[ProgressSink] = None) -> List[TriIdx]:
    return list(triangulate_with_diagnostics(points, progress).triangles)

def delaunay_violations(points: Sequence[PointLike], triangles: Iterable[TriIdx]) -> List[Tuple[TriIdx, int]]:
    """
    Пари (трикутник, точка), де точка лежить строго всередині описаного кола.
    O(#tris * n) — для перевірок і тестів, не для великих наборів.
    """
    pts = as_points(points)
    out: List[Tuple[TriIdx, int]] = []
    for tri in triangles:
        i, j, k = tri
        circle = circumcircle(pts[i], pts[j], pts[k])
        for m, p in enumerate(pts):
            if m in tri:
                continue
            if strictly_in_circumcircle(p, circle):
                out.append((tri, m))
    return out
