import numpy as np
import pytest
from scipy.spatial import ConvexHull

from cg2d.geom import EPS, Pt, as_points
from cg2d.mesh import (Delaunay2D, PROGRESS_TOTAL, Triangulation, delaunay_violations,
                       triangulate, triangulate_with_diagnostics)
from cg2d.predicates import orient2d

from conftest import hexagon_cloud


def tri_sets(triangles):
    return {frozenset(t) for t in triangles}


def area(pts, t):
    a, b, c = (pts[i] for i in t)
    return 0.5 * orient2d(a, b, c)


# ---------- сценарії ----------
def test_minimal_three_points():
    tris = triangulate([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    assert len(tris) == 1
    assert sorted(tris[0]) == [0, 1, 2]


def test_square_gives_two_triangles(square):
    tris = triangulate(square)
    assert len(tris) == 2
    pts = as_points(square)
    assert sum(area(pts, t) for t in tris) == pytest.approx(1.0)
    assert set().union(*tris) == {0, 1, 2, 3}
    # спільна діагональ: дві вершини спільні
    assert len(set(tris[0]) & set(tris[1])) == 2


def test_collinear_points_give_nothing():
    assert triangulate([(0, 0, 0), (1, 0, 0), (2, 0, 0)]) == []


def test_flip_picks_delaunay_diagonal():
    # A, B, C дають «очевидний» трикутник; D всередині його описаного кола
    kite = [(-1, 0, 0), (0, 0.3, 0), (1, 0, 0), (0, -0.3, 0)]
    assert tri_sets(triangulate(kite)) == {frozenset({0, 1, 3}), frozenset({1, 2, 3})}


@pytest.mark.parametrize("points", [[], [(0, 0, 0)], [(0, 0, 0), (1, 1, 1)]])
def test_fewer_than_three_points(points):
    res = triangulate_with_diagnostics(points)
    assert isinstance(res, Triangulation)
    assert len(res) == 0
    assert triangulate(points) == []


# ---------- властивості ----------
def test_euler_count(cloud):
    tris = triangulate(cloud)
    n = len(cloud)
    h = len(ConvexHull(np.array([p[:2] for p in cloud])).vertices)
    assert h == 6
    assert len(tris) == 2 * n - h - 2


def test_indices_valid_and_ccw(cloud):
    tris = triangulate(cloud)
    pts = as_points(cloud)
    for t in tris:
        assert len(set(t)) == 3
        assert all(0 <= i < len(cloud) for i in t)
        assert area(pts, t) > 0


def test_delaunay_property(cloud):
    assert delaunay_violations(cloud, triangulate(cloud)) == []


def test_matches_qhull(cloud):
    from scipy.spatial import Delaunay
    ref = Delaunay(np.array([p[:2] for p in cloud]))
    assert tri_sets(triangulate(cloud)) == tri_sets(ref.simplices.tolist())


def test_deterministic(cloud):
    assert triangulate(cloud) == triangulate(cloud)


def test_insertion_order_does_not_change_result():
    pts = hexagon_cloud(25, seed=3)
    perm = list(reversed(range(len(pts))))
    shuffled = [pts[i] for i in perm]
    back = {frozenset(perm[i] for i in t) for t in triangulate(shuffled)}
    assert back == tri_sets(triangulate(pts))


def test_covers_hull_area(cloud):
    pts = as_points(cloud)
    hull = ConvexHull(np.array([p[:2] for p in cloud]))
    assert sum(area(pts, t) for t in triangulate(cloud)) == pytest.approx(hull.volume)


# ---------- загальні набори: рівномірні й видовжені ----------
def random_cloud(seed, n=60, sx=1.0, sy=1.0):
    rng = np.random.default_rng(seed)
    xy = rng.random((n, 2)) * (sx, sy)
    z = rng.random(n)
    return [(float(x), float(y), float(h)) for (x, y), h in zip(xy, z)]


def check_against_qhull(points):
    from scipy.spatial import Delaunay
    xy = np.array([p[:2] for p in points])
    hull = ConvexHull(xy)
    tris = triangulate(points)
    pts = as_points(points)
    assert len(tris) == 2 * len(points) - len(hull.vertices) - 2
    assert sum(area(pts, t) for t in tris) == pytest.approx(hull.volume)
    assert tri_sets(tris) == tri_sets(Delaunay(xy).simplices.tolist())


@pytest.mark.parametrize("seed", range(30))
def test_uniform_random_matches_qhull(seed):
    check_against_qhull(random_cloud(seed))


@pytest.mark.parametrize("seed", range(10))
def test_elongated_random_matches_qhull(seed):
    check_against_qhull(random_cloud(seed, n=40, sx=20.0, sy=1.0))


def test_thin_set_keeps_hull_triangles():
    # тонкий «ромб»: крайові трикутники мають величезні описані кола
    pts = [(0, 0, 0), (10, 0, 0), (5, 0.01, 0), (5, -0.01, 0), (2, 0.002, 0), (8, -0.003, 0)]
    tris = triangulate(pts)
    assert len(tris) == 6
    assert sum(area(as_points(pts), t) for t in tris) == pytest.approx(0.1)
    assert delaunay_violations(pts, tris) == []


def test_accepts_pt_values():
    pts = [Pt(0, 0, 1), (2, 0, 1), Pt(1, 2, 1)]
    assert len(triangulate(pts)) == 1


# ---------- помилки вводу ----------
def test_rejects_plan_duplicates():
    with pytest.raises(ValueError):
        triangulate([(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 3)])


def test_rejects_nan():
    with pytest.raises(ValueError):
        triangulate([(0, 0, 0), (1, 0, 0), (0, float("nan"), 0)])


# ---------- рушій ----------
def test_super_triangle_contains_all_points(cloud):
    d2 = Delaunay2D(cloud)
    ia, ib, ic = d2._build_super_triangle()
    a, b, c = (d2.mesh.points[i] for i in (ia, ib, ic))
    assert orient2d(a, b, c) > 0
    for p in d2.input:
        assert orient2d(a, b, p) > 0
        assert orient2d(b, c, p) > 0
        assert orient2d(c, a, p) > 0


def test_super_triangle_for_zero_extent_input():
    d2 = Delaunay2D([(0, 0, 0), (0, 1, 0), (0, 2, 0)])
    ia, ib, ic = d2._build_super_triangle()
    a, b, c = (d2.mesh.points[i] for i in (ia, ib, ic))
    for p in d2.input:
        assert orient2d(a, b, p) > 0 and orient2d(b, c, p) > 0 and orient2d(c, a, p) > 0


def test_first_insert_splits_super_triangle():
    d2 = Delaunay2D([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    d2._build_super_triangle()
    assert d2.insert(0) == 3
    assert len(d2.mesh.active) == 3
    assert not d2.mesh.tris[0].alive


def test_mesh_stays_valid_and_purge_is_complete(cloud):
    d2 = Delaunay2D(cloud)
    d2.build()
    report = d2.mesh.validate()
    assert report["bad_orientation"] == []
    assert report["bad_edge_multiplicity"] == []
    d2.remove_super_triangle()
    supers = set(d2.super_verts)
    assert all(not (set(t.v) & supers) for t in d2.mesh.alive_tris())
    assert d2.mesh.validate()["bad_edge_multiplicity"] == []

    res = d2.result()
    assert res.diagnostics.inserted == len(cloud)
    assert res.diagnostics.super_purged > 0
    assert res.diagnostics.dropped == 0


def test_progress_milestones(cloud):
    calls = []
    res = triangulate_with_diagnostics(cloud, progress=lambda cur, total, msg: calls.append((cur, total, msg)))
    assert calls[0][0] == 0 and "Initializing" in calls[0][2]
    assert calls[-1][0] == 100 and str(len(res)) in calls[-1][2]
    assert all(total == PROGRESS_TOTAL for _, total, _ in calls)
    currents = [c for c, _, _ in calls]
    assert currents == sorted(currents)
    assert any("Removing super triangle" in m for _, _, m in calls)
    assert any("Converting to indices" in m for _, _, m in calls)
    assert list(res) == triangulate(cloud)


def test_has_point_is_tolerant(square):
    d2 = Delaunay2D(square)
    d2.build()
    d2.remove_super_triangle()
    t = d2.mesh.alive_tris()[0]
    p = d2.mesh.points[t.v[0]]
    assert t.has_vertex(t.v[0])
    assert t.has_point(Pt(p.x + EPS / 2, p.y - EPS / 2, p.z), d2.mesh.points)
    assert not t.has_point(Pt(p.x + 1e-6, p.y, p.z), d2.mesh.points)
    assert not t.has_point(Pt(5.0, 5.0, 0.0), d2.mesh.points)


def test_ghost_triangles_are_exactly_the_purged_ones(cloud):
    d2 = Delaunay2D(cloud)
    d2.build()
    supers = [d2.mesh.points[s] for s in d2.super_verts]
    ghosts = [t for t in d2.mesh.alive_tris() if t.ghost]
    assert ghosts
    for t in d2.mesh.alive_tris():
        touches = any(t.has_point(s, d2.mesh.points) for s in supers)
        assert touches == bool(t.ghost)
        # супер-вершини завжди в кінці
        assert all(v in d2.super_verts for v in t.v[3 - t.ghost:])
    assert d2.mesh.validate()["degenerate"] == []
    d2.remove_super_triangle()
    assert d2.diagnostics.super_purged == len(ghosts)
