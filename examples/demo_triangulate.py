# examples/demo_triangulate.py
from cg2d.mesh import Delaunay2D, triangulate_with_diagnostics

if __name__ == "__main__":
    # квадрат + кілька внутрішніх точок
    raw = [
        (0, 0, 10.0), (1, 0, 10.5), (1, 1, 11.0), (0, 1, 10.2),
        (0.5, 0.5, 10.8), (0.2, 0.7, 10.4), (0.8, 0.3, 10.6),
    ]

    res = triangulate_with_diagnostics(raw)
    print("Triangles:", list(res))
    print("Diagnostics:", res.diagnostics)

    d2 = Delaunay2D(raw)
    d2.build()
    d2.remove_super_triangle()
    print("VALIDATION:", d2.mesh.validate())
