# examples/demo_backends.py
import random
import time

from cg2d.pipeline import triangulate_points

if __name__ == "__main__":
    rnd = random.Random(5)
    pts = [(rnd.random(), rnd.random(), rnd.random()) for _ in range(1500)]

    for backend in ("internal", "scipy"):
        t0 = time.perf_counter()
        _, tri = triangulate_points(pts, backend=backend)
        print(f"{backend:>8}: {len(tri)} triangles in {time.perf_counter() - t0:.2f}s")
