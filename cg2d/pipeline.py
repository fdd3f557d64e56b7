from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .config import ConvertConfig
from .geom import Pt, PointLike, as_points, unique_points
from .io import WRITERS, load_agd, project
from .mesh import Diagnostics, ProgressSink, Triangulation, triangulate_with_diagnostics
from .predicates import orient2d
from .progress import TqdmProgress

logger = logging.getLogger(__name__)


def normalized(points: List[Pt]) -> List[Pt]:
    """
    Зсув і рівномірне масштабування xy в одиничний квадрат (z без змін).
    Делоне інваріантна до подібності, а абсолютні допуски рушія (1e-10)
    розраховані на координати порядку одиниці, не градусів із кроком 1e-5.
    """
    if not points:
        return []
    arr = np.array([(p.x, p.y) for p in points], dtype=float)
    lo = arr.min(axis=0)
    span = float(np.ptp(arr, axis=0).max()) or 1.0
    xy = (arr - lo) / span
    return [Pt(float(x), float(y), p.z) for (x, y), p in zip(xy, points)]


def _scipy_triangulation(pts: List[Pt]) -> Triangulation:
    try:
        from scipy.spatial import Delaunay, QhullError
    except ImportError as e:
        raise RuntimeError(
            "backend='scipy', але SciPy не встановлено. "
            "Встанови scipy або використай backend='internal'."
        ) from e
    if len(pts) < 3:
        return Triangulation(())
    arr = np.array([(p.x, p.y) for p in pts], dtype=float)
    try:
        dela = Delaunay(arr)
    except QhullError as e:
        raise ValueError(f"qhull could not triangulate the points: {e}") from e
    out = []
    for simplex in dela.simplices:
        a, b, c = (int(i) for i in simplex)
        if orient2d(pts[a], pts[b], pts[c]) < 0:
            b, c = c, b
        out.append((a, b, c))
    return Triangulation(tuple(out), Diagnostics(inserted=len(pts)))


def triangulate_points(
    points: Iterable[PointLike],
    backend: str = "internal",
    dedupe: bool = False,
    normalize: bool = True,
    progress: Optional[ProgressSink] = None,
) -> Tuple[List[Pt], Triangulation]:
    """
    Повний пайплайн тріангуляції:
      - (опційно) прибирає точки, що збігаються в плані;
      - будує Делоне: наш Bowyer–Watson ("internal") або SciPy/Qhull ("scipy").

    Повертає:
      pts — список Pt у фінальному порядку (вихідні координати);
      tri — Triangulation з індексами у pts.
    """
    pts = as_points(points)
    if dedupe:
        before = len(pts)
        pts, _ = unique_points(pts)
        if len(pts) != before:
            logger.info("dropped %d duplicate points", before - len(pts))

    work = normalized(pts) if normalize else pts

    if backend.lower() == "internal":
        tri = triangulate_with_diagnostics(work, progress)
    elif backend.lower() == "scipy":
        tri = _scipy_triangulation(work)
    else:
        raise ValueError(f"Невідомий backend: {backend}")
    return pts, tri


@dataclass
class ConvertReport:
    output: str
    points: int
    triangles: int
    diagnostics: Optional[Diagnostics] = None
    written: bool = True


def convert(config: ConvertConfig) -> ConvertReport:
    """Завантажити AGD, спроєктувати, тріангулювати й записати сітку."""
    config.validate()
    survey = load_agd(config.input)
    if not survey:
        logger.warning("no valid topology points found in %s", config.input)
        return ConvertReport(config.output, 0, 0, written=False)

    pts = project(survey, config.elevation)
    logger.info("using %s elevation, %s backend", config.elevation, config.backend)

    with TqdmProgress(desc="Triangulating", disable=not config.progress) as bar:
        pts, tri = triangulate_points(pts, backend=config.backend, dedupe=config.dedupe,
                                      normalize=config.normalize, progress=bar)
        bar.complete(f"Delaunay triangulation complete - {len(tri)} triangles")

    triangles = list(tri)
    WRITERS[config.fmt](config.output, pts, triangles)
    logger.info("wrote %s file %s: %d vertices, %d faces",
                config.fmt.upper(), config.output, len(pts), len(triangles))

    if config.preview:
        from .plot import save_preview
        save_preview(config.preview, pts, triangles)
        logger.info("wrote preview %s", config.preview)

    return ConvertReport(config.output, len(pts), len(triangles), tri.diagnostics)
