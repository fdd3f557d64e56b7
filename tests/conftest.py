import logging
import math

import numpy as np
import pytest

HEX_RADII = (1.0, 0.98, 1.02, 0.99, 1.01, 0.97)


def hexagon_cloud(n_inner=40, seed=7):
    """Slightly irregular hexagon hull + random points well inside it (general position)."""
    pts = []
    for k, r in enumerate(HEX_RADII):
        a = k * math.pi / 3.0 + 0.1
        pts.append((r * math.cos(a), r * math.sin(a), 10.0 + k))
    rng = np.random.default_rng(seed)
    for _ in range(n_inner):
        r = 0.5 * math.sqrt(rng.random())
        a = 2.0 * math.pi * rng.random()
        pts.append((r * math.cos(a), r * math.sin(a), float(rng.random())))
    return pts


@pytest.fixture
def cloud():
    return hexagon_cloud()


@pytest.fixture
def square():
    return [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]


AGD_TEXT = """Latitude,Longitude,Existing,Proposed,CutFill,Code,Comments
37.000000,-120.000000,100.0,101.0,-1.000,GR,corner
37.000000,-119.999900,100.5,100.0,0.000,GR,
37.000100,-119.999900,101.0,100.0,,GR,
37.000100,-120.000000,100.2,100.1,0.100,GR,"quoted, comment"
37.000050,-119.999950,100.7,0,0.000,GR,no proposed
37.000040,-119.999960,100.4,100.4,0.000,GR,centre
short,row
"""


@pytest.fixture
def agd_file(tmp_path):
    path = tmp_path / "site.agd"
    path.write_text(AGD_TEXT, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _restore_cg2d_logger():
    log = logging.getLogger("cg2d")
    handlers, level, propagate = list(log.handlers), log.level, log.propagate
    yield
    log.handlers[:] = handlers
    log.setLevel(level)
    log.propagate = propagate
