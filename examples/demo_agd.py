# examples/demo_agd.py
import random

from cg2d.config import ConvertConfig
from cg2d.logging_utils import configure_logging
from cg2d.pipeline import convert

HEADER = "Latitude,Longitude,Existing,Proposed,CutFill,Code,Comments"


def write_sample_agd(path: str, n: int = 200, seed: int = 1) -> None:
    """Випадкова ділянка ~100 м з пологим схилом (existing) і планувальною площиною (proposed)."""
    rnd = random.Random(seed)
    lines = [HEADER]
    for i in range(n):
        dlat = rnd.random() * 1e-3
        dlon = rnd.random() * 1e-3
        existing = 100.0 + 4000.0 * dlat + rnd.uniform(-0.2, 0.2)
        proposed = 101.5
        lines.append(f"{37.0 + dlat:.7f},{-120.0 + dlon:.7f},{existing:.3f},{proposed:.3f},,GR,pt{i}")
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")


if __name__ == "__main__":
    configure_logging("INFO")
    write_sample_agd("sample.agd")
    report = convert(ConvertConfig(input="sample.agd", output="sample.ply", preview="sample.png"))
    print(f"{report.points} vertices, {report.triangles} triangles -> {report.output}")
