# cg2d/io.py
"""
Введення/виведення навколо рушія: читання AGD-точок (CSV), проєкція EPSG:4326
та запис ASCII-сіток (PLY, OFF). Рушій про ці формати нічого не знає.
"""
from __future__ import annotations
import csv
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from .geom import Pt

logger = logging.getLogger(__name__)

ELEVATIONS = ("existing", "proposed")


@dataclass
class SurveyPoint:
    latitude: float
    longitude: float
    existing_elevation: float = 0.0
    proposed_elevation: float = 0.0
    cut_fill: float = 0.0          # cut > 0, fill < 0
    code: str = ""
    comments: str = ""


def _num(text: str, lineno: int, column: str, required: bool = False) -> float:
    text = text.strip()
    if not text:
        if required:
            raise ValueError(f"line {lineno}: empty {column}")
        return 0.0
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"line {lineno}: bad {column} value {text!r}") from None


def parse_agd(lines: Iterable[str]) -> List[SurveyPoint]:
    """
    Рядки AGD: перший — заголовок, далі
      lat, lon, existing, proposed, cut/fill, code, comments
    Рядки з < 7 полями пропускаються. Лишаються лише точки, де обидві висоти != 0.
    Порожня висота = 0, порожня широта/довгота -> ValueError.
    Cut/fill у файлі має протилежний знак; якщо поле порожнє або "0.000" —
    рахується як existing - proposed.
    """
    out: List[SurveyPoint] = []
    reader = csv.reader(lines)
    next(reader, None)  # заголовок
    for lineno, fields in enumerate(reader, start=2):
        if len(fields) < 7:
            continue
        pt = SurveyPoint(
            latitude=_num(fields[0], lineno, "latitude", required=True),
            longitude=_num(fields[1], lineno, "longitude", required=True),
            existing_elevation=_num(fields[2], lineno, "existing elevation"),
            proposed_elevation=_num(fields[3], lineno, "proposed elevation"),
            code=fields[5].strip(),
            comments=fields[6].strip(),
        )
        if pt.existing_elevation == 0 or pt.proposed_elevation == 0:
            continue
        cf = fields[4].strip()
        if cf and cf != "0.000":
            pt.cut_fill = -_num(cf, lineno, "cut/fill")
        else:
            pt.cut_fill = pt.existing_elevation - pt.proposed_elevation
        out.append(pt)
    return out


def load_agd(path: str) -> List[SurveyPoint]:
    with open(path, "r", encoding="utf-8", newline="") as f:
        points = parse_agd(f)
    logger.info("loaded %d topology points from %s", len(points), path)
    return points


# ---------- проєкція ----------
def reference_point(points: Sequence[SurveyPoint]) -> Tuple[float, float]:
    """Центр bbox у (lat, lon)."""
    if not points:
        raise ValueError("points list cannot be empty")
    lats = [p.latitude for p in points]
    lons = [p.longitude for p in points]
    return (min(lats) + max(lats)) / 2.0, (min(lons) + max(lons)) / 2.0


def to_local(latitude: float, longitude: float, ref_lat: float = 0.0, ref_lon: float = 0.0) -> Tuple[float, float]:
    """EPSG:4326: x = довгота, y = широта; опорна точка не використовується."""
    return longitude, latitude


def project(points: Sequence[SurveyPoint], elevation: str = "existing") -> List[Pt]:
    if elevation not in ELEVATIONS:
        raise ValueError(f"unknown elevation {elevation!r}, expected one of {ELEVATIONS}")
    ref_lat, ref_lon = reference_point(points)
    proposed = elevation == "proposed"
    out: List[Pt] = []
    for p in points:
        x, y = to_local(p.latitude, p.longitude, ref_lat, ref_lon)
        out.append(Pt(x, y, p.proposed_elevation if proposed else p.existing_elevation))
    return out


# ---------- запис сіток ----------
PLY_HEADER = (
    "ply",
    "format ascii 1.0",
    "comment Coordinate system: EPSG:4326 (WGS84)",
    "comment X = Longitude (decimal degrees)",
    "comment Y = Latitude (decimal degrees)",
    "comment Z = Elevation (meters)",
)


def ply_text(points: Sequence[Pt], triangles: Sequence[Tuple[int, int, int]]) -> str:
    lines = list(PLY_HEADER)
    lines.append(f"element vertex {len(points)}")
    lines += ["property float x", "property float y", "property float z"]
    lines.append(f"element face {len(triangles)}")
    lines.append("property list uchar int vertex_indices")
    lines.append("end_header")
    for p in points:
        lines.append(f"{p.x:.6f} {p.y:.6f} {p.z:.6f}")
    for a, b, c in triangles:
        lines.append(f"3 {a} {b} {c}")
    return "\n".join(lines) + "\n"


def off_text(points: Sequence[Pt], triangles: Sequence[Tuple[int, int, int]]) -> str:
    lines = ["OFF", f"{len(points)} {len(triangles)} 0"]
    for p in points:
        lines.append(f"{p.x} {p.y} {p.z}")
    for a, b, c in triangles:
        lines.append(f"3 {a} {b} {c}")
    return "\n".join(lines) + "\n"


def write_ply(path: str, points: Sequence[Pt], triangles: Sequence[Tuple[int, int, int]]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(ply_text(points, triangles))


def write_off(path: str, points: Sequence[Pt], triangles: Sequence[Tuple[int, int, int]]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(off_text(points, triangles))


WRITERS: Dict[str, Callable[[str, Sequence[Pt], Sequence[Tuple[int, int, int]]], None]] = {
    "ply": write_ply,
    "off": write_off,
}


def parse_xyz_text(text: str) -> List[Pt]:
    """
    Точки з багаторядкового тексту: кожен рядок "x y z" або "x, y, z".
    Порожні рядки й рядки з '#' пропускаються.
    """
    points: List[Pt] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.replace(",", " ").split()
        if len(parts) != 3:
            raise ValueError(f"Рядок {lineno}: очікується 3 числа, отримано: {len(parts)}")
        try:
            x, y, z = map(float, parts)
        except ValueError:
            raise ValueError(f"Рядок {lineno}: не вдалось прочитати числа '{line}'") from None
        points.append(Pt(x, y, z))
    return points
