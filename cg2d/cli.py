# cg2d/cli.py
"""Командний рядок: AGD -> PLY/OFF."""
from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import BACKENDS, ConvertConfig
from .io import ELEVATIONS, WRITERS
from .logging_utils import configure_logging
from .pipeline import convert

logger = logging.getLogger(__name__)

EPILOG = """examples:
  cg2d -i input.agd -o output.ply
  cg2d -i input.agd -o output.ply -f ply -e existing
  cg2d -i input.agd -o output.off -f off --progress --preview mesh.png
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cg2d",
        description="Convert AGD survey points to a triangulated mesh (Delaunay, Bowyer-Watson).",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-i", "--input", required=True, help="input AGD file path")
    p.add_argument("-o", "--output", required=True, help="output mesh file path")
    p.add_argument("-f", "--format", dest="fmt", default="ply", type=str.lower,
                   choices=sorted(WRITERS), help="output format (default: ply)")
    p.add_argument("-e", "--elevation", default="existing", type=str.lower,
                   choices=ELEVATIONS, help="elevation source (default: existing)")
    p.add_argument("-p", "--progress", action="store_true", help="show a progress bar")
    p.add_argument("--backend", default="internal", choices=BACKENDS,
                   help="triangulation backend (default: internal)")
    p.add_argument("--dedupe", action="store_true", help="merge points that coincide in plan")
    p.add_argument("--no-normalize", dest="normalize", action="store_false",
                   help="triangulate raw coordinates instead of unit-box ones")
    p.add_argument("--preview", metavar="PNG", help="also save a matplotlib preview image")
    p.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose > 1 else "INFO" if args.verbose or args.progress else "WARNING")

    if not os.path.isfile(args.input):
        logger.error("input file %r does not exist", args.input)
        return 1

    config = ConvertConfig(
        input=args.input, output=args.output, fmt=args.fmt, elevation=args.elevation,
        backend=args.backend, progress=args.progress, preview=args.preview,
        normalize=args.normalize, dedupe=args.dedupe,
    )
    try:
        report = convert(config)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("%s", e)
        logger.debug("conversion failed", exc_info=True)
        return 1
    if report.written:
        print(f"Exported {config.fmt.upper()} file: {report.output} "
              f"({report.points} vertices, {report.triangles} triangles)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
