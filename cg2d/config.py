"""Configuration for a survey-to-mesh conversion run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .io import ELEVATIONS, WRITERS

BACKENDS = ("internal", "scipy")


@dataclass
class ConvertConfig:
    input: str
    output: str
    fmt: str = 'ply'
    elevation: str = 'existing'
    backend: str = 'internal'
    progress: bool = True
    preview: Optional[str] = None   # PNG path for a matplotlib preview
    normalize: bool = True          # triangulate in unit-box coordinates
    dedupe: bool = False            # merge points that coincide in plan

    def validate(self) -> 'ConvertConfig':
        self.fmt = self.fmt.lower()
        self.elevation = self.elevation.lower()
        if self.fmt not in WRITERS:
            raise ValueError(f"unsupported output format {self.fmt!r}; supported: {', '.join(sorted(WRITERS))}")
        if self.elevation not in ELEVATIONS:
            raise ValueError(f"elevation must be one of {', '.join(ELEVATIONS)}")
        if self.backend not in BACKENDS:
            raise ValueError(f"unknown backend {self.backend!r}")
        return self
