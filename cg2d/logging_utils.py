"""Logging helpers for cg2d.

The library only logs through module loggers under the 'cg2d' namespace; the
package __init__ attaches a NullHandler. configure_logging() is for scripts
and the CLI and never touches the process root logger.
"""
from __future__ import annotations

import logging
import sys
from typing import Union

_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO', stream=None) -> logging.Logger:
    """Attach one stream handler to the 'cg2d' logger and set its level."""
    root = logging.getLogger('cg2d')
    for h in list(root.handlers):
        if isinstance(h, logging.NullHandler) or getattr(h, '_cg2d', False):
            root.removeHandler(h)
    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(_FORMAT)
    handler._cg2d = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(_to_level(level))
    root.propagate = False
    if root.level <= logging.DEBUG:
        logging.getLogger('matplotlib').setLevel(logging.INFO)
    return root


__all__ = ['configure_logging']
