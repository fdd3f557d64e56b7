# cg2d/progress.py
"""
Приймачі прогресу для тріангуляції.

Приймач — будь-який callable (current, total, message) -> None. Рушій викликає
його синхронно на грубих віхах і ніде не зберігає.
"""
from __future__ import annotations
import logging
from typing import Optional

from tqdm import tqdm

from .mesh import ProgressSink  # noqa: F401


class TqdmProgress:
    """
    Консольний індикатор на tqdm. Повідомлення віхи йде в опис смуги.
    Оновлює смугу лише коли змінився відсоток або прийшло повідомлення.
    """
    def __init__(self, desc: str = "", leave: bool = False, disable: bool = False, **kwargs):
        self._bar: Optional[tqdm] = None
        self._desc = desc
        self._leave = leave
        self._disable = disable
        self._kwargs = kwargs
        self._last_pct = -1

    def _ensure(self, total: int) -> tqdm:
        if self._bar is None:
            self._bar = tqdm(total=total, desc=self._desc, leave=self._leave,
                             disable=self._disable, **self._kwargs)
        elif self._bar.total != total:
            self._bar.reset(total=total)
            self._last_pct = -1
        return self._bar

    def __call__(self, current: int, total: int, message: str = "") -> None:
        if total <= 0:
            return
        pct = int(current * 100 / total)
        if pct == self._last_pct and not message:
            return
        self._last_pct = pct
        bar = self._ensure(total)
        if message:
            bar.set_postfix_str(message, refresh=False)
        bar.n = min(current, total)
        bar.refresh()

    def complete(self, message: str = "Complete") -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
        if not self._disable:
            tqdm.write(f"✓ {message}", file=self._kwargs.get("file"))

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class LoggingProgress:
    """Приймач, що пише віхи в лог (для неінтерактивних запусків)."""
    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger("cg2d.progress")
        self.level = level

    def __call__(self, current: int, total: int, message: str = "") -> None:
        self.logger.log(self.level, "[%d/%d] %s", current, total, message)
