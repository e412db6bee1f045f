# -*- coding: utf-8 -*-
"""
Local volatility surface backed by a callable sigma(t, S).
"""

import math
from utils.error import FinError


class LocalVolSurface:
    def __init__(self, fn):
        if not callable(fn):
            raise FinError("local vol function must be callable")
        self._fn = fn

    def local_vol(self, t: float, s: float) -> float:
        v = float(self._fn(t, s))
        if not math.isfinite(v) or v <= 0.0:
            raise FinError(f"illegal local vol {v} at t={t}, S={s}")
        return v

    def __repr__(self):
        return f"LocalVolSurface(fn={getattr(self._fn, '__name__', self._fn)})"
