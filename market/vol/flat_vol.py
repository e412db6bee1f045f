# -*- coding: utf-8 -*-
"""
Flat volatility surface: returns constant vol for all maturities/strikes.
"""

import math
from utils.error import FinError


class FlatVolSurface:
    def __init__(self, vol):
        v = float(vol)
        if v <= 0.0:
            raise FinError(f"Volatility must be positive. Got: {vol}")
        self._vol = v

    def vol_TK(self, T: float, K: float = None) -> float:
        """
        Return vol for time to maturity T (years) and optional strike K.
        """
        return self._vol

    def vol(self) -> float:
        return self._vol

    def black_variance(self, T: float, K: float = None) -> float:
        return self._vol * self._vol * T

    def black_forward_variance(self, t1: float, t2: float, K: float = None) -> float:
        if t2 < t1:
            raise FinError(f"t1 <= t2 required. Got: t1={t1}, t2={t2}")
        return self.black_variance(t2, K) - self.black_variance(t1, K)

    def black_forward_vol(self, t1: float, t2: float, K: float = None) -> float:
        if t2 == t1:
            return self._vol
        return math.sqrt(self.black_forward_variance(t1, t2, K) / (t2 - t1))

    def local_vol(self, t: float, s: float) -> float:
        return self._vol

    def __repr__(self):
        return f"FlatVolSurface(vol={self._vol:.4f})"
