# -*- coding: utf-8 -*-
"""
One-factor Hull-White short rate model fitted to a discount curve.

    r(t) = x(t) + phi(t),   dx = -a x dt + sigma dW,  x(0) = 0
    phi(t) = f(0, t) + sigma^2 / (2 a^2) * (1 - exp(-a t))^2
"""

import math

from market.curves.base_curve import BaseCurve
from utils.error import FinError


class HullWhiteModel:
    def __init__(self, curve: BaseCurve, a: float, sigma: float):
        if not isinstance(curve, BaseCurve):
            raise FinError("curve must be a BaseCurve instance")
        if a <= 0.0:
            raise FinError(f"mean reversion must be positive. Got: {a}")
        if sigma <= 0.0:
            raise FinError(f"sigma must be positive. Got: {sigma}")
        self._curve = curve
        self._a = float(a)
        self._sigma = float(sigma)

    def a(self) -> float:
        return self._a

    def sigma(self) -> float:
        return self._sigma

    def term_structure(self) -> BaseCurve:
        return self._curve

    def phi(self, t: float) -> float:
        f = self._curve.instantaneous_forward(t)
        tmp = self._sigma * (1.0 - math.exp(-self._a * t)) / self._a
        return f + 0.5 * tmp * tmp

    def short_rate(self, t: float, x: float) -> float:
        return x + self.phi(t)
