# -*- coding: utf-8 -*-
"""
Quanto-adjusted dividend yield curve.

Zero yield: q(T) + r_d(T) - r_f(T) + rho * sigma_eq(T) * sigma_fx(T)
"""

import math
from market.curves.base_curve import BaseCurve


class QuantoCurve(BaseCurve):

    def __init__(self, dividend_curve: BaseCurve, domestic_curve: BaseCurve,
                 foreign_curve: BaseCurve, equity_vol, fx_vol,
                 correlation: float, strike: float, exch_rate_atm_level: float):
        super().__init__(dividend_curve.as_of)
        self._q = dividend_curve
        self._rd = domestic_curve
        self._rf = foreign_curve
        self._eq_vol = equity_vol
        self._fx_vol = fx_vol
        self._rho = correlation
        self._strike = strike
        self._fx_atm = exch_rate_atm_level

    def zero_rate_T(self, T: float) -> float:
        T = max(T, 1e-4)
        sigma_eq = self._eq_vol.vol_TK(T, self._strike)
        sigma_fx = self._fx_vol.vol_TK(T, self._fx_atm)
        return (self._q.zero_rate_T(T) + self._rd.zero_rate_T(T)
                - self._rf.zero_rate_T(T) + self._rho * sigma_eq * sigma_fx)

    def discount_factor_T(self, T: float) -> float:
        if T <= 0.0:
            return 1.0
        return math.exp(-self.zero_rate_T(T) * T)
