# -*- coding: utf-8 -*-
"""
Quanto drift adjustment for an equity quoted in a foreign currency.
"""

import numpy as np

from market.curves.base_curve import BaseCurve
from utils.error import FinError


class FdmQuantoHelper:
    def __init__(self, r_curve: BaseCurve, f_curve: BaseCurve, fx_vol,
                 equity_fx_correlation: float, exch_rate_atm_level: float):
        if not -1.0 <= equity_fx_correlation <= 1.0:
            raise FinError(f"correlation must lie in [-1, 1]. Got: {equity_fx_correlation}")
        self._r_curve = r_curve
        self._f_curve = f_curve
        self._fx_vol = fx_vol
        self._rho = float(equity_fx_correlation)
        self._fx_atm = float(exch_rate_atm_level)

    def equity_fx_correlation(self) -> float:
        return self._rho

    def exch_rate_atm_level(self) -> float:
        return self._fx_atm

    def risk_free_term_structure(self) -> BaseCurve:
        return self._r_curve

    def foreign_term_structure(self) -> BaseCurve:
        return self._f_curve

    def fx_volatility_term_structure(self):
        return self._fx_vol

    def quanto_adjustment(self, equity_vol, t1: float, t2: float):
        """
        r_domestic - r_foreign + equity_vol * fx_vol * rho over [t1, t2].
        equity_vol may be a scalar or a numpy array.
        """
        r_domestic = self._r_curve.forward_rate(t1, t2)
        r_foreign = self._f_curve.forward_rate(t1, t2)
        fx_vol = self._fx_vol.black_forward_vol(t1, t2, self._fx_atm)

        adj = r_domestic - r_foreign + np.asarray(equity_vol, dtype=float) * fx_vol * self._rho
        return float(adj) if adj.ndim == 0 else adj
