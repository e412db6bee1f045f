# -*- coding: utf-8 -*-
"""
Created on Thu Aug 14 05:17:31 2025

@author: Simran
"""

"""
Generalised Black-Scholes process under the risk-neutral measure.

SDE: dS_t = S_t * (r(t) - q(t)) dt + S_t * sigma(t, S_t) dW_t

Features:
- Reads rates and dividend yields from the Market curves.
- Black vol from an explicit sigma or the market vol surface.
- Local vol from the market local vol surface (flat vol surfaces double as one).
"""

from typing import Optional

from market.vol.flat_vol import FlatVolSurface
from models.base import BaseProcess
from utils.error import FinError


class BlackScholesProcess(BaseProcess):
    def __init__(self, market, sigma: Optional[float] = None, local_vol=None):

        super().__init__(market)

        if sigma is not None:
            if sigma <= 0.0:
                raise FinError("sigma must be positive")
            self._black_vol = FlatVolSurface(sigma)
        else:
            self._black_vol = self.market.vol_surface()

        self._local_vol = local_vol

    def x0(self) -> float:
        return self.market.spot()

    def risk_free_rate(self):
        return self.market.discount_curve()

    def dividend_yield(self):
        return self.market.dividend_yield_curve()

    def black_volatility(self):
        return self._black_vol

    def local_volatility(self):
        if self._local_vol is not None:
            return self._local_vol
        if hasattr(self._black_vol, "local_vol"):
            return self._black_vol
        return self.market.local_vol_surface()
