# -*- coding: utf-8 -*-
"""
Black-Scholes operator in x = ln(S):

    L = (r - q - v/2) d/dx + v/2 d^2/dx^2 - r

v is the Black forward variance rate over the sub-step, or the local
variance sigma_loc(t_mid, S)^2 at every node when local vol is requested.
"""

from typing import Optional

import numpy as np

from fdm.operators.derivatives import FirstDerivativeOp, SecondDerivativeOp
from fdm.operators.linear_op import FdmLinearOpComposite
from fdm.operators.triple_band import TripleBandLinearOp
from utils.error import FinError
from utils.logger import get_logger

logger = get_logger(__name__)


class FdmBlackScholesOp(FdmLinearOpComposite):
    def __init__(self, mesher, process, strike: float,
                 local_vol: bool = False,
                 illegal_local_vol_overwrite: Optional[float] = None,
                 direction: int = 0,
                 quanto_helper=None):
        self._mesher = mesher
        self._r_ts = process.risk_free_rate()
        self._q_ts = process.dividend_yield()
        self._vol_ts = process.black_volatility()
        self._local_vol = process.local_volatility() if local_vol else None
        self._x = np.exp(mesher.locations(direction)) if local_vol else None
        self._dx_map = FirstDerivativeOp(direction, mesher)
        self._dxx_map = SecondDerivativeOp(direction, mesher)
        self._map_t = TripleBandLinearOp(direction, mesher)
        self._strike = strike
        self._illegal_local_vol_overwrite = illegal_local_vol_overwrite
        self._direction = direction
        self._quanto_helper = quanto_helper

    @property
    def band_operator(self) -> TripleBandLinearOp:
        return self._map_t

    def size(self) -> int:
        return 1

    def set_time(self, t1: float, t2: float):
        if t2 < t1:
            raise FinError(f"t1 <= t2 required. Got: t1={t1}, t2={t2}")
        r = self._r_ts.forward_rate(t1, t2)
        q = self._q_ts.forward_rate(t1, t2)

        if self._local_vol is not None:
            v = self._local_variance(0.5 * (t1 + t2))
            drift = r - q - 0.5 * v
            if self._quanto_helper is not None:
                drift = drift - self._quanto_helper.quanto_adjustment(np.sqrt(v), t1, t2)
            self._map_t.axpyb(drift, self._dx_map, self._dxx_map.mult(0.5 * v), -r)
        else:
            if t2 > t1:
                vv = self._vol_ts.black_forward_variance(t1, t2, self._strike) / (t2 - t1)
            else:
                vv = self._vol_ts.vol_TK(t1, self._strike) ** 2
            drift = r - q - 0.5 * vv
            if self._quanto_helper is not None:
                drift = drift - self._quanto_helper.quanto_adjustment(np.sqrt(vv), t1, t2)
            self._map_t.axpyb(drift, self._dx_map,
                              self._dxx_map.mult(np.full(self._map_t.size(), 0.5 * vv)), -r)

        logger.debug("FdmBlackScholesOp.set_time(%.6f, %.6f): r=%.6f q=%.6f", t1, t2, r, q)

    def _local_variance(self, t: float) -> np.ndarray:
        v = np.empty(self._x.size)
        for i, s in enumerate(self._x):
            if self._illegal_local_vol_overwrite is None:
                sigma = self._local_vol.local_vol(t, s)
            else:
                try:
                    sigma = self._local_vol.local_vol(t, s)
                except (FinError, ValueError, ArithmeticError):
                    sigma = self._illegal_local_vol_overwrite
            v[i] = sigma * sigma
        return v

    def apply(self, r) -> np.ndarray:
        return self._map_t.apply(r)

    def apply_direction(self, direction: int, r) -> np.ndarray:
        if direction == self._direction:
            return self._map_t.apply(r)
        return np.zeros(len(r))

    def apply_mixed(self, r) -> np.ndarray:
        return np.zeros(len(r))

    def solve_splitting(self, direction: int, r, dt: float) -> np.ndarray:
        if direction == self._direction:
            return self._map_t.solve_splitting(r, dt)
        return np.array(r, dtype=float)

    def preconditioner(self, r, dt: float) -> np.ndarray:
        return self.solve_splitting(self._direction, r, dt)

    def to_matrix_decomp(self):
        return [self._map_t.to_matrix()]
