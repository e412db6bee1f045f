# -*- coding: utf-8 -*-
"""
Hull-White operator in the state variable x of r = x + phi(t):

    L = -a x d/dx + sigma^2/2 d^2/dx^2 - (x + phi)

phi is averaged over the end points of each sub-step.
"""

import numpy as np

from fdm.operators.derivatives import FirstDerivativeOp, SecondDerivativeOp
from fdm.operators.linear_op import FdmLinearOpComposite
from fdm.operators.triple_band import TripleBandLinearOp
from utils.error import FinError
from utils.logger import get_logger

logger = get_logger(__name__)


class FdmHullWhiteOp(FdmLinearOpComposite):
    def __init__(self, mesher, model, direction: int = 0):
        self._x = mesher.locations(direction)
        self._dz_map = (FirstDerivativeOp(direction, mesher).mult(-self._x * model.a())
                        .add(SecondDerivativeOp(direction, mesher)
                             .mult(np.full(self._x.size, 0.5 * model.sigma() * model.sigma()))))
        self._map_t = TripleBandLinearOp(direction, mesher)
        self._direction = direction
        self._model = model

    @property
    def band_operator(self) -> TripleBandLinearOp:
        return self._map_t

    def size(self) -> int:
        return 1

    def set_time(self, t1: float, t2: float):
        if t2 < t1:
            raise FinError(f"t1 <= t2 required. Got: t1={t1}, t2={t2}")
        phi = 0.5 * (self._model.short_rate(t1, 0.0) + self._model.short_rate(t2, 0.0))
        self._map_t.axpyb(None, self._dz_map, self._dz_map, -(self._x + phi))
        logger.debug("FdmHullWhiteOp.set_time(%.6f, %.6f): phi=%.6f", t1, t2, phi)

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
        return np.zeros(len(r))

    def preconditioner(self, r, dt: float) -> np.ndarray:
        return self.solve_splitting(self._direction, r, dt)

    def to_matrix_decomp(self):
        return [self._map_t.to_matrix()]
