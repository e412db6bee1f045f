# -*- coding: utf-8 -*-
"""
First and second derivative stencils on non-uniform grids.

With hm = dminus, hp = dplus along the operator's direction:

first derivative, interior     -hp/(hm(hm+hp)),  (hp-hm)/(hm hp),  hm/(hp(hm+hp))
first derivative, first node    0,               -1/hp,            1/hp
first derivative, last node    -1/hm,             1/hm,            0

second derivative, interior     2/(hm(hm+hp)),   -2/(hm hp),       2/(hp(hm+hp))
second derivative, boundaries   0,                0,               0
"""

import numpy as np

from fdm.operators.triple_band import TripleBandLinearOp


def _spacings(direction, mesher):
    hm = mesher.dminus_array(direction)
    hp = mesher.dplus_array(direction)
    first = np.isnan(hm)
    last = np.isnan(hp)
    interior = ~(first | last)
    # NaN spacings only ever sit on the boundary rows, which are masked out
    hm = np.where(first, 1.0, hm)
    hp = np.where(last, 1.0, hp)
    return hm, hp, first, last, interior


class FirstDerivativeOp(TripleBandLinearOp):
    def __init__(self, direction: int, mesher):
        super().__init__(direction, mesher)
        hm, hp, first, last, interior = _spacings(direction, mesher)

        self._lower[:] = np.where(interior, -hp / (hm * (hm + hp)), 0.0)
        self._diag[:] = np.where(interior, (hp - hm) / (hm * hp), 0.0)
        self._upper[:] = np.where(interior, hm / (hp * (hm + hp)), 0.0)

        only_first = first & ~last
        only_last = last & ~first
        self._diag[only_first] = -1.0 / hp[only_first]
        self._upper[only_first] = 1.0 / hp[only_first]
        self._lower[only_last] = -1.0 / hm[only_last]
        self._diag[only_last] = 1.0 / hm[only_last]


class SecondDerivativeOp(TripleBandLinearOp):
    def __init__(self, direction: int, mesher):
        super().__init__(direction, mesher)
        hm, hp, _, _, interior = _spacings(direction, mesher)

        self._lower[:] = np.where(interior, 2.0 / (hm * (hm + hp)), 0.0)
        self._diag[:] = np.where(interior, -2.0 / (hm * hp), 0.0)
        self._upper[:] = np.where(interior, 2.0 / (hp * (hm + hp)), 0.0)
