# -*- coding: utf-8 -*-
"""
Payoff values on the grid.
"""

import math
from abc import ABC, abstractmethod

import numpy as np
from scipy.integrate import IntegrationWarning, quad
import warnings

from utils.logger import get_logger

logger = get_logger(__name__)


class FdmInnerValueCalculator(ABC):

    @abstractmethod
    def inner_value(self, iterator, t: float) -> float:
        ...

    @abstractmethod
    def avg_inner_value(self, iterator, t: float) -> float:
        ...

    def values(self, layout, t: float, average: bool = False) -> np.ndarray:
        """Inner (or cell averaged) values for every grid point."""
        fn = self.avg_inner_value if average else self.inner_value
        ret = np.empty(layout.size())
        for it in layout:
            ret[it.index()] = fn(it, t)
        return ret


class FdmLogInnerValue(FdmInnerValueCalculator):
    """Payoff of S = exp(x) along a log-space direction."""

    def __init__(self, payoff, mesher, direction: int = 0):
        self._payoff = payoff
        self._mesher = mesher
        self._direction = direction
        self._avg_inner_values = None

    def inner_value(self, iterator, t):
        s = math.exp(self._mesher.location(iterator, self._direction))
        return float(self._payoff.value(s))

    def avg_inner_value(self, iterator, t):
        if self._avg_inner_values is None:
            dim = self._mesher.layout().dim()[self._direction]
            self._avg_inner_values = [None] * dim
            for it in self._mesher.layout():
                xn = it.coordinates()[self._direction]
                if self._avg_inner_values[xn] is None:
                    self._avg_inner_values[xn] = self._avg_inner_value_calc(it, t)
        return self._avg_inner_values[iterator.coordinates()[self._direction]]

    def _avg_inner_value_calc(self, iterator, t):
        d = self._direction
        loc = self._mesher.location(iterator, d)
        a = b = loc
        dminus = self._mesher.dminus(iterator, d)
        dplus = self._mesher.dplus(iterator, d)
        if dminus is not None:
            a -= dminus / 2.0
        if dplus is not None:
            b += dplus / 2.0

        def f(x):
            return float(self._payoff.value(math.exp(x)))

        with warnings.catch_warnings():
            warnings.simplefilter("error", IntegrationWarning)
            try:
                integral, _ = quad(f, a, b, epsabs=1e-10, epsrel=1e-8)
                return integral / (b - a)
            except IntegrationWarning as err:
                logger.debug("cell average failed at x=%g (%s), using point value", loc, err)
                return self.inner_value(iterator, t)


class FdmZeroInnerValue(FdmInnerValueCalculator):

    def inner_value(self, iterator, t):
        return 0.0

    def avg_inner_value(self, iterator, t):
        return 0.0
