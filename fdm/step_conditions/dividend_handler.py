# -*- coding: utf-8 -*-
"""
Cash dividend step condition for one log-space equity direction.

At a dividend time every line of the solution along the equity direction is
re-sampled at S - D (floored at the lowest grid level) by linear
interpolation in S.
"""

from typing import List

import numpy as np

from market.dividends import DividendSchedule
from utils.date import Date
from utils.globals import FDM_TIME_TOL
from utils.helper import find_time
from utils.logger import get_logger

logger = get_logger(__name__)


class FdmDividendHandler:
    def __init__(self, schedule: DividendSchedule, mesher, reference_date: Date,
                 equity_direction: int = 0):
        layout = mesher.layout()
        self._mesher = mesher
        self._equity_direction = equity_direction

        self._dividends = schedule.amounts()
        self._dividend_dates = schedule.dates()
        self._dividend_times = schedule.times(reference_date)

        n = layout.dim()[equity_direction]
        spacing = layout.spacing()[equity_direction]
        # grid equity levels in physical units
        self._x = np.exp(mesher.locations(equity_direction)[np.arange(n) * spacing])

        # flat indices as (lines, n): each row one line along the equity direction
        coordinates = layout.coordinate_array()
        others = [k for k in range(coordinates.shape[1]) if k != equity_direction]
        keys = [coordinates[:, equity_direction]] + [coordinates[:, k] for k in others]
        order = np.lexsort(keys)
        self._lines = order.reshape(-1, n)

    def dividend_times(self) -> List[float]:
        return list(self._dividend_times)

    def dividend_dates(self) -> List[Date]:
        return list(self._dividend_dates)

    def dividends(self) -> List[float]:
        return list(self._dividends)

    def apply_to(self, a: np.ndarray, t: float):
        """In place."""
        i = find_time(self._dividend_times, t, FDM_TIME_TOL)
        if i < 0:
            return

        dividend = self._dividends[i]
        target = np.maximum(self._x[0], self._x - dividend)
        a_copy = a.copy()
        for line in self._lines:
            a[line] = np.interp(target, self._x, a_copy[line])
        logger.debug("dividend %.4f applied at t=%.6f", dividend, t)
