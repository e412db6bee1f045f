# -*- coding: utf-8 -*-
"""
1d mesher for the Black-Scholes process in x = ln(S).

Bounds: ln(min forward) - k and ln(max forward) + k with
k = sigma * sqrt(T) * N^-1(1 - eps) * scale_factor, where the forward is
walked through all dividend dates and a set of intermediate checkpoints.
"""

import math
from typing import Optional, Tuple

from fdm.meshers.concentrating_mesher import Concentrating1dMesher
from fdm.meshers.mesher_1d import Fdm1dMesher, Uniform1dMesher
from market.curves.quanto_curve import QuantoCurve
from market.dividends import DividendSchedule
from utils.error import FinError
from utils.globals import FDM_MESHER_EPS, FDM_MESHER_SCALE_FACTOR, FDM_MESHER_STEPS_PER_YEAR
from utils.logger import get_logger
from utils.math import N_inv

logger = get_logger(__name__)


class FdmBlackScholesMesher(Fdm1dMesher):
    def __init__(self, size: int, process, maturity: float, strike: float,
                 x_min_constraint: Optional[float] = None,
                 x_max_constraint: Optional[float] = None,
                 eps: float = FDM_MESHER_EPS,
                 scale_factor: float = FDM_MESHER_SCALE_FACTOR,
                 c_point: Tuple[Optional[float], Optional[float]] = (None, None),
                 dividend_schedule: Optional[DividendSchedule] = None,
                 quanto_helper=None,
                 spot_adjustment: float = 0.0):
        super().__init__(size)

        S = process.x0()
        if S <= 0.0:
            raise FinError("negative or null underlying given")
        if maturity <= 0.0:
            raise FinError(f"maturity must be positive. Got: {maturity}")
        if not 0.0 < eps < 1.0:
            raise FinError(f"tail probability eps must lie in (0, 1). Got: {eps}")

        dividend_schedule = dividend_schedule or DividendSchedule()
        intermediate_steps = []
        for div in dividend_schedule:
            t = process.time(div.date)
            if t > maturity:
                break
            if t < 0.0:
                continue
            intermediate_steps.append((t, div.amount))

        n_steps = int(max(2, FDM_MESHER_STEPS_PER_YEAR * maturity))
        for i in range(n_steps):
            intermediate_steps.append(((i + 1) * (maturity / n_steps), 0.0))
        intermediate_steps.sort()

        r_ts = process.risk_free_rate()
        q_ts = process.dividend_yield()
        if quanto_helper is not None:
            q_ts = QuantoCurve(q_ts, r_ts, quanto_helper.foreign_term_structure(),
                               process.black_volatility(),
                               quanto_helper.fx_volatility_term_structure(),
                               quanto_helper.equity_fx_correlation(), strike,
                               quanto_helper.exch_rate_atm_level())

        last_div_time = 0.0
        fwd = S + spot_adjustment
        mi = ma = fwd
        for div_time, div_amount in intermediate_steps:
            fwd = (fwd / r_ts.discount_factor_T(div_time) * r_ts.discount_factor_T(last_div_time)
                   * q_ts.discount_factor_T(div_time) / q_ts.discount_factor_T(last_div_time))
            mi = min(mi, fwd)
            ma = max(ma, fwd)

            fwd -= div_amount
            mi = min(mi, fwd)
            ma = max(ma, fwd)

            last_div_time = div_time

        if mi <= 0.0:
            raise FinError("dividends exceed the forward, no log-space grid possible")

        norm_inv_eps = N_inv(1.0 - eps)
        sigma_sqrt_t = process.black_volatility().vol_TK(maturity, strike) * math.sqrt(maturity)

        x_min = math.log(mi) - sigma_sqrt_t * norm_inv_eps * scale_factor
        x_max = math.log(ma) + sigma_sqrt_t * norm_inv_eps * scale_factor
        if x_min_constraint is not None:
            x_min = x_min_constraint
        if x_max_constraint is not None:
            x_max = x_max_constraint

        point, density = c_point if c_point is not None else (None, None)
        if point is not None and x_min <= math.log(point) <= x_max:
            helper = Concentrating1dMesher(x_min, x_max, size, (math.log(point), density))
        else:
            helper = Uniform1dMesher(x_min, x_max, size)

        self._set_locations(helper.locations())
        logger.debug("FdmBlackScholesMesher size=%d x in [%.6f, %.6f], fwd range [%.4f, %.4f]",
                     size, x_min, x_max, mi, ma)
