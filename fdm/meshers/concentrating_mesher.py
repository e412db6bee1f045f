# -*- coding: utf-8 -*-
"""
Meshers concentrating nodes around one or several points.

Single point: x(u) = c + d * sinh(c1 * (1 - u) + c2 * u) for u in [0, 1],
c1 = asinh((start - c) / d), c2 = asinh((end - c) / d), d = density * (end - start).

Several points: x(u) solves dx/du = a / sqrt(sum_i 1 / (beta_i + (x - c_i)^2)),
x(0) = start, with the scale a chosen so that x(1) = end.
"""

import math
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.integrate import solve_ivp
from scipy.optimize import brentq

from fdm.meshers.mesher_1d import Fdm1dMesher
from utils.error import FinError
from utils.globals import FDM_CONCENTRATING_TOL, QL_EPSILON
from utils.logger import get_logger
from utils.math import is_close

logger = get_logger(__name__)


class Concentrating1dMesher(Fdm1dMesher):
    def __init__(self, start: float, end: float, size: int,
                 c_point: Optional[Tuple[Optional[float], Optional[float]]] = None,
                 require_c_point: bool = False):
        super().__init__(size)
        if end <= start:
            raise FinError(f"end must be larger than start. Got: start={start}, end={end}")

        point, density = c_point if c_point is not None else (None, None)
        if density is not None:
            density = density * (end - start)

        if point is not None and not start <= point <= end:
            raise FinError("cPoint must be between start and end")
        if density is not None and density <= 0.0:
            raise FinError("density > 0 required")
        if point is not None and density is None:
            raise FinError("density must be given if cPoint is given")
        if require_c_point and point is None:
            raise FinError("cPoint is required in grid but not given")

        u = np.arange(size) / (size - 1.0)

        if point is not None:
            c1 = math.asinh((start - point) / density)
            c2 = math.asinh((end - point) / density)
            if require_c_point:
                knots_u, knots_z = [0.0], [0.0]
                if not is_close(point, start) and not is_close(point, end):
                    z0 = -c1 / (c2 - c1)
                    j0 = max(min(int(z0 * (size - 1) + 0.5), size - 2), 1)
                    knots_u.append(j0 / (size - 1.0))
                    knots_z.append(z0)
                knots_u.append(1.0)
                knots_z.append(1.0)
                u = np.interp(u, knots_u, knots_z)
            x = point + density * np.sinh(c1 * (1.0 - u) + c2 * u)
        else:
            x = start + u * (end - start)

        x[0] = start
        x[-1] = end
        self._set_locations(x)
        logger.debug("Concentrating1dMesher [%g, %g] size=%d cPoint=%s", start, end, size, point)


class MultiConcentrating1dMesher(Fdm1dMesher):
    """
    c_points: sequence of (point, density, required) triples. Required
    points strictly inside (start, end) end up exactly on a grid node.
    """

    def __init__(self, start: float, end: float, size: int,
                 c_points: Sequence[Tuple[float, float, bool]],
                 tol: float = FDM_CONCENTRATING_TOL):
        super().__init__(size)
        if end <= start:
            raise FinError(f"end must be larger than start. Got: start={start}, end={end}")
        if len(c_points) == 0:
            raise FinError("at least one concentration point required")

        points = np.array([float(p[0]) for p in c_points])
        betas = np.array([(float(p[1]) * (end - start)) ** 2 for p in c_points])
        if np.any(betas <= 0.0):
            raise FinError("density > 0 required")

        def jac(a, y):
            return a / math.sqrt(np.sum(1.0 / (betas + (y - points) ** 2)))

        def integrate(a, grid=None):
            sol = solve_ivp(lambda t, y: [jac(a, y[0])], (0.0, 1.0), [start],
                            method="RK45", t_eval=grid, rtol=tol, atol=tol)
            if not sol.success:
                raise FinError(f"concentrating mesher ODE failed: {sol.message}")
            return sol.y[0]

        # scale a so that y(1) = end
        a_init = 0.0
        for p, b in zip(points, betas):
            c1 = math.asinh((start - p) / b)
            c2 = math.asinh((end - p) / b)
            a_init += (c2 - c1) / len(points)

        def end_gap(a):
            return integrate(a)[-1] - end

        hi = a_init
        while end_gap(hi) < 0.0:
            hi *= 2.0
        a = brentq(end_gap, 0.0, hi, xtol=tol)

        x = np.arange(size) / (size - 1.0)
        y = integrate(a, x)
        # remove numerical noise, enforce y(1) = end
        y = y - x * (y[-1] - end)
        y[0] = start

        def ode_solution(v):
            return float(np.interp(v, x, y))

        w = [(0.0, 0.0)]
        for (p, _, required) in c_points:
            if required and start < p < end:
                j = int(np.searchsorted(y, p))
                e = brentq(lambda v: ode_solution(v) - p, 0.0, 1.0, xtol=QL_EPSILON)
                w.append((min(x[size - 2], x[j]), e))
        w.append((1.0, 1.0))

        w.sort(key=lambda uz: uz[0])
        knots = [w[0]]
        for uz in w[1:]:
            if not is_close(uz[0], knots[-1][0]):
                knots.append(uz)

        knots_u = [k[0] for k in knots]
        knots_z = [k[1] for k in knots]
        locations = np.interp(np.interp(x, knots_u, knots_z), x, y)
        locations[0] = start
        locations[-1] = end
        self._set_locations(locations)
        logger.debug("MultiConcentrating1dMesher [%g, %g] size=%d a=%g knots=%s",
                     start, end, size, a, knots)
