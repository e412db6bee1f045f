import numpy as np
from scipy.interpolate import PchipInterpolator

from fdm.boundary.boundary_condition import FdmBoundaryConditionSet
from fdm.operators.triple_band import TripleBandLinearOp
from fdm.step_conditions.composite import FdmStepConditionComposite
from utils.enum import PDEScheme
from utils.error import FinError
from utils.globals import FD_DEFAULT_STEPS_TIME, FDM_TIME_TOL
from utils.helper import validate_enum
from utils.logger import get_logger

logger = get_logger(__name__)

_THETA = {
    PDEScheme.EXPLICIT: 0.0,
    PDEScheme.IMPLICIT: 1.0,
    PDEScheme.CRANK_NICOLSON: 0.5,
}


class FiniteDifferenceEngine:
    """
    Theta-scheme rollback of a single direction operator.

    Each step from t to t - dt re-derives the operator on [t - dt, t], applies
    the explicit part a + (1 - theta) dt L a and then solves
    (I - theta dt L) u = a. Step conditions are applied at every step end
    and at each of their stopping times.
    """

    def __init__(self, op, bc_set: FdmBoundaryConditionSet = None,
                 conditions: FdmStepConditionComposite = None,
                 method: PDEScheme = PDEScheme.CRANK_NICOLSON):
        if not validate_enum(method, PDEScheme):
            raise FinError("Unknown finite difference method")
        if op.size() != 1:
            raise FinError("theta scheme rollback supports single direction operators only")
        self.op = op
        self.bc_set = bc_set if bc_set is not None else FdmBoundaryConditionSet()
        self.conditions = conditions if conditions is not None else FdmStepConditionComposite()
        self.method = method
        # the axis is the one the operator was built on
        self.direction = op.band_operator.direction

    def rollback(self, a, from_time: float, to_time: float, steps: int,
                 damping_steps: int = 0) -> np.ndarray:
        """
        Roll `a` back from from_time to to_time. The first damping_steps
        steps use implicit Euler. Returns a new vector.
        """
        if from_time < to_time:
            raise FinError("rollback requires from_time >= to_time")
        if steps <= 0 or damping_steps < 0 or damping_steps > steps:
            raise FinError("0 <= damping_steps <= steps and steps > 0 required")

        a = np.array(a, dtype=float)
        self.conditions.apply_to(a, from_time)

        dt = (from_time - to_time) / steps
        damping_to = from_time - dt * damping_steps
        logger.info("rollback %s from %.6f to %.6f in %d steps (%d damping)",
                    self.method.name, from_time, to_time, steps, damping_steps)

        if damping_steps > 0:
            a = self._rollback(a, from_time, damping_to, damping_steps, 1.0)
        if steps > damping_steps:
            a = self._rollback(a, damping_to, to_time, steps - damping_steps,
                               _THETA[self.method])
        return a

    def _rollback(self, a, from_time, to_time, steps, theta):
        dt = (from_time - to_time) / steps
        stopping_times = self.conditions.stopping_times()
        t = from_time
        for i in range(steps):
            now = t
            nxt = to_time if i == steps - 1 else from_time - (i + 1) * dt

            for s in reversed(stopping_times):
                if nxt + FDM_TIME_TOL < s < now - FDM_TIME_TOL:
                    a = self._step(a, now, now - s, theta)
                    self.conditions.apply_to(a, s)
                    now = s

            a = self._step(a, now, now - nxt, theta)
            self.conditions.apply_to(a, nxt)
            logger.debug("rolled back to t=%.6f", nxt)
            t = nxt
        return a

    def _step(self, a, t, dt, theta):
        if t - dt < -1e-8:
            raise FinError("a step towards negative time given")
        t_prev = max(0.0, t - dt)
        self.op.set_time(t_prev, t)
        self.bc_set.set_time(t_prev)

        if theta < 1.0:
            if theta == 0.0:
                self._check_stability(dt)
            self.bc_set.apply_before_applying(self.op)
            a = a + (1.0 - theta) * dt * self.op.apply(a)
            self.bc_set.apply_after_applying(a)

        if theta > 0.0:
            if self.bc_set.modifies_operator:
                band = self.op.band_operator
                system = TripleBandLinearOp(band.direction, band.mesher)
                system.axpyb(-theta * dt, band,
                             TripleBandLinearOp.identity(band.direction, band.mesher), None)
                rhs = a.copy()
                self.bc_set.apply_before_solving(system, rhs)
                a = system.solve_splitting(rhs, 1.0, 0.0)
            else:
                self.bc_set.apply_before_solving(self.op, a)
                a = self.op.solve_splitting(self.direction, a, -theta * dt)
            self.bc_set.apply_after_solving(a)
        return a

    def _check_stability(self, dt):
        band = self.op.band_operator
        bound = np.max(np.abs(band.lower) + np.abs(band.diag) + np.abs(band.upper))
        if dt * bound > 2.0:
            logger.warning("dt = %g may be too large for stability (dt * |L| = %.3g). "
                           "Consider increasing the number of time steps.", dt, dt * bound)


class Fdm1DimSolver:
    """
    Rolls cell averaged inner values back from maturity to 0 on a 1d mesher
    and interpolates the result with a monotone cubic.
    """

    def __init__(self, mesher, op, calculator, maturity: float,
                 time_steps: int = FD_DEFAULT_STEPS_TIME,
                 bc_set: FdmBoundaryConditionSet = None,
                 conditions: FdmStepConditionComposite = None,
                 scheme: PDEScheme = PDEScheme.CRANK_NICOLSON,
                 damping_steps: int = 0):
        if len(mesher.layout().dim()) != 1:
            raise FinError("Fdm1DimSolver needs a one dimensional mesher")
        if maturity <= 0.0:
            raise FinError(f"maturity must be positive. Got: {maturity}")

        self._engine = FiniteDifferenceEngine(op, bc_set, conditions, scheme)
        self._maturity = maturity
        self._time_steps = time_steps
        self._damping_steps = damping_steps

        layout = mesher.layout()
        self._x = mesher.locations(0)
        self._initial_values = np.array(
            [calculator.avg_inner_value(it, maturity) for it in layout])
        self._result_values = None
        self._interpolation = None

    def _calculate(self):
        if self._interpolation is not None:
            return
        self._result_values = self._engine.rollback(
            self._initial_values, self._maturity, 0.0,
            self._time_steps, self._damping_steps)
        self._interpolation = PchipInterpolator(self._x, self._result_values)

    def result_values(self) -> np.ndarray:
        self._calculate()
        return self._result_values.copy()

    def interpolate_at(self, x: float) -> float:
        self._calculate()
        return float(self._interpolation(x))

    def derivative_x(self, x: float) -> float:
        self._calculate()
        return float(self._interpolation.derivative(1)(x))

    def derivative_xx(self, x: float) -> float:
        self._calculate()
        return float(self._interpolation.derivative(2)(x))
