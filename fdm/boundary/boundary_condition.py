# -*- coding: utf-8 -*-
"""
Boundary conditions on one side of one direction of the grid.

Both kinds act on the hyperplane of grid points whose coordinate along the
direction is 0 (Side.LOWER) or dim - 1 (Side.UPPER).

Dirichlet values are imposed after the operator has been applied or the
system solved, by overwriting the hyperplane entries.

Neumann conditions (value = u[edge+1] - u[edge] on the lower side and
u[edge] - u[edge-1] on the upper side) rewrite the hyperplane rows of the
band system to {-1, 1} before solving and put the value on the right hand
side; after applying, the constant first difference is restored.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Union

import numpy as np

from fdm.operators.triple_band import TripleBandLinearOp
from utils.enum import Side
from utils.error import FinError
from utils.helper import validate_enum


class FdmBoundaryCondition(ABC):
    # True when apply_before_solving changes operator rows
    modifies_operator = False

    def __init__(self, mesher, value: Union[float, Callable[[float], float]],
                 direction: int, side: Side):
        if not validate_enum(side, Side) or side == Side.NONE:
            raise FinError(f"boundary side must be LOWER or UPPER. Got: {side}")
        layout = mesher.layout()
        if not 0 <= direction < len(layout.dim()):
            raise FinError(f"direction {direction} out of range for a {len(layout.dim())}-d layout")

        self._mesher = mesher
        self._direction = direction
        self._side = side
        self._value_fn = value if callable(value) else None
        self._value = None if callable(value) else float(value)

        coordinates = layout.coordinate_array()[:, direction]
        edge = 0 if side == Side.LOWER else layout.dim()[direction] - 1
        self._indices = np.flatnonzero(coordinates == edge)
        step = layout.spacing()[direction]
        self._inner_indices = self._indices + (step if side == Side.LOWER else -step)

    @property
    def side(self) -> Side:
        return self._side

    @property
    def direction(self) -> int:
        return self._direction

    @property
    def indices(self) -> np.ndarray:
        return self._indices

    def value(self) -> float:
        if self._value is None:
            raise FinError("time dependent boundary value used before set_time")
        return self._value

    def set_time(self, t: float):
        if self._value_fn is not None:
            self._value = float(self._value_fn(t))

    def apply_before_applying(self, op):
        pass

    @abstractmethod
    def apply_after_applying(self, a: np.ndarray):
        ...

    def apply_before_solving(self, op, rhs: np.ndarray):
        pass

    @abstractmethod
    def apply_after_solving(self, a: np.ndarray):
        ...


class FdmDirichletBoundary(FdmBoundaryCondition):

    def apply_after_applying(self, a):
        a[self._indices] = self.value()

    def apply_after_solving(self, a):
        a[self._indices] = self.value()


class FdmNeumannBoundary(FdmBoundaryCondition):
    modifies_operator = True

    def __init__(self, mesher, value, direction: int, side: Side):
        super().__init__(mesher, value, direction, side)
        if mesher.layout().dim()[direction] < 2:
            raise FinError("Neumann condition needs at least two nodes along its direction")

    def apply_before_solving(self, op, rhs):
        if not isinstance(op, TripleBandLinearOp) or op.direction != self._direction:
            raise FinError("Neumann condition needs the band system of its own direction")
        idx = self._indices
        if self._side == Side.LOWER:
            op.set_rows(idx, 0.0, -1.0, 1.0)
        else:
            op.set_rows(idx, -1.0, 1.0, 0.0)
        rhs[idx] = self.value()

    def apply_after_applying(self, a):
        if self._side == Side.LOWER:
            a[self._indices] = a[self._inner_indices] - self.value()
        else:
            a[self._indices] = a[self._inner_indices] + self.value()

    def apply_after_solving(self, a):
        pass


class FdmBoundaryConditionSet:
    def __init__(self, conditions: Iterable[FdmBoundaryCondition] = ()):
        self._conditions: List[FdmBoundaryCondition] = list(conditions)

    def __iter__(self):
        return iter(self._conditions)

    def __len__(self):
        return len(self._conditions)

    @property
    def modifies_operator(self) -> bool:
        return any(bc.modifies_operator for bc in self._conditions)

    def set_time(self, t: float):
        for bc in self._conditions:
            bc.set_time(t)

    def apply_before_applying(self, op):
        for bc in self._conditions:
            bc.apply_before_applying(op)

    def apply_after_applying(self, a):
        for bc in self._conditions:
            bc.apply_after_applying(a)

    def apply_before_solving(self, op, rhs):
        for bc in self._conditions:
            bc.apply_before_solving(op, rhs)

    def apply_after_solving(self, a):
        for bc in self._conditions:
            bc.apply_after_solving(a)
