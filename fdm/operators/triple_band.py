# -*- coding: utf-8 -*-
"""
Triple band linear operator along one direction of a tensor grid.

At flat index i the operator reads

    y[i] = lower[i] * x[i0[i]] + diag[i] * x[i] + upper[i] * x[i2[i]]

with i0 / i2 the mirrored neighbours of i along the operator's direction.
reverse_index lists all flat indices such that each line ("pencil") along
the direction is visited contiguously, whatever the storage order of the
layout. The tridiagonal solver walks the grid in that order.
"""

import numpy as np
from scipy import sparse

from fdm.operators.layout import FdmLinearOpLayout
from fdm.operators.linear_op import FdmLinearOp
from utils.error import FdmSingularPivotError, FinError
from utils.math import as_vector


class TripleBandLinearOp(FdmLinearOp):
    def __init__(self, direction: int, mesher):
        layout = mesher.layout()
        dim = layout.dim()
        if not 0 <= direction < len(dim):
            raise FinError(f"direction {direction} out of range for a {len(dim)}-d layout")

        self._direction = direction
        self._mesher = mesher

        size = layout.size()
        self._i0 = layout.neighbourhood_array(direction, -1)
        self._i2 = layout.neighbourhood_array(direction, 1)

        # relabel with `direction` as the fastest axis
        new_dim = list(dim)
        new_dim[direction], new_dim[0] = new_dim[0], new_dim[direction]
        new_spacing = FdmLinearOpLayout(new_dim).spacing()
        new_spacing[direction], new_spacing[0] = new_spacing[0], new_spacing[direction]

        coordinates = layout.coordinate_array()
        new_index = coordinates @ np.asarray(new_spacing)
        self._reverse_index = np.empty(size, dtype=int)
        self._reverse_index[new_index] = np.arange(size)
        self._axis_coordinates = coordinates[:, direction]

        for arr in (self._i0, self._i2, self._reverse_index, self._axis_coordinates):
            arr.setflags(write=False)

        self._lower = np.zeros(size)
        self._diag = np.zeros(size)
        self._upper = np.zeros(size)

    @classmethod
    def identity(cls, direction: int, mesher):
        op = cls(direction, mesher)
        op._diag[:] = 1.0
        return op

    def _like(self):
        """New operator on the same grid and direction, bands zeroed."""
        op = TripleBandLinearOp.__new__(TripleBandLinearOp)
        op._direction = self._direction
        op._mesher = self._mesher
        op._i0 = self._i0
        op._i2 = self._i2
        op._reverse_index = self._reverse_index
        op._axis_coordinates = self._axis_coordinates
        size = self.size()
        op._lower = np.zeros(size)
        op._diag = np.zeros(size)
        op._upper = np.zeros(size)
        return op

    def copy(self):
        op = self._like()
        op._lower[:] = self._lower
        op._diag[:] = self._diag
        op._upper[:] = self._upper
        return op

    # ===== Accessors =====
    @property
    def direction(self) -> int:
        return self._direction

    @property
    def mesher(self):
        return self._mesher

    @property
    def lower(self) -> np.ndarray:
        return self._lower

    @property
    def diag(self) -> np.ndarray:
        return self._diag

    @property
    def upper(self) -> np.ndarray:
        return self._upper

    @property
    def i0(self) -> np.ndarray:
        return self._i0

    @property
    def i2(self) -> np.ndarray:
        return self._i2

    @property
    def reverse_index(self) -> np.ndarray:
        return self._reverse_index

    def size(self) -> int:
        return self._diag.size

    def _check_size(self, v: np.ndarray, what: str):
        if v.shape != (self.size(),):
            raise FinError(f"inconsistent length of {what}: {v.shape} vs ({self.size()},)")

    def _check_compatible(self, m):
        if not isinstance(m, TripleBandLinearOp):
            raise FinError(f"expected TripleBandLinearOp, got {type(m).__name__}")
        if m.size() != self.size() or m._direction != self._direction:
            raise FinError("inconsistent band operators: size or direction differ")

    # ===== Algebra =====
    def apply(self, r) -> np.ndarray:
        r = np.asarray(r, dtype=float)
        self._check_size(r, "r")
        return r[self._i0] * self._lower + r * self._diag + r[self._i2] * self._upper

    def add(self, m):
        """Sum with another band operator, or with a vector added to the diagonal."""
        ret = self._like()
        if isinstance(m, TripleBandLinearOp):
            self._check_compatible(m)
            ret._lower[:] = self._lower + m._lower
            ret._diag[:] = self._diag + m._diag
            ret._upper[:] = self._upper + m._upper
        else:
            u = as_vector(m, self.size())
            self._check_size(u, "u")
            ret._lower[:] = self._lower
            ret._diag[:] = self._diag + u
            ret._upper[:] = self._upper
        return ret

    def mult(self, u):
        """Row scaling: every band at i is multiplied by u[i]."""
        u = as_vector(u, self.size())
        self._check_size(u, "u")
        ret = self._like()
        ret._lower[:] = self._lower * u
        ret._diag[:] = self._diag * u
        ret._upper[:] = self._upper * u
        return ret

    def mult_r(self, u):
        """
        Scales lower / diag / upper at i by u[i-1] / u[i] / u[i+1], with 1.0
        beyond the ends of the flat index range.
        """
        u = np.asarray(u, dtype=float)
        self._check_size(u, "rhs")
        sm1 = np.concatenate(([1.0], u[:-1]))
        sp1 = np.concatenate((u[1:], [1.0]))
        ret = self._like()
        ret._lower[:] = self._lower * sm1
        ret._diag[:] = self._diag * u
        ret._upper[:] = self._upper * sp1
        return ret

    def axpyb(self, a, x, y, b):
        """
        In place: self = a * x + y + b * I.

        a and b are scalars, vectors of grid size, length-one vectors
        (broadcast) or None (treated as absent).
        """
        self._check_compatible(y)
        size = self.size()

        if a is None:
            lower = y._lower.copy()
            diag = y._diag.copy()
            upper = y._upper.copy()
        else:
            self._check_compatible(x)
            s = as_vector(a, size)
            self._check_size(s, "a")
            lower = y._lower + s * x._lower
            diag = y._diag + s * x._diag
            upper = y._upper + s * x._upper

        if b is not None:
            bv = as_vector(b, size)
            self._check_size(bv, "b")
            diag = diag + bv

        self._lower[:] = lower
        self._diag[:] = diag
        self._upper[:] = upper

    # ===== Solver =====
    def solve_splitting(self, r, a: float, b: float = 1.0) -> np.ndarray:
        """
        Solve (a * L + b * I) u = r by Thomas elimination along the
        operator's direction, all pencils at once.

        The rows on the two boundary hyperplanes must not reach over the
        edge (lower == 0 at the first node, upper == 0 at the last node).
        """
        r = np.asarray(r, dtype=float)
        self._check_size(r, "rhs")

        n = self._mesher.layout().dim()[self._direction]
        first = self._axis_coordinates == 0
        last = self._axis_coordinates == n - 1
        if np.any(self._lower[first] != 0.0) or np.any(self._upper[last] != 0.0):
            raise FinError("removing non zero entry!")

        rev = self._reverse_index.reshape(-1, n)
        lo = a * self._lower[rev]
        di = a * self._diag[rev] + b
        up = a * self._upper[rev]
        rr = r[rev]

        ret = np.empty_like(rr)
        tmp = np.zeros_like(rr)

        bet = di[:, 0]
        if np.any(bet == 0.0):
            raise FdmSingularPivotError("division by zero")
        bet = 1.0 / bet
        ret[:, 0] = rr[:, 0] * bet

        for j in range(1, n):
            tmp[:, j] = up[:, j - 1] * bet
            bet = di[:, j] - tmp[:, j] * lo[:, j]
            if np.any(bet == 0.0):
                raise FdmSingularPivotError("division by zero")
            bet = 1.0 / bet
            ret[:, j] = (rr[:, j] - lo[:, j] * ret[:, j - 1]) * bet

        for j in range(n - 2, -1, -1):
            ret[:, j] -= tmp[:, j + 1] * ret[:, j + 1]

        u = np.empty_like(r)
        u[rev] = ret
        return u

    def set_rows(self, indices, lower: float, diag: float, upper: float):
        """In place: overwrite the bands of the given rows."""
        self._lower[indices] = lower
        self._diag[indices] = diag
        self._upper[indices] = upper

    def swap(self, m):
        if not isinstance(m, TripleBandLinearOp):
            raise FinError(f"expected TripleBandLinearOp, got {type(m).__name__}")
        self.__dict__, m.__dict__ = m.__dict__, self.__dict__

    def to_matrix(self) -> sparse.csr_matrix:
        n = self.size()
        rows = np.tile(np.arange(n), 3)
        cols = np.concatenate((self._i0, np.arange(n), self._i2))
        data = np.concatenate((self._lower, self._diag, self._upper))
        # duplicate (row, col) pairs are summed
        return sparse.coo_matrix((data, (rows, cols)), shape=(n, n)).tocsr()

    def __repr__(self):
        return f"TripleBandLinearOp(direction={self._direction}, size={self.size()})"
