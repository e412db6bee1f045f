# -*- coding: utf-8 -*-
"""
Operator interfaces.

FdmLinearOp is a single linear map on grid vectors (e.g. one band operator).
FdmLinearOpComposite is what a time stepping scheme sees: a time dependent
sum of per-direction operators (plus mixed terms) that can be applied and
inverted direction by direction.
"""

from abc import ABC, abstractmethod
from typing import List

import numpy as np
from scipy import sparse


class FdmLinearOp(ABC):

    @abstractmethod
    def apply(self, r: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def to_matrix(self) -> sparse.csr_matrix:
        ...


class FdmLinearOpComposite(FdmLinearOp):

    @abstractmethod
    def size(self) -> int:
        """Number of directions the operator splits into."""
        ...

    @abstractmethod
    def set_time(self, t1: float, t2: float):
        """Re-derive the coefficients for the sub-step [t1, t2], t1 <= t2."""
        ...

    @abstractmethod
    def apply_mixed(self, r: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def apply_direction(self, direction: int, r: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def solve_splitting(self, direction: int, r: np.ndarray, dt: float) -> np.ndarray:
        """Solve (I + dt * L_direction) u = r."""
        ...

    @abstractmethod
    def preconditioner(self, r: np.ndarray, dt: float) -> np.ndarray:
        ...

    @abstractmethod
    def to_matrix_decomp(self) -> List[sparse.csr_matrix]:
        ...

    def to_matrix(self) -> sparse.csr_matrix:
        decomp = self.to_matrix_decomp()
        ret = decomp[0]
        for m in decomp[1:]:
            ret = ret + m
        return ret.tocsr()
