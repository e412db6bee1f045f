# -*- coding: utf-8 -*-
"""
N-dimensional meshers over a FdmLinearOpLayout.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from fdm.meshers.mesher_1d import Fdm1dMesher
from fdm.operators.layout import FdmLinearOpIterator, FdmLinearOpLayout
from utils.error import FinError


class FdmMesher(ABC):
    def __init__(self, layout: FdmLinearOpLayout):
        self._layout = layout

    def layout(self) -> FdmLinearOpLayout:
        return self._layout

    @abstractmethod
    def dplus(self, iterator: FdmLinearOpIterator, direction: int) -> Optional[float]:
        ...

    @abstractmethod
    def dminus(self, iterator: FdmLinearOpIterator, direction: int) -> Optional[float]:
        ...

    @abstractmethod
    def location(self, iterator: FdmLinearOpIterator, direction: int) -> float:
        ...

    @abstractmethod
    def locations(self, direction: int) -> np.ndarray:
        """Location along `direction` of every grid point, in flat index order."""
        ...

    @abstractmethod
    def dplus_array(self, direction: int) -> np.ndarray:
        ...

    @abstractmethod
    def dminus_array(self, direction: int) -> np.ndarray:
        ...


class FdmMesherComposite(FdmMesher):
    """
    Tensor product of 1d meshers. Accepts the meshers positionally or as one
    list; an explicit layout must match their sizes.
    """

    def __init__(self, *meshers, layout: Optional[FdmLinearOpLayout] = None):
        if len(meshers) == 1 and isinstance(meshers[0], (list, tuple)):
            meshers = meshers[0]
        meshers = list(meshers)
        if not meshers:
            raise FinError("at least one 1d mesher required")
        for m in meshers:
            if not isinstance(m, Fdm1dMesher):
                raise FinError(f"expected Fdm1dMesher, got {type(m).__name__}")

        if layout is None:
            layout = FdmLinearOpLayout([m.size() for m in meshers])
        else:
            if len(layout.dim()) != len(meshers):
                raise FinError("number of 1d meshers does not fit to layout")
            for i, m in enumerate(meshers):
                if m.size() != layout.dim()[i]:
                    raise FinError(f"size of 1d mesher {i} does not fit to layout")

        super().__init__(layout)
        self._meshers: List[Fdm1dMesher] = meshers
        self._coordinates = layout.coordinate_array()

    def get_fdm_1d_meshers(self) -> List[Fdm1dMesher]:
        return list(self._meshers)

    def dplus(self, iterator, direction):
        return self._meshers[direction].dplus(iterator.coordinates()[direction])

    def dminus(self, iterator, direction):
        return self._meshers[direction].dminus(iterator.coordinates()[direction])

    def location(self, iterator, direction):
        return self._meshers[direction].location(iterator.coordinates()[direction])

    def locations(self, direction):
        return self._meshers[direction].locations()[self._coordinates[:, direction]]

    def dplus_array(self, direction):
        return self._meshers[direction].dplus_array()[self._coordinates[:, direction]]

    def dminus_array(self, direction):
        return self._meshers[direction].dminus_array()[self._coordinates[:, direction]]

    def coordinates(self, direction: int) -> np.ndarray:
        """Coordinate along `direction` of every grid point."""
        return self._coordinates[:, direction]
