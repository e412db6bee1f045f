# -*- coding: utf-8 -*-
"""
One dimensional meshers.

A 1d mesher holds strictly increasing node locations and the one-sided
spacings dminus[i] = x[i] - x[i-1], dplus[i] = x[i+1] - x[i]. dminus at the
first node and dplus at the last node do not exist and are reported as None.
"""

from typing import Optional, Sequence

import numpy as np

from utils.error import FinError, fin_require


class Fdm1dMesher:
    def __init__(self, size: int):
        fin_require(int(size) == size and size >= 2, f"1d mesher needs at least two nodes. Got: {size}")
        self._size = int(size)
        self._locations = np.zeros(self._size)
        self._dplus = np.full(self._size, np.nan)
        self._dminus = np.full(self._size, np.nan)

    def _set_locations(self, locations: Sequence[float]):
        x = np.asarray(locations, dtype=float)
        fin_require(x.shape == (self._size,), f"expected {self._size} locations, got {x.shape}")
        fin_require(np.all(np.isfinite(x)), "mesher locations must be finite")
        d = np.diff(x)
        fin_require(np.all(d > 0.0), "mesher locations must be strictly increasing")

        self._locations = x
        self._dplus = np.append(d, np.nan)
        self._dminus = np.insert(d, 0, np.nan)
        for arr in (self._locations, self._dplus, self._dminus):
            arr.setflags(write=False)

    def size(self) -> int:
        return self._size

    def locations(self) -> np.ndarray:
        return self._locations

    def location(self, index: int) -> float:
        return float(self._locations[index])

    def dplus(self, index: int) -> Optional[float]:
        d = self._dplus[index]
        return None if np.isnan(d) else float(d)

    def dminus(self, index: int) -> Optional[float]:
        d = self._dminus[index]
        return None if np.isnan(d) else float(d)

    def dplus_array(self) -> np.ndarray:
        """Forward spacings, NaN at the last node."""
        return self._dplus

    def dminus_array(self) -> np.ndarray:
        """Backward spacings, NaN at the first node."""
        return self._dminus

    def __repr__(self):
        return (f"{self.__class__.__name__}(size={self._size}, "
                f"start={self._locations[0]:.6g}, end={self._locations[-1]:.6g})")


class Uniform1dMesher(Fdm1dMesher):
    def __init__(self, start: float, end: float, size: int):
        super().__init__(size)
        if end <= start:
            raise FinError(f"end must be larger than start. Got: start={start}, end={end}")

        dx = (end - start) / (size - 1)
        x = start + dx * np.arange(size)
        x[-1] = end
        self._set_locations(x)


class Predefined1dMesher(Fdm1dMesher):
    def __init__(self, locations: Sequence[float]):
        super().__init__(len(locations))
        self._set_locations(locations)
