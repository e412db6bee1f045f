# -*- coding: utf-8 -*-
"""
Index layout of an N-dimensional tensor grid.

Axis 0 varies fastest: spacing[0] = 1, spacing[k+1] = dim[k] * spacing[k].
A grid point is addressed either by its coordinate tuple or by the flat
index sum(coordinates[k] * spacing[k]).
"""

from typing import List, Sequence

import numpy as np

from utils.error import FinError


def _mirror(coordinate: int, dim: int) -> int:
    if dim == 1:
        return 0
    if coordinate < 0:
        return -coordinate
    if coordinate >= dim:
        return 2 * (dim - 1) - coordinate
    return coordinate


class FdmLinearOpIterator:
    """
    Odometer over the grid. `index` always equals the dot product of
    `coordinates` with the layout spacing; index == size marks the end.
    """

    def __init__(self, dim: Sequence[int], coordinates: Sequence[int] = None, index: int = 0):
        self._dim = list(dim)
        self._coordinates = list(coordinates) if coordinates is not None else [0] * len(self._dim)
        self._index = index

    @classmethod
    def end_of(cls, size: int):
        return cls([], [], size)

    def index(self) -> int:
        return self._index

    def coordinates(self) -> List[int]:
        return self._coordinates

    def increment(self):
        self._index += 1
        for k in range(len(self._dim)):
            self._coordinates[k] += 1
            if self._coordinates[k] == self._dim[k]:
                self._coordinates[k] = 0
            else:
                return self
        return self

    def copy(self):
        return FdmLinearOpIterator(self._dim, list(self._coordinates), self._index)

    def __eq__(self, other):
        if not isinstance(other, FdmLinearOpIterator):
            return NotImplemented
        return self._index == other._index

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self._index)

    def __repr__(self):
        return f"FdmLinearOpIterator(index={self._index}, coordinates={self._coordinates})"


class FdmLinearOpLayout:
    def __init__(self, dim: Sequence[int]):
        if len(dim) == 0:
            raise FinError("layout needs at least one dimension")
        for d in dim:
            if int(d) != d or d <= 0:
                raise FinError(f"layout dimensions must be positive integers. Got: {list(dim)}")

        self._dim = [int(d) for d in dim]
        self._spacing = [1] * len(self._dim)
        for i in range(len(self._dim) - 1):
            self._spacing[i + 1] = self._dim[i] * self._spacing[i]
        self._size = self._spacing[-1] * self._dim[-1]

    def dim(self) -> List[int]:
        return list(self._dim)

    def spacing(self) -> List[int]:
        return list(self._spacing)

    def size(self) -> int:
        return self._size

    def begin(self) -> FdmLinearOpIterator:
        return FdmLinearOpIterator(self._dim)

    def end(self) -> FdmLinearOpIterator:
        return FdmLinearOpIterator.end_of(self._size)

    def __iter__(self):
        it = self.begin()
        while it.index() < self._size:
            yield it.copy()
            it.increment()

    def __len__(self):
        return self._size

    def index(self, coordinates: Sequence[int]) -> int:
        return sum(c * s for c, s in zip(coordinates, self._spacing))

    def coordinates_of(self, index: int) -> List[int]:
        if not 0 <= index < self._size:
            raise FinError(f"index {index} out of range [0, {self._size})")
        coordinates = []
        for d in self._dim:
            coordinates.append(index % d)
            index //= d
        return coordinates

    def coordinate_array(self) -> np.ndarray:
        """(size, ndim) array of coordinates in flat index order."""
        return np.stack(np.unravel_index(np.arange(self._size), self._dim, order="F"), axis=1)

    def iter_neighbourhood(self, iterator: FdmLinearOpIterator, i: int, offset: int) -> FdmLinearOpIterator:
        coordinates = list(iterator.coordinates())
        coordinates[i] = _mirror(coordinates[i] + offset, self._dim[i])
        return FdmLinearOpIterator(self._dim, coordinates, self.index(coordinates))

    def neighbourhood(self, iterator: FdmLinearOpIterator, i: int, offset: int,
                      i2: int = None, offset2: int = None) -> int:
        """
        Flat index of the point shifted by `offset` along axis i (and by
        `offset2` along axis i2), mirrored back into the grid at the edges.
        """
        coordinates = iterator.coordinates()
        my_index = iterator.index() - coordinates[i] * self._spacing[i]
        coor_offset = _mirror(coordinates[i] + offset, self._dim[i])

        if i2 is None:
            return my_index + coor_offset * self._spacing[i]

        my_index -= coordinates[i2] * self._spacing[i2]
        coor_offset2 = _mirror(coordinates[i2] + offset2, self._dim[i2])
        return my_index + coor_offset * self._spacing[i] + coor_offset2 * self._spacing[i2]

    def neighbourhood_array(self, i: int, offset: int) -> np.ndarray:
        """Vectorised neighbourhood() over all flat indices."""
        coordinates = self.coordinate_array()
        c = coordinates[:, i] + offset
        c = np.where(c < 0, -c, c)
        c = np.where(c >= self._dim[i], 2 * (self._dim[i] - 1) - c, c)
        if self._dim[i] == 1:
            c = np.zeros_like(c)
        return np.arange(self._size) + (c - coordinates[:, i]) * self._spacing[i]

    def __repr__(self):
        return f"FdmLinearOpLayout(dim={self._dim})"
