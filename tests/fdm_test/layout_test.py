# tests/fdm_test/layout_test.py

import sys
import os
import pytest
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from fdm.operators.layout import FdmLinearOpLayout, FdmLinearOpIterator
from utils.error import FinError


@pytest.mark.parametrize("dim", [[5], [3, 4], [2, 3, 4], [1, 6], [4, 1, 3]])
def test_size_and_iteration(dim):
    layout = FdmLinearOpLayout(dim)
    assert layout.size() == int(np.prod(dim))

    seen = set()
    count = 0
    for it in layout:
        coords = tuple(it.coordinates())
        assert it.index() == layout.index(coords)
        assert it.index() == count
        seen.add(coords)
        count += 1
    assert count == layout.size()
    assert len(seen) == layout.size()


def test_spacing():
    layout = FdmLinearOpLayout([3, 4, 5])
    assert layout.spacing() == [1, 3, 12]
    assert layout.index([2, 1, 3]) == 2 + 3 + 36
    assert layout.coordinates_of(2 + 3 + 36) == [2, 1, 3]


def test_begin_end_odometer():
    layout = FdmLinearOpLayout([2, 2])
    it = layout.begin()
    visited = []
    while it != layout.end():
        visited.append(list(it.coordinates()))
        it.increment()
    assert visited == [[0, 0], [1, 0], [0, 1], [1, 1]]
    assert it.index() == layout.size()


def test_mirror_neighbour():
    layout = FdmLinearOpLayout([5])
    first = FdmLinearOpIterator([5], [0], 0)
    last = FdmLinearOpIterator([5], [4], 4)
    assert layout.neighbourhood(first, 0, -1) == 1
    assert layout.neighbourhood(first, 0, 1) == 1
    assert layout.neighbourhood(last, 0, 1) == 3
    assert layout.neighbourhood(last, 0, -1) == 3
    assert layout.neighbourhood(first, 0, -2) == 2


def test_neighbour_stays_in_range():
    layout = FdmLinearOpLayout([3, 4, 2])
    for it in layout:
        for axis in range(3):
            for offset in (-1, 1):
                j = layout.neighbourhood(it, axis, offset)
                assert 0 <= j < layout.size()


def test_two_axis_neighbour():
    layout = FdmLinearOpLayout([4, 5])
    it = FdmLinearOpIterator([4, 5], [0, 4], layout.index([0, 4]))
    j = layout.neighbourhood(it, 0, -1, 1, 1)
    assert j == layout.index([1, 3])

    it = FdmLinearOpIterator([4, 5], [2, 2], layout.index([2, 2]))
    assert layout.neighbourhood(it, 0, 1, 1, -1) == layout.index([3, 1])


def test_iter_neighbourhood():
    layout = FdmLinearOpLayout([4, 5])
    it = FdmLinearOpIterator([4, 5], [3, 2], layout.index([3, 2]))
    nb = layout.iter_neighbourhood(it, 0, 1)
    assert nb.coordinates() == [2, 2]
    assert nb.index() == layout.index([2, 2])
    # the source iterator is untouched
    assert it.coordinates() == [3, 2]


def test_neighbourhood_array_matches_scalar():
    layout = FdmLinearOpLayout([3, 4, 2])
    for axis in range(3):
        for offset in (-1, 1):
            expected = [layout.neighbourhood(it, axis, offset) for it in layout]
            np.testing.assert_array_equal(layout.neighbourhood_array(axis, offset), expected)


def test_single_node_axis():
    layout = FdmLinearOpLayout([1, 3])
    it = layout.begin()
    assert layout.neighbourhood(it, 0, -1) == 0
    assert layout.neighbourhood(it, 0, 1) == 0


@pytest.mark.parametrize("dim", [[], [0], [3, -1], [2.5]])
def test_invalid_dims(dim):
    with pytest.raises(FinError):
        FdmLinearOpLayout(dim)
