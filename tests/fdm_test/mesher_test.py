# tests/fdm_test/mesher_test.py

import sys
import os
import math
import pytest
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from fdm.meshers.mesher_1d import Uniform1dMesher, Predefined1dMesher
from fdm.meshers.concentrating_mesher import Concentrating1dMesher, MultiConcentrating1dMesher
from fdm.meshers.black_scholes_mesher import FdmBlackScholesMesher
from fdm.meshers.composite_mesher import FdmMesherComposite
from fdm.operators.layout import FdmLinearOpLayout
from market.dividends import DividendSchedule, Dividend
from market.market_data import Market
from models.black_scholes import BlackScholesProcess
from utils.date import Date
from utils.error import FinError
from utils.math import N_inv

as_of = Date(2025, 8, 14)


def test_uniform_mesher():
    m = Uniform1dMesher(-1.0, 1.0, 5)
    np.testing.assert_allclose(m.locations(), [-1.0, -0.5, 0.0, 0.5, 1.0])
    assert m.dminus(0) is None
    assert m.dplus(4) is None
    assert m.dplus(0) == pytest.approx(0.5)
    assert m.dminus(4) == pytest.approx(0.5)


def test_uniform_mesher_bad_bounds():
    with pytest.raises(FinError):
        Uniform1dMesher(1.0, 1.0, 5)
    with pytest.raises(FinError):
        Uniform1dMesher(0.0, 1.0, 1)


def test_predefined_mesher_must_increase():
    Predefined1dMesher([0.0, 0.1, 0.5])
    with pytest.raises(FinError):
        Predefined1dMesher([0.0, 0.5, 0.5])
    with pytest.raises(FinError):
        Predefined1dMesher([0.0, 0.5, 0.2])


def test_concentrating_mesher_required_point():
    m = Concentrating1dMesher(0.0, 10.0, 101, (5.0, 0.1), True)
    x = m.locations()
    assert np.min(np.abs(x - 5.0)) < 1e-6
    assert x[0] == 0.0 and x[-1] == 10.0
    assert np.all(np.diff(x) > 0.0)


def test_concentrating_mesher_is_denser_near_point():
    m = Concentrating1dMesher(-2.0, 3.0, 50, (0.5, 0.01))
    x = m.locations()
    d = np.diff(x)
    k = int(np.argmin(np.abs(x - 0.5)))
    assert d[min(k, len(d) - 1)] < d[0]
    assert d[min(k, len(d) - 1)] < d[-1]


@pytest.mark.parametrize("start, end, point", [(0.5, 5.0, 0.5), (-1.0, 2.0, 2.0)])
def test_concentrating_mesher_point_on_edge(start, end, point):
    m = Concentrating1dMesher(start, end, 25, (point, 0.1), True)
    assert np.all(np.diff(m.locations()) > 0.0)
    assert m.location(0) == start and m.location(24) == end


def test_concentrating_mesher_without_point_is_uniform():
    m = Concentrating1dMesher(0.0, 1.0, 11)
    np.testing.assert_allclose(m.locations(), np.linspace(0.0, 1.0, 11))


def test_concentrating_mesher_preconditions():
    with pytest.raises(FinError):
        Concentrating1dMesher(1.0, 0.0, 11)
    with pytest.raises(FinError):
        Concentrating1dMesher(0.0, 1.0, 11, (2.0, 0.1))
    with pytest.raises(FinError):
        Concentrating1dMesher(0.0, 1.0, 11, (0.5, None))
    with pytest.raises(FinError):
        Concentrating1dMesher(0.0, 1.0, 11, (0.5, -0.1))
    with pytest.raises(FinError):
        Concentrating1dMesher(0.0, 1.0, 11, None, True)


def test_multi_concentrating_mesher():
    points = [(2.0, 0.05, True), (7.5, 0.1, True), (9.0, 0.1, False)]
    m = MultiConcentrating1dMesher(0.0, 10.0, 81, points)
    x = m.locations()
    assert x[0] == 0.0 and x[-1] == 10.0
    assert np.all(np.diff(x) > 0.0)
    assert np.min(np.abs(x - 2.0)) < 1e-6
    assert np.min(np.abs(x - 7.5)) < 1e-6


def test_composite_mesher_delegates():
    m1 = Uniform1dMesher(0.0, 1.0, 3)
    m2 = Concentrating1dMesher(-1.0, 1.0, 4, (0.0, 0.2))
    mesher = FdmMesherComposite(m1, m2)
    layout = mesher.layout()
    assert layout.dim() == [3, 4]

    for it in layout:
        c = it.coordinates()
        assert mesher.location(it, 0) == m1.location(c[0])
        assert mesher.location(it, 1) == m2.location(c[1])
        assert mesher.dminus(it, 1) == m2.dminus(c[1])
        assert mesher.dplus(it, 0) == m1.dplus(c[0])

    x1 = mesher.locations(1)
    assert x1.shape == (12,)
    assert x1[layout.index([2, 3])] == m2.location(3)


def test_composite_mesher_from_list_and_layout():
    m1 = Uniform1dMesher(0.0, 1.0, 3)
    m2 = Uniform1dMesher(0.0, 1.0, 4)
    mesher = FdmMesherComposite([m1, m2], layout=FdmLinearOpLayout([3, 4]))
    assert mesher.get_fdm_1d_meshers() == [m1, m2]

    with pytest.raises(FinError):
        FdmMesherComposite([m1, m2], layout=FdmLinearOpLayout([4, 3]))
    with pytest.raises(FinError):
        FdmMesherComposite([m1], layout=FdmLinearOpLayout([3, 4]))


# ------------------------------
# Black-Scholes mesher
# ------------------------------
def make_process(spot=100.0, rate=0.05, vol=0.2, q=0.0):
    return BlackScholesProcess(Market.from_manual(as_of, spot, rate, vol, q))


def test_black_scholes_mesher_bounds():
    process = make_process()
    T = 1.0
    m = FdmBlackScholesMesher(100, process, T, 100.0)
    x = m.locations()
    k = 0.2 * math.sqrt(T) * N_inv(1.0 - 1e-4) * 1.5

    # no dividends, r > q: forward grows, minimum is the spot
    assert x[0] == pytest.approx(math.log(100.0) - k)
    assert x[-1] == pytest.approx(math.log(100.0 * math.exp(0.05 * T)) + k, rel=1e-6)
    assert x[0] < math.log(100.0) < x[-1]


def test_black_scholes_mesher_constraints_and_cpoint():
    process = make_process()
    m = FdmBlackScholesMesher(51, process, 1.0, 100.0,
                              x_min_constraint=math.log(50.0),
                              x_max_constraint=math.log(200.0),
                              c_point=(100.0, 0.1))
    x = m.locations()
    assert x[0] == pytest.approx(math.log(50.0))
    assert x[-1] == pytest.approx(math.log(200.0))
    d = np.diff(x)
    k = int(np.argmin(np.abs(x - math.log(100.0))))
    assert d[k] < d[0]


def test_black_scholes_mesher_dividends_extend_grid():
    process = make_process()
    plain = FdmBlackScholesMesher(100, process, 1.0, 100.0)
    divs = DividendSchedule([Dividend(Date(2026, 2, 14), 5.0)])
    with_div = FdmBlackScholesMesher(100, process, 1.0, 100.0, dividend_schedule=divs)
    assert with_div.locations()[0] < plain.locations()[0]


def test_black_scholes_mesher_rejects_bad_input():
    process = make_process()
    with pytest.raises(FinError):
        FdmBlackScholesMesher(100, process, 0.0, 100.0)
    with pytest.raises(FinError):
        FdmBlackScholesMesher(100, process, 1.0, 100.0, eps=1.5)
