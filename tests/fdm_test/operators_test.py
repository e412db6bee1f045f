# tests/fdm_test/operators_test.py

import sys
import os
import math
import pytest
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from fdm.meshers.mesher_1d import Uniform1dMesher
from fdm.meshers.composite_mesher import FdmMesherComposite
from fdm.operators.black_scholes_op import FdmBlackScholesOp
from fdm.operators.hull_white_op import FdmHullWhiteOp
from fdm.operators.derivatives import FirstDerivativeOp, SecondDerivativeOp
from fdm.operators.factory import make_fdm_operator
from fdm.utilities.quanto_helper import FdmQuantoHelper
from market.curves.flat_discount import FlatCurve
from market.market_data import Market
from market.vol.flat_vol import FlatVolSurface
from market.vol.local_vol import LocalVolSurface
from models.black_scholes import BlackScholesProcess
from models.hull_white import HullWhiteModel
from utils.date import Date
from utils.enum import FdmOperatorType
from utils.error import FinError

# ------------------------------
# Market Setup
# ------------------------------
as_of = Date(2025, 8, 14)
r, q, vol = 0.05, 0.02, 0.2

market = Market.from_manual(as_of, 100.0, r, vol, q)
process = BlackScholesProcess(market)
mesher = FdmMesherComposite(Uniform1dMesher(math.log(50.0), math.log(200.0), 41))


def expected_band(drift, variance):
    d1 = FirstDerivativeOp(0, mesher)
    d2 = SecondDerivativeOp(0, mesher)
    return (drift * d1.lower + 0.5 * variance * d2.lower,
            drift * d1.diag + 0.5 * variance * d2.diag - r,
            drift * d1.upper + 0.5 * variance * d2.upper)


def test_black_scholes_op_set_time():
    op = FdmBlackScholesOp(mesher, process, 100.0)
    op.set_time(0.0, 0.5)
    lower, diag, upper = expected_band(r - q - 0.5 * vol * vol, vol * vol)
    band = op.band_operator
    np.testing.assert_allclose(band.lower, lower, atol=1e-12)
    np.testing.assert_allclose(band.diag, diag, atol=1e-12)
    np.testing.assert_allclose(band.upper, upper, atol=1e-12)


def test_black_scholes_op_local_vol_matches_flat_vol():
    black = FdmBlackScholesOp(mesher, process, 100.0)
    local = FdmBlackScholesOp(mesher, process, 100.0, local_vol=True)
    black.set_time(0.25, 0.5)
    local.set_time(0.25, 0.5)
    x = np.random.default_rng(0).standard_normal(41)
    np.testing.assert_allclose(local.apply(x), black.apply(x), atol=1e-10)


def test_black_scholes_op_illegal_local_vol():
    def sigma(t, s):
        return 0.25 if s < 150.0 else -1.0

    lv_process = BlackScholesProcess(market, local_vol=LocalVolSurface(sigma))
    op = FdmBlackScholesOp(mesher, lv_process, 100.0, local_vol=True)
    with pytest.raises(FinError):
        op.set_time(0.0, 0.1)

    op = FdmBlackScholesOp(mesher, lv_process, 100.0, local_vol=True,
                           illegal_local_vol_overwrite=0.3)
    op.set_time(0.0, 0.1)
    s = np.exp(mesher.locations(0))
    v = np.where(s < 150.0, 0.25 ** 2, 0.3 ** 2)
    lower, diag, upper = expected_band(r - q - 0.5 * v, v)
    np.testing.assert_allclose(op.band_operator.diag, diag, atol=1e-10)


def test_black_scholes_op_quanto_adjustment():
    helper = FdmQuantoHelper(FlatCurve(as_of, 0.05), FlatCurve(as_of, 0.03),
                             FlatVolSurface(0.1), 0.5, 1.2)
    assert helper.risk_free_term_structure().forward_rate(0.0, 1.0) == 0.05
    assert helper.foreign_term_structure().forward_rate(0.0, 1.0) == 0.03
    assert helper.equity_fx_correlation() == 0.5
    assert helper.exch_rate_atm_level() == 1.2
    assert helper.quanto_adjustment(vol, 0.0, 0.5) == pytest.approx(0.05 - 0.03 + vol * 0.1 * 0.5)

    op = FdmBlackScholesOp(mesher, process, 100.0, quanto_helper=helper)
    op.set_time(0.0, 0.5)
    lower, diag, upper = expected_band(r - q - 0.5 * vol * vol - 0.03, vol * vol)
    np.testing.assert_allclose(op.band_operator.upper, upper, atol=1e-12)
    np.testing.assert_allclose(op.band_operator.diag, diag, atol=1e-12)


def test_black_scholes_op_composite_hooks():
    op = FdmBlackScholesOp(mesher, process, 100.0)
    op.set_time(0.0, 0.1)
    x = np.linspace(0.0, 1.0, 41)

    assert op.size() == 1
    np.testing.assert_array_equal(op.apply_direction(0, x), op.apply(x))
    np.testing.assert_array_equal(op.apply_direction(1, x), np.zeros(41))
    np.testing.assert_array_equal(op.apply_mixed(x), np.zeros(41))
    np.testing.assert_array_equal(op.solve_splitting(1, x, 0.1), x)

    u = op.solve_splitting(0, x, -0.1)
    np.testing.assert_allclose(u - 0.1 * op.apply(u), x, atol=1e-12)
    np.testing.assert_allclose(op.preconditioner(x, -0.1), u)

    decomp = op.to_matrix_decomp()
    assert len(decomp) == 1
    np.testing.assert_allclose(decomp[0] @ x, op.apply(x), atol=1e-12)
    np.testing.assert_allclose(op.to_matrix() @ x, op.apply(x), atol=1e-12)


def test_set_time_requires_ordered_times():
    op = FdmBlackScholesOp(mesher, process, 100.0)
    with pytest.raises(FinError):
        op.set_time(0.5, 0.4)


# ------------------------------
# Hull-White
# ------------------------------
hw_model = HullWhiteModel(FlatCurve(as_of, 0.03), 0.1, 0.01)
hw_mesher = FdmMesherComposite(Uniform1dMesher(-0.15, 0.15, 151))


def test_hull_white_op_set_time():
    op = FdmHullWhiteOp(hw_mesher, hw_model, 0)
    op.set_time(1.0, 1.1)
    x = hw_mesher.locations(0)
    phi = 0.5 * (hw_model.phi(1.0) + hw_model.phi(1.1))

    d1 = FirstDerivativeOp(0, hw_mesher)
    d2 = SecondDerivativeOp(0, hw_mesher)
    expected = -0.1 * x * d1.diag + 0.5 * 0.01 ** 2 * d2.diag - (x + phi)
    np.testing.assert_allclose(op.band_operator.diag, expected, atol=1e-12)
    np.testing.assert_array_equal(op.solve_splitting(1, x, 0.1), np.zeros(151))


def test_factory_builds_operators():
    bs = make_fdm_operator(FdmOperatorType.BLACK_SCHOLES, mesher, process, strike=100.0)
    assert isinstance(bs, FdmBlackScholesOp)
    hw = make_fdm_operator(FdmOperatorType.HULL_WHITE, hw_mesher, hw_model)
    assert isinstance(hw, FdmHullWhiteOp)

    with pytest.raises(FinError):
        make_fdm_operator(FdmOperatorType.BLACK_SCHOLES, mesher, process)
    with pytest.raises(FinError):
        make_fdm_operator(FdmOperatorType.HULL_WHITE, hw_mesher, hw_model, strike=1.0)
