# tests/fdm_test/step_conditions_test.py

import sys
import os
import math
import pytest
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from core.payoff import PlainVanillaPayoff
from fdm.meshers.mesher_1d import Uniform1dMesher
from fdm.meshers.composite_mesher import FdmMesherComposite
from fdm.step_conditions.american import FdmAmericanStepCondition
from fdm.step_conditions.composite import FdmStepConditionComposite
from fdm.step_conditions.dividend_handler import FdmDividendHandler
from fdm.utilities.inner_value import FdmLogInnerValue, FdmZeroInnerValue
from market.dividends import DividendSchedule
from utils.date import Date
from utils.enum import ExerciseType, OptionType
from utils.error import FinError

as_of = Date(2025, 8, 14)
div_date = as_of.add_days(146)
div_time = as_of.year_fraction(div_date)
schedule = DividendSchedule.from_pairs([(div_date, 2.0)])

mesher = FdmMesherComposite(Uniform1dMesher(math.log(50.0), math.log(150.0), 101))
S = np.exp(mesher.locations(0))


def test_dividend_handler_shifts_spot():
    handler = FdmDividendHandler(schedule, mesher, as_of)
    assert handler.dividend_times() == [pytest.approx(0.4)]
    assert handler.dividends() == [2.0]
    assert handler.dividend_dates() == [div_date]

    a = S * S
    handler.apply_to(a, div_time)
    expected = np.interp(np.maximum(S[0], S - 2.0), S, S * S)
    np.testing.assert_allclose(a, expected, rtol=1e-12)
    # floored at the lowest level
    assert a[0] == pytest.approx(S[0] ** 2)
    assert np.all(np.diff(a) >= 0.0)


def test_dividend_handler_ignores_other_times():
    handler = FdmDividendHandler(schedule, mesher, as_of)
    a = S.copy()
    handler.apply_to(a, 0.25)
    np.testing.assert_array_equal(a, S)


def test_dividend_handler_second_direction():
    mesher_2d = FdmMesherComposite(Uniform1dMesher(0.0, 1.0, 3), mesher.get_fdm_1d_meshers()[0])
    handler = FdmDividendHandler(schedule, mesher_2d, as_of, equity_direction=1)

    x = mesher_2d.locations(0)
    s = np.exp(mesher_2d.locations(1))
    a = x + s
    handler.apply_to(a, div_time)
    np.testing.assert_allclose(a, x + np.maximum(S[0], s - 2.0), rtol=1e-12)


def test_american_condition_floors_at_inner_value():
    calculator = FdmLogInnerValue(PlainVanillaPayoff(OptionType.PUT, 100.0), mesher)
    condition = FdmAmericanStepCondition(mesher, calculator)

    a = np.full(101, 5.0)
    condition.apply_to(a, 0.5)
    np.testing.assert_allclose(a, np.maximum(5.0, 100.0 - S), atol=1e-12)


def test_american_condition_with_zero_inner_value():
    calculator = FdmZeroInnerValue()
    np.testing.assert_array_equal(calculator.values(mesher.layout(), 0.5), np.zeros(101))
    np.testing.assert_array_equal(calculator.values(mesher.layout(), 0.5, average=True), np.zeros(101))

    a = np.linspace(-1.0, 1.0, 101)
    FdmAmericanStepCondition(mesher, calculator).apply_to(a, 0.5)
    np.testing.assert_allclose(a, np.maximum(np.linspace(-1.0, 1.0, 101), 0.0))


def test_composite_stopping_times_and_order():
    calls = []

    class Recorder:
        def __init__(self, name):
            self.name = name

        def apply_to(self, a, t):
            calls.append((self.name, t))

    first = FdmStepConditionComposite([[0.5, 0.25]], [Recorder("first")])
    second = FdmStepConditionComposite([[0.25 + 1e-12, 0.75]], [Recorder("second")])
    joined = FdmStepConditionComposite.join_conditions(first, second)

    assert joined.stopping_times() == [0.25, 0.5, 0.75]
    joined.apply_to(np.zeros(3), 0.5)
    assert calls == [("first", 0.5), ("second", 0.5)]


def test_vanilla_composite():
    calculator = FdmLogInnerValue(PlainVanillaPayoff(OptionType.PUT, 100.0), mesher)

    european = FdmStepConditionComposite.vanilla_composite(
        schedule, ExerciseType.EUROPEAN, mesher, calculator, as_of)
    assert european.stopping_times() == [pytest.approx(div_time)]
    assert len(european.conditions()) == 1

    american = FdmStepConditionComposite.vanilla_composite(
        None, ExerciseType.AMERICAN, mesher, calculator, as_of)
    assert american.stopping_times() == []
    assert isinstance(american.conditions()[0], FdmAmericanStepCondition)

    with pytest.raises(FinError):
        FdmStepConditionComposite.vanilla_composite(
            schedule, OptionType.CALL, mesher, calculator, as_of)
