# vanilla_fdm.py

import math
import numpy as np

from core.payoff import PlainVanillaPayoff
from fdm.meshers.black_scholes_mesher import FdmBlackScholesMesher
from fdm.meshers.composite_mesher import FdmMesherComposite
from fdm.meshers.mesher_1d import Uniform1dMesher
from fdm.operators.factory import make_fdm_operator
from fdm.solvers.fd_solver import Fdm1DimSolver, FiniteDifferenceEngine
from fdm.step_conditions.composite import FdmStepConditionComposite
from fdm.utilities.inner_value import FdmLogInnerValue
from market.curves.flat_discount import FlatCurve
from market.dividends import DividendSchedule
from market.market_data import Market
from models.black_scholes import BlackScholesProcess
from models.hull_white import HullWhiteModel
from utils.date import Date
from utils.enum import ExerciseType, FdmOperatorType, OptionType, PDEScheme
from utils.globals import FD_DEFAULT_STEPS_SPACE, FD_DEFAULT_STEPS_TIME
from utils.logger import configure_logging
from utils.math import black_scholes_price

configure_logging(level="INFO")

# ------------------------------
# 1. Market objects
# ------------------------------

valuation_date = Date(2025, 8, 14)
expiry_date = Date(2026, 8, 14)
strike = 100.0
spot = 100.0
rate, div_yield, vol = 0.05, 0.02, 0.20

market_data = Market.from_manual(valuation_date, spot, rate, vol, div_yield)
process = BlackScholesProcess(market_data)
maturity = valuation_date.year_fraction(expiry_date)


def price(option_type, scheme=PDEScheme.CRANK_NICOLSON, exercise=ExerciseType.EUROPEAN,
          dividends=None, size=FD_DEFAULT_STEPS_SPACE, steps=FD_DEFAULT_STEPS_TIME):
    mesher = FdmMesherComposite(FdmBlackScholesMesher(
        size, process, maturity, strike, c_point=(strike, 0.1), dividend_schedule=dividends))
    op = make_fdm_operator(FdmOperatorType.BLACK_SCHOLES, mesher, process, strike=strike)
    calculator = FdmLogInnerValue(PlainVanillaPayoff(option_type, strike), mesher)
    conditions = FdmStepConditionComposite.vanilla_composite(
        dividends, exercise, mesher, calculator, valuation_date)
    solver = Fdm1DimSolver(mesher, op, calculator, maturity, steps,
                           conditions=conditions, scheme=scheme,
                           damping_steps=0 if scheme != PDEScheme.CRANK_NICOLSON else 2)
    return solver.interpolate_at(math.log(spot))


# ------------------------------
# 2. Analytical Pricing
# ------------------------------

print("--- Analytical Pricing ---")
print(f"Call Analytical: {black_scholes_price(spot, strike, maturity, rate, div_yield, vol, True):.6f}")
print(f"Put Analytical:  {black_scholes_price(spot, strike, maturity, rate, div_yield, vol, False):.6f}\n")

# ------------------------------
# 3. PDE Pricing
# ------------------------------

print("--- PDE Pricing ---")
for scheme in PDEScheme:
    steps = 1000 if scheme == PDEScheme.EXPLICIT else 100
    size = 100 if scheme == PDEScheme.EXPLICIT else 200
    call_fd = price(OptionType.CALL, scheme, size=size, steps=steps)
    put_fd = price(OptionType.PUT, scheme, size=size, steps=steps)
    print(f"{scheme.name:15} -> Call: {call_fd:.6f}, Put: {put_fd:.6f}")
print()

print("--- American and Dividends ---")
dividends = DividendSchedule.from_pairs([(valuation_date.add_months(6), 3.0)])
print(f"American Put:        {price(OptionType.PUT, exercise=ExerciseType.AMERICAN):.6f}")
print(f"Call with dividend:  {price(OptionType.CALL, dividends=dividends):.6f}")
print(f"American Call w/div: {price(OptionType.CALL, exercise=ExerciseType.AMERICAN, dividends=dividends):.6f}\n")

# ------------------------------
# 4. Hull-White zero coupon bond
# ------------------------------

print("--- Hull-White Bond ---")
model = HullWhiteModel(FlatCurve(valuation_date, 0.03), 0.1, 0.01)
hw_mesher = FdmMesherComposite(Uniform1dMesher(-0.15, 0.15, 151))
engine = FiniteDifferenceEngine(make_fdm_operator(FdmOperatorType.HULL_WHITE, hw_mesher, model))
bond = engine.rollback(np.ones(151), 2.0, 0.0, 100)
print(f"2Y ZCB FD:       {np.interp(0.0, hw_mesher.locations(0), bond):.6f}")
print(f"2Y ZCB curve:    {math.exp(-0.06):.6f}")
