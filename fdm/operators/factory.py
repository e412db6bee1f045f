# -*- coding: utf-8 -*-
"""
Operator construction keyed by FdmOperatorType.
"""

from fdm.operators.black_scholes_op import FdmBlackScholesOp
from fdm.operators.hull_white_op import FdmHullWhiteOp
from utils.enum import FdmOperatorType
from utils.error import FinError
from utils.helper import validate_enum


def _black_scholes(mesher, process, direction=0, **kwargs):
    if "strike" not in kwargs:
        raise FinError("Black-Scholes operator needs a strike")
    return FdmBlackScholesOp(mesher, process, direction=direction, **kwargs)


def _hull_white(mesher, model, direction=0, **kwargs):
    if kwargs:
        raise FinError(f"unexpected arguments for Hull-White operator: {sorted(kwargs)}")
    return FdmHullWhiteOp(mesher, model, direction)


_OPERATOR_FACTORIES = {
    FdmOperatorType.BLACK_SCHOLES: _black_scholes,
    FdmOperatorType.HULL_WHITE: _hull_white,
}


def make_fdm_operator(op_type: FdmOperatorType, mesher, model, direction: int = 0, **kwargs):
    """
    Build the composite operator of kind `op_type` for `model` on `mesher`.
    Extra keyword arguments go to the operator's constructor.
    """
    if not validate_enum(op_type, FdmOperatorType):
        raise FinError(f"Invalid FdmOperatorType: {op_type}. Valid types: {list(FdmOperatorType)}")
    return _OPERATOR_FACTORIES[op_type](mesher, model, direction, **kwargs)
