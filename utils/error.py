# -*- coding: utf-8 -*-
"""
Created on Mon Aug 11 12:10:02 2025

@author: Simran
"""


class FinError(Exception):
    """
    Library error. Raised for every violated precondition: bad grids,
    inconsistent operator sizes, singular pivots, illegal market data.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self):
        return self.message


class FdmSingularPivotError(FinError):
    """Zero pivot met during a tridiagonal elimination."""


def fin_require(condition, message: str):
    if not condition:
        raise FinError(message)
