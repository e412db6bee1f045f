# -*- coding: utf-8 -*-
"""
Created on Wed Aug 13 05:58:16 2025

@author: Simran
"""

from abc import ABC, abstractmethod
from utils.error import FinError
from utils.date import Date
import math

# forward rates over a vanishing interval are taken over this bump
_DT = 1e-4


class BaseCurve(ABC):

    def __init__(self, as_of: Date):
        if not isinstance(as_of, Date):
            raise FinError("as_of must be a Date instance")
        self.as_of = as_of

    def time_to(self, date: Date):
        if not isinstance(date, Date):
            raise FinError("date must be a Date instance")
        t = self.as_of.year_fraction(date)
        return max(0.0, t)

    @abstractmethod
    def discount_factor_T(self, T: float) -> float:
        """
        Return DF (from as_of to as_of+T) for T in years(continuous compounding).
        """

        ...

    def discount_factor(self, date: Date):
        """Return DF(from as_of to date) using Date-based time."""
        return self.discount_factor_T(self.time_to(date))

    def zero_rate_T(self, T: float) -> float:
        """
        Implied continuously-compounded zero rate from DF(T).
        By convention, r(0) = r(dt).
        """
        T = max(T, _DT)
        df = self.discount_factor_T(T)
        if df <= 0.0:
            raise FinError("Discount factor must be positive")
        return -math.log(df) / T

    def forward_rate(self, t1: float, t2: float) -> float:
        """
        Continuously-compounded forward rate between t1 and t2 (years).
        """
        if t2 < t1:
            raise FinError(f"t1 <= t2 required. Got: t1={t1}, t2={t2}")
        if t2 - t1 < _DT:
            t1 = max(t1 - 0.5 * _DT, 0.0)
            t2 = t1 + _DT
        df1 = self.discount_factor_T(t1)
        df2 = self.discount_factor_T(t2)
        if df1 <= 0.0 or df2 <= 0.0:
            raise FinError("Discount factor must be positive")
        return math.log(df1 / df2) / (t2 - t1)

    def instantaneous_forward(self, t: float) -> float:
        return self.forward_rate(t, t)

    def __repr__(self):
        return f"{self.__class__.__name__}(as_of={self.as_of})"
