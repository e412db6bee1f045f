# -*- coding: utf-8 -*-
"""
Created on Thu Aug 14 04:08:35 2025

@author: Simran
"""


from abc import ABC, abstractmethod

from utils.error import FinError
from utils.date import Date


class BaseProcess(ABC):

    def __init__(self, market):
        # avoid hard import to keep modules decoupled
        if not hasattr(market, "as_of") or not hasattr(market, "discount_curve"):
            raise FinError("market must be a Market-like object with as_of and discount_curve()")
        self.market = market

    @property
    def as_of(self) -> Date:
        return self.market.as_of

    def time(self, date: Date) -> float:
        """Year fraction from the market date (negative for past dates)."""
        if not isinstance(date, Date):
            raise FinError("date must be a Date instance")
        return self.as_of.year_fraction(date)

    @abstractmethod
    def x0(self) -> float:
        """
        Initial value of the state variable.
        """
        ...
