# -*- coding: utf-8 -*-
"""
Discrete cash dividends.
"""

from typing import Iterable, List

from utils.date import Date
from utils.error import FinError


class Dividend:
    def __init__(self, date: Date, amount: float):
        if not isinstance(date, Date):
            raise FinError("dividend date must be a Date instance")
        self.date = date
        self.amount = float(amount)

    def __repr__(self):
        return f"Dividend(date={self.date}, amount={self.amount})"


class DividendSchedule:
    """Dividends sorted by payment date."""

    def __init__(self, dividends: Iterable[Dividend] = ()):
        self._dividends: List[Dividend] = sorted(dividends, key=lambda d: d.date)

    @classmethod
    def from_pairs(cls, pairs):
        return cls(Dividend(d, a) for d, a in pairs)

    def __iter__(self):
        return iter(self._dividends)

    def __len__(self):
        return len(self._dividends)

    def __getitem__(self, i):
        return self._dividends[i]

    def empty(self) -> bool:
        return not self._dividends

    def dates(self) -> List[Date]:
        return [d.date for d in self._dividends]

    def amounts(self) -> List[float]:
        return [d.amount for d in self._dividends]

    def times(self, reference_date: Date) -> List[float]:
        return [reference_date.year_fraction(d.date) for d in self._dividends]
