import calendar
from datetime import date, datetime, timedelta
from functools import total_ordering

from utils.globals import days_in_year


@total_ordering
class Date:
    def __init__(self, year: int, month: int, day: int):
        self._d = date(year, month, day)

    # ===== Constructors =====
    @classmethod
    def today(cls):
        return cls.from_date(date.today())

    @classmethod
    def from_date(cls, d):
        return cls(d.year, d.month, d.day)

    @classmethod
    def from_iso(cls, text: str):
        return cls.from_date(datetime.strptime(text, "%Y-%m-%d").date())

    # ===== Comparisons =====
    def __lt__(self, other):
        return self._d < other._d

    def __eq__(self, other):
        if not isinstance(other, Date):
            return NotImplemented
        return self._d == other._d

    def __hash__(self):
        return hash(self._d)

    # ===== Arithmetic =====
    def add_days(self, n: int):
        return Date.from_date(self._d + timedelta(days=n))

    def add_months(self, n: int):
        month = self._d.month - 1 + n
        year = self._d.year + month // 12
        month = month % 12 + 1
        day = min(self._d.day, calendar.monthrange(year, month)[1])
        return Date(year, month, day)

    def add_years(self, n: int):
        return self.add_months(12 * n)

    # ===== Differences =====
    def days_between(self, other) -> int:
        return (other._d - self._d).days

    def year_fraction(self, other) -> float:
        """ACT/365F year fraction from self to other (negative if before)."""
        return self.days_between(other) / days_in_year

    # ===== Representation =====
    def __str__(self):
        return self._d.isoformat()

    def __repr__(self):
        return f"Date({self._d.year}, {self._d.month}, {self._d.day})"
