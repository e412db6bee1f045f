# -*- coding: utf-8 -*-
"""
Created on Wed Aug 13 14:38:26 2025

@author: Simran
"""

from utils.error import FinError
from utils.date import Date
from market.curves.base_curve import BaseCurve
from market.vol.flat_vol import FlatVolSurface
from market.curves.flat_discount import FlatCurve
from typing import Optional


class Market:
    """
    Immutable market snapshot: spot, discount and dividend curves, vols.
    """

    def __init__(
        self,
        as_of: Date,
        spot: float,
        discount_curve: BaseCurve,
        vol_surface: Optional[object] = None,
        dividend_yield_curve: Optional[BaseCurve] = None,
        local_vol_surface: Optional[object] = None
    ):
        if not isinstance(as_of, Date):
            raise FinError("as_of must be a Date instance")
        if spot <= 0.0:
            raise FinError(f"Spot must be positive. Got: {spot}")
        if not isinstance(discount_curve, BaseCurve):
            raise FinError("discount_curve must be a BaseCurve instance")
        if dividend_yield_curve is not None and not isinstance(dividend_yield_curve, BaseCurve):
            raise FinError("dividend_yield_curve must be a BaseCurve instance")

        self._as_of = as_of
        self._spot = float(spot)
        self._discount_curve = discount_curve
        self._vol_surface = vol_surface
        self._local_vol_surface = local_vol_surface
        self._dividend_yield_curve = dividend_yield_curve or FlatCurve(as_of, 0.0)

    # ===== API =====
    @property
    def as_of(self) -> Date:
        return self._as_of

    def spot(self) -> float:
        return self._spot

    def discount_curve(self) -> BaseCurve:
        return self._discount_curve

    def vol_surface(self):
        if self._vol_surface is None:
            raise FinError("Volatility surface not set in Market")
        return self._vol_surface

    def local_vol_surface(self):
        if self._local_vol_surface is not None:
            return self._local_vol_surface
        vol = self.vol_surface()
        if not hasattr(vol, "local_vol"):
            raise FinError("Market has no local volatility surface")
        return vol

    def dividend_yield_curve(self) -> BaseCurve:
        return self._dividend_yield_curve

    @classmethod
    def from_manual(cls, as_of: Date, spot: float, rate: float,
                    vol: Optional[float] = None, dividend_yield: float = 0.0):
        """
        Creates a Market with flat rate, flat dividend yield and optional flat vol.
        Continuous compounding for rates.
        """
        vol_surface = FlatVolSurface(vol) if vol is not None else None
        return cls(as_of, spot, FlatCurve(as_of, rate), vol_surface,
                   FlatCurve(as_of, dividend_yield))

    def __repr__(self):
        return f"Market(as_of={self._as_of}, spot={self._spot})"
