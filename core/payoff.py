# -*- coding: utf-8 -*-
"""
Created on Tue Aug 12 04:50:43 2025

@author: Simran
"""
from abc import ABC, abstractmethod

import numpy as np

from utils.enum import OptionType
from utils.error import FinError
from utils.helper import validate_enum


class BasePayoff(ABC):

    @abstractmethod
    def value(self, spot):
        """Payoff for a spot level, scalar or numpy array."""
        ...

    def __call__(self, spot):
        return self.value(spot)


class PlainVanillaPayoff(BasePayoff):
    def __init__(self, option_type: OptionType, strike: float):

        if not validate_enum(option_type, OptionType):
            raise FinError(f"Invalid Option Type: {option_type}. Valid types: {list(OptionType)}")

        if strike <= 0:
            raise FinError(f"Strike price must be positive. Got: {strike}")

        self.option_type = option_type
        self.strike = float(strike)

    def value(self, spot):
        if self.option_type == OptionType.CALL:
            return np.maximum(spot - self.strike, 0.0)
        return np.maximum(self.strike - spot, 0.0)

    def __str__(self):
        return f"{self.option_type.name} payoff | Strike: {self.strike:.2f}"
