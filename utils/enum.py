# -*- coding: utf-8 -*-
"""
Created on Mon Aug 11 11:16:23 2025

@author: Simran
"""

from enum import Enum

class OptionType(Enum):
    CALL = 1
    PUT = 2

class ExerciseType(Enum):
    AMERICAN = 1
    EUROPEAN = 2

class PDEScheme(Enum):
    EXPLICIT = 1
    IMPLICIT = 2
    CRANK_NICOLSON = 3


# FDM Specific:
class Side(Enum):
    NONE = 0
    LOWER = 1
    UPPER = 2

class FdmOperatorType(Enum):
    BLACK_SCHOLES = 1
    HULL_WHITE = 2
