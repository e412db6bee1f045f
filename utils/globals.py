# -*- coding: utf-8 -*-
"""
Created on Mon Aug 11 12:02:45 2025

@author: Simran
"""

import sys


# Day count
days_in_year = 365.0

FD_DEFAULT_STEPS_TIME = 100
FD_DEFAULT_STEPS_SPACE = 200

# Meshers
FDM_MESHER_EPS = 1e-4
FDM_MESHER_SCALE_FACTOR = 1.5
FDM_MESHER_STEPS_PER_YEAR = 24.0
FDM_CONCENTRATING_TOL = 1e-8

# Time matching for stopping times / dividend dates
FDM_TIME_TOL = 1e-10

QL_EPSILON = sys.float_info.epsilon
