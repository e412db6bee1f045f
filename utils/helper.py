# -*- coding: utf-8 -*-
"""
Created on Mon Aug 11 12:27:43 2025

@author: Simran
"""

import bisect


def validate_enum(value, enum_class):

    return value in enum_class


def find_time(times, t: float, tol: float) -> int:
    """
    Index of the entry of the sorted list `times` within `tol` of t,
    or -1 when there is none.
    """
    pos = bisect.bisect_left(times, t - tol)
    if pos < len(times) and abs(times[pos] - t) <= tol:
        return pos
    return -1


def unique_sorted(values, tol: float):

    out = []
    for v in sorted(values):
        if not out or abs(v - out[-1]) > tol:
            out.append(v)
    return out
