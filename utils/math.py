# -*- coding: utf-8 -*-
"""
Created on Mon Aug 11 12:21:16 2025

@author: Simran
"""

import math
from scipy.stats import norm
import numpy as np

from utils.globals import QL_EPSILON


#Distributions
def N(x: float) -> float:
    return norm.cdf(x)


def n(x: float) -> float:
    return norm.pdf(x)


def N_inv(p: float) -> float:
    """Inverse cumulative normal."""
    return norm.ppf(p)


#General

def is_close(a: float, b: float, n: int = 42) -> bool:
    """
    Relative closeness within n machine epsilons, exact for equal values.
    """
    if a == b:
        return True
    diff = abs(a - b)
    tol = n * QL_EPSILON
    return diff <= tol * abs(a) and diff <= tol * abs(b)


def as_vector(x, size: int) -> np.ndarray:
    """
    Broadcast a scalar or length-one sequence to a float vector of `size`.
    """
    v = np.atleast_1d(np.asarray(x, dtype=float))
    if v.size == 1:
        return np.full(size, v[0])
    return v


#Black-Scholes

def d1(S: float, K: float, T: float, r: float, q: float, sigma: float) -> float:
    """
    Black-Scholes d1 term.
    """
    return (math.log(S / K) + (r - q + 0.5 * sigma ** 2) * T) / (sigma * math.sqrt(T))


def d2(S: float, K: float, T: float, r: float, q: float, sigma: float) -> float:
    """
    Black-Scholes d2 term.
    """
    return d1(S, K, T, r, q, sigma) - sigma * math.sqrt(T)


def black_scholes_price(S: float, K: float, T: float, r: float, q: float,
                        sigma: float, is_call: bool = True) -> float:
    """
    Closed form European price, continuous rates.
    """
    _d1 = d1(S, K, T, r, q, sigma)
    _d2 = d2(S, K, T, r, q, sigma)
    df_r = math.exp(-r * T)
    df_q = math.exp(-q * T)
    if is_call:
        return S * df_q * N(_d1) - K * df_r * N(_d2)
    return K * df_r * N(-_d2) - S * df_q * N(-_d1)
