#Coefficient helpers
from __future__ import annotations
from typing import Dict
import numpy as np

from .shared import band_ranges
from .wavelet import Wavelet


def split_bands(coeffs: np.ndarray, levels: int) -> Dict[str, np.ndarray]:
    """Views of each band (A{levels}, D{levels}..D1) of a packed forward result."""
    R = band_ranges(coeffs.shape[0], levels)
    return {name: coeffs[r.slice()] for name, r in R.items()}


def band_energies(coeffs: np.ndarray, levels: int) -> Dict[str, float]:
    return {name: energy(band) for name, band in split_bands(coeffs, levels).items()}


def energy(x: np.ndarray) -> float:
    """Sum of squares, accumulated in float64."""
    x = np.asarray(x, dtype=np.float64)
    return float(np.dot(x, x))


def max_level(n: int, wavelet: Wavelet) -> int:
    """
    Deepest level usable for a length-n buffer: n divisible by 2**level
    and the offset still within L * (smallest window).
    """
    level = 0
    while n > 0 and n % (1 << (level + 1)) == 0:
        smallest = n >> level
        if wavelet.length * smallest < wavelet.offset:
            break
        level += 1
    return level
