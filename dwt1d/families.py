from __future__ import annotations
import re
from dataclasses import replace
from typing import Callable, Dict, List, Tuple
import numpy as np
import pywt

from . import tables
from .wavelet import Wavelet, haar, new_orthogonal

# family prefix -> (first order, last order); PyWavelets tables, then dwt1d.tables above them
FAMILY_RANGES: Dict[str, Tuple[int, int]] = {
    "db": (1, 45),
    "sym": (2, 34),
    "coif": (1, 17),
}


def lowpass_table(family: str, order: int) -> np.ndarray:
    """
    Double-precision decomposition low-pass taps for `family`+`order`,
    in the correlation order used by `forward_step` (PyWavelets stores
    them convolution-ordered, so they are reversed here).
    """
    if family not in FAMILY_RANGES:
        raise ValueError(f"Unknown wavelet family: {family!r}")
    lo, hi = FAMILY_RANGES[family]
    if not lo <= order <= hi:
        raise ValueError(f"{family} order must be in [{lo}, {hi}], got {order}")
    if tables.has_table(family, order):
        return tables.lowpass(family, order)
    taps = pywt.Wavelet(f"{family}{order}").dec_lo
    return np.asarray(taps, dtype=np.float64)[::-1].copy()


def _family(family: str, order: int, dtype, centered: bool) -> Wavelet:
    h = lowpass_table(family, order)
    offset = h.shape[0] // 2 if centered else 0
    w = new_orthogonal(h, offset=offset, name=f"{family}{order}")
    # derive in double precision, narrow afterwards
    if np.dtype(dtype) != w.dtype:
        w = w.with_dtype(dtype)
    return w


def daubechies(order: int, dtype=np.float64, centered: bool = False) -> Wavelet:
    """Daubechies wavelet with `order` vanishing moments (L = 2*order)."""
    return _family("db", order, dtype, centered)


def symlet(order: int, dtype=np.float64, centered: bool = False) -> Wavelet:
    """Least-asymmetric Daubechies wavelet (L = 2*order)."""
    return _family("sym", order, dtype, centered)


def coiflet(order: int, dtype=np.float64, centered: bool = False) -> Wavelet:
    """Coiflet wavelet (L = 6*order)."""
    return _family("coif", order, dtype, centered)


_FACTORIES: Dict[str, Callable[..., Wavelet]] = {
    "db": daubechies,
    "sym": symlet,
    "coif": coiflet,
}

_NAME_RE = re.compile(r"^(db|sym|coif)(\d+)$")


def wavelet_by_name(name: str, dtype=np.float64, centered: bool = False) -> Wavelet:
    """'haar', 'dbN', 'symN' or 'coifN' -> Wavelet."""
    key = name.strip().lower()
    if key == "haar":
        w = haar(dtype)
        if centered:
            w = replace(w, offset=w.length // 2)
        return w
    m = _NAME_RE.match(key)
    if m is None:
        raise ValueError(f"Unknown wavelet: {name!r} (expected haar, dbN, symN or coifN)")
    return _FACTORIES[m.group(1)](int(m.group(2)), dtype=dtype, centered=centered)


def available_wavelets() -> List[str]:
    names = ["haar"]
    for family, (lo, hi) in FAMILY_RANGES.items():
        names.extend(f"{family}{k}" for k in range(lo, hi + 1))
    return names
