#High-order Daubechies / Symlet low-pass tables

from __future__ import annotations
from functools import lru_cache
from math import comb
from typing import Dict, List, Tuple
import mpmath
import numpy as np

# orders beyond the tables PyWavelets ships; derived here by spectral factorization
EXTENDED_RANGES: Dict[str, Tuple[int, int]] = {
    "db": (39, 45),
    "sym": (21, 34),
}

_DPS = 80          # working precision (decimal digits) for root finding
_PHASE_GRID = 512  # frequency samples for the symlet phase criterion


def has_table(family: str, order: int) -> bool:
    rng = EXTENDED_RANGES.get(family)
    return rng is not None and rng[0] <= order <= rng[1]


def lowpass(family: str, order: int) -> np.ndarray:
    """
    Double-precision decomposition low-pass taps, correlation order
    (largest taps first for Daubechies, as in db2 = [0.483, 0.837, 0.224, -0.129]).
    Computed once per (family, order) and cached.
    """
    if not has_table(family, order):
        raise ValueError(f"No extended table for {family}{order}")
    return np.array(_lowpass_cached(family, order), dtype=np.float64)


@lru_cache(maxsize=None)
def _lowpass_cached(family: str, order: int) -> Tuple[float, ...]:
    return tuple(float(t) for t in compute_lowpass(family, order))


def compute_lowpass(family: str, order: int) -> list:
    """Spectral factorization at _DPS digits; family "db" (minimum phase) or "sym" (least asymmetric)."""
    if family not in ("db", "sym"):
        raise ValueError(f"Unknown wavelet family: {family!r}")
    with mpmath.workdps(_DPS):
        groups = _root_groups(order)
        if family == "db":
            choice = [0] * len(groups)
        else:
            choice = _least_asymmetric(groups)
        roots: List[mpmath.mpc] = []
        for (inside, outside), c in zip(groups, choice):
            roots.extend(outside if c else inside)
        return _expand(roots, order)


def _root_groups(N: int) -> List[Tuple[list, list]]:
    """
    Zeros of Q(z) in |H(z)|^2 = |(1+z)/2|^(2N) * P(y),
      P(y) = sum_k C(N-1+k, k) y^k,   y = (2 - z - 1/z) / 4
    grouped so that each group is chosen as a whole (inside or outside
    the unit circle) and the filter keeps real taps:
      real y       -> (z,)       or (1/z,)
      complex pair -> (z, z*)    or (1/z, 1/z*)
    """
    if N == 1:
        return []
    # highest power first
    coeffs = [comb(N - 1 + k, k) for k in reversed(range(N))]
    ys = mpmath.polyroots(coeffs, maxsteps=2000, extraprec=4 * _DPS)

    tol = mpmath.mpf(10) ** (-_DPS // 2)
    groups = []
    for y in sorted(ys, key=lambda v: (float(mpmath.re(v)), float(mpmath.im(v)))):
        y = mpmath.mpc(y)
        if mpmath.im(y) < -tol:
            continue  # the conjugate carries this pair
        b = 1 - 2 * y
        z = b - mpmath.sqrt(b * b - 1)
        if abs(z) > 1:
            z = 1 / z
        if abs(mpmath.im(y)) <= tol:
            z = mpmath.re(z)
            groups.append(([z], [1 / z]))
        else:
            groups.append(([z, mpmath.conj(z)], [1 / z, mpmath.conj(1 / z)]))
    return groups


def _expand(roots: list, N: int) -> List[mpmath.mpf]:
    """Coefficients of (x+1)^N * prod(x - r), highest power first, scaled to sum sqrt(2)."""
    poly = [mpmath.mpc(1)]
    for r in list(roots) + [mpmath.mpf(-1)] * N:
        nxt = poly + [mpmath.mpc(0)]
        for i, c in enumerate(poly):
            nxt[i + 1] -= r * c
        poly = nxt
    taps = [mpmath.re(c) for c in poly]
    scale = mpmath.sqrt(2) / mpmath.fsum(taps)
    return [t * scale for t in taps]


@lru_cache(maxsize=1)
def _phase_basis() -> Tuple[np.ndarray, np.ndarray]:
    w = np.linspace(0.0, np.pi, _PHASE_GRID + 2)[1:-1]
    A = np.stack([np.ones_like(w), w], axis=1)
    proj = np.eye(w.shape[0]) - A @ np.linalg.pinv(A)
    return w, proj


def _phase(roots: np.ndarray, w: np.ndarray) -> np.ndarray:
    e = np.exp(1j * w)
    ph = np.zeros_like(w)
    for r in roots:
        ph += np.unwrap(np.angle(e - r))
    return ph


def _least_asymmetric(groups) -> List[int]:
    """
    Exhaustive search over inside/outside choices per group for the
    smallest phase nonlinearity. The phase is additive over zeros, so
    each choice contributes a fixed residual vector. The first group is
    pinned inside; flipping every group only time-reverses the filter.
    """
    m = len(groups)
    if m <= 1:
        return [0] * m
    w, proj = _phase_basis()

    def resid(zs):
        return proj @ _phase(np.array([complex(z) for z in zs]), w)

    inside = np.array([resid(g[0]) for g in groups])
    outside = np.array([resid(g[1]) for g in groups])
    base = inside.sum(axis=0)
    diff = outside[1:] - inside[1:]

    best_code, best_score = 0, np.inf
    total = 1 << (m - 1)
    shifts = np.arange(m - 1, dtype=np.int64)
    for start in range(0, total, 4096):
        codes = np.arange(start, min(start + 4096, total), dtype=np.int64)
        bits = ((codes[:, np.newaxis] >> shifts) & 1).astype(np.float64)
        score = np.max(np.abs(base + bits @ diff), axis=1)
        k = int(np.argmin(score))
        if score[k] < best_score:
            best_code, best_score = int(codes[k]), float(score[k])
    return [0] + [(best_code >> i) & 1 for i in range(m - 1)]
