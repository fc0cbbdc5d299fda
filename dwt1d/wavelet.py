#Wavelet filter banks

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Sequence
import numpy as np


def _as_filter(taps, dtype) -> np.ndarray:
    arr = np.array(taps, dtype=dtype, copy=True)
    if arr.ndim != 1:
        raise ValueError(f"Filter must be 1-D, got shape {arr.shape}")
    if not np.issubdtype(arr.dtype, np.floating):
        raise TypeError(f"Filter dtype must be floating, got {arr.dtype}")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Wavelet:
    """
    Two-channel filter bank for the periodic DWT.

      offset          alignment shift applied to every tap index
      dec_lo, dec_hi  analysis (decomposition) filters, correlation order
      rec_lo, rec_hi  synthesis (reconstruction) filters, stored
                      time-reversed w.r.t. the analysis pair

    All four arrays share one length L (even) and one floating dtype and
    are read-only, so an instance can be shared between transforms.
    """
    offset: int
    dec_lo: np.ndarray
    dec_hi: np.ndarray
    rec_lo: np.ndarray
    rec_hi: np.ndarray
    name: str = "custom"

    def __post_init__(self):
        dtype = np.asarray(self.dec_lo).dtype
        if not np.issubdtype(dtype, np.floating):
            raise TypeError(f"Wavelet dtype must be floating, got {dtype}")
        for field in ("dec_lo", "dec_hi", "rec_lo", "rec_hi"):
            object.__setattr__(self, field, _as_filter(getattr(self, field), dtype))

        L = self.dec_lo.shape[0]
        if L == 0 or L % 2:
            raise ValueError(f"Filter length must be even and non-zero, got {L}")
        for field in ("dec_hi", "rec_lo", "rec_hi"):
            if getattr(self, field).shape[0] != L:
                raise ValueError(f"{field} has length {getattr(self, field).shape[0]}, expected {L}")
        if int(self.offset) != self.offset or self.offset < 0:
            raise ValueError(f"offset must be a non-negative integer, got {self.offset}")
        object.__setattr__(self, "offset", int(self.offset))

    @property
    def length(self) -> int:
        return self.dec_lo.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self.dec_lo.dtype

    def with_dtype(self, dtype) -> "Wavelet":
        """Same filter bank with taps cast to `dtype` (e.g. float32)."""
        return replace(
            self,
            dec_lo=self.dec_lo.astype(dtype),
            dec_hi=self.dec_hi.astype(dtype),
            rec_lo=self.rec_lo.astype(dtype),
            rec_hi=self.rec_hi.astype(dtype),
        )

    def __repr__(self) -> str:
        return f"Wavelet(name={self.name!r}, length={self.length}, offset={self.offset}, dtype={self.dtype})"


def haar(dtype=np.float64) -> Wavelet:
    """
    Length-2 Haar filter bank, every tap ±1/sqrt(2):
      dec_lo = [+, +]   dec_hi = [+, -]
      rec_lo = [+, +]   rec_hi = [-, +]   (reversed dec_hi)
    Forward of [a, b] gives approx (a+b)/sqrt(2), detail (a-b)/sqrt(2).

    rec_hi is stored time-reversed, not as [+, -]: `inverse_step` reads
    rec_*[L-1-j] at the tap where `forward_step` reads dec_*[j], the same
    convention `new_orthogonal` produces for every other wavelet.
    """
    v = np.asarray(1.0 / np.sqrt(2.0), dtype=dtype)
    return Wavelet(
        offset=0,
        dec_lo=[v, v],
        dec_hi=[v, -v],
        rec_lo=[v, v],
        rec_hi=[-v, v],
        name="haar",
    )


def new_orthogonal(dec_lo: Sequence[float], offset: int = 0, dtype=None,
                   name: Optional[str] = None) -> Wavelet:
    """
    Orthogonal filter bank derived from one decomposition low-pass filter
    (quadrature-mirror relations, exact since only copies and sign flips):

      dec_lo[i] = h[i]
      rec_lo[i] = dec_lo[L-1-i]
      rec_hi[i] = h[i] * (+1 if i even else -1)
      dec_hi[i] = rec_hi[L-1-i]

    The taps are not checked for orthogonality; a wrong table gives a
    wrong but well-defined transform.
    """
    if dtype is None:
        dtype = np.asarray(dec_lo).dtype
        if not np.issubdtype(dtype, np.floating):
            dtype = np.float64
    h = np.array(dec_lo, dtype=dtype, copy=True)
    if h.ndim != 1:
        raise ValueError(f"dec_lo must be 1-D, got shape {h.shape}")

    signs = np.ones(h.shape[0], dtype=dtype)
    signs[1::2] = -1
    rec_hi = h * signs

    return Wavelet(
        offset=offset,
        dec_lo=h,
        dec_hi=rec_hi[::-1],
        rec_lo=h[::-1],
        rec_hi=rec_hi,
        name=name or "orthogonal",
    )
