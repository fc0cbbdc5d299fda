#Inverse periodic 1-D DWT (synthesis)

from __future__ import annotations
from typing import Optional
import numpy as np

from .dwt import _tap_indices
from .shared import check_step, prepare
from .wavelet import Wavelet


def inverse_step(wavelet: Wavelet, approx: np.ndarray, detail: np.ndarray,
                 n: int, work: np.ndarray) -> None:
    """
    One level of the inverse transform: rebuild n samples into work[:n]
    from approx[:n/2] and detail[:n/2].

      work[(2i + L*n - offset + j) mod n] += rec_lo[L-1-j] * approx[i]
                                           + rec_hi[L-1-j] * detail[i]

    The reconstruction filters are the time-reversed analysis filters, so
    this is the adjoint of `forward_step`. work must not alias the inputs.
    """
    check_step(wavelet, n)
    nh = n >> 1
    L = wavelet.length
    idx = _tap_indices(wavelet, n)
    a = approx[:nh]
    d = detail[:nh]

    out = work[:n]
    out[:] = 0
    for j in range(L):
        # entries of idx[j] are distinct (2i mod n), so fancy += is safe
        out[idx[j]] += wavelet.rec_lo[L - 1 - j] * a + wavelet.rec_hi[L - 1 - j] * d


def dwt_inverse(data: np.ndarray, wavelet: Wavelet, level: int,
                work: Optional[np.ndarray] = None) -> np.ndarray:
    """
    In-place multi-level inverse of `dwt_forward`. Expects data packed as
    [A_level | D_level | ... | D_1]. Returns data.
    """
    work = prepare(data, wavelet, level, work)
    if work is None:
        return data

    N = data.shape[0]
    for i in reversed(range(level)):
        n = N >> i
        nh = n >> 1
        inverse_step(wavelet, data[:nh], data[nh:n], n, work)
        data[:n] = work[:n]
    return data
