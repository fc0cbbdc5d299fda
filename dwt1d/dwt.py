#Periodic 1-D DWT (analysis)

from __future__ import annotations
from typing import Optional
import numpy as np

from .shared import check_step, prepare
from .wavelet import Wavelet


def _tap_indices(wavelet: Wavelet, n: int) -> np.ndarray:
    """
    (L, n/2) table of signal indices: row j holds (k0 + j) mod n for
    every output index i, with k0 = 2*i + (L*n - offset).
    """
    L = wavelet.length
    k0 = 2 * np.arange(n >> 1, dtype=np.int64) + (L * n - wavelet.offset)
    return (k0[np.newaxis, :] + np.arange(L, dtype=np.int64)[:, np.newaxis]) % n


def forward_step(wavelet: Wavelet, data: np.ndarray, n: int,
                 approx: Optional[np.ndarray] = None,
                 detail: Optional[np.ndarray] = None) -> None:
    """
    One level of the forward transform over data[:n] (circular extension):

      approx[i] = sum_j dec_lo[j] * data[(2i + L*n - offset + j) mod n]
      detail[i] = sum_j dec_hi[j] * data[(2i + L*n - offset + j) mod n]

    for i in 0..n/2. Either destination may be None, not both. Outputs
    must not alias data[:n].
    """
    if approx is None and detail is None:
        raise ValueError("forward_step needs an approx or a detail destination")
    check_step(wavelet, n)
    nh = n >> 1
    idx = _tap_indices(wavelet, n)

    # taps accumulated in order j = 0..L-1 for every output index
    if approx is not None:
        h = approx[:nh]
        h[:] = 0
        for j in range(wavelet.length):
            h += wavelet.dec_lo[j] * data[idx[j]]
    if detail is not None:
        g = detail[:nh]
        g[:] = 0
        for j in range(wavelet.length):
            g += wavelet.dec_hi[j] * data[idx[j]]


def dwt_forward(data: np.ndarray, wavelet: Wavelet, level: int,
                work: Optional[np.ndarray] = None) -> np.ndarray:
    """
    In-place multi-level forward DWT. After the call data holds
    [A_level | D_level | ... | D_1]. `work` is optional caller-owned
    scratch (len >= len(data), same dtype); one is allocated otherwise.
    Returns data.
    """
    work = prepare(data, wavelet, level, work)
    if work is None:
        return data

    N = data.shape[0]
    for i in range(level):
        n = N >> i
        nh = n >> 1
        forward_step(wavelet, data, n, approx=work[:nh], detail=work[nh:n])
        data[:n] = work[:n]
    return data
