from __future__ import annotations
from typing import Union
import numpy as np

from .dwt import dwt_forward
from .idwt import dwt_inverse
from .shared import Operation
from .wavelet import Wavelet


def transform(data: np.ndarray, operation: Union[Operation, str],
              wavelet: Wavelet, level: int) -> None:
    """
    Multi-level periodic DWT of `data`, in place.

    len(data) must be divisible by 2**level. Forward replaces the signal
    with [A_level | D_level | ... | D_1]; inverse expects that layout and
    restores the signal. level == 0 leaves data untouched. One scratch
    buffer of len(data) is allocated per call; use dwt_forward/dwt_inverse
    with `work=` to supply your own.
    """
    op = Operation.parse(operation)
    if op is Operation.FORWARD:
        dwt_forward(data, wavelet, level)
    else:
        dwt_inverse(data, wavelet, level)
