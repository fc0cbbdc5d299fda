from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional
import numpy as np

from .wavelet import Wavelet


class Operation(Enum):
    FORWARD = "forward"
    INVERSE = "inverse"

    @classmethod
    def parse(cls, op) -> "Operation":
        if isinstance(op, cls):
            return op
        try:
            return cls(str(op).lower())
        except ValueError:
            raise ValueError(f"Unknown operation: {op!r} (expected 'forward' or 'inverse')") from None


@dataclass(frozen=True)
class BandRange:
    start: int
    stop: int

    @property
    def size(self) -> int:
        return self.stop - self.start

    def slice(self) -> slice:
        return slice(self.start, self.stop)


def band_ranges(n: int, levels: int) -> Dict[str, BandRange]:
    """
    Returns ranges for A{levels} and D{l}, l=levels..1, in the packed
    layout produced by the forward transform:
      [A_levels | D_levels | D_levels-1 | ... | D_1]
    """
    check_length(n, levels)
    ranges: Dict[str, BandRange] = {}
    m = n
    for l in range(1, levels + 1):
        half = m // 2
        ranges[f"D{l}"] = BandRange(half, m)
        m = half
    ranges[f"A{levels}"] = BandRange(0, m)
    return ranges


def check_length(n: int, levels: int) -> None:
    if levels < 0:
        raise ValueError(f"level must be >= 0, got {levels}")
    if n % (1 << levels) != 0:
        raise ValueError(f"length {n} is not divisible by 2**level = {1 << levels}")


def check_offset(wavelet: Wavelet, n: int) -> None:
    # periodic index base L*n - offset must stay non-negative
    if wavelet.length * n < wavelet.offset:
        raise ValueError(
            f"offset {wavelet.offset} exceeds L*n = {wavelet.length}*{n} for {wavelet.name}"
        )


def check_buffer(data: np.ndarray, name: str = "data") -> None:
    if not isinstance(data, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(data).__name__}")
    if data.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {data.shape}")
    if not np.issubdtype(data.dtype, np.floating):
        raise TypeError(f"{name} dtype must be floating, got {data.dtype}")


def check_step(wavelet: Wavelet, n: int) -> None:
    if n <= 0 or n % 2:
        raise ValueError(f"step size must be even and positive, got {n}")
    check_offset(wavelet, n)


def prepare(data: np.ndarray, wavelet: Wavelet, level: int,
            work: Optional[np.ndarray] = None) -> Optional[np.ndarray]:
    """
    Validate a multi-level call and return the scratch buffer to use:
    `work` itself if given, a new zero buffer otherwise, None for level 0.
    """
    check_buffer(data)
    n = data.shape[0]
    check_length(n, level)
    if level == 0:
        return None
    # smallest window is visited last (forward) / first (inverse)
    check_step(wavelet, n >> (level - 1))

    if work is None:
        return np.zeros(n, dtype=data.dtype)
    check_buffer(work, "work")
    if work.shape[0] < n:
        raise ValueError(f"work buffer too small: {work.shape[0]} < {n}")
    if work.dtype != data.dtype:
        raise TypeError(f"work dtype {work.dtype} does not match data dtype {data.dtype}")
    if np.shares_memory(work, data):
        raise ValueError("work buffer must not overlap data")
    return work
