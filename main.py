from __future__ import annotations
import argparse
import sys
import time
import numpy as np

from dwt1d.dwt import dwt_forward
from dwt1d.families import available_wavelets, wavelet_by_name
from dwt1d.idwt import dwt_inverse
from dwt1d.utils import band_energies, energy, max_level
from dwt1d.wavelet import Wavelet

BENCH_SIZES = (4, 16, 64, 256, 1024, 4096)


def read_signal(path: str, dtype) -> np.ndarray:
    """
    Read a 1-D signal:
      - .npy: any numeric array, flattened
      - text: numbers separated by whitespace and/or commas
    """
    if path.endswith(".npy"):
        arr = np.load(path)
    else:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read().replace(",", " ")
        arr = np.array([float(tok) for tok in text.split()])
    return np.ascontiguousarray(arr, dtype=dtype).ravel()


def _roundtrip(signal: np.ndarray, wavelet: Wavelet, levels: int) -> tuple[np.ndarray, float]:
    """
    Per-signal pipeline:
      forward DWT -> copy coeffs -> inverse DWT
    Returns (coeffs, max_abs_error)
    """
    buf = signal.copy()
    work = np.zeros_like(buf)

    dwt_forward(buf, wavelet, levels, work=work)
    coeffs = buf.copy()

    dwt_inverse(buf, wavelet, levels, work=work)
    err = float(np.max(np.abs(buf - signal))) if signal.size else 0.0
    return coeffs, err


def _bench(wavelet: Wavelet, repeats: int) -> None:
    for size in BENCH_SIZES:
        data = np.full(size, 42.0, dtype=wavelet.dtype)
        work = np.zeros_like(data)
        level = max_level(size, wavelet)
        t0 = time.perf_counter()
        for _ in range(repeats):
            data.fill(42.0)
            dwt_forward(data, wavelet, level, work=work)
        dt = (time.perf_counter() - t0) / repeats
        print(f"[Bench] forward {wavelet.name} n={size:5d} level={level:2d}: {dt * 1e6:10.1f} us/iter")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Periodic 1-D DWT: forward/inverse round-trip of a signal")
    ap.add_argument("input", nargs="?", help="Signal file (.npy or whitespace/comma separated text)")
    ap.add_argument("--wavelet", default="db4", help="haar, dbN, symN or coifN (default: db4)")
    ap.add_argument("--levels", default="3", help="Decomposition levels, or 'max' (default: 3)")
    ap.add_argument("--single", action="store_true", help="Use float32 instead of float64")
    ap.add_argument("--centered", action="store_true", help="Use the centered (offset L/2) filter alignment")
    ap.add_argument("--save-coeffs", default=None, help="Optional path to save forward coefficients (.npy)")
    ap.add_argument("--bench", action="store_true", help="Time forward transforms of constant signals")
    ap.add_argument("--repeats", type=int, default=100, help="Iterations per benchmark size (default: 100)")
    ap.add_argument("--list", action="store_true", help="List available wavelets and exit")
    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.list:
        print(" ".join(available_wavelets()))
        return 0

    dtype = np.float32 if args.single else np.float64
    try:
        wavelet = wavelet_by_name(args.wavelet, dtype=dtype, centered=args.centered)
    except ValueError as e:
        print(f"{e}", file=sys.stderr)
        return 2

    if args.bench:
        _bench(wavelet, args.repeats)
        return 0

    if args.input is None:
        print("an input signal is required unless --list or --bench is given", file=sys.stderr)
        return 2

    try:
        signal = read_signal(args.input, dtype)
    except (OSError, ValueError) as e:
        print(f"Cannot read {args.input}: {e}", file=sys.stderr)
        return 2

    if args.levels == "max":
        levels = max_level(signal.shape[0], wavelet)
    else:
        try:
            levels = int(args.levels)
        except ValueError:
            print(f"Unexpected --levels value: {args.levels}", file=sys.stderr)
            return 2

    print(f"[Input] n={signal.shape[0]}, dtype={signal.dtype}, wavelet={wavelet!r}, levels={levels}")
    try:
        coeffs, err = _roundtrip(signal, wavelet, levels)
    except ValueError as e:
        print(f"{e}", file=sys.stderr)
        return 2

    if levels > 0:
        for name, e in band_energies(coeffs, levels).items():
            print(f"  {name:>4s}: energy={e:.6g}")
    print(f"[Forward] energy in={energy(signal):.6g} out={energy(coeffs):.6g}")

    tol = 1e-5 if args.single else 1e-10
    scale = max(1.0, float(np.max(np.abs(signal)))) if signal.size else 1.0
    ok = err <= tol * scale
    print(f"[Round-trip] {ok}  (max_abs_error={err:.3e}, tol={tol * scale:.1e})")

    if args.save_coeffs:
        np.save(args.save_coeffs, coeffs)
        print(f"[Saved] coefficients -> {args.save_coeffs}")

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
