import numpy as np
import pytest

from dwt1d.dwt import dwt_forward, forward_step
from dwt1d.families import coiflet, daubechies, symlet, wavelet_by_name
from dwt1d.idwt import dwt_inverse, inverse_step
from dwt1d.shared import Operation
from dwt1d.transform import transform
from dwt1d.utils import energy
from dwt1d.wavelet import haar, new_orthogonal

WAVELETS = ["haar", "db1", "db2", "db4", "db10", "db20", "sym2", "sym8", "sym12", "coif1", "coif3", "coif5"]


def _signal(n, dtype=np.float64, seed=0):
    rng = np.random.default_rng(seed)
    return rng.standard_normal(n).astype(dtype)


@pytest.mark.parametrize("name", WAVELETS)
@pytest.mark.parametrize("centered", [False, True])
def test_roundtrip_double(name, centered):
    w = wavelet_by_name(name, centered=centered)
    x = _signal(256)
    for level in (1, 3, 5):
        data = x.copy()
        transform(data, Operation.FORWARD, w, level)
        assert not np.allclose(data, x)
        transform(data, Operation.INVERSE, w, level)
        np.testing.assert_allclose(data, x, rtol=1e-10, atol=1e-10)


@pytest.mark.parametrize("name", ["haar", "db3", "sym6", "coif3"])
def test_roundtrip_single(name):
    w = wavelet_by_name(name, dtype=np.float32)
    x = _signal(128, np.float32, seed=1)
    data = x.copy()
    transform(data, "forward", w, 4)
    transform(data, "inverse", w, 4)
    assert data.dtype == np.float32
    np.testing.assert_allclose(data, x, rtol=1e-5, atol=1e-5)


def test_roundtrip_full_depth_short_signal():
    # filter longer than the coarsest window: taps wrap several times
    w = daubechies(8)
    x = _signal(64, seed=2)
    data = x.copy()
    transform(data, Operation.FORWARD, w, 6)
    transform(data, Operation.INVERSE, w, 6)
    np.testing.assert_allclose(data, x, atol=1e-10)


def test_custom_orthogonal_roundtrip():
    # db2 taps typed in directly, odd offset
    h = [0.48296291314469025, 0.836516303737469, 0.22414386804185735, -0.12940952255092145]
    w = new_orthogonal(h, offset=3)
    x = _signal(32, seed=3)
    data = x.copy()
    transform(data, Operation.FORWARD, w, 2)
    transform(data, Operation.INVERSE, w, 2)
    np.testing.assert_allclose(data, x, atol=1e-12)


@pytest.mark.parametrize("wavelet", [haar(), daubechies(5), symlet(4), coiflet(2, centered=True)])
def test_energy_preserved(wavelet):
    x = _signal(512, seed=4)
    data = x.copy()
    transform(data, Operation.FORWARD, wavelet, 4)
    assert energy(data) == pytest.approx(energy(x), rel=1e-10)


@pytest.mark.parametrize("op", [Operation.FORWARD, Operation.INVERSE])
@pytest.mark.parametrize("wavelet", [haar(), daubechies(4), coiflet(1)])
def test_level_zero_is_noop(op, wavelet):
    x = _signal(10, seed=5)
    data = x.copy()
    transform(data, op, wavelet, 0)
    np.testing.assert_array_equal(data, x)


def test_haar_two_samples():
    a, b = 3.0, -1.25
    data = np.array([a, b])
    transform(data, Operation.FORWARD, haar(), 1)
    np.testing.assert_allclose(data, [(a + b) / np.sqrt(2.0), (a - b) / np.sqrt(2.0)], rtol=1e-14)


def test_haar_layout_three_levels():
    data = np.arange(8, dtype=np.float64)
    transform(data, Operation.FORWARD, haar(), 3)
    s = np.sqrt(2.0)
    # D1 = (x[2i] - x[2i+1]) / sqrt(2)
    np.testing.assert_allclose(data[4:], [-1 / s] * 4)
    # A3 = sum(x) / 2**(3/2)
    np.testing.assert_allclose(data[0], 28.0 / (2.0 * s))


def test_constant_signal_has_no_detail():
    w = daubechies(3)
    data = np.full(64, 2.5)
    transform(data, Operation.FORWARD, w, 3)
    np.testing.assert_allclose(data[8:], 0.0, atol=1e-12)


def test_length_not_divisible_by_level_power():
    data = np.zeros(10)
    with pytest.raises(ValueError):
        transform(data, Operation.FORWARD, haar(), 2)
    with pytest.raises(ValueError):
        transform(data, Operation.INVERSE, haar(), 2)


def test_offset_too_large_for_smallest_window():
    w = new_orthogonal([0.5, 0.5, 0.5, -0.5], offset=9)
    data = np.zeros(8)
    # level 2: smallest window n = 4, L*n = 16 >= 9
    transform(data, Operation.FORWARD, w, 2)
    # level 3: smallest window n = 2, L*n = 8 < 9
    with pytest.raises(ValueError):
        transform(data, Operation.FORWARD, w, 3)


def test_bad_buffers_and_arguments():
    w = haar()
    with pytest.raises(TypeError):
        transform([1.0, 2.0], Operation.FORWARD, w, 1)
    with pytest.raises(TypeError):
        transform(np.arange(4), Operation.FORWARD, w, 1)
    with pytest.raises(ValueError):
        transform(np.zeros((2, 2)), Operation.FORWARD, w, 1)
    with pytest.raises(ValueError):
        transform(np.zeros(4), Operation.FORWARD, w, -1)
    with pytest.raises(ValueError):
        transform(np.zeros(4), "sideways", w, 1)


def test_deterministic():
    w = symlet(7)
    x = _signal(256, seed=6)
    a, b = x.copy(), x.copy()
    transform(a, Operation.FORWARD, w, 5)
    transform(b, Operation.FORWARD, w, 5)
    assert a.tobytes() == b.tobytes()


def test_caller_scratch_matches_allocating_path():
    w = coiflet(2)
    x = _signal(128, seed=7)
    a = x.copy()
    transform(a, Operation.FORWARD, w, 3)

    b = x.copy()
    work = np.full(200, np.nan)
    dwt_forward(b, w, 3, work=work)
    np.testing.assert_array_equal(a, b)

    dwt_inverse(b, w, 3, work=work)
    np.testing.assert_allclose(b, x, atol=1e-10)


def test_caller_scratch_validation():
    w = haar()
    data = np.zeros(8)
    with pytest.raises(ValueError):
        dwt_forward(data, w, 1, work=np.zeros(4))
    with pytest.raises(TypeError):
        dwt_forward(data, w, 1, work=np.zeros(8, dtype=np.float32))
    with pytest.raises(ValueError):
        dwt_forward(data, w, 1, work=data)


def test_only_leading_window_is_touched():
    w = daubechies(2)
    x = _signal(32, seed=8)
    data = x.copy()
    dwt_forward(data, w, 1)
    d1 = data[16:].copy()
    dwt_forward(data[:16], w, 1)
    np.testing.assert_array_equal(data[16:], d1)


def test_forward_step_partial_outputs():
    w = daubechies(3)
    x = _signal(16, seed=9)
    approx = np.empty(8)
    detail = np.empty(8)
    forward_step(w, x, 16, approx, detail)

    only_a = np.empty(8)
    forward_step(w, x, 16, approx=only_a)
    np.testing.assert_array_equal(only_a, approx)

    only_d = np.empty(8)
    forward_step(w, x, 16, detail=only_d)
    np.testing.assert_array_equal(only_d, detail)


def test_forward_step_needs_a_destination():
    with pytest.raises(ValueError):
        forward_step(haar(), np.zeros(4), 4)


def test_forward_step_matches_direct_sum():
    w = new_orthogonal([0.3, -0.2, 0.8, 0.1, 0.05, -0.4], offset=4)
    x = _signal(12, seed=10)
    n, L = 12, w.length
    approx = np.empty(n // 2)
    detail = np.empty(n // 2)
    forward_step(w, x, n, approx, detail)
    for i in range(n // 2):
        k0 = 2 * i + (L * n - w.offset)
        h = sum(w.dec_lo[j] * x[(k0 + j) % n] for j in range(L))
        g = sum(w.dec_hi[j] * x[(k0 + j) % n] for j in range(L))
        assert approx[i] == pytest.approx(h, abs=1e-14)
        assert detail[i] == pytest.approx(g, abs=1e-14)


def test_inverse_step_is_adjoint_of_forward_step():
    w = symlet(3, centered=True)
    n = 16
    x = _signal(n, seed=11)
    y = _signal(n, seed=12)
    fx = np.empty(n)
    forward_step(w, x, n, fx[: n // 2], fx[n // 2:])
    ty = np.empty(n)
    inverse_step(w, y[: n // 2], y[n // 2:], n, ty)
    # <Fx, y> == <x, F^T y>
    assert np.dot(fx, y) == pytest.approx(np.dot(x, ty), abs=1e-12)


def test_inverse_step_rejects_odd_size():
    with pytest.raises(ValueError):
        inverse_step(haar(), np.zeros(2), np.zeros(2), 5, np.zeros(5))
