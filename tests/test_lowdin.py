import numpy as np
import pytest

from gnme.lowdin import ReducedOverlap, lowdin_pair, reduced_overlap


def _setup(complex_, seed=11, nbsf=6, nocc=3):
    rng = np.random.default_rng(seed)
    a = rng.normal(size=(nbsf, nbsf))
    metric = a.T @ a + np.eye(nbsf)
    cw = rng.normal(size=(nbsf, nocc))
    cx = rng.normal(size=(nbsf, nocc))
    if complex_:
        cw = cw + 1j * rng.normal(size=(nbsf, nocc))
        cx = cx + 1j * rng.normal(size=(nbsf, nocc))
    return cw, cx, metric


@pytest.mark.parametrize("complex_", [False, True])
def test_pairing_diagonalises_overlap(complex_):
    cw, cx, metric = _setup(complex_)
    cw2, cx2, sxx = lowdin_pair(cw, cx, metric)
    swx = cw2.conj().T @ metric @ cx2
    assert np.allclose(swx, np.diag(sxx), atol=1e-10)


@pytest.mark.parametrize("complex_", [False, True])
def test_pairing_preserves_determinant(complex_):
    cw, cx, metric = _setup(complex_)
    det_before = np.linalg.det(cw.conj().T @ metric @ cx)
    _, _, sxx = lowdin_pair(cw, cx, metric)
    assert np.isclose(np.prod(sxx), det_before)


def test_pairing_preserves_orbital_span():
    cw, cx, metric = _setup(False)
    cw2, cx2, _ = lowdin_pair(cw, cx, metric)
    assert np.linalg.matrix_rank(np.hstack([cw, cw2])) == cw.shape[1]
    assert np.linalg.matrix_rank(np.hstack([cx, cx2])) == cx.shape[1]


def test_pairing_leaves_inputs_unchanged():
    cw, cx, metric = _setup(False)
    cw0, cx0 = cw.copy(), cx.copy()
    lowdin_pair(cw, cx, metric)
    assert np.array_equal(cw, cw0)
    assert np.array_equal(cx, cx0)


def test_already_diagonal_is_untouched():
    cw = np.eye(4)[:, :2]
    cx = 2.0 * np.eye(4)[:, :2]
    cw2, cx2, sxx = lowdin_pair(cw, cx, np.eye(4))
    assert np.array_equal(cw2, cw)
    assert np.array_equal(cx2, cx)
    assert np.array_equal(sxx, np.diag(cw.T @ cx))


def test_lowdin_bad_threshold():
    cw, cx, metric = _setup(False)
    with pytest.raises(ValueError):
        lowdin_pair(cw, cx, metric, thresh=0.0)


def test_reduced_overlap_without_zeros():
    sxx = np.array([2.0, -0.5, 4.0])
    r = reduced_overlap(sxx)
    assert r.nzeros == 0
    assert r.value == pytest.approx(2.0 * -0.5 * 4.0)
    assert np.allclose(r.inv_sxx * sxx, 1.0)


def test_reduced_overlap_with_zero():
    sxx = np.array([2.0, 1e-12, 4.0])
    r = reduced_overlap(sxx)
    assert isinstance(r, ReducedOverlap)
    assert r.nzeros == 1
    assert list(r.zeros) == [1]
    assert r.value == pytest.approx(2.0 * 4.0)
    assert np.allclose(r.inv_sxx, [1 / 2.0, 1.0, 1 / 4.0])


def test_reduced_overlap_complex():
    sxx = np.array([1 + 1j, 0.0, 0.0, 2j])
    r = reduced_overlap(sxx)
    assert r.nzeros == 2
    assert list(r.zeros) == [1, 2]
    assert np.isclose(r.value, (1 + 1j) * 2j)
    assert np.isclose(r.inv_sxx[0] * sxx[0], 1.0)


def test_reduced_overlap_bad_threshold():
    with pytest.raises(ValueError):
        reduced_overlap(np.ones(2), thresh=-1.0)