import numpy as np
import pytest

from gnme.linalg import adjoint_matrix, gen_eig_sym, orthogonalisation_matrix


def _spd(n, seed, complex_=False):
    rng = np.random.default_rng(seed)
    a = rng.normal(size=(n, n))
    if complex_:
        a = a + 1j * rng.normal(size=(n, n))
    return a.conj().T @ a + np.eye(n)


@pytest.mark.parametrize("complex_", [False, True])
def test_orthogonalisation_full_rank(complex_):
    s = _spd(5, 1, complex_)
    x = orthogonalisation_matrix(s, 1e-8)
    assert x.shape == (5, 5)
    assert np.allclose(x.conj().T @ s @ x, np.eye(5))


def test_orthogonalisation_removes_null_space():
    rng = np.random.default_rng(2)
    b = rng.normal(size=(5, 3))
    s = b @ b.T
    x = orthogonalisation_matrix(s, 1e-8)
    assert x.shape == (5, 3)
    assert np.allclose(x.T @ s @ x, np.eye(3))


def test_orthogonalisation_rejects_non_square():
    with pytest.raises(ValueError):
        orthogonalisation_matrix(np.ones((2, 3)), 1e-8)


def test_orthogonalisation_all_null():
    with pytest.raises(ValueError):
        orthogonalisation_matrix(np.zeros((3, 3)), 1e-8)


@pytest.mark.parametrize("complex_", [False, True])
def test_gen_eig_sym_solves_problem(complex_):
    s = _spd(4, 3, complex_)
    h = _spd(4, 4, complex_) - 3 * np.eye(4)
    eigval, eigvec, x = gen_eig_sym(h, s)
    assert np.all(np.diff(eigval) >= 0)
    assert np.allclose(h @ eigvec, s @ eigvec * eigval)
    assert np.allclose(eigvec.conj().T @ s @ eigvec, np.eye(4))
    assert np.allclose(x.conj().T @ s @ x, np.eye(4))


def test_gen_eig_sym_identity_overlap():
    h = _spd(4, 5)
    eigval, _, _ = gen_eig_sym(h, np.eye(4))
    assert np.allclose(eigval, np.linalg.eigvalsh(h))


def test_gen_eig_sym_shape_mismatch():
    with pytest.raises(ValueError):
        gen_eig_sym(np.eye(3), np.eye(4))


@pytest.mark.parametrize("complex_", [False, True])
def test_adjoint_invertible(complex_):
    rng = np.random.default_rng(6)
    m = rng.normal(size=(4, 4))
    if complex_:
        m = m + 1j * rng.normal(size=(4, 4))
    a, det, nzero = adjoint_matrix(m)
    assert nzero == 0
    assert np.isclose(det, np.linalg.det(m))
    assert np.allclose(a, np.linalg.det(m) * np.linalg.inv(m))


def test_adjoint_rank_deficient_by_one():
    rng = np.random.default_rng(7)
    m = rng.normal(size=(4, 3)) @ rng.normal(size=(3, 4))
    a, det, nzero = adjoint_matrix(m, 1e-10)
    assert nzero == 1
    assert abs(det) < 1e-10
    assert np.allclose(m @ a, 0, atol=1e-10)
    assert np.allclose(a @ m, 0, atol=1e-10)
    eps = 1e-7
    shifted = m + eps * np.eye(4)
    approx = np.linalg.det(shifted) * np.linalg.inv(shifted)
    assert np.allclose(a, approx, atol=1e-4)
    assert np.linalg.norm(a) > 1e-6


def test_adjoint_rank_deficient_by_two():
    rng = np.random.default_rng(8)
    m = rng.normal(size=(4, 2)) @ rng.normal(size=(2, 4))
    a, _, nzero = adjoint_matrix(m, 1e-10)
    assert nzero == 2
    assert np.array_equal(a, np.zeros((4, 4)))


def test_adjoint_rejects_non_square():
    with pytest.raises(ValueError):
        adjoint_matrix(np.ones((3, 2)))