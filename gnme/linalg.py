"""Dense linear-algebra helpers for non-orthogonal determinants."""

from __future__ import annotations

import numpy as np


def _adjoint(a: np.ndarray) -> np.ndarray:
    return a.conj().T


def _check_square(m: np.ndarray, name: str) -> None:
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"{name} must be a square matrix, got shape {m.shape}")


def orthogonalisation_matrix(m, thresh: float) -> np.ndarray:
    """Canonical orthogonalisation matrix ``X`` with ``X^H M X = 1``.

    Eigenvectors of the Hermitian matrix ``m`` with eigenvalues not above
    ``thresh`` are discarded, so ``X.shape[1]`` is the non-null dimension.
    """
    m = np.asarray(m)
    _check_square(m, "M")
    eigval, eigvec = np.linalg.eigh(m)
    null_dim = int(np.count_nonzero(np.cumprod(eigval <= thresh)))
    if null_dim == eigval.size:
        raise ValueError("orthogonalisation_matrix: matrix has no non-null space")
    return eigvec[:, null_dim:] * (1.0 / np.sqrt(eigval[null_dim:]))


def gen_eig_sym(m, s, thresh: float = 1e-8) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Solve ``M v = e S v`` for Hermitian ``M`` and overlap ``S``.

    Returns ``(eigval, eigvec, x)`` with eigenvalues in ascending order,
    eigenvectors as columns and ``x`` the orthogonalisation matrix of ``S``.
    """
    m = np.asarray(m)
    s = np.asarray(s)
    _check_square(m, "M")
    _check_square(s, "S")
    if m.shape != s.shape:
        raise ValueError("gen_eig_sym: M and S have different shapes")
    x = orthogonalisation_matrix(s, thresh)
    eigval, eigvec = np.linalg.eigh(_adjoint(x) @ m @ x)
    eigvec = x @ eigvec
    order = np.argsort(eigval, kind="stable")
    return eigval[order], eigvec[:, order], x


def adjoint_matrix(m, thresh: float = 1e-16):
    """Adjugate of a square matrix computed through its SVD.

    Returns ``(a, det, nzero)``: the adjugate, the determinant and the number
    of singular values not above ``thresh``.  With two or more such values
    the adjugate is the zero matrix.
    """
    m = np.asarray(m)
    _check_square(m, "M")
    dtype = np.result_type(m.dtype, float)
    u, sv, vh = np.linalg.svd(m)
    v = _adjoint(vh)

    red_det = np.linalg.det(u) * np.linalg.det(vh)
    det = red_det * np.prod(sv)
    nonzero = np.abs(sv) > thresh
    red_det = red_det * np.prod(sv[nonzero])
    zeros = np.flatnonzero(~nonzero)

    if zeros.size == 0:
        a = det * ((v * (1.0 / sv)) @ _adjoint(u))
    elif zeros.size == 1:
        z = zeros[0]
        a = red_det * np.outer(v[:, z], u[:, z].conj())
    else:
        a = np.zeros(m.shape, dtype=dtype)
    return a.astype(dtype, copy=False), dtype.type(det), int(zeros.size)