"""Density matrices of non-orthogonal configuration interaction wave functions.

Orbital coefficients are given as a stack ``c[state]`` of coefficient
matrices, one per reference determinant.
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from .lowdin import lowdin_pair, reduced_overlap


def _prepare(c, anoci, metric):
    c = np.asarray(c)
    anoci = np.asarray(anoci)
    metric = np.asarray(metric)
    if c.ndim != 3:
        raise ValueError("noci_density: orbital coefficients must be a stack of matrices")
    if anoci.shape != (c.shape[0],):
        raise ValueError("noci_density: one NOCI coefficient is needed per state")
    if metric.ndim != 2 or metric.shape[0] != metric.shape[1]:
        raise ValueError("noci_density: metric must be a square matrix")
    dtype = np.result_type(c.dtype, anoci.dtype, float)
    return c.astype(dtype, copy=False), anoci.astype(dtype, copy=False), metric, dtype


def _state_pairs(nstates: int) -> Iterator[tuple[int, int]]:
    for iw in range(nstates):
        for ix in range(iw, nstates):
            yield iw, ix


def _accumulate(p: np.ndarray, pwx: np.ndarray, iw: int, ix: int) -> None:
    p += pwx
    if iw != ix:
        p += pwx.conj().T


def rscf_noci_density(c, anoci, metric, nelec: int) -> np.ndarray:
    """Total NOCI density matrix for restricted references.

    ``c`` has shape ``(nstates, nbsf, nmo)``; the first ``nelec`` columns of
    each state are doubly occupied.
    """
    c, anoci, metric, dtype = _prepare(c, anoci, metric)
    nbsf = c.shape[1]
    if metric.shape[0] != nbsf:
        raise ValueError("rscf_noci_density: metric does not match the basis size")

    p = np.zeros((nbsf, nbsf), dtype=dtype)
    for iw, ix in _state_pairs(c.shape[0]):
        cw, cx, sxx = lowdin_pair(c[iw][:, :nelec], c[ix][:, :nelec], metric)
        ov = reduced_overlap(sxx)
        if ov.nzeros:
            continue
        weight = 2.0 * ov.value * ov.value * np.conj(anoci[iw]) * anoci[ix]
        pwx = (cx * ov.inv_sxx) @ cw.conj().T
        _accumulate(p, weight * pwx, iw, ix)
    return p


def uscf_noci_spin_density(c, anoci, metric, nmo: int, nalpha: int, nbeta: int):
    """Alpha and beta NOCI density matrices for unrestricted references.

    ``c`` has shape ``(nstates, nbsf, 2*nmo)`` with the alpha orbitals in the
    first ``nmo`` columns and the beta orbitals in the rest.
    """
    c, anoci, metric, dtype = _prepare(c, anoci, metric)
    nbsf = c.shape[1]
    if c.shape[2] != 2 * nmo:
        raise ValueError("uscf_noci_density: expected 2*nmo orbital columns")
    if metric.shape[0] != nbsf:
        raise ValueError("uscf_noci_density: metric does not match the basis size")

    pa = np.zeros((nbsf, nbsf), dtype=dtype)
    pb = np.zeros((nbsf, nbsf), dtype=dtype)
    for iw, ix in _state_pairs(c.shape[0]):
        cw_a, cx_a, sxx_a = lowdin_pair(c[iw][:, :nalpha], c[ix][:, :nalpha], metric)
        cw_b, cx_b, sxx_b = lowdin_pair(
            c[iw][:, nmo : nmo + nbeta], c[ix][:, nmo : nmo + nbeta], metric
        )
        ov_a = reduced_overlap(sxx_a)
        ov_b = reduced_overlap(sxx_b)

        pwx_a = np.zeros((nbsf, nbsf), dtype=dtype)
        pwx_b = np.zeros((nbsf, nbsf), dtype=dtype)
        nzeros = ov_a.nzeros + ov_b.nzeros
        if nzeros == 0:
            pwx_a = (cx_a * ov_a.inv_sxx) @ cw_a.conj().T
            pwx_b = (cx_b * ov_b.inv_sxx) @ cw_b.conj().T
        elif nzeros == 1:
            if ov_a.nzeros == 1:
                z = ov_a.zeros[0]
                pwx_a = np.outer(cx_a[:, z], cw_a[:, z].conj())
            else:
                z = ov_b.zeros[0]
                pwx_b = np.outer(cx_b[:, z], cw_b[:, z].conj())

        # Only the beta reduced overlap enters the weight.
        weight = ov_b.value * np.conj(anoci[iw]) * anoci[ix]
        _accumulate(pa, weight * pwx_a, iw, ix)
        _accumulate(pb, weight * pwx_b, iw, ix)
    return pa, pb


def uscf_noci_density(c, anoci, metric, nmo: int, nalpha: int, nbeta: int) -> np.ndarray:
    """Total (alpha plus beta) NOCI density matrix for unrestricted references."""
    pa, pb = uscf_noci_spin_density(c, anoci, metric, nmo, nalpha, nbeta)
    return pa + pb


def gscf_noci_density(c, anoci, metric, nelec: int) -> np.ndarray:
    """NOCI density matrix for generalised references.

    ``c`` has shape ``(nstates, 2*nbsf, nmo)`` where ``nbsf`` is the size of
    the spatial ``metric``; the first ``nelec`` columns are occupied.
    """
    c, anoci, metric, dtype = _prepare(c, anoci, metric)
    nbsf = metric.shape[0]
    if c.shape[1] != 2 * nbsf:
        raise ValueError("gscf_noci_density: expected 2*nbsf orbital rows")
    metric_ghf = np.kron(np.eye(2), metric)

    p = np.zeros((2 * nbsf, 2 * nbsf), dtype=dtype)
    for iw, ix in _state_pairs(c.shape[0]):
        cw, cx, sxx = lowdin_pair(c[iw][:, :nelec], c[ix][:, :nelec], metric_ghf)
        ov = reduced_overlap(sxx)
        if ov.nzeros == 0:
            pwx = (cx * ov.inv_sxx) @ cw.conj().T
        elif ov.nzeros == 1:
            z = ov.zeros[0]
            pwx = np.outer(cx[:, z], cw[:, z].conj())
        else:
            continue
        weight = ov.value * np.conj(anoci[iw]) * anoci[ix]
        _accumulate(p, weight * pwx, iw, ix)
    return p