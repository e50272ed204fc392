"""Lowdin pairing of bra and ket orbitals."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ReducedOverlap:
    """Inverse paired overlaps, their non-zero product and the zero positions."""

    inv_sxx: np.ndarray
    value: complex | float
    zeros: np.ndarray

    @property
    def nzeros(self) -> int:
        return int(self.zeros.size)


def lowdin_pair(cw, cx, metric, thresh: float = 1e-10):
    """Biorthogonalise bra orbitals ``cw`` and ket orbitals ``cx``.

    Returns ``(cw, cx, sxx)``: transformed copies of the orbitals whose
    overlap ``cw^H metric cx`` is diagonal, and that diagonal.  The inputs
    are left unchanged.
    """
    if thresh <= 0:
        raise ValueError("lowdin_pair: threshold must be positive")
    cw = np.asarray(cw)
    cx = np.asarray(cx)
    metric = np.asarray(metric)
    dtype = np.result_type(cw.dtype, cx.dtype, float)
    cw = np.array(cw, dtype=dtype)
    cx = np.array(cx, dtype=dtype)

    swx = cw.conj().T @ metric @ cx
    off_diagonal = swx - np.diag(np.diag(swx))
    if off_diagonal.size and np.abs(off_diagonal).max() > thresh:
        u, _, vh = np.linalg.svd(swx)
        cw = cw @ u
        cx = cx @ vh.conj().T
        cw[:, 0] *= np.linalg.det(u.conj().T)
        cx[:, 0] *= np.linalg.det(vh)
        swx = cw.conj().T @ metric @ cx

    return cw, cx, np.diag(swx).copy()


def reduced_overlap(sxx, thresh: float = 1e-8) -> ReducedOverlap:
    """Inverse paired overlaps and the product of the non-zero ones.

    Entries with magnitude not above ``thresh`` count as zeros; their
    inverse is set to one.
    """
    if thresh <= 0:
        raise ValueError("reduced_overlap: threshold must be positive")
    sxx = np.asarray(sxx)
    dtype = np.result_type(sxx.dtype, float)
    nonzero = np.abs(sxx) > thresh
    inv = np.ones(sxx.shape, dtype=dtype)
    inv[nonzero] = 1.0 / sxx[nonzero]
    value = dtype.type(np.prod(sxx[nonzero]))
    return ReducedOverlap(inv_sxx=inv, value=value, zeros=np.flatnonzero(~nonzero))