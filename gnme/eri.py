"""Transformation of two-electron integrals from the AO to the MO basis."""

from __future__ import annotations

import numpy as np


def _prepare(c1, c2, c3, c4, ii_ao):
    cs = [np.asarray(c) for c in (c1, c2, c3, c4)]
    ii_ao = np.asarray(ii_ao)
    for c in cs:
        if c.ndim != 2:
            raise ValueError("eri_ao2mo: coefficient arrays must be matrices")
    nbsf = cs[0].shape[0]
    if any(c.shape[0] != nbsf for c in cs):
        raise ValueError("eri_ao2mo: coefficient matrices have different row counts")
    if ii_ao.shape != (nbsf * nbsf, nbsf * nbsf):
        raise ValueError(
            f"eri_ao2mo: AO integrals must have shape {(nbsf * nbsf, nbsf * nbsf)}, "
            f"got {ii_ao.shape}"
        )
    return cs, ii_ao.reshape(nbsf, nbsf, nbsf, nbsf)


def _coulomb(cs, ii4) -> np.ndarray:
    c1, c2, c3, c4 = cs
    return np.einsum(
        "pqrs,pi,qj,rk,sl->ijkl", ii4, c1.conj(), c2, c3.conj(), c4, optimize=True
    )


def eri_ao2mo_split(c1, c2, c3, c4, ii_ao, antisym: bool = False):
    """Coulomb and exchange MO integrals ``(12|34)`` in chemists' notation.

    ``ii_ao`` holds ``(pq|rs)`` at row ``p*n+q`` and column ``r*n+s``.
    Returns ``(j, k)``, both of shape ``(d1*d2, d3*d4)``.  With ``antisym``
    the exchange part is ``k[ij, kl] = -j[il, kj]``; otherwise it is zero.
    """
    cs, ii4 = _prepare(c1, c2, c3, c4, ii_ao)
    d1, d2, d3, d4 = (c.shape[1] for c in cs)
    if antisym and d2 != d4:
        raise ValueError("eri_ao2mo: antisymmetrisation needs equal index 2 and 4 dimensions")
    j4 = _coulomb(cs, ii4)
    if antisym:
        k4 = -j4.transpose(0, 3, 2, 1)
    else:
        k4 = np.zeros_like(j4)
    shape = (d1 * d2, d3 * d4)
    return j4.reshape(shape), k4.reshape(shape)


def eri_ao2mo(c1, c2, c3, c4, ii_ao, antisym: bool = False) -> np.ndarray:
    """MO integrals ``(12|34)``, antisymmetrised when ``antisym`` is true."""
    j, k = eri_ao2mo_split(c1, c2, c3, c4, ii_ao, antisym)
    return j + k