# gnme

Building blocks for evaluating matrix elements between non-orthogonal Slater
determinants, built on NumPy. Real and complex arrays are both accepted.

## Install

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Modules

### `gnme.bitset`

`Bitset` holds the occupation string of a determinant. Bits are stored most
significant first (`str(b)` reads left to right), while orbital indices count
from the right, orbital 0 being the least significant bit.

- `Bitset(bits)` from a sequence of 0/1 values; `Bitset.from_int(n, size)`
  from an integer (raises `ValueError` if `n` is negative or too large).
- `&`, `|`, `^` on bitsets of equal length, `int(b)`, `len(b)`, `==`,
  `b.bits`, `b.copy()`.
- `flip(i)` toggles orbital `i`; `count()` counts all set bits and
  `count(lo, hi)` those of orbitals `lo <= i < hi`.
- `excitation(other)` returns an `(n, 2)` array of `(hole, particle)` rows and
  the sign of the excitation; `parity(other)` returns only the sign.
- `occ()` gives the occupied orbital indices in ascending order.
- `next_fci()` steps to the next configuration in lexicographic order and
  returns `False` (after wrapping round to the first) when there is none.

`fci_bitset_list(nelec, norb)` lists every configuration of `nelec` electrons
in `norb` orbitals.

### `gnme.linalg`

- `orthogonalisation_matrix(m, thresh)` – canonical orthogonalisation `X`
  with `X^H M X = 1`, dropping eigenvalues not above `thresh`.
- `gen_eig_sym(m, s, thresh=1e-8)` – solves `M v = e S v`; returns
  `(eigval, eigvec, x)` with eigenvalues ascending.
- `adjoint_matrix(m, thresh=1e-16)` – adjugate through the SVD; returns
  `(a, det, nzero)`. With two or more zero singular values the adjugate is
  the zero matrix.

### `gnme.lowdin`

- `lowdin_pair(cw, cx, metric, thresh=1e-10)` – returns transformed copies
  `(cw, cx, sxx)` whose overlap `cw^H metric cx` is diagonal, with that
  diagonal. The inputs are not modified.
- `reduced_overlap(sxx, thresh=1e-8)` – returns a `ReducedOverlap` with
  `inv_sxx` (inverse overlaps, 1 where the overlap is zero), `value` (product
  of the non-zero overlaps), `zeros` (their positions) and `nzeros`.

### `gnme.eri`

AO integrals are passed as an `(n*n, n*n)` matrix holding `(pq|rs)` at row
`p*n+q`, column `r*n+s`.

- `eri_ao2mo_split(c1, c2, c3, c4, ii_ao, antisym=False)` – returns Coulomb
  and exchange parts `(j, k)`, each `(d1*d2, d3*d4)`; `k` is zero unless
  `antisym` is true.
- `eri_ao2mo(c1, c2, c3, c4, ii_ao, antisym=False)` – returns `j + k`.

### `gnme.density`

Orbital coefficients are a stack `c[state]`, one matrix per reference
determinant, with one NOCI coefficient per state in `anoci`.

- `rscf_noci_density(c, anoci, metric, nelec)` – restricted references;
  state pairs with a zero paired overlap contribute nothing.
- `uscf_noci_spin_density(c, anoci, metric, nmo, nalpha, nbeta)` – returns
  `(pa, pb)` for unrestricted references, alpha orbitals in the first `nmo`
  columns and beta orbitals after them.
- `uscf_noci_density(...)` – same arguments, returns `pa + pb`.
- `gscf_noci_density(c, anoci, metric, nelec)` – generalised references with
  `2*nbsf` rows, using the block-diagonal spin metric built from `metric`.

## Example

```python
import numpy as np
from gnme.bitset import fci_bitset_list
from gnme.lowdin import lowdin_pair, reduced_overlap

configs = fci_bitset_list(2, 4)
print(len(configs))          # 6
print(configs[0].occ())      # [0 1]

rng = np.random.default_rng(0)
cw, cx = rng.standard_normal((2, 4, 2))
cw, cx, sxx = lowdin_pair(cw, cx, np.eye(4))
print(np.allclose(cw.T @ cx, np.diag(sxx)))  # True
print(reduced_overlap(sxx).value)
```

## What this package does not do

It provides only the helpers above. It has no engine that evaluates
Hamiltonian matrix elements or reduced density matrices between excited
determinants, reads no integral or orbital files, and has no command-line
interface.