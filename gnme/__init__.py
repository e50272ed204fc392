"""Bitsets, Lowdin pairing, linear algebra, integral transforms and NOCI densities."""

__version__ = "0.0.1"
__all__ = ["bitset", "linalg", "lowdin", "eri", "density"]