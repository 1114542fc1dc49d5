"""
Integer kernels for the constant-product pool.

Pure functions over non-negative ints with typed results. Every value is
range-checked against the u64/u128 width it would occupy in a persisted pool
record, and every rounding step favors the pool.
"""
