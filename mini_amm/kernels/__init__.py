"""
Kernel layer.

This package groups the deterministic, integer-only kernels used by the AMM core.
`mini_amm/kernels/python/` contains the production Python kernels; the core wraps
them and maps their built-in exceptions onto the AMM error taxonomy.
"""
