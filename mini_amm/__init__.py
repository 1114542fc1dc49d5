"""
Minimal two-asset constant-product AMM.
"""

__version__ = "0.1.0"
