"""
2D minimum bounding rectangle algebra.
"""

__version__ = "0.1.0"
