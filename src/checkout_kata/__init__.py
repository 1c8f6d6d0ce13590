"""
Checkout Kata Package

Supermarket checkout pricing with per-item unit prices and bulk specials.
Resolves a string of item letters into a total using the Tally → Rule → Total pipeline.
"""

__version__ = "1.0.0"
