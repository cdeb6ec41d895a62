"""
Bill Insight - Source Package

Deterministic computation core for utility-bill insight: explains a
month-over-month bill change, recommends one way to save and assigns a
loyalty tier.

DESIGN PRINCIPLES:
1. Pure functions of one immutable BillInput
2. Ordered rule tables, first match wins
3. Every policy constant is configuration
4. Exact money arithmetic
"""

__version__ = "1.0.0"
__author__ = "Bill Insight Team"
