"""
Personal Finance Tracker - Source Package

A single-user tracker for income and expense transactions, monthly
category budgets and savings goals.

DESIGN PRINCIPLES:
1. Records are validated before they enter a collection
2. Every dashboard figure is derived from the records, never stored
3. A failed save is logged, never shown as an error
4. Storage layer is swappable
"""

__version__ = "1.0.0"
