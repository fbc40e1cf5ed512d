"""
Personal Expenses - Source Package

A minimal, private expense tracker for a single person.

DESIGN PRINCIPLES:
1. All data stays on the user's machine
2. Derived numbers are recomputed from the raw entries on every render
3. Bad input and storage hiccups never crash the page
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Expenses Team"
