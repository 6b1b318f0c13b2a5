"""
Expense Tracker - Source Package

A single-page expense tracker: add, list, filter and delete expenses
for the current session, with a natural-language summary of the list
written by an external service.

DESIGN PRINCIPLES:
1. State changes only through the store
2. Fail visibly, never fatally
3. Every step must be auditable
4. Nothing is persisted
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
