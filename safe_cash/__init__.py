"""
Safe Cash Tracker - Source Package

A multi-store cash ledger: each store keeps its own safe, its own
employees and its own transaction history.

DESIGN PRINCIPLES:
1. Balance is always derived, never stored
2. Transactions are append-only
3. Every entry is attributed to an employee and a submitter
4. Anyone may see a balance, only admins see the ledger
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Safe Cash Team"
