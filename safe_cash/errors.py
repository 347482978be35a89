"""
Error hierarchy for Safe Cash Tracker.

Every failure the core can raise derives from SafeCashError so callers
(the UI, tests) can catch one type at the boundary.
"""


class SafeCashError(Exception):
    """Base exception for the Safe Cash core."""
    pass
