"""
flipscore: a scorekeeping aid for Flip 7.

Tracks cumulative scores across rounds, ranks players live, keeps a short
undo history and saves the scoreboard between sessions.
"""

__version__ = "0.1.0"
