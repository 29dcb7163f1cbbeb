"""
VibeCheck - Source Package

A mood-aware personal ledger. Every expense and income is appended to a
single pipe-delimited text file together with a note and an emoji
describing how the user felt about it.

DESIGN PRINCIPLES:
1. The file is the database
2. Writes replace the file atomically, never in place
3. One corrupt line never hides the rest of the history
4. All file access goes through one serialized store instance
"""

__version__ = "1.0.0"
__author__ = "VibeCheck Team"
