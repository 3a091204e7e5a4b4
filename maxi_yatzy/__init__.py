"""
Maxi Yatzy.

Six dice, twenty categories, two to four players.
"""

__version__ = "0.1.0"
