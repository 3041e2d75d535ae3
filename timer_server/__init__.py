"""Countdown timer tool server"""

__version__ = "2.0.0"
