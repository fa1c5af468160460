"""Wagebook - worked time, pay and credited time for personal time tracking"""

__version__ = "1.0.0"
