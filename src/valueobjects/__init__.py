"""
Immutable value objects: date and date-time ranges, IP/MAC addresses, money.
"""

__version__ = "0.1.0"
