"""
LightBnB data-access layer.
Async query facade over the users, properties, reservations and reviews tables.
"""

__version__ = "1.0.0"
