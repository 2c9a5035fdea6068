"""
                Food Ordering API

A FastAPI + SQLAlchemy backend for customers, restaurants, menu items
and orders, with revenue and best-seller aggregates.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
