"""
Database models package.
"""

from app.models.category import Category, MAX_DEPTH, MAX_ID

__all__ = [
    "Category",
    "MAX_DEPTH",
    "MAX_ID",
]
