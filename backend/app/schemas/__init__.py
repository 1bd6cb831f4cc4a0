"""
Pydantic schemas package.
"""

from app.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryRename,
    CategoryResponse,
    CategoryList,
    SelectionSchema,
    CategoryTreeResponse,
)

__all__ = [
    "CategoryBase",
    "CategoryCreate",
    "CategoryRename",
    "CategoryResponse",
    "CategoryList",
    "SelectionSchema",
    "CategoryTreeResponse",
]
