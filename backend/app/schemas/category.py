"""
Category Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, Optional


class CategoryBase(BaseModel):
    """Base category schema."""
    name: str = Field(..., min_length=1, max_length=100)
    parent_id: Optional[int] = None


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""
    pass


class CategoryRename(BaseModel):
    """Schema for renaming a category. Parent cannot be changed."""
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(CategoryBase):
    """Schema for category response."""
    id: int
    depth: int = Field(..., ge=0, le=2)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryList(BaseModel):
    """Schema for listing categories."""
    items: list[CategoryResponse]
    total: int


class SelectionSchema(BaseModel):
    """Decoded navigation selection."""
    root_id: Optional[int] = None
    first_id: Optional[int] = None
    second_id: Optional[int] = None

    class Config:
        from_attributes = True


class CategoryTreeResponse(BaseModel):
    """Per-level view of the hierarchy for a selection."""
    selection: SelectionSchema
    roots: list[CategoryResponse]
    first_level: list[CategoryResponse]
    second_level: list[CategoryResponse]
    breadcrumb: list[CategoryResponse]
    query_params: Dict[str, str]
