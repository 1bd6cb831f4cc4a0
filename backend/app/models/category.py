"""
Category database model.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from app.database import Base


# Roots sit at depth 0; nothing may be created below depth 2
MAX_DEPTH = 2

# Largest id a SQLite INTEGER column can hold
MAX_ID = 2**63 - 1


class Category(Base):
    """Category model for a depth-bounded hierarchy.

    Parentage is a plain foreign key. Depth is never stored, it is
    recomputed from the parent chain whenever categories are read.
    """

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
