"""
Category store: persistence and invariant enforcement for the hierarchy.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.category import Category, MAX_DEPTH, MAX_ID
from app.services.exceptions import (
    CategoryNotFound,
    DuplicateName,
    HierarchyCorrupted,
    InvalidName,
    MaxDepthExceeded,
    ParentNotFound,
    StorageError,
)

logger = logging.getLogger(__name__)

# Serializes check-then-write across every store in the process.
# The unique constraint on categories.name covers other processes.
_write_lock = threading.Lock()


@dataclass(frozen=True)
class CategoryRecord:
    """A stored category together with its computed depth."""

    id: int
    name: str
    parent_id: Optional[int]
    depth: int
    created_at: Optional[datetime] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


def compute_depths(categories: List[Category]) -> Dict[int, int]:
    """
    Compute the depth of every category from one snapshot of rows.

    Raises HierarchyCorrupted when a parent link points at a missing row or a
    chain is longer than MAX_DEPTH (which also rules out cycles).
    """
    parents = {cat.id: cat.parent_id for cat in categories}
    depths: Dict[int, int] = {}

    for cat_id in parents:
        chain = []
        current = cat_id
        while current is not None and current not in depths:
            if len(chain) > MAX_DEPTH:
                raise HierarchyCorrupted(f"Category {cat_id} is nested deeper than {MAX_DEPTH}")
            if current not in parents:
                raise HierarchyCorrupted(f"Category {chain[-1]} points at missing parent {current}")
            chain.append(current)
            current = parents[current]

        base = -1 if current is None else depths[current]
        for offset, node in enumerate(reversed(chain), start=1):
            depths[node] = base + offset

        if depths[cat_id] > MAX_DEPTH:
            raise HierarchyCorrupted(f"Category {cat_id} is nested deeper than {MAX_DEPTH}")

    return depths


class CategoryStore:
    """Owns category rows and enforces the depth and name rules."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[CategoryRecord]:
        """All categories in insertion order, with depth."""
        rows = self._load_all()
        depths = compute_depths(rows)
        return [self._to_record(row, depths[row.id]) for row in rows]

    def get_by_parent(self, parent_id: Optional[int]) -> List[CategoryRecord]:
        """Categories directly under ``parent_id``; ``None`` selects the roots."""
        return [cat for cat in self.get_all() if cat.parent_id == parent_id]

    def get(self, category_id: int) -> CategoryRecord:
        row = self._get_row(category_id)
        if row is None:
            raise CategoryNotFound(category_id)
        return self._to_record(row, self._depth_of(row))

    def find_by_name(self, name: str) -> Optional[CategoryRecord]:
        row = self._query(
            lambda: self.db.query(Category).filter(Category.name == name).first()
        )
        if row is None:
            return None
        return self._to_record(row, self._depth_of(row))

    def create(self, name: str, parent_id: Optional[int] = None) -> CategoryRecord:
        """
        Create a category under ``parent_id`` (or as a root).

        Raises ParentNotFound, MaxDepthExceeded, DuplicateName or InvalidName.
        Nothing is written when any of them is raised.
        """
        name = self._clean_name(name)

        with _write_lock:
            depth = 0
            if parent_id is not None:
                parent = self._get_row(parent_id)
                if parent is None:
                    logger.warning(f"Rejected category '{name}': parent {parent_id} not found")
                    raise ParentNotFound(parent_id)
                depth = self._depth_of(parent) + 1
                if depth > MAX_DEPTH:
                    logger.warning(f"Rejected category '{name}': parent {parent_id} is at max depth")
                    raise MaxDepthExceeded(parent_id, MAX_DEPTH)

            self._ensure_name_free(name)

            category = Category(name=name, parent_id=parent_id)
            self.db.add(category)
            self._commit(name)
            self.db.refresh(category)

        logger.info(f"Created category {category.id} '{name}' at depth {depth}")
        return self._to_record(category, depth)

    def rename(self, category_id: int, new_name: str) -> CategoryRecord:
        """
        Rename a category. Parent and depth never change.

        Raises CategoryNotFound, DuplicateName or InvalidName.
        """
        new_name = self._clean_name(new_name)

        with _write_lock:
            category = self._get_row(category_id)
            if category is None:
                raise CategoryNotFound(category_id)

            if category.name != new_name:
                self._ensure_name_free(new_name)
                old_name = category.name
                category.name = new_name
                self._commit(new_name)
                self.db.refresh(category)
                logger.info(f"Renamed category {category_id} '{old_name}' -> '{new_name}'")

        return self._to_record(category, self._depth_of(category))

    def _clean_name(self, name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidName("Category name must not be empty")
        return cleaned

    def _ensure_name_free(self, name: str) -> None:
        existing = self._query(
            lambda: self.db.query(Category.id).filter(Category.name == name).first()
        )
        if existing is not None:
            logger.warning(f"Rejected category name '{name}': already in use")
            raise DuplicateName(name)

    def _depth_of(self, category: Category) -> int:
        """Walk up the parent chain of a single row."""
        depth = 0
        current = category
        while current.parent_id is not None:
            depth += 1
            if depth > MAX_DEPTH:
                raise HierarchyCorrupted(f"Category {category.id} is nested deeper than {MAX_DEPTH}")
            parent_id = current.parent_id
            current = self._get_row(parent_id)
            if current is None:
                raise HierarchyCorrupted(f"Category {category.id} points at missing parent {parent_id}")
        return depth

    def _get_row(self, category_id: int) -> Optional[Category]:
        # Ids outside the column range can never have been stored
        if not -MAX_ID - 1 <= category_id <= MAX_ID:
            return None
        return self._query(lambda: self.db.get(Category, category_id))

    def _load_all(self) -> List[Category]:
        return self._query(lambda: self.db.query(Category).order_by(Category.id).all())

    def _commit(self, name: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            # Another writer took the name between our check and the insert
            self.db.rollback()
            logger.warning(f"Rejected category name '{name}': unique constraint")
            raise DuplicateName(name)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Category write failed: {e}")
            raise StorageError("Category storage failed") from e

    def _query(self, fn):
        try:
            return fn()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Category read failed: {e}")
            raise StorageError("Category storage failed") from e

    @staticmethod
    def _to_record(row: Category, depth: int) -> CategoryRecord:
        return CategoryRecord(
            id=row.id,
            name=row.name,
            parent_id=row.parent_id,
            depth=depth,
            created_at=row.created_at,
        )
