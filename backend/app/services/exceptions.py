"""
Errors raised by the category services.

Validation failures subclass CategoryError and carry a stable ``code`` so the
API layer can report which rule was broken. StorageError and
HierarchyCorrupted are internal failures and are never shown in detail.
"""


class CategoryError(Exception):
    """Base class for rejected category operations."""

    code = "category_error"


class InvalidName(CategoryError):
    code = "invalid_name"


class DuplicateName(CategoryError):
    code = "duplicate_name"

    def __init__(self, name: str):
        super().__init__(f"Category name '{name}' is already in use")
        self.name = name


class MaxDepthExceeded(CategoryError):
    code = "max_depth_exceeded"

    def __init__(self, parent_id: int, max_depth: int):
        super().__init__(
            f"Category {parent_id} is at depth {max_depth} and cannot have children"
        )
        self.parent_id = parent_id


class ParentNotFound(CategoryError):
    code = "parent_not_found"

    def __init__(self, parent_id: int):
        super().__init__(f"Parent category {parent_id} not found")
        self.parent_id = parent_id


class CategoryNotFound(CategoryError):
    code = "not_found"

    def __init__(self, category_id: int):
        super().__init__(f"Category {category_id} not found")
        self.category_id = category_id


class StorageError(Exception):
    """The database failed underneath a category operation."""

    code = "storage_error"


class HierarchyCorrupted(StorageError):
    """Stored parent links break the depth bound or point nowhere."""

    code = "hierarchy_corrupted"
