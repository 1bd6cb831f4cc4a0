"""
Level partitioning of the category tree for a navigation selection.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, NamedTuple, Optional

from app.services.category_store import CategoryRecord
from app.services.selection_codec import Selection


class LevelPartition(NamedTuple):
    """The three category lists a navigator shows side by side."""

    roots: List[CategoryRecord]
    first_level: List[CategoryRecord]
    second_level: List[CategoryRecord]


def index_by_parent(categories: Iterable[CategoryRecord]) -> Dict[Optional[int], List[CategoryRecord]]:
    """Group categories by parent id, keeping input order."""
    children: Dict[Optional[int], List[CategoryRecord]] = defaultdict(list)
    for cat in categories:
        children[cat.parent_id].append(cat)
    return children


def partition(categories: Iterable[CategoryRecord], selection: Selection) -> LevelPartition:
    """
    Split a flat category list into roots and the children of the selected
    root and first-level category.

    A level whose selector is unset, or points at nothing, comes back empty.
    """
    children = index_by_parent(categories)

    first_level = children.get(selection.root_id, []) if selection.root_id is not None else []
    second_level = children.get(selection.first_id, []) if selection.first_id is not None else []

    return LevelPartition(
        roots=list(children.get(None, [])),
        first_level=list(first_level),
        second_level=list(second_level),
    )


def breadcrumb(categories: Iterable[CategoryRecord], selection: Selection) -> List[CategoryRecord]:
    """
    The selected path as far as it resolves.

    Each selector must name a child of the previous one (the first must name
    a root); the path stops at the first one that does not.
    """
    by_id = {cat.id: cat for cat in categories}
    path: List[CategoryRecord] = []
    expected_parent: Optional[int] = None

    for selected in (selection.root_id, selection.first_id, selection.second_id):
        cat = by_id.get(selected) if selected is not None else None
        if cat is None or cat.parent_id != expected_parent:
            break
        path.append(cat)
        expected_parent = cat.id

    return path
