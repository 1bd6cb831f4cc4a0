"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, NoReturn, Optional

from app.dependencies import get_category_store, get_view_cache, require_action
from app.schemas.category import (
    CategoryCreate,
    CategoryRename,
    CategoryResponse,
    CategoryList,
    CategoryTreeResponse,
    SelectionSchema,
)
from app.services import selection_codec, tree_query
from app.services.auth_gate import CREATE_CATEGORY, RENAME_CATEGORY
from app.services.category_store import CategoryRecord, CategoryStore
from app.services.exceptions import (
    CategoryError,
    CategoryNotFound,
    DuplicateName,
    ParentNotFound,
    StorageError,
)
from app.services.view_cache import CATEGORIES_SCOPE, ViewCache

router = APIRouter()


def _raise_http(error: Exception) -> NoReturn:
    """Translate a store error into an HTTP error naming the broken rule."""
    if isinstance(error, (CategoryNotFound, ParentNotFound)):
        status_code = 404
    elif isinstance(error, DuplicateName):
        status_code = 409
    elif isinstance(error, CategoryError):
        status_code = 422
    else:
        raise HTTPException(
            status_code=500,
            detail={"code": StorageError.code, "message": "Category storage is unavailable"},
        )
    raise HTTPException(status_code=status_code, detail={"code": error.code, "message": str(error)})


def _responses(categories: List[CategoryRecord]) -> List[CategoryResponse]:
    return [CategoryResponse.model_validate(cat) for cat in categories]


@router.get("", response_model=CategoryList)
def list_categories(
    parent_id: Optional[int] = Query(None, ge=1),
    roots_only: bool = False,
    store: CategoryStore = Depends(get_category_store)
):
    """List categories in creation order, optionally only one parent's children."""
    try:
        if roots_only:
            categories = store.get_by_parent(None)
        elif parent_id is not None:
            categories = store.get_by_parent(parent_id)
        else:
            categories = store.get_all()
    except StorageError as e:
        _raise_http(e)

    return CategoryList(items=_responses(categories), total=len(categories))


@router.get("/tree", response_model=CategoryTreeResponse)
def get_category_tree(
    root_id: Optional[str] = Query(None, alias="rootId"),
    first_id: Optional[str] = Query(None, alias="firstId"),
    second_id: Optional[str] = Query(None, alias="secondId"),
    store: CategoryStore = Depends(get_category_store),
    cache: ViewCache = Depends(get_view_cache)
):
    """
    Roots plus the children of the selected root and first-level category.

    Selectors that are missing or not numbers count as "nothing selected".
    """
    selection = selection_codec.decode(root_id, first_id, second_id)

    cached = cache.get(CATEGORIES_SCOPE, selection)
    if cached is not None:
        return cached

    # Taken before reading so a mutation committed meanwhile voids the write
    generation = cache.generation(CATEGORIES_SCOPE)

    try:
        categories = store.get_all()
    except StorageError as e:
        _raise_http(e)

    levels = tree_query.partition(categories, selection)
    response = CategoryTreeResponse(
        selection=SelectionSchema.model_validate(selection),
        roots=_responses(levels.roots),
        first_level=_responses(levels.first_level),
        second_level=_responses(levels.second_level),
        breadcrumb=_responses(tree_query.breadcrumb(categories, selection)),
        query_params=selection_codec.to_query_params(selection),
    )
    cache.set(CATEGORIES_SCOPE, selection, response, generation=generation)
    return response


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    store: CategoryStore = Depends(get_category_store),
    cache: ViewCache = Depends(get_view_cache),
    _gate=Depends(require_action(CREATE_CATEGORY))
):
    """Create a root category, or a child of a category at depth 0 or 1."""
    try:
        created = store.create(category.name, category.parent_id)
    except (CategoryError, StorageError) as e:
        _raise_http(e)

    cache.invalidate(CATEGORIES_SCOPE)
    return created


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: int,
    store: CategoryStore = Depends(get_category_store)
):
    """Get a specific category."""
    try:
        return store.get(category_id)
    except (CategoryError, StorageError) as e:
        _raise_http(e)


@router.patch("/{category_id}", response_model=CategoryResponse)
def rename_category(
    category_id: int,
    rename: CategoryRename,
    store: CategoryStore = Depends(get_category_store),
    cache: ViewCache = Depends(get_view_cache),
    _gate=Depends(require_action(RENAME_CATEGORY))
):
    """Rename a category. Its parent and depth stay the same."""
    try:
        renamed = store.rename(category_id, rename.name)
    except (CategoryError, StorageError) as e:
        _raise_http(e)

    cache.invalidate(CATEGORIES_SCOPE)
    return renamed
