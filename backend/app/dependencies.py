"""
FastAPI dependencies.
"""

from typing import Generator, Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.config import settings
from app.database import SessionLocal
from app.services.auth_gate import ApiKeyAuthGate
from app.services.category_store import CategoryStore
from app.services.view_cache import ViewCache


_view_cache = ViewCache(
    enabled=settings.view_cache_enabled,
    max_entries=settings.view_cache_max_entries,
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_category_store(db: Session = Depends(get_db)) -> CategoryStore:
    return CategoryStore(db)


def get_view_cache() -> ViewCache:
    """Process-wide cache of tree views."""
    return _view_cache


def get_auth_gate(x_api_key: Optional[str] = Header(None)) -> ApiKeyAuthGate:
    return ApiKeyAuthGate(
        api_key=x_api_key,
        admin_key=settings.admin_api_key,
    )


def require_action(action: str):
    """
    Build a dependency that rejects the request unless the caller may
    perform ``action``: 401 when unauthenticated, 403 when not allowed.
    """
    def check(gate: ApiKeyAuthGate = Depends(get_auth_gate)) -> ApiKeyAuthGate:
        if not gate.is_authenticated():
            raise HTTPException(
                status_code=401,
                detail={"code": "unauthorized", "message": "Missing or invalid API key"},
            )
        if not gate.is_authorized(action):
            raise HTTPException(
                status_code=403,
                detail={"code": "forbidden", "message": f"Not allowed to {action}"},
            )
        return gate

    return check
