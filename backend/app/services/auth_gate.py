"""
Access checks consulted by the API before category mutations.
"""

import hmac
from typing import Optional, Protocol

CREATE_CATEGORY = "categories:create"
RENAME_CATEGORY = "categories:rename"

WRITE_ACTIONS = frozenset({CREATE_CATEGORY, RENAME_CATEGORY})


class AuthGate(Protocol):
    def is_authenticated(self) -> bool: ...

    def is_authorized(self, action: str) -> bool: ...


class ApiKeyAuthGate:
    """
    Gate for a single request, keyed on the ``X-API-Key`` header.

    The admin key is authorized for the category write actions and nothing
    else. With no admin key configured nobody authenticates.
    """

    def __init__(self, api_key: Optional[str], admin_key: Optional[str]):
        self.api_key = api_key
        self.admin_key = admin_key

    def is_authenticated(self) -> bool:
        if not self.admin_key or not self.api_key:
            return False
        return hmac.compare_digest(self.api_key.encode(), self.admin_key.encode())

    def is_authorized(self, action: str) -> bool:
        return self.is_authenticated() and action in WRITE_ACTIONS
