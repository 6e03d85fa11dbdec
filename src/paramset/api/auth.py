"""Authorization policies for the HTTP API.

An authorizer is any callable taking the incoming request and returning True
when the caller may update runs. The application consults it before reading
the body.
"""

from __future__ import annotations

import hmac
from typing import Callable

from fastapi import Request

Authorizer = Callable[[Request], bool]

UPDATE_PERMISSION = "Run/Update"


class AllowAll:
    """Grants every request. Suitable for local use only."""

    def __call__(self, request: Request) -> bool:
        return True


class BearerTokenAuthorizer:
    """Grants requests carrying `Authorization: Bearer <token>`."""

    def __init__(self, token: str):
        if not token:
            raise ValueError("token must not be empty")
        self._token = token.encode("utf-8")

    def __call__(self, request: Request) -> bool:
        header = request.headers.get("authorization", "")
        scheme, _, supplied = header.partition(" ")
        if scheme.lower() != "bearer" or not supplied:
            return False
        return hmac.compare_digest(supplied.strip().encode("utf-8"), self._token)
