from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .settings import get_settings

_security = HTTPBasic(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )


# PUBLIC_INTERFACE
def get_basic_auth_dependency():
    """
    Return a FastAPI dependency enforcing HTTP Basic Auth on the admin endpoints when
    ENABLE_BASIC_AUTH is on. When it is off, the dependency is a no-op.

    Usage:
        router = APIRouter(dependencies=[Depends(get_basic_auth_dependency())])
    """
    settings = get_settings()

    if not settings.enable_basic_auth:
        async def _noop() -> None:  # noqa: D401 - trivial
            """No-op dependency (auth disabled)."""
            return None

        return _noop

    expected_user: Optional[str] = settings.basic_auth_username
    expected_pass: Optional[str] = settings.basic_auth_password

    async def _enforce(creds: Optional[HTTPBasicCredentials] = Depends(_security)) -> None:
        """
        Raises:
            HTTPException(401) if credentials are missing, invalid, or not configured.
        """
        if creds is None or creds.username is None or creds.password is None:
            raise _unauthorized("Not authenticated")

        if expected_user is None or expected_pass is None:
            raise _unauthorized("Server authentication not configured")

        user_ok = secrets.compare_digest(creds.username, expected_user)
        pass_ok = secrets.compare_digest(creds.password, expected_pass)
        if not (user_ok and pass_ok):
            raise _unauthorized("Invalid authentication credentials")

    return _enforce


# PUBLIC_INTERFACE
def get_actor(x_actor: Optional[str] = Header(default=None, description="Login of the acting user")) -> Optional[str]:
    """
    Resolve the acting user's login from the X-Actor header.

    Capability checks are left to the host; an unknown or missing actor simply holds
    no capabilities.
    """
    if x_actor is None:
        return None
    login = x_actor.strip()
    return login or None
