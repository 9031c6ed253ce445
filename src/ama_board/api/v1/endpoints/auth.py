"""Host session endpoints.

The board itself only consumes the resulting "is host" flag; this module is
the thin password login that issues it.
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ama_board.api.v1.dependencies import IsHostDep
from ama_board.core.security import create_host_token, verify_admin_password
from ama_board.core.settings import settings
from ama_board.schemas.auth import LoginRequest, SessionResponse

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=SessionResponse)
async def login(payload: LoginRequest, response: Response) -> SessionResponse:
    """Exchange the admin password for a host session cookie."""
    if not verify_admin_password(payload.password):
        logger.warning("Rejected host login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )

    response.set_cookie(
        key=settings.host_cookie_name,
        value=create_host_token(),
        max_age=settings.host_session_expire_minutes * 60,
        path="/",
        samesite="lax",
        httponly=True,
    )
    return SessionResponse(is_host=True)


@router.post("/logout", response_model=SessionResponse)
async def logout(response: Response) -> SessionResponse:
    """Drop the host session cookie."""
    response.delete_cookie(key=settings.host_cookie_name, path="/")
    return SessionResponse(is_host=False)


@router.get("/session", response_model=SessionResponse)
async def get_session(is_host: IsHostDep) -> SessionResponse:
    """Report whether the caller holds a host session."""
    return SessionResponse(is_host=is_host)
