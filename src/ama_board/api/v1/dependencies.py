"""Shared API dependencies for caller identity and common functionality."""

from typing import Annotated

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ama_board.core.security import verify_host_token
from ama_board.core.settings import settings
from ama_board.db.session import get_db
from ama_board.services.voter import VoterIdentity, resolve_voter

# Optional bearer scheme so scripted hosts can skip the cookie
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def set_voter_cookie(response: Response, voter_id: str) -> None:
    """Persist the voter id on the browser for a year."""
    response.set_cookie(
        key=settings.voter_cookie_name,
        value=voter_id,
        max_age=settings.voter_cookie_max_age_seconds,
        path="/",
        samesite="lax",
        httponly=False,  # client JS reads it for optimistic UI
    )


def get_voter(request: Request, response: Response) -> VoterIdentity:
    """Resolve the caller's voter identity once for the whole request.

    FastAPI caches dependency results per request, so every endpoint parameter
    and sub-dependency that asks for the voter receives this same identity.
    A freshly issued id is written back as a cookie on the response.
    """
    identity = resolve_voter(request.cookies.get(settings.voter_cookie_name))
    if identity.is_new:
        set_voter_cookie(response, identity.voter_id)
    return identity


def get_is_host(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> bool:
    """Return True if the caller presents a valid host session.

    Args:
        request: Incoming request carrying the host cookie, if any
        credentials: Optional bearer token carrying the same session

    Returns:
        Host privilege flag; invalid or missing sessions simply yield False.
    """
    token = request.cookies.get(settings.host_cookie_name)
    if not token and credentials is not None:
        token = credentials.credentials
    return verify_host_token(token)


# Type aliases for caller dependencies
VoterDep = Annotated[VoterIdentity, Depends(get_voter)]
IsHostDep = Annotated[bool, Depends(get_is_host)]
