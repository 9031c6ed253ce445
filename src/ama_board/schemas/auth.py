"""Host session schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Host password login."""

    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """Whether the caller currently holds a host session."""

    is_host: bool
