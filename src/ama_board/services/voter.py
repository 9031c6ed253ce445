"""Anonymous per-browser voter identity."""

from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Opaque tokens are accepted as-is when they look sane; this is deduplication, not auth.
_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_\-]{8,64}$")


@dataclass(frozen=True)
class VoterIdentity:
    """Voter id resolved for one request."""

    voter_id: str
    is_new: bool


def generate_voter_id() -> str:
    """Return a fresh random voter id (UUID4, 122 random bits)."""
    return str(uuid.uuid4())


def is_valid_token(token: str | None) -> bool:
    """Return True if `token` is shaped like a voter id."""
    return bool(token) and _TOKEN_PATTERN.match(token) is not None


def resolve_voter(incoming_token: str | None) -> VoterIdentity:
    """Resolve the caller's voter identity from the cookie value.

    Args:
        incoming_token: Raw cookie value, or None if the browser sent none.

    Returns:
        The existing id when the token looks valid, otherwise a new id with
        `is_new=True` so the caller can persist it back to the browser.
    """
    if is_valid_token(incoming_token):
        return VoterIdentity(voter_id=incoming_token, is_new=False)  # type: ignore[arg-type]

    voter_id = generate_voter_id()
    if incoming_token:
        logger.debug("Discarding malformed voter token and issuing a new one")
    return VoterIdentity(voter_id=voter_id, is_new=True)
