"""Caller identities understood by the service layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class Authenticated:
    """A signed-in user."""

    user_id: int
    is_admin: bool = False


@dataclass(frozen=True)
class Anonymous:
    """A guest recognised only by an opaque session token."""

    session_token: str


Identity: TypeAlias = Authenticated | Anonymous
