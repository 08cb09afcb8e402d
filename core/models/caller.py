# ============================================================================
# CALLER MODEL
# ============================================================================
# STATUS: Domain model - The authenticated identity behind a request
# PURPOSE: Carry the caller's user id, role and granted capabilities
# ============================================================================
"""
Caller Model

Resolved once per request from the bearer token. An anonymous caller has
no user id and no capabilities.
"""

from typing import FrozenSet, Optional

from pydantic import BaseModel, Field


class Caller(BaseModel):
    """Identity and primitive capabilities of the current caller."""

    user_id: Optional[int] = None
    login: Optional[str] = None
    role: Optional[str] = None
    capabilities: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def has_cap(self, capability: str) -> bool:
        """True if the caller holds a primitive capability."""
        return capability in self.capabilities

    @classmethod
    def anonymous(cls) -> "Caller":
        return cls()
