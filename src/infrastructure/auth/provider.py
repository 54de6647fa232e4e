"""Session gate protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Verified identity extracted from a session token."""

    id: UUID
    email: str
    display_name: Optional[str] = None
    role: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for session token validation."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a session token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None otherwise
        """
        ...
