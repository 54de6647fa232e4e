"""Identity provider protocol."""

from typing import Protocol

from domain.entities.identity import IdentityFailure, IdentitySnapshot


class IIdentityProvider(Protocol):
    """Protocol for fetching the caller's external identity profile."""

    async def fetch_profile(self) -> IdentitySnapshot | IdentityFailure:
        """
        Fetch the current profile from the identity provider.

        Returns:
            IdentitySnapshot on success, IdentityFailure otherwise (never raises
            for provider-side problems)
        """
        ...
