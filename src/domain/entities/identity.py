"""Identity provider snapshot and sync outcome types."""

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class IdentitySnapshot:
    """Normalized view of the caller's GitHub profile.

    Lives only for the duration of a sync; never persisted as-is.
    """

    login: str
    avatar_url: str
    name: str | None = None
    email: str | None = None
    bio: str | None = None
    location: str | None = None
    blog: str | None = None
    twitter_username: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    html_url: str | None = None


class IdentityFailureKind(StrEnum):
    CREDENTIAL_MISSING = "credential_missing"
    PROVIDER_UNREACHABLE = "provider_unreachable"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True, slots=True)
class IdentityFailure:
    """Typed failure of an identity fetch. Returned, never raised."""

    kind: IdentityFailureKind
    detail: str = ""


@dataclass(frozen=True, slots=True)
class Synced:
    """Sync used a fresh snapshot from the provider."""

    snapshot: IdentitySnapshot


@dataclass(frozen=True, slots=True)
class FellBackToLocal:
    """Sync could not reach the provider and re-affirmed stored values."""

    reason: IdentityFailureKind


SyncOutcome = Synced | FellBackToLocal
