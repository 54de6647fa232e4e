"""Merge a GitHub identity snapshot into a stored profile.

Everything here is pure: no I/O, no clock. The service layer fetches the
snapshot, calls :func:`reconcile`, and persists the result in one write.

Field precedence when a snapshot is available:

- ``name``: snapshot name, else the session's name, else the stored name
- ``bio`` / ``location``: snapshot value, else ``None`` (GitHub wins, even
  when it is empty)
- ``website``: snapshot ``blog`` with ``https://`` prepended when it has no
  scheme
- ``github_url``: snapshot ``html_url``; never taken from stored state
- ``twitter_url``: ``https://twitter.com/<handle>`` when a handle is present

When the fetch failed, every field re-affirms the stored value.
"""

from dataclasses import dataclass

from domain.entities.identity import (
    FellBackToLocal,
    IdentityFailure,
    IdentitySnapshot,
    Synced,
    SyncOutcome,
)
from domain.entities.profile import UserProfile

TWITTER_PROFILE_BASE = "https://twitter.com/"

RECONCILED_FIELDS = ("name", "bio", "location", "website", "github_url", "twitter_url")


@dataclass(frozen=True, slots=True)
class ProfileUpdate:
    """Complete next-state of the reconciled fields plus how it was derived."""

    outcome: SyncOutcome
    name: str | None
    bio: str | None
    location: str | None
    website: str | None
    github_url: str | None
    twitter_url: str | None

    def apply_to(self, profile: UserProfile) -> UserProfile:
        """Overwrite every reconciled field on ``profile`` and return it."""
        for name in RECONCILED_FIELDS:
            setattr(profile, name, getattr(self, name))
        return profile


def normalize_website(blog: str | None) -> str | None:
    """Turn GitHub's free-form ``blog`` field into a URL."""
    if not blog:
        return None
    if blog.lower().startswith(("http://", "https://")):
        return blog
    return f"https://{blog}"


def twitter_url_for(handle: str | None) -> str | None:
    if not handle:
        return None
    return f"{TWITTER_PROFILE_BASE}{handle}"


def reconcile(
    current: UserProfile,
    fetched: IdentitySnapshot | IdentityFailure,
    session_name: str | None = None,
) -> ProfileUpdate:
    """Compute the profile's next state from an identity fetch result."""
    if isinstance(fetched, IdentityFailure):
        return ProfileUpdate(
            outcome=FellBackToLocal(reason=fetched.kind),
            name=current.name,
            bio=current.bio,
            location=current.location,
            website=current.website,
            github_url=current.github_url,
            twitter_url=current.twitter_url,
        )

    return ProfileUpdate(
        outcome=Synced(snapshot=fetched),
        name=fetched.name or session_name or current.name,
        bio=fetched.bio or None,
        location=fetched.location or None,
        website=normalize_website(fetched.blog),
        github_url=fetched.html_url or None,
        twitter_url=twitter_url_for(fetched.twitter_username),
    )
