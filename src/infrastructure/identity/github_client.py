"""GitHub identity client.

Fetches ``GET /user`` with the configured token and projects the response
into an :class:`IdentitySnapshot`. Provider problems are returned as
:class:`IdentityFailure` values so the caller can fall back to stored data.
"""

from typing import Any

import httpx
import structlog

from core.config import settings
from domain.entities.identity import (
    IdentityFailure,
    IdentityFailureKind,
    IdentitySnapshot,
)

logger = structlog.get_logger()

GITHUB_ACCEPT = "application/vnd.github.v3+json"


def is_github_profile(payload: Any) -> bool:
    """Shape guard: a stable ``login`` handle and an ``avatar_url`` string."""
    return (
        isinstance(payload, dict)
        and isinstance(payload.get("login"), str)
        and isinstance(payload.get("avatar_url"), str)
    )


def _optional_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return value if isinstance(value, str) else None


def _count(payload: dict[str, Any], key: str) -> int:
    value = payload.get(key)
    return value if isinstance(value, int) else 0


def to_snapshot(payload: dict[str, Any]) -> IdentitySnapshot:
    """Project a guarded GitHub payload into a snapshot."""
    return IdentitySnapshot(
        login=payload["login"],
        avatar_url=payload["avatar_url"],
        name=_optional_str(payload, "name"),
        email=_optional_str(payload, "email"),
        bio=_optional_str(payload, "bio"),
        location=_optional_str(payload, "location"),
        blog=_optional_str(payload, "blog"),
        twitter_username=_optional_str(payload, "twitter_username"),
        public_repos=_count(payload, "public_repos"),
        followers=_count(payload, "followers"),
        following=_count(payload, "following"),
        html_url=_optional_str(payload, "html_url"),
    )


class GitHubIdentityClient:
    """Read-only client for the authenticated GitHub user profile."""

    def __init__(
        self,
        token: str = settings.github_token,
        api_url: str = settings.github_api_url,
        timeout: float = settings.github_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def fetch_profile(self) -> IdentitySnapshot | IdentityFailure:
        """Fetch and validate the caller's GitHub profile."""
        if not self._token:
            logger.info("github_credential_missing")
            return IdentityFailure(IdentityFailureKind.CREDENTIAL_MISSING)

        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": GITHUB_ACCEPT,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(f"{self._api_url}/user", headers=headers)
        except httpx.HTTPError as e:
            logger.warning(
                "github_request_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return IdentityFailure(IdentityFailureKind.PROVIDER_UNREACHABLE, str(e))

        if not response.is_success:
            logger.warning(
                "github_request_rejected",
                status_code=response.status_code,
                body=response.text[:500],
            )
            return IdentityFailure(
                IdentityFailureKind.PROVIDER_UNREACHABLE,
                f"HTTP {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError:
            logger.warning("github_response_not_json", body=response.text[:500])
            return IdentityFailure(IdentityFailureKind.MALFORMED_RESPONSE, "invalid JSON")

        if not is_github_profile(payload):
            logger.warning("github_response_malformed")
            return IdentityFailure(
                IdentityFailureKind.MALFORMED_RESPONSE,
                "missing login or avatar_url",
            )

        return to_snapshot(payload)
