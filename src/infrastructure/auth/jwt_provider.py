"""JWT session validation.

Session tokens are issued by the auth service after GitHub OAuth sign-in.
Two signing modes are accepted:

- ES256, verified against the auth service's JWKS document
- HS256 with the shared secret (local development and tests)

Expected payload::

    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "authenticated",
        "user_metadata": {"full_name": "Jane Doe", "user_name": "jdoe"},
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
import structlog
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

# kid -> JWK, fetched lazily and refreshed on an unknown kid
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys(refresh: bool = False) -> dict[str, Any]:
    """Fetch (or return cached) signing keys keyed by ``kid``."""
    global _jwks_cache
    if _jwks_cache is not None and not refresh:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            keys = response.json().get("keys", [])
    except (httpx.HTTPError, ValueError):
        logger.exception("jwks_fetch_failed", url=jwks_url)
        return {}

    _jwks_cache = {key["kid"]: key for key in keys if key.get("kid")}
    logger.info("jwks_fetched", key_count=len(_jwks_cache))
    return _jwks_cache


def _display_name(payload: dict[str, Any]) -> Optional[str]:
    """Pick the best human name the token carries."""
    metadata = payload.get("user_metadata") or {}
    return (
        metadata.get("full_name")
        or metadata.get("name")
        or metadata.get("display_name")
        or payload.get("name")
        or metadata.get("user_name")
    )


class JWTAuthProvider:
    """Validates session JWTs and turns them into a TokenUser."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a session token.

        Args:
            token: The bearer JWT

        Returns:
            TokenUser if valid, None if invalid, expired, or missing claims
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email:
            return None

        try:
            parsed_id = UUID(user_id)
        except ValueError:
            return None

        return TokenUser(
            id=parsed_id,
            email=email,
            display_name=_display_name(payload),
            role=payload.get("role"),
        )

    async def _decode_es256(self, token: str, header: dict) -> Optional[dict]:
        """Verify an ES256 token against the JWKS key named by ``kid``."""
        kid = header.get("kid")
        if not kid:
            return None

        key_data = (await _get_jwks_keys()).get(kid)
        if not key_data:
            # Possibly rotated; refetch once
            key_data = (await _get_jwks_keys(refresh=True)).get(kid)
        if not key_data:
            logger.warning("jwks_key_not_found", kid=kid)
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Issue an HS256 session token (local development and tests).

        Args:
            user: The user to create a token for

        Returns:
            The encoded JWT
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": user.role or "authenticated",
            "exp": expire,
            "user_metadata": {"full_name": user.display_name},
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
