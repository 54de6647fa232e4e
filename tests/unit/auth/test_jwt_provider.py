"""Unit tests for JWTAuthProvider.

- HS256 round trip and claim checks
- display name extraction from GitHub OAuth metadata
- JWKS fetching, caching and refresh on unknown kid
- ES256 decode path with mocked key material
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from jose import jwt as jose_jwt

from infrastructure.auth import jwt_provider as jwt_provider_module
from infrastructure.auth.jwt_provider import (
    JWTAuthProvider,
    _display_name,
    _get_jwks_keys,
)
from infrastructure.auth.provider import TokenUser

JWKS_URL = "https://example.supabase.co/auth/v1/.well-known/jwks.json"

_RealAsyncClient = httpx.AsyncClient


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    return jose_jwt.encode(payload, secret, algorithm="HS256")


def _client_factory(handler):
    """AsyncClient constructor that routes every request to ``handler``."""

    def factory(*args, **kwargs):
        return _RealAsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture(autouse=True)
def _clear_jwks_cache():
    jwt_provider_module._jwks_cache = None
    yield
    jwt_provider_module._jwks_cache = None


@pytest.fixture
def hs256_provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


# ---------------------------------------------------------------------------
# HS256 tokens
# ---------------------------------------------------------------------------


class TestHs256:
    async def test_round_trip(self, hs256_provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="jane@example.com", display_name="Jane Doe")

        result = await hs256_provider.validate_token(hs256_provider.create_token(user))

        assert result is not None
        assert result.id == user.id
        assert result.email == "jane@example.com"
        assert result.display_name == "Jane Doe"
        assert result.role == "authenticated"

    async def test_wrong_secret_rejected(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token(
            {"sub": str(uuid4()), "email": "a@example.com", "exp": 9999999999},
            secret="other-secret",
        )

        assert await hs256_provider.validate_token(token) is None

    async def test_garbage_rejected(self, hs256_provider: JWTAuthProvider):
        assert await hs256_provider.validate_token("not-a-jwt") is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "a@example.com"},
            {"sub": str(uuid4())},
            {"sub": "", "email": "a@example.com"},
            {"sub": str(uuid4()), "email": ""},
            {"sub": "not-a-uuid", "email": "a@example.com"},
        ],
    )
    async def test_missing_or_bad_claims_rejected(
        self, hs256_provider: JWTAuthProvider, payload: dict
    ):
        token = _make_hs256_token({**payload, "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None


class TestDisplayName:
    def test_prefers_full_name(self):
        payload = {"user_metadata": {"full_name": "Jane Doe", "user_name": "jdoe"}}

        assert _display_name(payload) == "Jane Doe"

    def test_falls_back_to_login(self):
        assert _display_name({"user_metadata": {"user_name": "jdoe"}}) == "jdoe"

    def test_top_level_name(self):
        assert _display_name({"name": "Jane"}) == "Jane"

    def test_none_when_absent(self):
        assert _display_name({}) is None


# ---------------------------------------------------------------------------
# JWKS
# ---------------------------------------------------------------------------


class TestGetJwksKeys:
    async def test_empty_when_not_configured(self):
        with patch.object(jwt_provider_module, "settings") as mock_settings:
            mock_settings.supabase_jwks_url = ""

            assert await _get_jwks_keys() == {}

    async def test_fetches_and_caches(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            return httpx.Response(
                200,
                json={
                    "keys": [
                        {"kid": "key-1", "kty": "EC", "crv": "P-256"},
                        {"kty": "EC", "crv": "P-256"},
                    ]
                },
            )

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(httpx, "AsyncClient", _client_factory(handler)),
        ):
            mock_settings.supabase_jwks_url = JWKS_URL

            first = await _get_jwks_keys()
            second = await _get_jwks_keys()

        assert list(first) == ["key-1"]
        assert second == first
        assert len(calls) == 1

    async def test_refresh_bypasses_cache(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            return httpx.Response(200, json={"keys": [{"kid": f"key-{len(calls)}"}]})

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(httpx, "AsyncClient", _client_factory(handler)),
        ):
            mock_settings.supabase_jwks_url = JWKS_URL

            await _get_jwks_keys()
            refreshed = await _get_jwks_keys(refresh=True)

        assert "key-2" in refreshed
        assert len(calls) == 2

    async def test_empty_on_http_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(httpx, "AsyncClient", _client_factory(handler)),
        ):
            mock_settings.supabase_jwks_url = JWKS_URL

            assert await _get_jwks_keys() == {}

        assert jwt_provider_module._jwks_cache is None


# ---------------------------------------------------------------------------
# ES256
# ---------------------------------------------------------------------------


class TestDecodeEs256:
    async def test_none_without_kid(self, hs256_provider: JWTAuthProvider):
        assert await hs256_provider._decode_es256("a.b.c", {"alg": "ES256"}) is None

    async def test_none_when_kid_unknown_after_refresh(self, hs256_provider: JWTAuthProvider):
        with patch.object(
            jwt_provider_module, "_get_jwks_keys", new_callable=AsyncMock
        ) as mock_get_jwks:
            mock_get_jwks.return_value = {"other-kid": {"kty": "EC"}}

            result = await hs256_provider._decode_es256(
                "a.b.c", {"alg": "ES256", "kid": "missing-kid"}
            )

        assert result is None
        assert mock_get_jwks.await_count == 2

    async def test_decodes_after_key_rotation(self, hs256_provider: JWTAuthProvider):
        key_data = {"kid": "rotated", "kty": "EC", "crv": "P-256"}
        payload = {"sub": str(uuid4()), "email": "rotated@example.com"}

        with (
            patch.object(
                jwt_provider_module,
                "_get_jwks_keys",
                new_callable=AsyncMock,
                side_effect=[{}, {"rotated": key_data}],
            ),
            patch.object(jwt_provider_module, "ECKey") as mock_eckey_cls,
            patch.object(jwt_provider_module.jwt, "decode", return_value=payload) as mock_decode,
        ):
            mock_key = MagicMock()
            mock_eckey_cls.return_value = mock_key

            result = await hs256_provider._decode_es256(
                "es256.token.value", {"alg": "ES256", "kid": "rotated"}
            )

        assert result == payload
        mock_eckey_cls.assert_called_once_with(key_data, algorithm="ES256")
        mock_decode.assert_called_once_with(
            "es256.token.value",
            mock_key,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    async def test_validate_token_uses_es256_path(self, hs256_provider: JWTAuthProvider):
        user_id = str(uuid4())
        payload = {
            "sub": user_id,
            "email": "gh@example.com",
            "role": "authenticated",
            "user_metadata": {"user_name": "jdoe"},
        }

        with (
            patch.object(
                jwt_provider_module.jwt,
                "get_unverified_header",
                return_value={"alg": "ES256", "kid": "k1"},
            ),
            patch.object(
                hs256_provider, "_decode_es256", new_callable=AsyncMock, return_value=payload
            ) as mock_es256,
        ):
            result = await hs256_provider.validate_token("es256.token.here")

        mock_es256.assert_awaited_once_with("es256.token.here", {"alg": "ES256", "kid": "k1"})
        assert result is not None
        assert str(result.id) == user_id
        assert result.display_name == "jdoe"

    async def test_validate_token_none_when_es256_fails(self, hs256_provider: JWTAuthProvider):
        with (
            patch.object(
                jwt_provider_module.jwt,
                "get_unverified_header",
                return_value={"alg": "ES256", "kid": "k1"},
            ),
            patch.object(
                hs256_provider, "_decode_es256", new_callable=AsyncMock, return_value=None
            ),
        ):
            assert await hs256_provider.validate_token("es256.token.here") is None
