"""JWT authentication provider implementation.

Accepts Supabase-issued access tokens (ES256, verified against the project's
JWKS) and locally signed HS256 tokens used in development and tests. The
``sub`` claim is the caller's user id.
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

# Fetched once per process and refreshed when an unknown kid shows up.
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Fetch and cache JWKS keys from Supabase as a kid -> key mapping."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks_data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("jwks_fetch_failed", url=jwks_url, error=str(e))
        return {}

    _jwks_cache = {
        key_data["kid"]: key_data
        for key_data in jwks_data.get("keys", [])
        if key_data.get("kid")
    }
    logger.info("jwks_fetched", key_count=len(_jwks_cache))
    return _jwks_cache


class JWTAuthProvider:
    """JWT-based authentication provider."""

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
        Validate a JWT and extract the caller identity.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or missing ``sub``
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg == "ES256":
                payload = await self._validate_es256(token, header)
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

        try:
            user_id = UUID(str(payload.get("sub") or ""))
        except ValueError:
            return None

        user_metadata = payload.get("user_metadata") or {}
        display_name = (
            user_metadata.get("display_name")
            or user_metadata.get("name")
            or payload.get("name")
        )

        return TokenUser(
            id=user_id,
            email=payload.get("email") or None,
            display_name=display_name,
            role=payload.get("role"),
        )

    async def _validate_es256(
        self, token: str, header: dict
    ) -> Optional[dict]:
        """Validate an ES256-signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        jwks_keys = await _get_jwks_keys()
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Unknown kid: the signing key may have rotated, refetch once.
            global _jwks_cache
            _jwks_cache = None
            jwks_keys = await _get_jwks_keys()
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("jwks_key_not_found", kid=kid)
                return None

        ec_key = ECKey(key_data, algorithm="ES256")
        return jwt.decode(
            token,
            ec_key,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """Create an HS256 JWT for a user (development and tests)."""
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "aud": "authenticated",
            "role": "authenticated",
            "exp": expire,
            "user_metadata": {
                "display_name": user.display_name,
            },
        }
        if user.email:
            payload["email"] = user.email

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
