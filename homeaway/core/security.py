import logging
import time
from typing import Optional

import httpx
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from homeaway.core.config import settings
from homeaway.core.exceptions import AuthorizationError
from homeaway.schemas.identity_schema import Identity
from homeaway.services.identity import ClerkIdentityStore, IdentityStore

logger = logging.getLogger(__name__)

# Authorization: Bearer <session token>. Missing header is allowed; public routes still work.
security = HTTPBearer(auto_error=False)

_jwks_cache: dict = {}
_jwks_cache_time: float = 0
_jwks_failed_at: float = 0
JWKS_CACHE_TTL = 3600


async def _fetch_jwks() -> dict:
    """
    Fetch the identity provider's signing keys, cached for an hour.
    After a failed fetch, no new attempt is made for JWKS_RETRY_SECONDS.
    """
    global _jwks_cache, _jwks_cache_time, _jwks_failed_at

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache
    if _jwks_failed_at and (now - _jwks_failed_at) < settings.JWKS_RETRY_SECONDS:
        return _jwks_cache or {"keys": []}

    try:
        async with httpx.AsyncClient(timeout=10) as client:
            response = await client.get(settings.CLERK_JWKS_URL)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = now
        _jwks_failed_at = 0
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        _jwks_failed_at = now
        # Stale keys beat no keys
        return _jwks_cache or {"keys": []}


async def _signing_key(token: str) -> tuple:
    """
    Pick the key and the accepted algorithms for a token.

    HS256 tokens are verified with SECRET_KEY outside production only. Every
    other token must use one of CLERK_JWT_ALGORITHMS and a JWKS key matching kid.
    """
    header = jwt.get_unverified_header(token)
    alg = header.get("alg")
    if alg == "HS256":
        if settings.is_production:
            raise JWTError("HS256 tokens are not accepted in production")
        return settings.SECRET_KEY, ["HS256"]

    allowed = settings.clerk_jwt_algorithms_list
    if alg not in allowed:
        raise JWTError(f"Algorithm {alg} is not allowed")

    kid = header.get("kid")
    for key in (await _fetch_jwks()).get("keys", []):
        if key.get("kid") == kid:
            return key, allowed
    raise JWTError(f"No signing key found for kid={kid}")


async def decode_subject(token: str) -> str:
    """
    Verify the session token and return its subject (the identity id).
    Raises AuthorizationError if the token is invalid or has no subject.
    """
    try:
        key, algorithms = await _signing_key(token)
        payload = jwt.decode(token, key, algorithms=algorithms, options={"verify_aud": False})
    except JWTError as e:
        logger.warning(f"JWT Error: {e}")
        raise AuthorizationError("Could not validate credentials")

    subject = payload.get("sub")
    if not subject:
        logger.warning("Token missing sub claim")
        raise AuthorizationError("Could not validate credentials")
    return subject


def get_identity_store() -> IdentityStore:
    return ClerkIdentityStore()


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity_store: IdentityStore = Depends(get_identity_store),
) -> Optional[Identity]:
    """
    Resolve the caller. Returns None for anonymous requests; actions decide
    whether that is acceptable.
    """
    if credentials is None:
        return None
    subject = await decode_subject(credentials.credentials)
    return await identity_store.get_identity(subject)
