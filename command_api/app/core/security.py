"""
Security helpers for bearer token authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
arbitrary claims and an expiration timestamp (``exp``).  A secret
key from the application settings is used to sign and verify the
token.  Long‑lived static tokens listed in ``API_TOKENS`` are accepted
as well.

Read endpoints are anonymous; every mutating endpoint depends on
``get_current_user``.
"""

import base64
import json
import time
import hmac
import hashlib
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings

logger = logging.getLogger(__name__)


# Tokens are always HS256; the header is fixed accordingly.
JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


def _encode_segment(value: Dict[str, Any]) -> str:
    """Serialise ``value`` compactly and base64url encode it without padding."""
    raw = json.dumps(value, separators=(',', ':')).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _decode_segment(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + '=' * (-len(segment) % 4))


def _signature(signing_input: str) -> bytes:
    return hmac.new(settings.secret_key.encode("utf-8"), signing_input.encode("utf-8"), hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given claims.

    An ``exp`` claim (UNIX timestamp) is added.  Clients send the token
    in the ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. {"sub": "ops@example.com"}).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    if expires_delta is None:
        expires_delta = settings.access_token_expire_minutes * 60
    claims = {**data, "exp": int(time.time()) + expires_delta}
    signing_input = f"{_encode_segment(JWT_HEADER)}.{_encode_segment(claims)}"
    signature = base64.urlsafe_b64encode(_signature(signing_input)).rstrip(b"=").decode("ascii")
    return f"{signing_input}.{signature}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the claims if the signature matches and ``exp`` lies in the
    future, otherwise ``None``.
    """
    signing_input, _, signature_b64 = token.rpartition('.')
    if signing_input.count('.') != 1:
        return None
    payload_b64 = signing_input.split('.')[1]
    try:
        signature = _decode_segment(signature_b64)
    except ValueError:
        return None
    if not hmac.compare_digest(_signature(signing_input), signature):
        return None
    try:
        claims = json.loads(_decode_segment(payload_b64).decode("utf-8"))
    except ValueError:
        return None
    if not isinstance(claims, dict):
        return None
    try:
        expires_at = int(claims["exp"])
    except (KeyError, TypeError, ValueError):
        return None
    if expires_at < int(time.time()):
        return None
    return claims




def _static_tokens() -> list[str]:
    return [t.strip() for t in settings.api_tokens.split(',') if t.strip()]


security = HTTPBearer(auto_error=False)


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, str]:
    """Dependency that retrieves the current authenticated principal.

    If the request does not contain an ``Authorization`` header or the
    token is invalid/expired, an HTTP 401 error is raised.  On success,
    returns the decoded token payload, or a synthetic payload with
    ``sub`` set to ``"service"`` for static tokens.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = credentials.credentials

    for static_token in _static_tokens():
        if hmac.compare_digest(token.encode("utf-8"), static_token.encode("utf-8")):
            return {"sub": "service"}

    payload = decode_access_token(token)
    if not payload:
        logger.info("Rejected invalid or expired bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload
