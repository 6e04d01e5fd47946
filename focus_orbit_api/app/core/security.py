"""
Security helpers for JWT authentication and identity resolution.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
arbitrary claims and an expiration timestamp (``exp``).  The token
subject (``sub``) is the caller identity: an opaque principal string
that partitions every per-user record.  How a client obtained the
token (login, external identity provider) is outside this service.
"""

import base64
import json
import time
import hmac
import hashlib
from typing import Optional, Dict

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import NoIdentityError, to_http_exception


def _b64_url_encode(data: bytes) -> str:
    """Encode one identity token segment (base64url, no padding)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode one identity token segment, restoring the stripped padding."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], expires_delta: Optional[int] = None) -> str:
    """Mint an identity token for a Focus Orbit caller.

    ``data["sub"]`` names the identity whose profile, settings, streak,
    sessions and goals the bearer may read and change.  An ``exp``
    claim (UNIX timestamp) is added.  The web client sends the token as
    ``Authorization: Bearer <token>``; ``create_token.py`` mints
    long-lived ones for operators.

    Parameters
    ----------
    data : dict
        Claims to embed in the token; ``sub`` carries the identity.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature = _sign(signing_input, settings.secret_key)
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"


def decode_access_token(token: str) -> Optional[Dict[str, str]]:
    """Verify an identity token and return its claims.

    Returns ``None`` when the signature does not match ``SECRET_KEY`` or
    the token has expired; the identity dependencies below turn that
    into HTTP 401.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        # Constant‑time comparison to prevent timing attacks
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    if data.get("exp") is None or int(data["exp"]) < int(time.time()):
        return None
    return data


security = HTTPBearer(auto_error=False)


def _identity_from_credentials(credentials: HTTPAuthorizationCredentials) -> str:
    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return str(payload["sub"])


def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Dependency returning the caller identity, or ``None`` for anonymous callers.

    A request that carries a token which fails verification is rejected
    rather than treated as anonymous.
    """
    if credentials is None:
        return None
    return _identity_from_credentials(credentials)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Dependency returning the caller identity; mutations use this one.

    Raises HTTP 401 when the request is unauthenticated.
    """
    if credentials is None:
        raise to_http_exception(NoIdentityError("Not authenticated"))
    return _identity_from_credentials(credentials)
