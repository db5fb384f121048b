from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

import jwt

from .errors import PreconditionError, SigningError

ALGORITHM = "HS256"


def server_claims() -> dict[str, Any]:
    return {"server": True}


def user_claims(user_id: str) -> dict[str, Any]:
    if not user_id:
        raise PreconditionError("user ID is empty")
    return {"user_id": user_id}


def sign_claims(claims: Mapping[str, Any], secret: bytes, expire: datetime | None = None) -> bytes:
    """
    Sign ``claims`` with HS256 keyed by ``secret``.

    ``expire=None`` leaves the ``exp`` claim unset. The result depends only on
    the inputs, so identical claims, secret and expiration give identical tokens.
    """
    payload = dict(claims)
    if expire is not None:
        payload["exp"] = expire
    try:
        token = jwt.encode(payload, secret, algorithm=ALGORITHM)
    except (TypeError, ValueError, jwt.PyJWTError) as e:
        raise SigningError(f"cannot sign claims: {e}") from e
    return token.encode("ascii")


def decode_token(token: bytes | str, secret: bytes) -> dict[str, Any]:
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        raise SigningError(f"invalid token: {e}") from e
