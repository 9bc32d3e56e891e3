"""JWT helpers for Supabase access tokens and the current-user lookup."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from flask import current_app, g, request
from loguru import logger


@dataclass(slots=True, frozen=True)
class AuthUser:
    id: str
    email: Optional[str] = None


def encode(payload: Dict[str, Any]) -> str:
    secret = current_app.config.get("JWT_SECRET", "change-me")
    alg = current_app.config.get("JWT_ALG", "HS256")
    return jwt.encode(payload, secret, algorithm=alg)


def decode(token: str) -> Dict[str, Any]:
    secret = current_app.config.get("JWT_SECRET", "change-me")
    alg = current_app.config.get("JWT_ALG", "HS256")
    # supabase tokens carry aud="authenticated"; audience is not pinned here
    return jwt.decode(token, secret, algorithms=[alg], options={"verify_aud": False})


def access_token() -> Optional[str]:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth.split(" ", 1)[1]
    return request.cookies.get(current_app.config.get("AUTH_COOKIE_NAME", "sb-access-token"))


def current_user() -> Optional[AuthUser]:
    """The signed-in user for this request, or None for anonymous visitors."""
    if "auth_user" in g:
        return g.auth_user
    user = None
    token = access_token()
    if token:
        try:
            claims = decode(token)
        except jwt.PyJWTError as e:
            logger.info("ignoring invalid access token: {}", e)
        else:
            if claims.get("sub"):
                user = AuthUser(id=str(claims["sub"]), email=claims.get("email"))
    g.auth_user = user
    return user
