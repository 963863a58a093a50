"""
Token manager for identity-provider session tokens.

Tokens are issued by the external identity provider. The ``sub`` claim
is the provider's user id and the authorization role lives in the
optional ``metadata.role`` claim.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from app.configs import settings
from app.schemas.auth import AuthContext, Role


def role_from_claims(claims: dict[str, Any]) -> Role:
    """
    Resolve the role from token claims.

    Missing metadata, a missing role or an unknown role all give ``Role.USER``.

    Args:
        claims: Decoded token payload

    Returns:
        Role: Resolved role
    """
    metadata = claims.get("metadata")
    if not isinstance(metadata, dict):
        return Role.USER
    try:
        return Role(metadata.get("role") or Role.USER)
    except ValueError:
        return Role.USER


def create_access_token(
    user_id: str,
    role: Role = Role.USER,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a session token in the identity provider's format.

    Used by local tooling and tests; production tokens come from the provider.

    Args:
        user_id: Identity provider user id
        role: Role placed in ``metadata.role``
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=30))

    to_encode: dict[str, Any] = {
        "sub": user_id,
        "iat": now,
        "exp": expire,
        "metadata": {"role": role.value},
    }
    if settings.JWT_ISSUER:
        to_encode["iss"] = settings.JWT_ISSUER
    if settings.JWT_AUDIENCE:
        to_encode["aud"] = settings.JWT_AUDIENCE

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> AuthContext | None:
    """
    Decode and validate a session token.

    Args:
        token: JWT token string

    Returns:
        AuthContext | None: Caller identity or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"verify_aud": settings.JWT_AUDIENCE is not None},
        )
    except JWTError:
        return None

    user_id: str | None = payload.get("sub")
    if not user_id:
        return None

    return AuthContext(user_id=user_id, role=role_from_claims(payload))
