"""Bearer-token authentication.

Tokens are HS256 JWTs carrying the user id in ``sub`` and the user's
``role``. Routes depend on :func:`get_actor` to receive an
:class:`~marketplace.access.Actor`; a missing or invalid token is a 401.
"""

from datetime import UTC, datetime, timedelta

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from marketplace.access import Actor, Role
from marketplace.config import get_settings

bearer_scheme = HTTPBearer(auto_error=False)

_ROLES = {role.value for role in Role}


def create_access_token(user_id: str, role: str = Role.BUYER.value, expires_delta: timedelta | None = None) -> str:
    """Issue a signed token for ``user_id`` (used by tooling and tests)."""
    settings = get_settings()
    now = datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + (expires_delta or timedelta(hours=24)),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Actor:
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise _unauthorized("Invalid token") from exc

    user_id = claims.get("sub")
    role = claims.get("role", Role.BUYER.value)
    if not user_id or role not in _ROLES:
        raise _unauthorized("Invalid token")
    return Actor(user_id=str(user_id), role=role)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_actor(credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> Actor:  # noqa: B008
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Access token required")
    return decode_token(credentials.credentials)
