import logging
from dataclasses import dataclass

import jwt
from fastapi import Cookie, Header, HTTPException

from src.config.settings import Settings, is_configured, settings

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "newszoid_token"


@dataclass(frozen=True)
class CurrentUser:
    id: str
    name: str


def decode_user(token: str | None, config: Settings | None = None) -> CurrentUser | None:
    """Verify a session token and return its user, or None if it is unusable.

    Tokens are issued elsewhere; only the signature and the ``userId``/``sub``
    and ``name`` claims matter here.
    """
    config = config or settings
    if not token or not is_configured(config.jwt_secret):
        return None
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except jwt.PyJWTError as exc:
        logger.debug("Rejected session token: %s", exc)
        return None

    user_id = payload.get("userId") or payload.get("sub")
    if not user_id:
        return None
    return CurrentUser(id=str(user_id), name=str(payload.get("name") or "Reader"))


def _bearer(authorization: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1].strip()
    return None


async def get_current_user(
    authorization: str | None = Header(None),
    newszoid_token: str | None = Cookie(None),
) -> CurrentUser:
    user = decode_user(newszoid_token or _bearer(authorization))
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
