import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from jose import jwt, JWTError

from prephub.config import Settings, settings as default_settings
from prephub.errors import Forbidden, InvalidOrExpiredToken, Unauthenticated
from prephub.models.enums import Role

import logging
logger = logging.getLogger("prephub.auth")


@dataclass(frozen=True)
class Identity:
    id: int
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin


class AuthOutcome(str, enum.Enum):
    authenticated = "authenticated"
    anonymous = "anonymous"
    # 帶了 token 但驗證失敗：照匿名處理
    rejected = "rejected"


@dataclass(frozen=True)
class OptionalAuth:
    outcome: AuthOutcome
    identity: Optional[Identity] = None


def create_access_token(
    identity: Identity,
    cfg: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    cfg = cfg or default_settings
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else timedelta(days=cfg.ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {
        "sub": str(identity.id),
        "id": identity.id,
        "email": identity.email,
        "role": Role(identity.role).value,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, cfg.JWT_SECRET, algorithm=cfg.JWT_ALGORITHM)


def decode_access_token(token: str, cfg: Settings | None = None) -> Identity:
    cfg = cfg or default_settings
    if not token:
        raise InvalidOrExpiredToken()

    try:
        payload = jwt.decode(token, cfg.JWT_SECRET, algorithms=[cfg.JWT_ALGORITHM])
    except JWTError:
        raise InvalidOrExpiredToken()

    # jose 只在有 exp 時才檢查，沒有 exp 的 token 一律拒絕
    if "exp" not in payload:
        raise InvalidOrExpiredToken()

    try:
        return Identity(
            id=int(payload["id"]),
            email=str(payload["email"]),
            role=Role(payload["role"]),
        )
    except (KeyError, TypeError, ValueError):
        raise InvalidOrExpiredToken()


def extract_bearer_token(authorization: str | None) -> str | None:
    """``"Bearer <token>"`` -> ``"<token>"``; anything else -> None."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def _settings_of(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or default_settings


def get_current_identity(request: Request) -> Identity:
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise Unauthenticated()
    return decode_access_token(token, _settings_of(request))


def get_optional_auth(request: Request) -> OptionalAuth:
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return OptionalAuth(AuthOutcome.anonymous)
    try:
        identity = decode_access_token(token, _settings_of(request))
    except InvalidOrExpiredToken:
        logger.debug("Optional auth: token rejected, continuing anonymously")
        return OptionalAuth(AuthOutcome.rejected)
    return OptionalAuth(AuthOutcome.authenticated, identity)


#管理者驗證
def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        raise Forbidden()
    return identity
