"""
Access/refresh token issuing and verification.

Both tokens are stateless HS256 JWTs. Access and refresh tokens are signed
with different secrets, so a token of one kind never verifies as the other.
Nothing is stored server side: a token is valid while its signature checks
out and ``now < exp``.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, Literal

from fastapi import Request
from jose import JWTError, jwt
from pydantic import ValidationError

from hisaabu.core.config import Settings
from hisaabu.core.schemas import CamelModel

logger = logging.getLogger(__name__)

JWT_ALG = "HS256"
DEV_ACCESS_SECRET = "dev-access-secret-change-me"
DEV_REFRESH_SECRET = "dev-refresh-secret-change-me"

UserType = Literal["platform_admin", "company_user"]


class AccessClaims(CamelModel):
    user_id: str
    email: str
    user_type: UserType
    role: str
    company_id: str | None = None
    company_status: str | None = None
    iat: int | None = None
    exp: int | None = None


class RefreshClaims(CamelModel):
    user_id: str
    user_type: UserType
    iat: int | None = None
    exp: int | None = None


def extract_bearer(header_value: str | None) -> str | None:
    if not header_value:
        return None
    parts = header_value.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]


class TokenService:
    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        access_ttl_seconds: int,
        refresh_ttl_seconds: int,
        clock: Callable[[], float] = time.time,
    ):
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.access_ttl_seconds = access_ttl_seconds
        self.refresh_ttl_seconds = refresh_ttl_seconds
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TokenService":
        access_secret = settings.JWT_SECRET
        refresh_secret = settings.JWT_REFRESH_SECRET
        if settings.ENV != "dev":
            if not access_secret or not refresh_secret:
                raise RuntimeError("JWT_SECRET and JWT_REFRESH_SECRET must be set")
            if access_secret == refresh_secret:
                raise RuntimeError("JWT_SECRET and JWT_REFRESH_SECRET must differ")
        return cls(
            access_secret=access_secret or DEV_ACCESS_SECRET,
            refresh_secret=refresh_secret or DEV_REFRESH_SECRET,
            access_ttl_seconds=settings.JWT_ACCESS_EXP_MINUTES * 60,
            refresh_ttl_seconds=settings.JWT_REFRESH_EXP_DAYS * 24 * 60 * 60,
            **kwargs,
        )

    def _now(self) -> int:
        return int(self._clock())

    def _encode(self, payload: dict[str, Any], secret: str, ttl_seconds: int) -> str:
        now = self._now()
        to_encode = dict(payload)
        to_encode["iat"] = now
        to_encode["exp"] = now + ttl_seconds
        return jwt.encode(to_encode, secret, algorithm=JWT_ALG)

    def _decode(self, token: str, secret: str) -> dict[str, Any] | None:
        try:
            # expiry is checked against our own clock below
            payload = jwt.decode(
                token,
                secret,
                algorithms=[JWT_ALG],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            return None

        exp = payload.get("exp")
        if not isinstance(exp, int) or self._now() >= exp:
            return None
        return payload

    def issue_access(self, claims: AccessClaims) -> str:
        payload = claims.model_dump(by_alias=True, exclude_none=True, exclude={"iat", "exp"})
        return self._encode(payload, self._access_secret, self.access_ttl_seconds)

    def issue_refresh(self, claims: RefreshClaims) -> str:
        payload = claims.model_dump(by_alias=True, exclude_none=True, exclude={"iat", "exp"})
        return self._encode(payload, self._refresh_secret, self.refresh_ttl_seconds)

    def verify_access(self, token: str) -> AccessClaims | None:
        payload = self._decode(token, self._access_secret)
        if payload is None:
            return None
        try:
            return AccessClaims.model_validate(payload)
        except ValidationError:
            return None

    def verify_refresh(self, token: str) -> RefreshClaims | None:
        payload = self._decode(token, self._refresh_secret)
        if payload is None:
            return None
        try:
            return RefreshClaims.model_validate(payload)
        except ValidationError:
            return None


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


__all__ = [
    "AccessClaims",
    "RefreshClaims",
    "TokenService",
    "UserType",
    "extract_bearer",
    "get_token_service",
]
