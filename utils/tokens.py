"""
Token Service
Issues and verifies signed JWT access/refresh tokens
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from config import Settings

ALGORITHM = 'HS256'
ACCESS = 'access'
REFRESH = 'refresh'


class InvalidToken(Exception):
    """Token is malformed, forged, expired, revoked or of the wrong kind"""


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    """
    Stateless token issuer bound to a pair of secrets.

    Access tokens and refresh tokens are signed with different secrets and
    carry a ``type`` claim, so neither kind is accepted in place of the other.
    An optional ``revocation_check(claims) -> bool`` rejects tokens it flags.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(hours=1),
        refresh_ttl: timedelta = timedelta(days=7),
        revocation_check: Optional[Callable[[dict], bool]] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        if not access_secret or not refresh_secret:
            raise ValueError("Token secrets must be non-empty")
        self._secrets = {ACCESS: access_secret, REFRESH: refresh_secret}
        self._ttls = {ACCESS: access_ttl, REFRESH: refresh_ttl}
        self._revocation_check = revocation_check
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> 'TokenService':
        return cls(
            access_secret=settings.jwt_secret,
            refresh_secret=settings.jwt_refresh_secret,
            access_ttl=timedelta(minutes=settings.access_token_ttl_minutes),
            refresh_ttl=timedelta(days=settings.refresh_token_ttl_days),
            **kwargs,
        )

    def _issue(self, user_id: str, kind: str) -> str:
        now = self._clock()
        payload = {
            'id': str(user_id),
            'type': kind,
            'iat': now,
            'exp': now + self._ttls[kind],
        }
        return jwt.encode(payload, self._secrets[kind], algorithm=ALGORITHM)

    def _verify(self, token: str, kind: str) -> str:
        if not token:
            raise InvalidToken("Token missing")
        try:
            claims = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[ALGORITHM],
                options={'require': ['exp', 'id']},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidToken("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken("Token invalid") from e

        if claims.get('type') != kind:
            raise InvalidToken("Wrong token type")
        if self._revocation_check is not None and self._revocation_check(claims):
            raise InvalidToken("Token revoked")

        user_id = claims.get('id')
        if not isinstance(user_id, str) or not user_id:
            raise InvalidToken("Token has no identity")
        return user_id

    def issue_access_token(self, user_id: str) -> str:
        return self._issue(user_id, ACCESS)

    def issue_token_pair(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=self._issue(user_id, ACCESS),
            refresh_token=self._issue(user_id, REFRESH),
        )

    def verify_access_token(self, token: str) -> str:
        """Return the user id bound to a valid access token"""
        return self._verify(token, ACCESS)

    def verify_refresh_token(self, token: str) -> str:
        """Return the user id bound to a valid refresh token"""
        return self._verify(token, REFRESH)
