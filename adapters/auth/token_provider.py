"""
토큰 신원 제공자

settings.yaml의 accounts로 로그인하고 HS256 JWT를 발급.
게스트 로그인은 세션마다 새 게스트 Identity를 발급 (휘발성 저장소용).

토큰 claim:
- sub: Identity.id
- name: 표시 이름
- guest: 게스트 여부
- jti: 토큰 ID (로그아웃 시 무효화 목록에 추가)
- iat / exp: 발급 / 만료 시각
"""

import hashlib
import hmac
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable

import jwt

from core.config.loader import AccountCredential
from core.constants import Defaults
from core.types import Identity
from core.utils.dates import now_utc

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class AuthenticationError(Exception):
    """로그인 실패 또는 토큰이 잘못/만료/무효화됨"""

    pass


@dataclass(frozen=True)
class IssuedToken:
    """발급된 토큰"""

    access_token: str
    identity: Identity
    expires_at: datetime


def hash_password(password: str) -> str:
    """비밀번호 sha256 hex (settings.yaml의 password_sha256 생성용)"""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class TokenIdentityProvider:
    """JWT 신원 제공자

    Args:
        secret_key: 서명 키
        ttl_minutes: 토큰 유효 시간 (분)
        accounts: 로그인 가능한 계정 목록

    사용 예시:
    ```python
    provider = TokenIdentityProvider(settings.web.secret_key, accounts=settings.accounts)
    issued = provider.sign_in("manager", "secret")
    identity = await provider.current_identity(issued.access_token)
    ```
    """

    def __init__(
        self,
        secret_key: str,
        ttl_minutes: int = Defaults.TOKEN_TTL_MINUTES,
        accounts: Iterable[AccountCredential] = (),
    ):
        if not secret_key:
            raise ValueError("secret_key가 비어 있습니다")

        self._secret_key = secret_key
        self._ttl = timedelta(minutes=ttl_minutes)
        self._accounts = {a.username: a for a in accounts}
        self._revoked: set[str] = set()

    # -------------------------------------------------------------------------
    # 로그인
    # -------------------------------------------------------------------------

    def sign_in(self, username: str, password: str) -> IssuedToken:
        """계정 로그인

        Raises:
            AuthenticationError: 사용자명 또는 비밀번호가 틀린 경우
        """
        account = self._accounts.get(username)
        if account is None or not hmac.compare_digest(
            hash_password(password), account.password_sha256
        ):
            logger.warning(f"로그인 실패: username={username}")
            raise AuthenticationError("사용자명 또는 비밀번호가 올바르지 않습니다")

        identity = Identity.account(f"user:{account.username}", account.display_name)
        logger.info(f"로그인: {identity.id}")
        return self._issue(identity)

    def sign_in_guest(self) -> IssuedToken:
        """게스트(데모) 로그인 - 휘발성 저장소에 연결되는 새 Identity"""
        identity = Identity.guest()
        logger.info(f"게스트 로그인: {identity.id}")
        return self._issue(identity)

    # -------------------------------------------------------------------------
    # IIdentityProvider
    # -------------------------------------------------------------------------

    async def current_identity(self, token: str) -> Identity:
        """토큰의 Identity 조회

        Raises:
            AuthenticationError: 서명 불일치, 만료, 로그아웃된 토큰
        """
        claims = self._decode(token)
        return self._identity_from(claims)

    async def sign_out(self, token: str) -> Identity:
        """로그아웃 (jti 무효화)

        Returns:
            로그아웃한 Identity (게스트면 호출자가 휘발성 레코드 정리)
        """
        claims = self._decode(token)
        self._revoked.add(claims["jti"])

        identity = self._identity_from(claims)
        logger.info(f"로그아웃: {identity.id}")
        return identity

    def is_revoked(self, jti: str) -> bool:
        return jti in self._revoked

    # -------------------------------------------------------------------------
    # 내부
    # -------------------------------------------------------------------------

    def _issue(self, identity: Identity) -> IssuedToken:
        issued_at = now_utc()
        expires_at = issued_at + self._ttl

        payload: dict[str, Any] = {
            "sub": identity.id,
            "name": identity.display_name,
            "guest": identity.is_guest,
            "jti": uuid.uuid4().hex,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)
        return IssuedToken(access_token=token, identity=identity, expires_at=expires_at)

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "jti", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("토큰이 만료되었습니다") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"유효하지 않은 토큰: {e}") from e

        if claims["jti"] in self._revoked:
            raise AuthenticationError("로그아웃된 토큰입니다")
        return claims

    @staticmethod
    def _identity_from(claims: dict[str, Any]) -> Identity:
        return Identity(
            id=claims["sub"],
            display_name=claims.get("name") or claims["sub"],
            is_guest=bool(claims.get("guest", False)),
        )
