"""
인증 어댑터

JWT 기반 신원 제공자 (계정 로그인 / 게스트 데모 로그인).
IIdentityProvider Protocol 준수.
"""

from adapters.auth.token_provider import (
    AuthenticationError,
    IssuedToken,
    TokenIdentityProvider,
    hash_password,
)

__all__ = [
    "AuthenticationError",
    "IssuedToken",
    "TokenIdentityProvider",
    "hash_password",
]
