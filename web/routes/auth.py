"""
인증 라우트

계정 로그인 / 게스트 로그인 / 로그아웃 / 현재 사용자
"""

import logging

from fastapi import APIRouter, Depends, Request

from adapters.auth.token_provider import IssuedToken, TokenIdentityProvider
from core.types import Identity
from web.dependencies import get_identity, get_identity_provider, get_token
from web.models.requests import LoginRequest
from web.models.responses import IdentityResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _token_response(issued: IssuedToken) -> TokenResponse:
    return TokenResponse(
        access_token=issued.access_token,
        expires_at=issued.expires_at,
        identity=IdentityResponse.from_identity(issued.identity),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    provider: TokenIdentityProvider = Depends(get_identity_provider),
) -> TokenResponse:
    """계정 로그인 (settings.yaml의 accounts)"""
    return _token_response(provider.sign_in(request.username, request.password))


@router.post("/guest", response_model=TokenResponse)
async def login_guest(
    provider: TokenIdentityProvider = Depends(get_identity_provider),
) -> TokenResponse:
    """게스트(데모) 로그인

    기록은 휘발성 저장소에만 남고 로그아웃 시 삭제됨 (identity.durable=false).
    """
    return _token_response(provider.sign_in_guest())


@router.post("/logout", response_model=IdentityResponse)
async def logout(
    request: Request,
    token: str = Depends(get_token),
    provider: TokenIdentityProvider = Depends(get_identity_provider),
) -> IdentityResponse:
    """로그아웃 (토큰 무효화, 게스트 기록 삭제)"""
    identity = await provider.sign_out(token)

    if identity.is_guest:
        purged = await request.app.state.guest_store.purge_owner(identity.id)
        logger.info(f"게스트 기록 삭제: {identity.id} ({purged}건)")

    return IdentityResponse.from_identity(identity)


@router.get("/me", response_model=IdentityResponse)
async def me(identity: Identity = Depends(get_identity)) -> IdentityResponse:
    """현재 사용자"""
    return IdentityResponse.from_identity(identity)
