"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.

저장소 선택은 여기서만 일어남:
- 계정 Identity → app.state.durable_store (SQLite)
- 게스트 Identity → app.state.guest_store (인메모리)
Ledger Engine / Staff Registry는 어느 저장소인지 구분하지 않음.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from adapters.auth.token_provider import AuthenticationError, TokenIdentityProvider
from adapters.interfaces import IRecordStore
from core.config.loader import LedgerPolicy
from core.ledger.engine import LedgerEngine
from core.ledger.reconciler import LedgerReconciler
from core.ledger.staff import StaffRegistry
from core.types import Identity

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_provider(request: Request) -> TokenIdentityProvider:
    """신원 제공자 반환 (lifespan에서 생성)"""
    return request.app.state.identity_provider


def get_ledger_policy(request: Request) -> LedgerPolicy:
    """Ledger 정책 반환"""
    return request.app.state.ledger_policy


def get_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Authorization: Bearer 토큰 추출

    Raises:
        AuthenticationError: 헤더가 없는 경우
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("인증 토큰이 필요합니다")
    return credentials.credentials


async def get_identity(
    token: str = Depends(get_token),
    provider: TokenIdentityProvider = Depends(get_identity_provider),
) -> Identity:
    """현재 요청의 Identity"""
    return await provider.current_identity(token)


def get_store(
    request: Request,
    identity: Identity = Depends(get_identity),
) -> IRecordStore:
    """Identity에 맞는 Record Store (게스트는 휘발성)"""
    if identity.is_guest:
        return request.app.state.guest_store
    return request.app.state.durable_store


def get_engine(
    store: IRecordStore = Depends(get_store),
    policy: LedgerPolicy = Depends(get_ledger_policy),
) -> LedgerEngine:
    """요청 단위 Ledger Engine"""
    return LedgerEngine(store, block_insufficient_funds=policy.block_insufficient_funds)


def get_registry(
    store: IRecordStore = Depends(get_store),
    policy: LedgerPolicy = Depends(get_ledger_policy),
) -> StaffRegistry:
    """요청 단위 Staff Registry"""
    return StaffRegistry(store, cascade_delete=policy.cascade_staff_delete)


def get_reconciler(store: IRecordStore = Depends(get_store)) -> LedgerReconciler:
    """요청 단위 Ledger Reconciler"""
    return LedgerReconciler(store)
