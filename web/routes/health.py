"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

from fastapi import APIRouter

from core.utils.dates import now_utc
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """서버 상태 확인 (인증 불필요)"""
    return HealthResponse(status="ok", version=API_VERSION, timestamp=now_utc())
