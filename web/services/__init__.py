"""
Web 서비스 패키지

여러 레코드 목록을 조합하는 조회 로직
"""

from web.services.dashboard_service import DashboardService

__all__ = [
    "DashboardService",
]
