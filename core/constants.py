"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → fintrack/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # 월급 → 일당 환산 기준 일수
    DAYS_PER_MONTH: int = 30

    # 인증 토큰 유효 시간 (분)
    TOKEN_TTL_MINUTES: int = 720

    GUEST_DISPLAY_NAME: str = "Demo User"
    CURRENCY_SYMBOL: str = "৳"


class Collections:
    """Record Store 컬렉션 이름"""

    STAFF: str = "staff"
    PAYMENTS: str = "payments"
    EXPENSES: str = "expenses"
    LEDGER: str = "ledger"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    DEFAULT_DB: Path = DATA_DIR / "fintrack.db"


# 금액 0 (Decimal 비교/합산 초기값)
ZERO: Decimal = Decimal("0")
