"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths


@dataclass(frozen=True)
class AccountCredential:
    """로그인 가능한 계정 (비밀번호는 sha256 hex로만 보관)"""

    username: str
    display_name: str
    password_sha256: str


@dataclass(frozen=True)
class WebConfig:
    """Web 서버 / 토큰 설정"""

    secret_key: str
    token_ttl_minutes: int = Defaults.TOKEN_TTL_MINUTES
    host: str = Defaults.WEB_HOST
    port: int = Defaults.WEB_PORT


@dataclass(frozen=True)
class LedgerPolicy:
    """Ledger 정책 스위치

    block_insufficient_funds: 잔액이 음수가 되는 지출을 차단할지 여부
    cascade_staff_delete: 직원 삭제 시 급여/분개를 함께 삭제할지 여부
    """

    block_insufficient_funds: bool = False
    cascade_staff_delete: bool = True


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    web: WebConfig
    db_path: Path
    ledger: LedgerPolicy = field(default_factory=LedgerPolicy)
    accounts: tuple[AccountCredential, ...] = ()


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _parse_bool(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise SettingsLoadError(f"'{key}' 값은 true/false 여야 합니다: {value!r}")
    return value


def _parse_accounts(raw: Any) -> tuple[AccountCredential, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SettingsLoadError("'accounts'는 목록이어야 합니다")

    accounts = []
    for item in raw:
        username = item.get("username")
        password_sha256 = item.get("password_sha256")
        if not username or not password_sha256:
            raise SettingsLoadError(
                "accounts 항목에 'username'과 'password_sha256'이 필요합니다"
            )
        accounts.append(
            AccountCredential(
                username=username,
                display_name=item.get("display_name") or username,
                password_sha256=password_sha256.lower(),
            )
        )
    return tuple(accounts)


def load_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")

    web_section = data.get("web") or {}
    secret_key = web_section.get("secret_key", "")
    if not secret_key:
        raise SettingsLoadError("settings.yaml의 web 섹션에 'secret_key'가 없습니다")

    try:
        ttl = int(web_section.get("token_ttl_minutes", Defaults.TOKEN_TTL_MINUTES))
        port = int(web_section.get("port", Defaults.WEB_PORT))
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(f"web 섹션 숫자 값이 잘못되었습니다: {e}") from e

    if ttl <= 0:
        raise SettingsLoadError("token_ttl_minutes는 0보다 커야 합니다")

    web = WebConfig(
        secret_key=secret_key,
        token_ttl_minutes=ttl,
        host=web_section.get("host", Defaults.WEB_HOST),
        port=port,
    )

    # 상대 경로는 프로젝트 루트 기준
    storage_section = data.get("storage") or {}
    db_path = Path(storage_section.get("db_path") or Paths.DEFAULT_DB)
    if not db_path.is_absolute():
        db_path = PROJECT_ROOT / db_path

    ledger_section = data.get("ledger") or {}
    ledger = LedgerPolicy(
        block_insufficient_funds=_parse_bool(
            ledger_section, "block_insufficient_funds", False
        ),
        cascade_staff_delete=_parse_bool(ledger_section, "cascade_staff_delete", True),
    )

    return AppConfig(
        web=web,
        db_path=db_path,
        ledger=ledger,
        accounts=_parse_accounts(data.get("accounts")),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(settings_path)

    @property
    def config(self) -> AppConfig:
        """로드된 전체 설정"""
        assert self._config is not None
        return self._config

    @property
    def web(self) -> WebConfig:
        """Web 설정"""
        return self.config.web

    @property
    def db_path(self) -> Path:
        """영속 저장소 DB 경로"""
        return self.config.db_path

    @property
    def ledger(self) -> LedgerPolicy:
        """Ledger 정책"""
        return self.config.ledger

    @property
    def accounts(self) -> tuple[AccountCredential, ...]:
        """로그인 계정 목록"""
        return self.config.accounts

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
