"""
core/config/loader.py 테스트

settings.yaml 로드, 검증, Settings 싱글턴 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    AccountCredential,
    LedgerPolicy,
    Settings,
    SettingsLoadError,
    get_settings,
    load_config,
)
from core.constants import PROJECT_ROOT, Defaults

# sha256("secret")
SECRET_SHA256 = "2bb80d537b1da3e38bd30361aa855686bde0eacd7162fef6a25fe97bf527a25b"


class TestLoadConfig:
    """load_config 테스트"""

    def test_load_valid(self, temp_settings_file: Path, temp_dir: Path) -> None:
        """정상 로드"""
        config = load_config(temp_settings_file)

        assert config.web.secret_key == "test_jwt_secret_key_xyz"
        assert config.web.token_ttl_minutes == 60
        assert config.web.port == Defaults.WEB_PORT
        assert config.db_path == temp_dir / "fintrack.db"

    def test_default_policies(self, temp_settings_file: Path) -> None:
        """ledger 섹션이 없으면 기본 정책"""
        config = load_config(temp_settings_file)

        assert config.ledger == LedgerPolicy(
            block_insufficient_funds=False,
            cascade_staff_delete=True,
        )

    def test_policy_overrides(self, temp_settings_file_strict: Path) -> None:
        """정책 스위치 로드"""
        config = load_config(temp_settings_file_strict)

        assert config.ledger.block_insufficient_funds is True
        assert config.ledger.cascade_staff_delete is False

    def test_accounts(self, temp_settings_file: Path) -> None:
        """계정 목록 로드"""
        config = load_config(temp_settings_file)

        assert config.accounts == (
            AccountCredential("manager", "Fund Manager", SECRET_SHA256),
        )

    def test_account_hash_lowercased_and_name_defaulted(self, temp_settings_file_strict: Path) -> None:
        """해시는 소문자로, display_name은 username으로 기본 설정"""
        account = load_config(temp_settings_file_strict).accounts[0]

        assert account.password_sha256 == SECRET_SHA256
        assert account.display_name == "manager"

    def test_missing_file(self, temp_dir: Path) -> None:
        """파일 없음"""
        with pytest.raises(SettingsLoadError, match="찾을 수 없습니다"):
            load_config(temp_dir / "nope.yaml")

    def test_missing_secret_key(self, temp_settings_file_no_secret: Path) -> None:
        """secret_key 없음"""
        with pytest.raises(SettingsLoadError, match="secret_key"):
            load_config(temp_settings_file_no_secret)

    def test_empty_file(self, temp_dir: Path) -> None:
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="비어"):
            load_config(path)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        path = temp_dir / "broken.yaml"
        path.write_text("web: [unclosed", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="파싱"):
            load_config(path)

    def test_non_bool_policy(self, temp_dir: Path) -> None:
        """정책 값은 true/false만 허용"""
        path = temp_dir / "bad_policy.yaml"
        path.write_text(
            'web:\n  secret_key: "k"\nledger:\n  block_insufficient_funds: "yes"\n',
            encoding="utf-8",
        )

        with pytest.raises(SettingsLoadError, match="block_insufficient_funds"):
            load_config(path)

    def test_relative_db_path(self, temp_dir: Path) -> None:
        """상대 DB 경로는 프로젝트 루트 기준"""
        path = temp_dir / "relative.yaml"
        path.write_text(
            'web:\n  secret_key: "k"\nstorage:\n  db_path: "data/x.db"\n',
            encoding="utf-8",
        )

        assert load_config(path).db_path == PROJECT_ROOT / "data" / "x.db"

    def test_account_without_hash(self, temp_dir: Path) -> None:
        path = temp_dir / "bad_account.yaml"
        path.write_text(
            'web:\n  secret_key: "k"\naccounts:\n  - username: "a"\n',
            encoding="utf-8",
        )

        with pytest.raises(SettingsLoadError, match="password_sha256"):
            load_config(path)

    def test_non_positive_ttl(self, temp_dir: Path) -> None:
        path = temp_dir / "ttl.yaml"
        path.write_text('web:\n  secret_key: "k"\n  token_ttl_minutes: 0\n', encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="token_ttl_minutes"):
            load_config(path)


class TestSettings:
    """Settings 싱글턴 테스트"""

    def setup_method(self) -> None:
        Settings.reset()

    def teardown_method(self) -> None:
        Settings.reset()

    def test_singleton(self, temp_settings_file: Path) -> None:
        """같은 인스턴스 반환"""
        first = get_settings(temp_settings_file)
        second = get_settings()

        assert first is second

    def test_properties(self, temp_settings_file: Path, temp_dir: Path) -> None:
        settings = get_settings(temp_settings_file)

        assert settings.web.secret_key == "test_jwt_secret_key_xyz"
        assert settings.db_path == temp_dir / "fintrack.db"
        assert settings.ledger.cascade_staff_delete is True
        assert len(settings.accounts) == 1

    def test_reset(self, temp_settings_file: Path, temp_settings_file_strict: Path) -> None:
        """reset 후 다른 파일 로드"""
        get_settings(temp_settings_file)
        Settings.reset()

        settings = get_settings(temp_settings_file_strict)

        assert settings.ledger.block_insufficient_funds is True
