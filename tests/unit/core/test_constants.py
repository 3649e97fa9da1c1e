"""
core/constants.py 테스트

경로는 pathlib.Path, 금액 상수는 Decimal인지 확인
"""

from decimal import Decimal
from pathlib import Path

from core.constants import PROJECT_ROOT, ZERO, Collections, Defaults, Paths


class TestPaths:
    """Paths 테스트"""

    def test_all_paths_are_pathlib(self) -> None:
        """모든 경로가 Path 타입"""
        for name in ("CONFIG_DIR", "DATA_DIR", "LOGS_DIR", "WEB_LOGS_DIR", "SETTINGS_FILE", "DEFAULT_DB"):
            assert isinstance(getattr(Paths, name), Path)

    def test_under_project_root(self) -> None:
        """프로젝트 루트 하위"""
        assert Paths.CONFIG_DIR.parent == PROJECT_ROOT
        assert Paths.SETTINGS_FILE.name == "settings.yaml"
        assert Paths.DEFAULT_DB.suffix == ".db"

    def test_project_root_contains_core(self) -> None:
        assert (PROJECT_ROOT / "core" / "constants.py").exists()


class TestDefaults:
    """Defaults 테스트"""

    def test_days_per_month(self) -> None:
        assert Defaults.DAYS_PER_MONTH == 30

    def test_guest_display_name(self) -> None:
        assert Defaults.GUEST_DISPLAY_NAME == "Demo User"


class TestCollections:
    """Collections 테스트"""

    def test_names_unique(self) -> None:
        names = [Collections.STAFF, Collections.PAYMENTS, Collections.EXPENSES, Collections.LEDGER]
        assert len(set(names)) == 4


def test_zero_is_decimal() -> None:
    assert isinstance(ZERO, Decimal)
    assert ZERO == 0
