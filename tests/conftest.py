"""
pytest 공통 fixture 정의

설정 파일, Identity, Record Store, Ledger Engine fixture
"""

import tempfile
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio

from adapters.db.record_store import SQLiteRecordStore
from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.memory.record_store import InMemoryRecordStore
from core.ledger.engine import LedgerEngine
from core.ledger.staff import StaffRegistry
from core.types import Identity

# sha256("secret")
SECRET_SHA256 = "2bb80d537b1da3e38bd30361aa855686bde0eacd7162fef6a25fe97bf527a25b"


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = f"""# 테스트용 settings.yaml
web:
  secret_key: "test_jwt_secret_key_xyz"
  token_ttl_minutes: 60

storage:
  db_path: "{(temp_dir / 'fintrack.db').as_posix()}"

accounts:
  - username: "manager"
    display_name: "Fund Manager"
    password_sha256: "{SECRET_SHA256}"
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_strict(temp_dir: Path) -> Path:
    """정책 스위치를 반대로 설정한 settings.yaml"""
    settings_content = f"""web:
  secret_key: "strict_secret"

storage:
  db_path: "{(temp_dir / 'strict.db').as_posix()}"

ledger:
  block_insufficient_funds: true
  cascade_staff_delete: false

accounts:
  - username: "manager"
    password_sha256: "{SECRET_SHA256.upper()}"
"""
    settings_path = temp_dir / "settings_strict.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_no_secret(temp_dir: Path) -> Path:
    """secret_key가 없는 settings.yaml"""
    settings_path = temp_dir / "settings_no_secret.yaml"
    settings_path.write_text("web:\n  port: 9000\n", encoding="utf-8")
    return settings_path


# =============================================================================
# Identity / 저장소
# =============================================================================


@pytest.fixture
def identity() -> Identity:
    """실계정 Identity"""
    return Identity.account("user:manager", "Fund Manager")


@pytest.fixture
def other_identity() -> Identity:
    """다른 소유자 Identity (교차 조회 차단 확인용)"""
    return Identity.account("user:other", "Other")


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    """인메모리 Record Store"""
    return InMemoryRecordStore()


@pytest_asyncio.fixture
async def sqlite_db(tmp_path: Path) -> AsyncIterator[SQLiteAdapter]:
    """스키마가 초기화된 임시 SQLite DB"""
    async with SQLiteAdapter(tmp_path / "test.db") as db:
        await init_schema(db)
        yield db


@pytest_asyncio.fixture
async def sqlite_store(sqlite_db: SQLiteAdapter) -> SQLiteRecordStore:
    """SQLite Record Store"""
    return SQLiteRecordStore(sqlite_db)


@pytest.fixture
def engine(memory_store: InMemoryRecordStore) -> LedgerEngine:
    """인메모리 저장소 Ledger Engine (기본 정책)"""
    return LedgerEngine(memory_store)


@pytest.fixture
def registry(memory_store: InMemoryRecordStore) -> StaffRegistry:
    """인메모리 저장소 Staff Registry (기본 정책)"""
    return StaffRegistry(memory_store)
