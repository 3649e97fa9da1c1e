"""
Ledger 도메인 예외

Ledger Engine이 발생시키는 예외 계층.
모든 예외는 자동 재시도 없이 호출한 운영자 액션으로 그대로 전달됨.
"""

from typing import Any


class LedgerError(Exception):
    """Ledger 예외 기본 클래스"""

    code: str = "LEDGER_ERROR"


class DuplicateEntry(LedgerError):
    """같은 직원/같은 날짜에 급여 기록이 이미 있음

    existing_id로 기존 기록을 알려주어 호출자가 수정 모드로 전환할 수 있게 함.
    """

    code = "DUPLICATE_ENTRY"

    def __init__(self, message: str, existing_id: str | None = None):
        super().__init__(message)
        self.existing_id = existing_id


class NotFound(LedgerError):
    """대상 기록이 없음 (다른 세션에서 삭제된 경우 포함)"""

    code = "NOT_FOUND"


class Forbidden(LedgerError):
    """허용되지 않은 직접 수정/삭제 (파생 분개 등)"""

    code = "FORBIDDEN"


class InvalidInput(LedgerError, ValueError):
    """잘못된 입력값 (빈 이름, 알 수 없는 분개 종류, 날짜 형식 등)"""

    code = "INVALID_INPUT"


class InvalidAmount(InvalidInput):
    """음수이거나 숫자가 아닌 금액/일수"""

    code = "INVALID_AMOUNT"


class InsufficientFunds(LedgerError):
    """지출 후 잔액이 음수가 됨 (block_insufficient_funds 정책 활성 시)"""

    code = "INSUFFICIENT_FUNDS"

    def __init__(self, message: str, balance: Any = None, amount: Any = None):
        super().__init__(message)
        self.balance = balance
        self.amount = amount


class PartialWriteError(LedgerError):
    """연결된 쓰기 중 일부만 반영됨

    원자적 다중 쓰기를 지원하지 않는 저장소에서 두 번째 이후 단계가 실패한 경우.
    운영자가 수동으로 정합을 맞추거나 LedgerReconciler로 복구해야 함.
    """

    code = "PARTIAL_WRITE"

    def __init__(
        self,
        message: str,
        applied: list[Any] | None = None,
        failed: Any = None,
    ):
        super().__init__(message)
        self.applied = applied or []
        self.failed = failed
