"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from dataclasses import dataclass
from enum import Enum
from uuid import uuid4

from core.constants import Defaults


class LedgerKind(str, Enum):
    """분개 종류

    방향은 부호가 아니라 종류로 표현 (amount는 항상 0 이상).
    """

    INFLOW = "INFLOW"  # 수금 (Collector → Fund)
    SALARY_OUTFLOW = "SALARY_OUTFLOW"  # 급여 지급 (Payment 파생)
    EXPENSE_OUTFLOW = "EXPENSE_OUTFLOW"  # 시장(바자르) 지출 (Expense 파생)
    RETURN = "RETURN"  # Collector 반환

    @property
    def is_derived(self) -> bool:
        """Payment/Expense에서 자동 생성되는 종류인지"""
        return self in (LedgerKind.SALARY_OUTFLOW, LedgerKind.EXPENSE_OUTFLOW)

    @property
    def is_inflow(self) -> bool:
        """잔액 증가 방향인지"""
        return self is LedgerKind.INFLOW


class DueStatus(str, Enum):
    """급여 지급 상태 (due_amount 부호로 결정)"""

    DUE = "Due"  # 미지급분 있음 (due > 0)
    EXTRA = "Extra"  # 초과 지급 (due < 0)
    SETTLED = "Settled"  # 정산 완료 (due == 0)


class WriteOp(str, Enum):
    """Record Store 쓰기 연산 종류"""

    PUT = "PUT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Identity:
    """소유자 식별 정보 (불변)

    모든 Ledger Engine 호출에 명시적으로 전달되는 owner scope.
    게스트(데모) 신원은 휘발성 저장소에 연결됨.
    """

    id: str
    display_name: str
    is_guest: bool = False

    @classmethod
    def account(cls, user_id: str, display_name: str | None = None) -> "Identity":
        """실계정 Identity 생성"""
        return cls(id=user_id, display_name=display_name or "User", is_guest=False)

    @classmethod
    def guest(cls) -> "Identity":
        """게스트(데모) Identity 생성 - 세션마다 새 ID"""
        return cls(
            id=f"guest-{uuid4().hex}",
            display_name=Defaults.GUEST_DISPLAY_NAME,
            is_guest=True,
        )
