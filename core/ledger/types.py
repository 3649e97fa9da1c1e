"""
Ledger 타입 정의

분개 종류 분류(잔액 fold의 부호 결정)와 기본 설명 문구
"""

from core.types import LedgerKind


# 잔액 증가 종류
INFLOW_KINDS: frozenset[LedgerKind] = frozenset({LedgerKind.INFLOW})

# 잔액 감소 종류
OUTFLOW_KINDS: frozenset[LedgerKind] = frozenset({
    LedgerKind.SALARY_OUTFLOW,
    LedgerKind.EXPENSE_OUTFLOW,
    LedgerKind.RETURN,
})

# 원본 레코드에서 자동 생성 (직접 수정/삭제 불가)
DERIVED_KINDS: frozenset[LedgerKind] = frozenset({
    LedgerKind.SALARY_OUTFLOW,
    LedgerKind.EXPENSE_OUTFLOW,
})

# 운영자가 직접 생성/수정/삭제
MANUAL_KINDS: frozenset[LedgerKind] = frozenset({
    LedgerKind.INFLOW,
    LedgerKind.RETURN,
})

# 설명이 비어 있을 때 사용
DEFAULT_DESCRIPTIONS: dict[LedgerKind, str] = {
    LedgerKind.INFLOW: "Fund Collection",
    LedgerKind.RETURN: "Return to Collector",
}

SALARY_DESCRIPTION_PREFIX = "Salary to"
EXPENSE_DESCRIPTION_PREFIX = "Bazar:"
