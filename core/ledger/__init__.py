"""
현금 장부 (Cash Fund Ledger)

급여 지급 / 시장 지출 / 수금·반환을 분개로 기록하고
분개 전체에서 잔액을 다시 계산.

사용 예시:
```python
from core.ledger import LedgerEngine, StaffRegistry

registry = StaffRegistry(store)
engine = LedgerEngine(store)

staff = await registry.register_staff(identity, "Rahim", daily_rate="600")
await engine.record_manual_entry(identity, "INFLOW", "10000", "2025-01-01")
payment, entry = await engine.record_payment(identity, staff.id, "2025-01-10", "500")

balance = await engine.get_balance(identity)  # Decimal("9500")
```
"""

from core.ledger.balance import (
    PeriodAggregate,
    compute_balance,
    compute_period_aggregate,
    fold_entries,
)
from core.ledger.engine import LedgerEngine
from core.ledger.entry_builder import LedgerEntryBuilder
from core.ledger.reconciler import DriftInfo, LedgerReconciler, ReconcileReport
from core.ledger.reports import (
    ActivityItem,
    DashboardSummary,
    MonthlyRow,
    StaffSummary,
    activity_log,
    dashboard_summary,
    kind_totals,
    monthly_breakdown,
    staff_summary,
)
from core.ledger.staff import StaffRegistry, daily_rate_from_monthly
from core.ledger.types import (
    DEFAULT_DESCRIPTIONS,
    DERIVED_KINDS,
    INFLOW_KINDS,
    MANUAL_KINDS,
    OUTFLOW_KINDS,
)

__all__ = [
    # 핵심 클래스
    "LedgerEngine",
    "StaffRegistry",
    "LedgerEntryBuilder",
    "LedgerReconciler",
    # 잔액 계산
    "PeriodAggregate",
    "compute_balance",
    "compute_period_aggregate",
    "fold_entries",
    # 리포트
    "ActivityItem",
    "DashboardSummary",
    "MonthlyRow",
    "StaffSummary",
    "activity_log",
    "dashboard_summary",
    "kind_totals",
    "monthly_breakdown",
    "staff_summary",
    # 정합
    "DriftInfo",
    "ReconcileReport",
    # 상수
    "DEFAULT_DESCRIPTIONS",
    "DERIVED_KINDS",
    "INFLOW_KINDS",
    "MANUAL_KINDS",
    "OUTFLOW_KINDS",
    "daily_rate_from_monthly",
]
