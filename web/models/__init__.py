"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    ExpenseCreateRequest,
    LoginRequest,
    ManualEntryRequest,
    ManualEntryUpdateRequest,
    PaymentCreateRequest,
    PaymentUpdateRequest,
    StaffCreateRequest,
    StaffUpdateRequest,
)
from web.models.responses import (
    ActivityResponse,
    BalanceResponse,
    DashboardResponse,
    DeleteResponse,
    ErrorResponse,
    ExpenseCreatedResponse,
    ExpenseResponse,
    HealthResponse,
    IdentityResponse,
    LedgerEntryResponse,
    MonthlyBreakdownResponse,
    MonthlyRowResponse,
    PaymentCreatedResponse,
    PaymentResponse,
    PeriodResponse,
    ReconcileResponse,
    StaffResponse,
    StaffSummaryResponse,
    TokenResponse,
)

__all__ = [
    # Requests
    "ExpenseCreateRequest",
    "LoginRequest",
    "ManualEntryRequest",
    "ManualEntryUpdateRequest",
    "PaymentCreateRequest",
    "PaymentUpdateRequest",
    "StaffCreateRequest",
    "StaffUpdateRequest",
    # Responses
    "ActivityResponse",
    "BalanceResponse",
    "DashboardResponse",
    "DeleteResponse",
    "ErrorResponse",
    "ExpenseCreatedResponse",
    "ExpenseResponse",
    "HealthResponse",
    "IdentityResponse",
    "LedgerEntryResponse",
    "MonthlyBreakdownResponse",
    "MonthlyRowResponse",
    "PaymentCreatedResponse",
    "PaymentResponse",
    "PeriodResponse",
    "ReconcileResponse",
    "StaffResponse",
    "StaffSummaryResponse",
    "TokenResponse",
]
