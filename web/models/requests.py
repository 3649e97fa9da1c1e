"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
금액 범위(음수 등)는 Ledger Engine에서 검증하여 InvalidAmount로 응답.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from core.types import LedgerKind


class LoginRequest(BaseModel):
    """계정 로그인 요청"""

    username: str = Field(..., description="사용자명")
    password: str = Field(..., description="비밀번호")


class StaffCreateRequest(BaseModel):
    """직원 등록 요청

    daily_rate / monthly_salary 중 하나만 지정 (월급은 30일 기준 일급 환산).
    """

    name: str = Field(..., description="직원 이름")
    daily_rate: Decimal | None = Field(default=None, description="일급")
    monthly_salary: Decimal | None = Field(default=None, description="월급")
    days_worked: int = Field(default=0, description="근무 일수")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Rahim", "monthly_salary": "18000"},
                {"name": "Karim", "daily_rate": "600", "days_worked": 12},
            ]
        }
    }


class StaffUpdateRequest(BaseModel):
    """직원 수정 요청 (None인 필드는 유지)"""

    name: str | None = Field(default=None, description="직원 이름")
    daily_rate: Decimal | None = Field(default=None, description="일급")
    days_worked: int | None = Field(default=None, description="근무 일수")


class PaymentCreateRequest(BaseModel):
    """급여 지급 기록 요청"""

    staff_id: str = Field(..., description="직원 ID")
    date: dt.date = Field(..., description="지급일 (YYYY-MM-DD)")
    amount_paid: Decimal = Field(..., description="지급액")
    days_covered: int = Field(default=1, description="지급 대상 일수")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"staff_id": "…", "date": "2025-01-10", "amount_paid": "500", "days_covered": 1},
            ]
        }
    }


class PaymentUpdateRequest(BaseModel):
    """급여 기록 수정 요청"""

    date: dt.date = Field(..., description="지급일 (YYYY-MM-DD)")
    amount_paid: Decimal = Field(..., description="지급액")
    days_covered: int | None = Field(default=None, description="지급 대상 일수 (None이면 유지)")


class ExpenseCreateRequest(BaseModel):
    """시장 지출 기록 요청"""

    description: str = Field(default="", description="지출 내용")
    amount: Decimal = Field(..., description="지출액")
    date: dt.date = Field(..., description="지출일 (YYYY-MM-DD)")


class ManualEntryRequest(BaseModel):
    """수금/반환 기록 요청

    SALARY_OUTFLOW / EXPENSE_OUTFLOW는 403 (급여/지출 API로만 생성).
    """

    kind: LedgerKind = Field(..., description="분개 종류 (INFLOW / RETURN)")
    amount: Decimal = Field(..., description="금액")
    date: dt.date = Field(..., description="날짜 (YYYY-MM-DD)")
    description: str = Field(default="", description="설명 (비우면 기본 문구)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"kind": "INFLOW", "amount": "10000", "date": "2025-01-01"},
                {"kind": "RETURN", "amount": "2000", "date": "2025-01-31", "description": "Month-end return"},
            ]
        }
    }


class ManualEntryUpdateRequest(BaseModel):
    """수금/반환 수정 요청"""

    amount: Decimal = Field(..., description="금액")
    date: dt.date = Field(..., description="날짜 (YYYY-MM-DD)")
    description: str = Field(default="", description="설명 (비우면 기본 문구)")
