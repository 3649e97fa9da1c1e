"""
유틸리티 패키지

날짜 처리, 금액 파싱 등 공통 유틸리티
"""

from core.utils.dates import (
    in_month,
    now_utc,
    parse_date,
    parse_timestamp,
)
from core.utils.money import parse_amount, parse_days

__all__ = [
    "in_month",
    "now_utc",
    "parse_date",
    "parse_timestamp",
    "parse_amount",
    "parse_days",
]
