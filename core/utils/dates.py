"""
날짜 유틸리티

내부 저장: UTC 타임스탬프 / 달력 날짜(YYYY-MM-DD) 원칙 준수를 위한 헬퍼 함수.
급여/지출/분개 날짜는 시간 정보 없는 달력 날짜로만 다룸.
"""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def parse_date(value: date | datetime | str) -> date:
    """달력 날짜로 변환

    datetime이 들어오면 날짜 부분만 사용 (시간 정보 버림).
    문자열은 "YYYY-MM-DD" 또는 완전한 ISO datetime만 허용.

    Args:
        value: date, datetime 또는 ISO 문자열 ("2025-01-10")

    Returns:
        date 객체

    Raises:
        ValueError: 날짜 형식이 아닌 경우

    Example:
        >>> parse_date("2025-01-10")
        datetime.date(2025, 1, 10)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        # 전체 ISO datetime ("2025-01-10T00:00:00")만 허용, 뒤에 붙은 문자열은 거부
        return datetime.fromisoformat(text).date()
    raise ValueError(f"날짜 형식이 아닙니다: {value!r}")


def parse_timestamp(value: datetime | str) -> datetime:
    """ISO 타임스탬프를 UTC datetime으로 변환 (naive면 UTC로 간주)"""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def in_month(day: date, year: int, month: int) -> bool:
    """날짜가 해당 연/월에 속하는지 (달력 기준 비교)"""
    return day.year == year and day.month == month
