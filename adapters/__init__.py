"""
어댑터 레이어

외부 서비스(레코드 저장소, 신원 제공자)와의 연동을 담당.
Protocol 기반 인터페이스로 구현체 교체 가능.
"""

from adapters.interfaces import (
    IIdentityProvider,
    IRecordStore,
    RecordCallback,
    Unsubscribe,
)

__all__ = [
    "IIdentityProvider",
    "IRecordStore",
    "RecordCallback",
    "Unsubscribe",
]
