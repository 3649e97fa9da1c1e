"""
스토리지 모듈

Record Store 쓰기 묶음(TransactionalWrite)과 적용 헬퍼 제공
"""

from core.storage.transaction import (
    RecordMissingError,
    StoreError,
    TransactionalWrite,
    WriteStep,
    apply_write,
)

__all__ = [
    "RecordMissingError",
    "StoreError",
    "TransactionalWrite",
    "WriteStep",
    "apply_write",
]
