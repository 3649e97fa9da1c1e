"""
인메모리 어댑터

게스트 세션용 휘발성 Record Store 제공.
IRecordStore Protocol 준수하여 SQLite 구현체와 교체 가능.
"""

from adapters.memory.record_store import InMemoryRecordStore

__all__ = [
    "InMemoryRecordStore",
]
