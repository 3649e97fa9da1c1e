"""
core/domain/errors.py 테스트
"""

import pytest

from core.domain.errors import (
    DuplicateEntry,
    Forbidden,
    InsufficientFunds,
    InvalidAmount,
    InvalidInput,
    LedgerError,
    NotFound,
    PartialWriteError,
)


class TestHierarchy:
    """예외 계층"""

    @pytest.mark.parametrize(
        "error_cls",
        [DuplicateEntry, NotFound, Forbidden, InvalidInput, InvalidAmount, InsufficientFunds, PartialWriteError],
    )
    def test_all_ledger_errors(self, error_cls: type) -> None:
        assert issubclass(error_cls, LedgerError)

    def test_invalid_amount_is_value_error(self) -> None:
        assert issubclass(InvalidAmount, InvalidInput)
        assert issubclass(InvalidAmount, ValueError)

    def test_codes_unique(self) -> None:
        codes = [
            cls.code
            for cls in (DuplicateEntry, NotFound, Forbidden, InvalidInput, InvalidAmount, InsufficientFunds, PartialWriteError)
        ]
        assert len(set(codes)) == len(codes)


class TestPayload:
    """예외 부가 정보"""

    def test_duplicate_carries_existing_id(self) -> None:
        error = DuplicateEntry("dup", existing_id="p1")
        assert error.existing_id == "p1"
        assert str(error) == "dup"

    def test_insufficient_funds(self) -> None:
        error = InsufficientFunds("low", balance=10, amount=20)
        assert (error.balance, error.amount) == (10, 20)

    def test_partial_write_defaults(self) -> None:
        error = PartialWriteError("partial")
        assert error.applied == []
        assert error.failed is None
