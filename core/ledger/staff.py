"""
Staff Registry

직원 등록/수정/삭제. 일급(daily_rate)은 급여 기록의 expected 계산 기준.
월급으로 등록하면 30일 기준 일급으로 환산.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

from core.constants import Collections, Defaults
from core.domain.errors import Forbidden, InvalidInput, NotFound
from core.domain.models import LedgerEntry, Payment, Staff, new_id
from core.storage.transaction import RecordMissingError, TransactionalWrite, apply_write
from core.types import Identity
from core.utils.money import parse_amount, parse_days

if TYPE_CHECKING:
    from adapters.interfaces import IRecordStore

logger = logging.getLogger(__name__)


def daily_rate_from_monthly(monthly_salary: Any) -> Decimal:
    """월급 → 일급 환산 (30일 기준, 정수 반올림)

    Example:
        >>> daily_rate_from_monthly("18000")
        Decimal('600')
    """
    monthly = parse_amount(monthly_salary, "monthly_salary")
    return (monthly / Defaults.DAYS_PER_MONTH).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def _clean_name(name: Any) -> str:
    text = name.strip() if isinstance(name, str) else ""
    if not text:
        raise InvalidInput(f"직원 이름이 비어 있습니다: {name!r}")
    return text


class StaffRegistry:
    """직원 관리

    Args:
        store: Record Store
        cascade_delete: True면 직원 삭제 시 급여 기록과 분개도 함께 삭제,
            False면 급여 기록이 남은 직원 삭제를 거부

    사용 예시:
    ```python
    registry = StaffRegistry(store)
    staff = await registry.register_staff(identity, "Rahim", monthly_salary="18000")
    assert staff.daily_rate == Decimal("600")
    ```
    """

    def __init__(self, store: IRecordStore, cascade_delete: bool = True):
        self.store = store
        self.cascade_delete = cascade_delete

    async def register_staff(
        self,
        identity: Identity,
        name: str,
        daily_rate: Any = None,
        days_worked: Any = 0,
        monthly_salary: Any = None,
    ) -> Staff:
        """직원 등록

        daily_rate / monthly_salary 중 정확히 하나만 지정.

        Raises:
            InvalidInput: 이름이 비었거나 단가를 둘 다/하나도 지정하지 않은 경우
            InvalidAmount: 단가 음수/숫자 아님
        """
        if (daily_rate is None) == (monthly_salary is None):
            raise InvalidInput("daily_rate 또는 monthly_salary 중 하나만 지정해야 합니다")

        if monthly_salary is not None:
            rate = daily_rate_from_monthly(monthly_salary)
        else:
            rate = parse_amount(daily_rate, "daily_rate")

        staff = Staff(
            id=new_id(),
            owner_id=identity.id,
            name=_clean_name(name),
            daily_rate=rate,
            days_worked=parse_days(days_worked, "days_worked", minimum=0),
        )
        await self.store.put(Collections.STAFF, staff.id, staff.to_dict())

        logger.info(f"직원 등록: {staff.name} (id={staff.id}, rate={rate})")
        return staff

    async def update_staff(
        self,
        identity: Identity,
        staff_id: str,
        name: str | None = None,
        daily_rate: Any = None,
        days_worked: Any = None,
    ) -> Staff:
        """직원 정보 수정 (None인 필드는 유지)

        단가 변경은 이후 기록/수정되는 급여의 expected에만 반영.
        """
        staff = await self.get_staff(identity, staff_id)

        fields: dict[str, Any] = {}
        if name is not None:
            staff.name = _clean_name(name)
            fields["name"] = staff.name
        if daily_rate is not None:
            staff.daily_rate = parse_amount(daily_rate, "daily_rate")
            fields["daily_rate"] = str(staff.daily_rate)
        if days_worked is not None:
            staff.days_worked = parse_days(days_worked, "days_worked", minimum=0)
            fields["days_worked"] = staff.days_worked

        if fields:
            await self._commit(TransactionalWrite().update(Collections.STAFF, staff.id, fields))
            logger.info(f"직원 수정: id={staff.id}, fields={sorted(fields)}")

        return staff

    async def delete_staff(self, identity: Identity, staff_id: str) -> int:
        """직원 삭제

        Returns:
            함께 삭제된 급여 기록 수

        Raises:
            NotFound: 직원이 없는 경우
            Forbidden: cascade_delete=False인데 급여 기록이 남아 있는 경우
        """
        staff = await self.get_staff(identity, staff_id)

        payments = [
            Payment.from_dict(r)
            for r in await self.store.query(Collections.PAYMENTS, identity.id)
            if r.get("staff_id") == staff.id
        ]
        if payments and not self.cascade_delete:
            raise Forbidden(f"{staff.name}: 급여 기록 {len(payments)}건이 남아 있어 삭제할 수 없습니다")

        entries_by_ref = {
            r.get("reference_id"): LedgerEntry.from_dict(r)
            for r in await self.store.query(Collections.LEDGER, identity.id)
            if r.get("reference_id")
        }

        write = TransactionalWrite()
        for payment in payments:
            write.delete(Collections.PAYMENTS, payment.id)
            entry = entries_by_ref.get(payment.id)
            if entry is not None:
                write.delete(Collections.LEDGER, entry.id)
        write.delete(Collections.STAFF, staff.id)

        await self._commit(write)

        logger.info(f"직원 삭제: {staff.name} (id={staff.id}, 급여 기록 {len(payments)}건)")
        return len(payments)

    async def list_staff(self, identity: Identity) -> list[Staff]:
        """직원 목록 (등록순)"""
        records = await self.store.query(Collections.STAFF, identity.id)
        staff = [Staff.from_dict(r) for r in records]
        return sorted(staff, key=lambda s: s.created_at)

    async def get_staff(self, identity: Identity, staff_id: str) -> Staff:
        """직원 단건 조회

        Raises:
            NotFound: 없거나 다른 소유자의 직원인 경우
        """
        record = await self.store.get(Collections.STAFF, staff_id)
        if record is None or record.get("owner_id") != identity.id:
            raise NotFound(f"직원을 찾을 수 없습니다: {staff_id}")
        return Staff.from_dict(record)

    async def _commit(self, write: TransactionalWrite) -> None:
        try:
            await apply_write(self.store, write)
        except RecordMissingError as e:
            raise NotFound(f"기록을 찾을 수 없습니다: {e.collection}/{e.record_id}") from e
