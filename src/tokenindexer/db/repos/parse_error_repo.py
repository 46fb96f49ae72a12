from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tokenindexer.db.models.parse_error_record import ParseErrorRecord


class ParseErrorRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        transaction_version: Optional[int],
        error_type: str,
        message: str,
        stack_trace: Optional[str] = None,
        diagnostic_data: Optional[str] = None,
    ) -> ParseErrorRecord:
        record = ParseErrorRecord(
            transaction_version=transaction_version,
            error_type=error_type,
            message=message,
            stack_trace=stack_trace,
            diagnostic_data=diagnostic_data,
        )
        self._session.add(record)
        await self._session.flush()
        return record

    async def list_errors(
        self,
        error_type: Optional[str] = None,
        resolved: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[ParseErrorRecord], int]:
        base = select(ParseErrorRecord)
        count_q = select(func.count()).select_from(ParseErrorRecord)

        if error_type:
            base = base.where(ParseErrorRecord.error_type == error_type)
            count_q = count_q.where(ParseErrorRecord.error_type == error_type)
        if resolved is not None:
            base = base.where(ParseErrorRecord.resolved == resolved)
            count_q = count_q.where(ParseErrorRecord.resolved == resolved)

        total_result = await self._session.execute(count_q)
        total = total_result.scalar_one()

        result = await self._session.execute(
            base.order_by(ParseErrorRecord.created_at.desc(), ParseErrorRecord.transaction_version.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total

    async def delete_for_version(self, transaction_version: int) -> int:
        result = await self._session.execute(
            delete(ParseErrorRecord).where(ParseErrorRecord.transaction_version == transaction_version)
        )
        return result.rowcount
