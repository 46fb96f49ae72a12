from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tokenindexer.db.models.token_activity import TokenActivityRecord

ActivityKey = tuple[int, str, int, int]


class TokenActivityRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_existing_keys(self, versions: set[int]) -> set[ActivityKey]:
        if not versions:
            return set()
        result = await self._session.execute(
            select(
                TokenActivityRecord.transaction_version,
                TokenActivityRecord.event_account_address,
                TokenActivityRecord.event_creation_number,
                TokenActivityRecord.event_sequence_number,
            ).where(TokenActivityRecord.transaction_version.in_(versions))
        )
        return {tuple(row) for row in result.all()}  # type: ignore[misc]

    async def bulk_insert(self, records: list[TokenActivityRecord]) -> int:
        """Insert records whose key is not stored yet. Returns the number inserted.

        A re-delivered transaction is therefore a no-op rather than a key violation.
        """
        existing = await self.get_existing_keys({r.transaction_version for r in records})
        fresh: list[TokenActivityRecord] = []
        for record in records:
            if record.key in existing:
                continue
            existing.add(record.key)
            fresh.append(record)

        self._session.add_all(fresh)
        await self._session.flush()
        return len(fresh)

    async def get_by_key(
        self,
        transaction_version: int,
        event_account_address: str,
        event_creation_number: int,
        event_sequence_number: int,
    ) -> Optional[TokenActivityRecord]:
        result = await self._session.execute(
            select(TokenActivityRecord).where(
                TokenActivityRecord.transaction_version == transaction_version,
                TokenActivityRecord.event_account_address == event_account_address,
                TokenActivityRecord.event_creation_number == event_creation_number,
                TokenActivityRecord.event_sequence_number == event_sequence_number,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_transaction(self, transaction_version: int) -> list[TokenActivityRecord]:
        result = await self._session.execute(
            select(TokenActivityRecord)
            .where(TokenActivityRecord.transaction_version == transaction_version)
            .order_by(TokenActivityRecord.event_index.asc())
        )
        return list(result.scalars().all())

    async def list_activities(
        self,
        token_data_id_hash: Optional[str] = None,
        collection_data_id_hash: Optional[str] = None,
        address: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[TokenActivityRecord], int]:
        """Newest first. `address` matches either side of a transfer."""
        base = select(TokenActivityRecord)
        count_q = select(func.count()).select_from(TokenActivityRecord)

        if token_data_id_hash:
            base = base.where(TokenActivityRecord.token_data_id_hash == token_data_id_hash)
            count_q = count_q.where(TokenActivityRecord.token_data_id_hash == token_data_id_hash)
        if collection_data_id_hash:
            base = base.where(TokenActivityRecord.collection_data_id_hash == collection_data_id_hash)
            count_q = count_q.where(TokenActivityRecord.collection_data_id_hash == collection_data_id_hash)
        if address:
            either_side = or_(TokenActivityRecord.from_address == address, TokenActivityRecord.to_address == address)
            base = base.where(either_side)
            count_q = count_q.where(either_side)

        total_result = await self._session.execute(count_q)
        total = total_result.scalar_one()

        result = await self._session.execute(
            base.order_by(
                TokenActivityRecord.transaction_version.desc(),
                TokenActivityRecord.event_index.asc(),
            )
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total
