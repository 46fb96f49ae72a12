"""TokenActivityProcessor: normalizes transactions and persists their activities."""

from __future__ import annotations

import json
import logging
import traceback

from sqlalchemy.ext.asyncio import AsyncSession

from tokenindexer.db.models.token_activity import TokenActivityRecord
from tokenindexer.db.repos.parse_error_repo import ParseErrorRepo
from tokenindexer.db.repos.token_activity_repo import TokenActivityRepo
from tokenindexer.exceptions import TokenIndexerError
from tokenindexer.parser.token.activities import ActivityNormalizer
from tokenindexer.parser.utils.types import Transaction

logger = logging.getLogger(__name__)


class TokenActivityProcessor:
    """Transaction -> ActivityNormalizer -> TokenActivityRecord rows.

    A transaction the normalizer rejects is recorded as a ParseErrorRecord and
    contributes no rows; the rest of the batch is unaffected. Once a version
    normalizes, its earlier error records are removed.
    """

    def __init__(self, session: AsyncSession, normalizer: ActivityNormalizer) -> None:
        self._session = session
        self._normalizer = normalizer
        self._activities = TokenActivityRepo(session)
        self._errors = ParseErrorRepo(session)

    async def process_transaction(self, tx: Transaction) -> list[TokenActivityRecord] | None:
        records = await self._normalize(tx)
        if records is not None:
            await self._activities.bulk_insert(records)
        return records

    async def process_batch(self, txs: list[Transaction]) -> dict[str, int]:
        """Normalize every transaction, then insert all resulting rows in one flush."""
        stats = {"total": len(txs), "processed": 0, "errors": 0, "activities": 0, "inserted": 0}
        pending: list[TokenActivityRecord] = []
        for tx in txs:
            records = await self._normalize(tx)
            if records is None:
                stats["errors"] += 1
                continue
            stats["processed"] += 1
            stats["activities"] += len(records)
            pending.extend(records)

        stats["inserted"] = await self._activities.bulk_insert(pending)
        logger.info(
            "Processed %d/%d transactions: %d activities (%d new), %d errors",
            stats["processed"], stats["total"], stats["activities"], stats["inserted"], stats["errors"],
        )
        return stats

    async def _normalize(self, tx: Transaction) -> list[TokenActivityRecord] | None:
        try:
            activities = self._normalizer.normalize(tx)
        except TokenIndexerError as e:
            logger.exception("Failed to normalize transaction %d", tx.version)
            await self._errors.create(
                transaction_version=tx.version,
                error_type=e.error_type.value,
                message=str(e),
                stack_trace=traceback.format_exc(),
                diagnostic_data=json.dumps(self._build_diagnostics(tx)),
            )
            return None

        cleared = await self._errors.delete_for_version(tx.version)
        if cleared:
            logger.info("Cleared %d stale error(s) for transaction %d", cleared, tx.version)
        return [TokenActivityRecord.from_activity(a) for a in activities]

    @staticmethod
    def _build_diagnostics(tx: Transaction) -> dict:
        diag: dict = {
            "version": tx.version,
            "type": tx.type.value,
            "has_timestamp": tx.timestamp is not None,
        }
        if tx.user is not None:
            diag["event_types"] = [e.type_str for e in tx.user.events]
        return diag
