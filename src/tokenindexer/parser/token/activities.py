"""ActivityNormalizer: one transaction's token events -> canonical TokenActivity records."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import assert_never

from tokenindexer.domain.enums import ParseErrorType, TransactionType
from tokenindexer.exceptions import MalformedTransactionError
from tokenindexer.parser.token.events import (
    BurnTokenEvent,
    CancelTokenOfferEvent,
    ClaimTokenEvent,
    DepositTokenEvent,
    EventDecoder,
    MintTokenEvent,
    MutateTokenPropertyMapEvent,
    OfferTokenEvent,
    TokenEvent,
    WithdrawTokenEvent,
)
from tokenindexer.parser.token.identifier import CompositeIdentifier
from tokenindexer.parser.utils.address import standardize_address
from tokenindexer.parser.utils.types import (
    TokenActivity,
    Transaction,
    TransactionEvent,
    TransactionTimestamp,
)

logger = logging.getLogger(__name__)

# Largest whole second a datetime can hold.
MAX_TIMESTAMP_SECS = int(datetime(9999, 12, 31, 23, 59, 59, tzinfo=UTC).timestamp())


def parse_timestamp(ts: TransactionTimestamp) -> datetime:
    """Chain timestamp -> naive UTC datetime. Out-of-range seconds clamp to the datetime limit."""
    seconds = min(ts.seconds, MAX_TIMESTAMP_SECS)
    return datetime.fromtimestamp(seconds, tz=UTC).replace(tzinfo=None, microsecond=ts.nanos // 1000)


class ActivityNormalizer:
    """Stateless Transaction -> list[TokenActivity] mapping. Safe to share across workers."""

    def __init__(self, decoder: EventDecoder | None = None) -> None:
        self._decoder = decoder or EventDecoder()

    def normalize(self, transaction: Transaction) -> list[TokenActivity]:
        """Map every recognized token event of a user transaction, in event order.

        Raises MalformedTransactionError for non-user transactions or a missing timestamp,
        MalformedEventError for a token event with an undecodable payload. Nothing is
        returned for a transaction that fails.
        """
        version = transaction.version
        if transaction.type != TransactionType.USER or transaction.user is None:
            logger.error("User transaction data doesn't exist for version %d", version)
            raise MalformedTransactionError(
                f"Transaction {version} ({transaction.type.value}) has no user transaction data",
                transaction_version=version,
            )
        if transaction.timestamp is None:
            logger.error("Timestamp doesn't exist for version %d", version)
            raise MalformedTransactionError(
                f"Transaction {version} has no timestamp",
                transaction_version=version,
                error_type=ParseErrorType.MISSING_TIMESTAMP,
            )

        txn_timestamp = parse_timestamp(transaction.timestamp)
        activities: list[TokenActivity] = []
        for index, event in enumerate(transaction.user.events):
            token_event = self._decoder.decode(event.type_str, event.data, version)
            if token_event is None:
                continue
            activities.append(self.from_parsed_event(event, token_event, version, txn_timestamp, index))
        return activities

    def from_parsed_event(
        self,
        event: TransactionEvent,
        token_event: TokenEvent,
        txn_version: int,
        txn_timestamp: datetime,
        event_index: int,
    ) -> TokenActivity:
        event_account_address = standardize_address(event.key.account_address)
        identifier, from_address, to_address, token_amount = self._extract(token_event, event_account_address)

        return TokenActivity(
            transaction_version=txn_version,
            event_account_address=event_account_address,
            event_creation_number=event.key.creation_number,
            event_sequence_number=event.sequence_number,
            token_data_id_hash=identifier.token_hash(),
            property_version=identifier.property_version,
            creator_address=identifier.get_creator_address(),
            collection_name=identifier.truncated_collection_name(),
            name=identifier.truncated_token_name(),
            transfer_type=event.type_str,
            from_address=from_address,
            to_address=to_address,
            token_amount=token_amount,
            coin_type=None,
            coin_amount=None,
            collection_data_id_hash=identifier.collection_hash(),
            transaction_timestamp=txn_timestamp,
            event_index=event_index,
        )

    @staticmethod
    def _extract(
        token_event: TokenEvent, event_account_address: str,
    ) -> tuple[CompositeIdentifier, str | None, str | None, Decimal]:
        """Per-variant (identifier, from_address, to_address, token_amount)."""
        match token_event:
            case MintTokenEvent():
                return token_event.id.to_identifier(Decimal(0)), event_account_address, None, token_event.amount
            case BurnTokenEvent() | WithdrawTokenEvent():
                return token_event.id.to_identifier(), event_account_address, None, token_event.amount
            case MutateTokenPropertyMapEvent():
                return token_event.new_id.to_identifier(), event_account_address, None, Decimal(0)
            case DepositTokenEvent():
                return token_event.id.to_identifier(), None, event_account_address, token_event.amount
            case OfferTokenEvent() | CancelTokenOfferEvent() | ClaimTokenEvent():
                return (
                    token_event.token_id.to_identifier(),
                    event_account_address,
                    token_event.get_to_address(),
                    token_event.amount,
                )
            case _:
                assert_never(token_event)
