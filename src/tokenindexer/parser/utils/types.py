"""Core data types for the normalizer: the transaction it reads and the activity it emits."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tokenindexer.domain.enums import TransactionType


class EventKey(BaseModel):
    """Identity of the event stream that emitted an event."""

    account_address: str
    creation_number: int = Field(ge=0)


class TransactionEvent(BaseModel):
    """One event of a user transaction, payload still JSON-encoded."""

    key: EventKey
    sequence_number: int = Field(ge=0)
    type_str: str  # type tag, e.g. "0x3::token::MintTokenEvent"
    data: str  # JSON payload


class TransactionTimestamp(BaseModel):
    seconds: int = Field(ge=0)
    nanos: int = Field(default=0, ge=0, lt=1_000_000_000)


class UserTransaction(BaseModel):
    events: list[TransactionEvent] = []


class Transaction(BaseModel):
    """A committed transaction as delivered by the stream. Only user transactions carry events."""

    version: int = Field(ge=0)
    timestamp: Optional[TransactionTimestamp] = None
    type: TransactionType = TransactionType.USER
    user: Optional[UserTransaction] = None


class TokenActivity(BaseModel):
    """Canonical record of one token event.

    Unique on (transaction_version, event_account_address, event_creation_number, event_sequence_number).
    """

    model_config = ConfigDict(frozen=True)

    transaction_version: int
    event_account_address: str
    event_creation_number: int
    event_sequence_number: int
    token_data_id_hash: str
    property_version: Decimal
    creator_address: str
    collection_name: str
    name: str
    transfer_type: str  # raw event type tag
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    token_amount: Decimal
    coin_type: Optional[str] = None  # reserved for coin-paired transfers
    coin_amount: Optional[Decimal] = None
    collection_data_id_hash: str
    transaction_timestamp: datetime  # naive UTC
    event_index: Optional[int] = None

    @property
    def key(self) -> tuple[int, str, int, int]:
        return (
            self.transaction_version,
            self.event_account_address,
            self.event_creation_number,
            self.event_sequence_number,
        )
