from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from tokenindexer.db.session import Base, TimestampMixin
from tokenindexer.parser.utils.types import TokenActivity


class TokenActivityRecord(TimestampMixin, Base):
    """Persisted TokenActivity. Natural composite PK: one row per emitting event."""

    __tablename__ = "token_activities"
    __table_args__ = (
        Index("ix_token_activities_token_data_id_hash", "token_data_id_hash"),
        Index("ix_token_activities_collection_data_id_hash", "collection_data_id_hash"),
        Index("ix_token_activities_from_address", "from_address"),
        Index("ix_token_activities_to_address", "to_address"),
    )

    transaction_version: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    event_account_address: Mapped[str] = mapped_column(String, primary_key=True)
    event_creation_number: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    event_sequence_number: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    token_data_id_hash: Mapped[str] = mapped_column(String(64))
    property_version: Mapped[Decimal] = mapped_column(Numeric)
    creator_address: Mapped[str] = mapped_column(String)
    collection_name: Mapped[str] = mapped_column(String(128))
    name: Mapped[str] = mapped_column(String(128))
    transfer_type: Mapped[str] = mapped_column(String(50))
    from_address: Mapped[Optional[str]] = mapped_column(String, default=None)
    to_address: Mapped[Optional[str]] = mapped_column(String, default=None)
    token_amount: Mapped[Decimal] = mapped_column(Numeric)
    coin_type: Mapped[Optional[str]] = mapped_column(String, default=None)
    coin_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric, default=None)
    collection_data_id_hash: Mapped[str] = mapped_column(String(64))
    transaction_timestamp: Mapped[datetime] = mapped_column()
    event_index: Mapped[Optional[int]] = mapped_column(BigInteger, default=None)

    @property
    def key(self) -> tuple[int, str, int, int]:
        return (
            self.transaction_version,
            self.event_account_address,
            self.event_creation_number,
            self.event_sequence_number,
        )

    @classmethod
    def from_activity(cls, activity: TokenActivity) -> "TokenActivityRecord":
        return cls(**activity.model_dump())
