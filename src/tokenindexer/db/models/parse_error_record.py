from typing import Optional

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tokenindexer.db.session import Base, TimestampMixin, UUIDPrimaryKey


class ParseErrorRecord(UUIDPrimaryKey, TimestampMixin, Base):
    """A transaction the normalizer rejected."""

    __tablename__ = "parse_error_records"

    transaction_version: Mapped[Optional[int]] = mapped_column(BigInteger, index=True, default=None)
    error_type: Mapped[str] = mapped_column(String(50))
    message: Mapped[Optional[str]] = mapped_column(Text, default=None)
    stack_trace: Mapped[Optional[str]] = mapped_column(Text, default=None)
    resolved: Mapped[bool] = mapped_column(default=False)
    diagnostic_data: Mapped[Optional[str]] = mapped_column(Text, default=None)  # JSON diagnostic payload
