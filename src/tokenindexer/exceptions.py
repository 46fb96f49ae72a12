"""Errors raised while turning transactions into token activities."""

from __future__ import annotations

from tokenindexer.domain.enums import ParseErrorType


class TokenIndexerError(Exception):
    """Base class for every failure the indexer reports to its caller."""

    error_type: ParseErrorType = ParseErrorType.TX_PARSE_ERROR


class MalformedTransactionError(TokenIndexerError):
    """A transaction lacks the user payload or timestamp the normalizer needs."""

    def __init__(
        self,
        message: str,
        transaction_version: int | None = None,
        error_type: ParseErrorType = ParseErrorType.MISSING_USER_TRANSACTION,
    ) -> None:
        super().__init__(message)
        self.transaction_version = transaction_version
        self.error_type = error_type


class MalformedEventError(TokenIndexerError):
    """A recognized token event tag carries a payload of the wrong shape."""

    error_type = ParseErrorType.MALFORMED_EVENT

    def __init__(self, type_tag: str, message: str, transaction_version: int | None = None) -> None:
        super().__init__(f"{type_tag}: {message}")
        self.type_tag = type_tag
        self.transaction_version = transaction_version
