from tokenindexer.domain.enums.parse_error import ParseErrorType
from tokenindexer.domain.enums.token_event import TokenEventType
from tokenindexer.domain.enums.transaction import TransactionType

__all__ = [
    "ParseErrorType",
    "TokenEventType",
    "TransactionType",
]
