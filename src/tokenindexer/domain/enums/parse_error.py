from enum import Enum


class ParseErrorType(str, Enum):
    """Categorized normalization failures recorded per transaction."""

    MISSING_USER_TRANSACTION = "MissingUserTransaction"
    MISSING_TIMESTAMP = "MissingTimestamp"
    MALFORMED_EVENT = "MalformedEvent"
    TX_PARSE_ERROR = "TxParseError"
