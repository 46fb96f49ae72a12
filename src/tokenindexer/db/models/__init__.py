from tokenindexer.db.models.parse_error_record import ParseErrorRecord
from tokenindexer.db.models.token_activity import TokenActivityRecord

__all__ = [
    "ParseErrorRecord",
    "TokenActivityRecord",
]
