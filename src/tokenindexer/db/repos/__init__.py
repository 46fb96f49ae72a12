from tokenindexer.db.repos.parse_error_repo import ParseErrorRepo
from tokenindexer.db.repos.token_activity_repo import TokenActivityRepo

__all__ = ["ParseErrorRepo", "TokenActivityRepo"]
