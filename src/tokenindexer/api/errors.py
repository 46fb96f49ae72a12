import json
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tokenindexer.api.deps import get_db
from tokenindexer.api.schemas.errors import ErrorList, ParseErrorResponse
from tokenindexer.db.models.parse_error_record import ParseErrorRecord
from tokenindexer.db.repos.parse_error_repo import ParseErrorRepo

router = APIRouter(prefix="/api/errors", tags=["errors"])

DbDep = Annotated[AsyncSession, Depends(get_db)]


def _to_response(e: ParseErrorRecord) -> ParseErrorResponse:
    """Convert a ParseErrorRecord to response, deserializing diagnostic_data JSON."""
    diag = None
    if e.diagnostic_data:
        try:
            diag = json.loads(e.diagnostic_data)
        except (json.JSONDecodeError, TypeError):
            pass

    return ParseErrorResponse(
        id=e.id,
        transaction_version=e.transaction_version,
        error_type=e.error_type,
        message=e.message,
        stack_trace=e.stack_trace,
        resolved=e.resolved,
        created_at=e.created_at,
        diagnostic_data=diag,
    )


@router.get("", response_model=ErrorList)
async def list_errors(
    db: DbDep,
    error_type: Optional[str] = Query(None),
    resolved: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> ErrorList:
    repo = ParseErrorRepo(db)
    rows, total = await repo.list_errors(error_type=error_type, resolved=resolved, limit=limit, offset=offset)
    return ErrorList(errors=[_to_response(e) for e in rows], total=total, limit=limit, offset=offset)
