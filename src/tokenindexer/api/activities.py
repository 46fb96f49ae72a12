from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tokenindexer.api.deps import build_processor, get_db, get_normalizer
from tokenindexer.api.schemas.activities import (
    IngestResponse,
    NormalizeResponse,
    TokenActivityList,
    TokenActivityResponse,
    TransactionBatchRequest,
)
from tokenindexer.db.repos.token_activity_repo import TokenActivityRepo
from tokenindexer.exceptions import TokenIndexerError
from tokenindexer.parser.token.activities import ActivityNormalizer
from tokenindexer.parser.utils.address import standardize_address
from tokenindexer.parser.utils.types import Transaction

router = APIRouter(prefix="/api/activities", tags=["activities"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
NormalizerDep = Annotated[ActivityNormalizer, Depends(get_normalizer)]


@router.get("", response_model=TokenActivityList)
async def list_activities(
    db: DbDep,
    token_data_id_hash: Optional[str] = Query(None),
    collection_data_id_hash: Optional[str] = Query(None),
    address: Optional[str] = Query(None, description="Matches from_address or to_address"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> TokenActivityList:
    repo = TokenActivityRepo(db)
    rows, total = await repo.list_activities(
        token_data_id_hash=token_data_id_hash,
        collection_data_id_hash=collection_data_id_hash,
        address=standardize_address(address) if address else None,
        limit=limit,
        offset=offset,
    )
    return TokenActivityList(
        activities=[TokenActivityResponse.model_validate(r) for r in rows],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/transactions/{version}", response_model=list[TokenActivityResponse])
async def get_transaction_activities(version: int, db: DbDep) -> list[TokenActivityResponse]:
    repo = TokenActivityRepo(db)
    rows = await repo.list_for_transaction(version)
    return [TokenActivityResponse.model_validate(r) for r in rows]


@router.post("/normalize", response_model=NormalizeResponse)
async def normalize_transaction(body: Transaction, normalizer: NormalizerDep) -> NormalizeResponse:
    """Dry run: map one transaction without persisting anything."""
    try:
        activities = normalizer.normalize(body)
    except TokenIndexerError as e:
        raise HTTPException(
            status_code=422,
            detail={"error_type": e.error_type.value, "message": str(e)},
        ) from e
    return NormalizeResponse(
        version=body.version,
        activities=[TokenActivityResponse.model_validate(a) for a in activities],
    )


@router.post("/ingest", response_model=IngestResponse)
async def ingest_transactions(body: TransactionBatchRequest, db: DbDep, normalizer: NormalizerDep) -> IngestResponse:
    """Normalize and store a batch. Rejected transactions are recorded under /api/errors."""
    processor = build_processor(db, normalizer)
    stats = await processor.process_batch(body.transactions)
    await db.commit()
    return IngestResponse(**stats)
