from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from tokenindexer.parser.utils.types import Transaction


class TokenActivityResponse(BaseModel):
    transaction_version: int
    event_account_address: str
    event_creation_number: int
    event_sequence_number: int
    token_data_id_hash: str
    property_version: Decimal
    creator_address: str
    collection_name: str
    name: str
    transfer_type: str
    from_address: Optional[str]
    to_address: Optional[str]
    token_amount: Decimal
    coin_type: Optional[str]
    coin_amount: Optional[Decimal]
    collection_data_id_hash: str
    transaction_timestamp: datetime
    event_index: Optional[int]

    model_config = {"from_attributes": True}


class TokenActivityList(BaseModel):
    activities: list[TokenActivityResponse]
    total: int
    limit: int
    offset: int


class TransactionBatchRequest(BaseModel):
    transactions: list[Transaction]


class IngestResponse(BaseModel):
    total: int
    processed: int
    errors: int
    activities: int
    inserted: int


class NormalizeResponse(BaseModel):
    version: int
    activities: list[TokenActivityResponse]
