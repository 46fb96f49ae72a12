import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ParseErrorResponse(BaseModel):
    id: uuid.UUID
    transaction_version: Optional[int] = None
    error_type: str
    message: Optional[str] = None
    stack_trace: Optional[str] = None
    resolved: bool
    created_at: datetime
    diagnostic_data: Optional[dict[str, Any]] = None

    model_config = {"from_attributes": True}


class ErrorList(BaseModel):
    errors: list[ParseErrorResponse]
    total: int
    limit: int
    offset: int
