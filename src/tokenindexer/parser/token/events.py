"""Token event payloads and EventDecoder (type tag + JSON payload -> typed event)."""

import logging
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field, ValidationError

from tokenindexer.domain.enums import TokenEventType
from tokenindexer.exceptions import MalformedEventError
from tokenindexer.parser.token.identifier import CompositeIdentifier
from tokenindexer.parser.utils.address import standardize_address

logger = logging.getLogger(__name__)

# Move u64: amounts and property versions.
U64 = Annotated[Decimal, Field(ge=0, le=2**64 - 1)]


class TokenDataIdType(BaseModel):
    """Token identity without a property version, as it appears in event payloads."""

    creator: str
    collection: str
    name: str

    def to_identifier(self, property_version: Decimal) -> CompositeIdentifier:
        return CompositeIdentifier(
            creator_address=self.creator,
            collection_name=self.collection,
            token_name=self.name,
            property_version=property_version,
        )


class TokenIdType(BaseModel):
    token_data_id: TokenDataIdType
    property_version: U64

    def to_identifier(self) -> CompositeIdentifier:
        return self.token_data_id.to_identifier(self.property_version)


class MintTokenEvent(BaseModel):
    id: TokenDataIdType
    amount: U64


class BurnTokenEvent(BaseModel):
    id: TokenIdType
    amount: U64


class MutateTokenPropertyMapEvent(BaseModel):
    old_id: TokenIdType
    new_id: TokenIdType
    keys: list[str] = []
    values: list[Any] = []
    types: list[str] = []


class WithdrawTokenEvent(BaseModel):
    id: TokenIdType
    amount: U64


class DepositTokenEvent(BaseModel):
    id: TokenIdType
    amount: U64


class _TokenTransferEvent(BaseModel):
    """Shared shape of the token_transfers module events."""

    to_address: str
    token_id: TokenIdType
    amount: U64

    def get_to_address(self) -> str:
        return standardize_address(self.to_address)


class OfferTokenEvent(_TokenTransferEvent):
    pass


class CancelTokenOfferEvent(_TokenTransferEvent):
    pass


class ClaimTokenEvent(_TokenTransferEvent):
    pass


TokenEvent = (
    MintTokenEvent
    | BurnTokenEvent
    | MutateTokenPropertyMapEvent
    | WithdrawTokenEvent
    | DepositTokenEvent
    | OfferTokenEvent
    | CancelTokenOfferEvent
    | ClaimTokenEvent
)

# Exhaustive: every TokenEventType has exactly one variant.
TOKEN_EVENT_VARIANTS: dict[TokenEventType, type[BaseModel]] = {
    TokenEventType.MINT: MintTokenEvent,
    TokenEventType.BURN: BurnTokenEvent,
    TokenEventType.MUTATE_PROPERTY_MAP: MutateTokenPropertyMapEvent,
    TokenEventType.WITHDRAW: WithdrawTokenEvent,
    TokenEventType.DEPOSIT: DepositTokenEvent,
    TokenEventType.OFFER: OfferTokenEvent,
    TokenEventType.CANCEL_OFFER: CancelTokenOfferEvent,
    TokenEventType.CLAIM: ClaimTokenEvent,
}


class EventDecoder:
    """Classifies an event by its type tag and decodes the payload into a TokenEvent variant.

    Unknown tags are routine (coin events, account events, ...) and decode to None.
    A known tag whose payload does not fit the variant raises MalformedEventError.
    """

    def decode(self, type_tag: str, payload: str, txn_version: Optional[int] = None) -> Optional[TokenEvent]:
        event_type = self._event_type(type_tag)
        if event_type is None:
            return None

        variant = TOKEN_EVENT_VARIANTS[event_type]
        try:
            return variant.model_validate_json(payload)  # type: ignore[return-value]
        except ValidationError as e:
            logger.error(
                "Failed to decode %s payload at version %s: %s", type_tag, txn_version, e,
            )
            raise MalformedEventError(
                type_tag,
                f"payload does not match {variant.__name__} ({e.error_count()} error(s))",
                transaction_version=txn_version,
            ) from e

    def _event_type(self, type_tag: str) -> TokenEventType | None:
        try:
            return TokenEventType(type_tag)
        except ValueError:
            return None
