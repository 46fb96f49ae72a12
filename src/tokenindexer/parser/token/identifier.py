"""CompositeIdentifier: token and collection identity with stable hashes."""

import hashlib
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from tokenindexer.parser.utils.address import standardize_address

# Storage width of collection_name / name columns, in UTF-8 bytes.
NAME_LENGTH = 128


def hash_str(value: str) -> str:
    """SHA-256 hex digest of a UTF-8 string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def truncate_str(value: str, max_bytes: int) -> str:
    """Cut to at most max_bytes of UTF-8 without splitting a character."""
    encoded = value.encode("utf-8")
    if len(encoded) <= max_bytes:
        return value
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def decimal_text(value: Decimal) -> str:
    """Plain decimal text with no exponent: Decimal("1E+2") -> "100", Decimal("3.0") -> "3"."""
    return format(value.normalize(), "f")


class CompositeIdentifier(BaseModel):
    """(creator, collection, name, property_version) identity of a token.

    Hashes are computed from the canonical creator address and the untruncated names.
    """

    model_config = ConfigDict(frozen=True)

    creator_address: str
    collection_name: str
    token_name: str
    property_version: Decimal = Field(default=Decimal(0), ge=0)

    def get_creator_address(self) -> str:
        return standardize_address(self.creator_address)

    def token_hash(self) -> str:
        return hash_str(
            f"{self.get_creator_address()}::{self.collection_name}::{self.token_name}"
            f"::{decimal_text(self.property_version)}"
        )

    def collection_hash(self) -> str:
        return hash_str(f"{self.get_creator_address()}::{self.collection_name}")

    def truncated_collection_name(self) -> str:
        return truncate_str(self.collection_name, NAME_LENGTH)

    def truncated_token_name(self) -> str:
        return truncate_str(self.token_name, NAME_LENGTH)
