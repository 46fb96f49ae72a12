from enum import Enum


class TransactionType(str, Enum):
    """Kinds of transactions a chain stream emits. Only USER carries events."""

    USER = "user"
    GENESIS = "genesis"
    BLOCK_METADATA = "block_metadata"
    STATE_CHECKPOINT = "state_checkpoint"
    VALIDATOR = "validator"
