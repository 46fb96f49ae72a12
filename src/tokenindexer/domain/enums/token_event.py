from enum import Enum


class TokenEventType(str, Enum):
    """Type tags of the token events that produce activities. Values are the on-chain tags verbatim."""

    MINT = "0x3::token::MintTokenEvent"
    BURN = "0x3::token::BurnTokenEvent"
    MUTATE_PROPERTY_MAP = "0x3::token::MutateTokenPropertyMapEvent"
    WITHDRAW = "0x3::token::WithdrawEvent"
    DEPOSIT = "0x3::token::DepositEvent"
    OFFER = "0x3::token_transfers::TokenOfferEvent"
    CANCEL_OFFER = "0x3::token_transfers::TokenCancelOfferEvent"
    CLAIM = "0x3::token_transfers::TokenClaimEvent"
