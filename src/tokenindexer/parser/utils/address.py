"""Account address canonicalization."""

ADDRESS_HEX_LENGTH = 64


def standardize_address(raw: str) -> str:
    """Return the canonical form of an account address: ``0x`` + 64 lowercase hex digits.

    Short addresses are left-padded with zeros (``0x1`` -> ``0x000...001``).
    Bodies longer than 64 digits are kept whole rather than cut.
    """
    body = raw.strip().lower()
    if body.startswith("0x"):
        body = body[2:]
    return "0x" + body.rjust(ADDRESS_HEX_LENGTH, "0")
