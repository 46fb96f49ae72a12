from tokenindexer.parser.utils.address import standardize_address

CANONICAL_ONE = "0x" + "0" * 63 + "1"


class TestStandardizeAddress:
    def test_pads_short_address(self):
        assert standardize_address("0x1") == CANONICAL_ONE

    def test_lowercases(self):
        assert standardize_address("0xABC") == "0x" + "0" * 61 + "abc"

    def test_uppercase_prefix(self):
        assert standardize_address("0XAbC") == "0x" + "0" * 61 + "abc"

    def test_missing_prefix(self):
        assert standardize_address("1") == CANONICAL_ONE

    def test_strips_whitespace(self):
        assert standardize_address("  0x1\n") == CANONICAL_ONE

    def test_full_length_unchanged(self):
        addr = "0x" + "ab" * 32
        assert standardize_address(addr) == addr

    def test_overlong_not_truncated(self):
        addr = "0x" + "f" * 70
        assert standardize_address(addr) == addr

    def test_empty_string(self):
        assert standardize_address("") == "0x" + "0" * 64

    def test_idempotent(self):
        for raw in ["0x1", "0XDEADbeef", "abc", "", "0x" + "9" * 64, "  0x42 "]:
            once = standardize_address(raw)
            assert standardize_address(once) == once
