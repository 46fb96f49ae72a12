from decimal import Decimal

import pytest
from pydantic import ValidationError

from tokenindexer.parser.token.identifier import (
    NAME_LENGTH,
    CompositeIdentifier,
    decimal_text,
    hash_str,
    truncate_str,
)


def _make_id(
    creator: str = "0xabc",
    collection: str = "Swords",
    name: str = "Excalibur",
    property_version: Decimal = Decimal(0),
) -> CompositeIdentifier:
    return CompositeIdentifier(
        creator_address=creator,
        collection_name=collection,
        token_name=name,
        property_version=property_version,
    )


class TestHashes:
    def test_token_hash_is_sha256_of_canonical_fields(self):
        creator = "0x" + "0" * 61 + "abc"
        assert _make_id().token_hash() == hash_str(f"{creator}::Swords::Excalibur::0")
        assert len(_make_id().token_hash()) == 64

    def test_collection_hash_ignores_token_fields(self):
        a = _make_id(name="Excalibur", property_version=Decimal(0))
        b = _make_id(name="Durendal", property_version=Decimal(7))
        assert a.collection_hash() == b.collection_hash()

    def test_equal_identifiers_hash_equal(self):
        assert _make_id().token_hash() == _make_id().token_hash()

    def test_creator_canonicalized_before_hashing(self):
        padded = "0x" + "0" * 61 + "ABC"
        assert _make_id(creator="0xabc").token_hash() == _make_id(creator=padded).token_hash()
        assert _make_id(creator="0xabc").collection_hash() == _make_id(creator=padded).collection_hash()

    @pytest.mark.parametrize(
        "changed",
        [
            {"creator": "0xabd"},
            {"collection": "Shields"},
            {"name": "Durendal"},
            {"property_version": Decimal(1)},
        ],
    )
    def test_any_field_change_changes_token_hash(self, changed):
        assert _make_id(**changed).token_hash() != _make_id().token_hash()

    def test_property_version_text_is_plain_integer(self):
        assert _make_id(property_version=Decimal("1E+2")).token_hash() == _make_id(property_version=Decimal(100)).token_hash()
        assert _make_id(property_version=Decimal("3.0")).token_hash() == _make_id(property_version=Decimal(3)).token_hash()

    def test_hash_uses_untruncated_names(self):
        long_a = "x" * (NAME_LENGTH + 10)
        long_b = "x" * (NAME_LENGTH + 20)
        a, b = _make_id(name=long_a), _make_id(name=long_b)
        assert a.truncated_token_name() == b.truncated_token_name()
        assert a.token_hash() != b.token_hash()


class TestTruncation:
    def test_short_names_unchanged(self):
        ident = _make_id()
        assert ident.truncated_collection_name() == "Swords"
        assert ident.truncated_token_name() == "Excalibur"

    def test_ascii_cut_to_limit(self):
        ident = _make_id(collection="c" * 300)
        assert ident.truncated_collection_name() == "c" * NAME_LENGTH

    def test_does_not_split_multibyte_character(self):
        # 3-byte characters: 42 fit in 126 bytes, the 43rd would cross 128
        value = "€" * 50
        result = truncate_str(value, NAME_LENGTH)
        assert result == "€" * 42
        assert len(result.encode("utf-8")) <= NAME_LENGTH

    def test_stable(self):
        value = "\U0001f5e1" * 100
        assert truncate_str(value, NAME_LENGTH) == truncate_str(value, NAME_LENGTH)


class TestDecimalText:
    def test_values(self):
        assert decimal_text(Decimal(0)) == "0"
        assert decimal_text(Decimal("18446744073709551615")) == "18446744073709551615"
        assert decimal_text(Decimal("1E+3")) == "1000"
        assert decimal_text(Decimal("1.50")) == "1.5"

    def test_huge_exponent_has_no_digit_limit(self):
        assert decimal_text(Decimal("1E+5000")) == "1" + "0" * 5000


class TestValidation:
    def test_negative_property_version_rejected(self):
        with pytest.raises(ValidationError):
            _make_id(property_version=Decimal(-1))

    def test_frozen(self):
        ident = _make_id()
        with pytest.raises(ValidationError):
            ident.token_name = "other"
