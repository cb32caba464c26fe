# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for ParamList, the UNDEFINED marker and the component codec."""

import copy
import pickle

import pytest

from genro_uri import MalformedUri
from genro_uri.datastructures import (
    UNDEFINED,
    ParamList,
    decode_component,
    encode_component,
)


class TestUndefined:
    """Test the UNDEFINED marker."""

    def test_falsy(self):
        """UNDEFINED should be falsy."""
        assert not UNDEFINED

    def test_repr(self):
        """UNDEFINED repr should be readable."""
        assert repr(UNDEFINED) == "UNDEFINED"

    def test_distinct_from_none(self):
        """UNDEFINED is not None."""
        assert UNDEFINED is not None

    def test_singleton_survives_copy_and_pickle(self):
        """Copies and pickles resolve to the same marker."""
        assert copy.deepcopy(UNDEFINED) is UNDEFINED
        assert pickle.loads(pickle.dumps(UNDEFINED)) is UNDEFINED


class TestComponentCodec:
    """Test encode_component / decode_component."""

    def test_encode_reserved(self):
        """Reserved characters should be percent-encoded."""
        assert encode_component("a b&c=d/e?") == "a%20b%26c%3Dd%2Fe%3F"

    def test_encode_unreserved(self):
        """encodeURIComponent's unreserved set should pass through."""
        assert encode_component("Az09-_.!~*'()") == "Az09-_.!~*'()"

    def test_encode_unicode(self):
        """Non-ASCII text should be encoded as UTF-8."""
        assert encode_component("é") == "%C3%A9"

    def test_decode_plus_kept_by_default(self):
        """'+' should stay literal unless plus_as_space is set."""
        assert decode_component("a+b") == "a+b"
        assert decode_component("a+b", plus_as_space=True) == "a b"

    def test_decode_percent(self):
        """Percent escapes should be decoded."""
        assert decode_component("a%20b%3D") == "a b="

    def test_decode_invalid_utf8(self):
        """Escapes that are not UTF-8 should raise instead of becoming U+FFFD."""
        with pytest.raises(UnicodeDecodeError):
            decode_component("%FF")


class TestParamListParse:
    """Test ParamList.parse."""

    def test_key_values(self):
        """Key/value pairs should keep their order."""
        params = ParamList.parse("one=two&three=four")
        assert params.items() == [("one", "two"), ("three", "four")]

    def test_bare_key_is_none(self):
        """A key without '=' should have a None value."""
        params = ParamList.parse("three")
        assert params.get("three") is None

    def test_empty_value(self):
        """A key with '=' and nothing after it should have an empty value."""
        params = ParamList.parse("key=")
        assert params.get("key") == ""

    def test_empty_tokens_skipped(self):
        """Empty tokens from '&&' should not become entries."""
        params = ParamList.parse("&one=two&three&&four=five")
        assert params.items() == [("one", "two"), ("three", None), ("four", "five")]

    def test_split_on_first_equals(self):
        """Only the first '=' should separate key from value."""
        params = ParamList.parse("expr=a=b")
        assert params.get("expr") == "a=b"

    def test_value_plus_is_space(self):
        """'+' in a value should decode to a space."""
        params = ParamList.parse("q=to+be%21")
        assert params.get("q") == "to be!"

    def test_key_decoded(self):
        """Keys should be percent-decoded."""
        params = ParamList.parse("a%20key=1")
        assert params.get("a key") == "1"

    def test_duplicates_kept(self):
        """Parsing should not deduplicate keys."""
        params = ParamList.parse("a=1&a=2")
        assert params.items() == [("a", "1"), ("a", "2")]
        assert params.get("a") == "1"
        assert len(params) == 2

    @pytest.mark.parametrize("raw", ["a=%FF", "%C3=1", "a=ok&b=%E2%82"])
    def test_invalid_utf8_is_malformed(self, raw):
        """Undecodable escapes should raise MalformedUri carrying the raw text."""
        with pytest.raises(MalformedUri) as exc_info:
            ParamList.parse(raw)
        assert exc_info.value.source == raw
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_empty_string(self):
        """An empty string should parse to an empty list."""
        assert len(ParamList.parse("")) == 0


class TestParamListMutation:
    """Test set, update and remove."""

    def test_get_missing(self):
        """A missing key should return UNDEFINED."""
        assert ParamList().get("missing") is UNDEFINED

    def test_set_appends(self):
        """Setting a new key should append it."""
        params = ParamList.parse("a=1").set("b", "2")
        assert params.items() == [("a", "1"), ("b", "2")]

    def test_set_updates_in_place(self):
        """Setting an existing key should keep its position."""
        params = ParamList.parse("a=1&b=2").set("a", "x")
        assert params.items() == [("a", "x"), ("b", "2")]

    def test_set_updates_first_duplicate_only(self):
        """Only the first entry of a duplicated key should change."""
        params = ParamList.parse("a=1&a=2").set("a", "x")
        assert params.items() == [("a", "x"), ("a", "2")]

    @pytest.mark.parametrize("value", ["v", "", None, UNDEFINED])
    def test_set_then_get(self, value):
        """get should return exactly what set stored."""
        params = ParamList().set("k", value)
        assert params.get("k") is value or params.get("k") == value

    def test_update_mapping(self):
        """update should set every key in mapping order."""
        params = ParamList.parse("one=two&three=four")
        params.update({"one": "one", "two": "two", "three": "three"})
        assert params.items() == [("one", "one"), ("three", "three"), ("two", "two")]

    def test_remove_keeps_entry(self):
        """remove should mark the entry UNDEFINED without dropping it."""
        params = ParamList.parse("a=1&b=2").remove("a")
        assert len(params) == 2
        assert params.get("a") is UNDEFINED
        assert "a" not in params
        params.set("a", "3")
        assert params.serialize() == "a=3&b=2"

    def test_remove_hides_duplicates(self):
        """remove should hide every entry for the key."""
        params = ParamList.parse("a=1&b=2&a=3").remove("a")
        assert params.serialize() == "b=2"
        assert params.get_all("a") == []

    def test_contains(self):
        """Membership should ignore removed and non-string keys."""
        params = ParamList.parse("a=1&b")
        assert "a" in params
        assert "b" in params
        assert "c" not in params
        assert 1 not in params


class TestParamListMultiValue:
    """Test repeated keys."""

    def test_get_all(self):
        """get_all should return every value in order, bare keys included."""
        params = ParamList.parse("a=1&b=2&a&a=3")
        assert params.get_all("a") == ["1", None, "3"]
        assert params.get_all("c") == []

    def test_add_appends_duplicate(self):
        """add should keep the existing value."""
        params = ParamList.parse("a=1").add("a", "2").add("b", None)
        assert params.serialize() == "a=1&a=2&b"
        assert params.get("a") == "1"

    def test_add_reuses_removed_entry(self):
        """add after remove should take the removed entry's position."""
        params = ParamList.parse("a=1&b=2").remove("a").add("a", "3")
        assert params.serialize() == "a=3&b=2"
        assert len(params) == 2

    def test_get_all_skips_removed(self):
        params = ParamList([("a", "1"), ("a", UNDEFINED), ("a", "")])
        assert params.get_all("a") == ["1", ""]


class TestParamListSerialize:
    """Test serialization."""

    def test_tri_state(self):
        """Values, bare keys and removed keys should serialize differently."""
        params = ParamList([("a", "1"), ("b", None), ("c", UNDEFINED), ("d", "")])
        assert params.serialize() == "a=1&b&d="

    def test_encoding(self):
        """Keys and values should be percent-encoded."""
        params = ParamList([("a b", "c&d")])
        assert str(params) == "a%20b=c%26d"

    def test_all_removed(self):
        """A list with only removed entries should serialize to ''."""
        params = ParamList.parse("a=1").remove("a")
        assert params.serialize() == ""


class TestParamListProtocol:
    """Test copy, equality, iteration and repr."""

    def test_copy_is_independent(self):
        """Mutating a copy should not affect the original."""
        params = ParamList.parse("a=1")
        clone = params.copy()
        clone.set("a", "2")
        assert params.get("a") == "1"
        assert clone.get("a") == "2"

    def test_equality(self):
        """Lists with the same entries should be equal."""
        assert ParamList.parse("a=1&b") == ParamList([("a", "1"), ("b", None)])
        assert ParamList.parse("a=1") != ParamList.parse("a=2")

    def test_unhashable(self):
        """ParamList is mutable and should not be hashable."""
        with pytest.raises(TypeError):
            hash(ParamList())

    def test_iter_keys(self):
        """Iteration should yield keys in order."""
        assert list(ParamList.parse("b=1&a=2&b=3")) == ["b", "a", "b"]

    def test_repr(self):
        """repr should show the entries."""
        assert "ParamList" in repr(ParamList.parse("a=1"))
