"""Tests for insertion-ordered collection helpers."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from groupdelta.core.exceptions import DuplicateKeyError, ValidationException
from groupdelta.core.ordered import OrderedSet, identities_of, index_by, select


@dataclass(frozen=True)
class Record:
    identity: bytes
    label: str = ""


class TestOrderedSet:
    """Tests for OrderedSet."""

    def test_iterates_in_insertion_order(self):
        """Elements come back in the order first added."""
        s = OrderedSet([b"c", b"a", b"b"])
        assert list(s) == [b"c", b"a", b"b"]

    def test_duplicates_keep_first_position(self):
        """Re-adding an element does not move it."""
        s = OrderedSet([b"a", b"b", b"a"])
        s.add(b"b")
        assert list(s) == [b"a", b"b"]
        assert len(s) == 2

    def test_membership(self):
        s = OrderedSet([b"a"])
        assert b"a" in s
        assert b"z" not in s

    def test_add_and_discard(self):
        """add appends, discard removes and ignores missing elements."""
        s = OrderedSet([b"a"])
        s.add(b"b")
        s.discard(b"a")
        s.discard(b"missing")
        assert list(s) == [b"b"]

    def test_subtract_keeps_left_order(self):
        """subtract returns the left operand's order."""
        s = OrderedSet([b"d", b"c", b"b", b"a"])
        result = s.subtract([b"c"], OrderedSet([b"a"]))
        assert list(result) == [b"d", b"b"]

    def test_subtract_with_no_others_copies(self):
        s = OrderedSet([b"a", b"b"])
        result = s.subtract()
        assert list(result) == [b"a", b"b"]
        assert result is not s

    def test_intersect_keeps_left_order(self):
        """intersect follows the left operand even when the right is ordered differently."""
        left = OrderedSet([b"a", b"b", b"c"])
        right = OrderedSet([b"c", b"a"])
        assert list(left.intersect(right)) == [b"a", b"c"]

    def test_intersect_accepts_plain_iterables(self):
        left = OrderedSet([b"a", b"b", b"c"])
        assert list(left.intersect(iter([b"c", b"b"]))) == [b"b", b"c"]

    def test_equality_ignores_order(self):
        """Equality follows Set semantics."""
        assert OrderedSet([b"a", b"b"]) == OrderedSet([b"b", b"a"])
        assert OrderedSet([b"a", b"b"]) == {b"a", b"b"}
        assert OrderedSet([b"a"]) != OrderedSet([b"b"])

    def test_set_operators_return_ordered_sets(self):
        """Operators inherited from Set produce OrderedSet instances."""
        result = OrderedSet([b"a", b"b", b"c"]) - OrderedSet([b"b"])
        assert isinstance(result, OrderedSet)
        assert list(result) == [b"a", b"c"]

    def test_repr(self):
        assert repr(OrderedSet([b"a"])) == "OrderedSet([b'a'])"

    def test_empty(self):
        s = OrderedSet()
        assert len(s) == 0
        assert list(s) == []


class TestIndexBy:
    """Tests for index_by()."""

    def test_maps_key_to_record_in_order(self):
        records = [Record(b"b", "second"), Record(b"a", "first")]
        index = index_by(records, lambda r: r.identity)
        assert list(index) == [b"b", b"a"]
        assert index[b"a"].label == "first"

    def test_duplicate_key_raises(self):
        """A repeated key fails fast."""
        records = [Record(b"a"), Record(b"a")]
        with pytest.raises(DuplicateKeyError) as exc_info:
            index_by(records, lambda r: r.identity)

        assert exc_info.value.key == b"a"
        assert isinstance(exc_info.value, ValidationException)
        assert exc_info.value.details["value"] == b"a".hex()

    def test_non_bytes_key_in_message(self):
        with pytest.raises(DuplicateKeyError, match="Duplicate key: 7"):
            index_by([1, 1], lambda n: 7)


class TestIdentityHelpers:
    """Tests for identities_of() and select()."""

    def test_identities_of(self):
        records = [Record(b"x"), Record(b"y")]
        assert list(identities_of(records)) == [b"x", b"y"]

    def test_select_follows_record_order(self):
        """select keeps the record sequence order, not the identity set order."""
        records = [Record(b"x"), Record(b"y"), Record(b"z")]
        chosen = select(records, OrderedSet([b"z", b"x"]))
        assert [r.identity for r in chosen] == [b"x", b"z"]
        assert isinstance(chosen, tuple)

    def test_select_nothing(self):
        assert select([Record(b"x")], OrderedSet()) == ()
