import copy
import logging

import pytest

from assocarray.datastructures import (
    DEFAULT_CAPACITY,
    AssociativeArray,
    KeyNotFoundError,
    KVPair,
)


def slot_keys(aa):
    """Keys in raw slot order, empty slots included as None."""
    return [None if p is None else p.key for p in aa._pairs]


def test_empty_array():
    aa = AssociativeArray()
    assert aa.size() == 0
    assert len(aa) == 0
    assert not aa
    assert aa.capacity == DEFAULT_CAPACITY == 16
    assert list(aa.items()) == []


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        AssociativeArray(capacity=0)


def test_set_distinct_keys(abc):
    assert abc.size() == 3
    assert abc.get("a") == 1
    assert abc.get("b") == 2
    assert abc.get("c") == 3


def test_set_overwrite_keeps_size():
    aa = AssociativeArray()
    aa.set("a", 1)
    aa.set("b", 2)
    aa.set("a", 3)
    assert aa.size() == 2
    assert aa.get("a") == 3
    assert aa.get("b") == 2
    # Overwrite happens in place
    assert slot_keys(aa)[:3] == ["a", "b", None]


def test_get_missing_raises(empty):
    with pytest.raises(KeyNotFoundError) as exc:
        empty.get("nope")
    assert exc.value.key == "nope"
    # Still a KeyError for ordinary mapping code
    with pytest.raises(KeyError):
        empty["nope"]


def test_get_or(abc):
    assert abc.get_or("a") == 1
    assert abc.get_or("z") is None
    assert abc.get_or("z", 0) == 0


def test_has_key(abc):
    assert abc.has_key("a")
    assert "b" in abc
    assert not abc.has_key("z")
    assert "z" not in abc


def test_set_then_remove_scenario():
    aa = AssociativeArray()
    aa.set("x", 1)
    aa.remove("x")
    assert aa.has_key("x") is False
    with pytest.raises(KeyNotFoundError):
        aa.get("x")


def test_remove_present(abc):
    assert abc.remove("b") is True
    assert abc.size() == 2
    assert not abc.has_key("b")
    assert abc.get("a") == 1
    assert abc.get("c") == 3


def test_remove_moves_last_pair_into_hole():
    aa = AssociativeArray()
    for k in "abcd":
        aa.set(k, k.upper())
    aa.remove("a")
    assert slot_keys(aa)[:5] == ["d", "b", "c", None, None]
    aa.remove("c")
    assert slot_keys(aa)[:4] == ["d", "b", None, None]


def test_remove_last_pair():
    aa = AssociativeArray(capacity=2)
    aa.set("a", 1)
    aa.set("b", 2)
    aa.remove("b")
    assert slot_keys(aa) == ["a", None]
    aa.remove("a")
    assert slot_keys(aa) == [None, None]
    assert aa.size() == 0


def test_remove_absent_is_noop(abc):
    before = list(abc.items())
    assert abc.remove("z") is False
    assert abc.size() == 3
    assert list(abc.items()) == before


def test_remove_absent_logs_at_debug(abc, caplog):
    with caplog.at_level(logging.DEBUG, logger="assocarray"):
        abc.remove("z")
    assert "absent key 'z'" in caplog.text


def test_delitem(abc):
    del abc["a"]
    assert "a" not in abc
    with pytest.raises(KeyNotFoundError):
        del abc["a"]


def test_reinsert_after_remove(abc):
    abc.remove("a")
    abc.set("a", 10)
    assert abc.has_key("a")
    assert abc.get("a") == 10
    assert abc.size() == 3


def test_growth_keeps_all_keys():
    aa = AssociativeArray()
    for i in range(40):
        aa.set(f"k{i}", i)
    assert aa.size() == 40
    assert aa.capacity == 64
    for i in range(40):
        assert aa.get(f"k{i}") == i


def test_expands_only_when_full():
    aa = AssociativeArray(capacity=2)
    aa.set("a", 1)
    aa.set("b", 2)
    assert aa.capacity == 2
    aa.set("a", 5)  # overwrite never grows
    assert aa.capacity == 2
    aa.set("c", 3)
    assert aa.capacity == 4


def test_capacity_never_shrinks():
    aa = AssociativeArray()
    for i in range(20):
        aa.set(i, i)
    for i in range(20):
        aa.remove(i)
    assert aa.size() == 0
    assert aa.capacity == 32


def test_keys_only_need_equality():
    class Unhashable:
        __hash__ = None

        def __init__(self, n):
            self.n = n

        def __eq__(self, other):
            return isinstance(other, Unhashable) and other.n == self.n

    aa = AssociativeArray()
    aa.set(Unhashable(1), "one")
    aa.set(Unhashable(1), "uno")
    assert aa.size() == 1
    assert aa.get(Unhashable(1)) == "uno"


def test_clone_is_independent(abc):
    c = abc.clone()
    assert list(c.items()) == list(abc.items())
    assert slot_keys(c) == slot_keys(abc)

    c.set("a", 100)
    c.set("d", 4)
    c.remove("b")
    assert abc.size() == 3
    assert abc.get("a") == 1
    assert abc.get("b") == 2
    assert not abc.has_key("d")


def test_clone_does_not_share_pairs(abc):
    c = abc.clone()
    for i in range(abc.size()):
        assert c._pairs[i] is not abc._pairs[i]


def test_clone_of_grown_array():
    aa = AssociativeArray()
    for i in range(20):
        aa.set(i, str(i))
    c = copy.copy(aa)
    assert c.size() == 20
    assert c.to_py() == aa.to_py()


def test_str():
    aa = AssociativeArray()
    assert str(aa) == "{}"
    aa.set("k", 1)
    assert str(aa) == "{ k: 1 }"
    aa.set(2, "two")
    assert str(aa) == "{ k: 1, 2: two }"


def test_repr(abc):
    assert repr(abc) == "AssociativeArray({'a': 1, 'b': 2, 'c': 3})"


def test_enumeration_in_slot_order(abc):
    assert list(abc) == ["a", "b", "c"]
    assert list(abc.keys()) == ["a", "b", "c"]
    assert list(abc.values()) == [1, 2, 3]
    assert list(abc.items()) == [("a", 1), ("b", 2), ("c", 3)]


def test_constructor_inputs():
    aa = AssociativeArray({"a": 1, "b": 2}, c=3)
    assert aa.to_py() == {"a": 1, "b": 2, "c": 3}

    bb = AssociativeArray([("x", 1), ("y", 2), ("x", 3)])
    assert bb.size() == 2
    assert bb.get("x") == 3


def test_to_py_recurses():
    inner = AssociativeArray(a=1)
    outer = AssociativeArray(inner=inner, n=2)
    assert outer.to_py() == {"inner": {"a": 1}, "n": 2}


def test_kvpair_unpacks():
    k, v = KVPair("k", "v")
    assert (k, v) == ("k", "v")


def test_random_operations_match_dict():
    import random

    rng = random.Random(1234)
    aa = AssociativeArray()
    model = {}
    for _ in range(2000):
        k = rng.randint(0, 50)
        if rng.random() < 0.6:
            v = rng.randint(0, 1000)
            aa.set(k, v)
            model[k] = v
        else:
            aa.remove(k)
            model.pop(k, None)
        assert aa.size() == len(model)
    assert aa.to_py() == model
    for k in range(51):
        assert aa.has_key(k) == (k in model)
