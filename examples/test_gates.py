import pytest

from sortnets.circuits import Add, CompareSwap, Const, Gate, Identity, value_lt, values


def test_fans() -> None:
    assert (Identity(3).fan_in, Identity(3).fan_out) == (3, 3)
    assert (CompareSwap(4, 0, 2).fan_in, CompareSwap(4, 0, 2).fan_out) == (4, 4)
    assert (Add().fan_in, Add().fan_out) == (2, 1)
    assert (Const(1.5).fan_in, Const(1.5).fan_out) == (0, 1)


def test_hash_consing() -> None:
    assert Identity(3) is Identity(3)
    assert CompareSwap(4, 0, 1) is CompareSwap(4, 0, 1)
    assert CompareSwap(4, 0, 1) is not CompareSwap(4, 1, 0)
    assert Add() is Add()
    assert Const(2) is Const(2.0)


def test_identity_run() -> None:
    assert Identity(3).run([1.0, None, 2.0]) == (1.0, None, 2.0)


def test_compare_swap_run() -> None:
    cs = CompareSwap(2, 0, 1)
    assert cs.run([1.0, 3.0]) == (3.0, 1.0)
    assert cs.run([3.0, 1.0]) == (3.0, 1.0)
    assert cs.run([None, 5.0]) == (5.0, None)
    assert cs.run([5.0, None]) == (5.0, None)
    assert cs.run([None, None]) == (None, None)


def test_compare_swap_out_of_range() -> None:
    assert CompareSwap(3, 0, 2).run([None, 5.0]) == (None, 5.0)
    assert CompareSwap(3, 2, 0).run([5.0]) == (5.0,)


def test_compare_swap_leaves_other_wires() -> None:
    assert CompareSwap(4, 1, 3).run([7.0, 1.0, 0.0, 2.0]) == (7.0, 2.0, 0.0, 1.0)


def test_add_run() -> None:
    assert Add().run([2.0, 3.0]) == (5.0,)
    assert Add().run([2.0, None]) == (None,)
    assert Add().run([None, 3.0]) == (None,)
    assert Add().run([]) == (None,)


def test_const_run() -> None:
    assert Const(4).run([]) == (4.0,)
    assert Const(4).run([1.0, 2.0]) == (4.0,)


def test_invalid_gates() -> None:
    with pytest.raises(ValueError):
        Identity(-1)
    with pytest.raises(ValueError):
        CompareSwap(2, 0, 2)
    with pytest.raises(ValueError):
        CompareSwap(2, 1, 1)
    with pytest.raises(TypeError):
        Gate()


def test_repr() -> None:
    assert repr(Identity(2)) == "Identity(2)"
    assert repr(CompareSwap(4, 0, 2)) == "CompareSwap(4, 0, 2)"
    assert repr(Add()) == "Add()"
    assert repr(Const(1)) == "Const(1.0)"


def test_value_ordering() -> None:
    assert value_lt(None, 0.0)
    assert value_lt(1.0, 2.0)
    assert not value_lt(2.0, 1.0)
    assert not value_lt(1.0, None)
    assert not value_lt(None, None)


def test_values() -> None:
    assert values([1, None, 2.5]) == (1.0, None, 2.5)
    assert values([1, 2], 4) == (1.0, 2.0, None, None)
    assert values([1, 2, 3], 2) == (1.0, 2.0)
