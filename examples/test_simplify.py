import random
from typing import Any

import pytest

from sortnets.circuits import *
from sortnets.lib.networks import bitonic_sort, bubble_sort, insert_bubble_sort


def is_simplified(circuit: Circuit[Any]) -> bool:
    for node in circuit.nodes():
        match node:
            case Seq(_, Primitive(_, Identity()), _) | Seq(_, _, Primitive(_, Identity())):
                return False
            case Par(_, Primitive(_, Identity()), Primitive(_, Identity())):
                return False
    return True


def test_drop_identity_before() -> None:
    c = Seq("root", Primitive("i", Identity(2)), Primitive("c", CompareSwap(2, 0, 1)))
    assert simplify(c) == Primitive("root", CompareSwap(2, 0, 1))


def test_drop_identity_after() -> None:
    c = Seq("root", Primitive("a", Add()), Primitive("i", Identity(1)))
    assert simplify(c) == Primitive("root", Add())


def test_fuse_parallel_identities() -> None:
    c = Par("p", Primitive("a", Identity(1)), Primitive("b", Identity(2)))
    assert simplify(c) == Primitive("p", Identity(3))


def test_fused_identities_dropped() -> None:
    c = seq(par(identity(1), identity(1)), compare_swap(2, 0, 1))
    assert simplify(c) == compare_swap(2, 0, 1)


def test_primitives_unchanged() -> None:
    assert simplify(identity(3)) == identity(3)
    assert simplify(add()) == add()


def test_no_rewrite_applies() -> None:
    c = par(identity(1), compare_swap(2, 0, 1))
    assert simplify(c) == c


@pytest.mark.parametrize(
    "circuit",
    [bitonic_sort(8), bitonic_sort(4), bubble_sort(5), insert_bubble_sort(6)],
)
def test_simplify_preserves_semantics(circuit: Circuit[str]) -> None:
    simplified = simplify(circuit)
    assert is_simplified(simplified)
    assert simplified.fan_in == circuit.fan_in
    assert simplified.fan_out == circuit.fan_out
    assert simplified.size <= circuit.size
    assert simplified.data == circuit.data
    rng = random.Random(0)
    for _ in range(20):
        inputs = [rng.choice([None, *range(10)]) for _ in range(circuit.fan_in)]
        assert run(simplified, inputs) == run(circuit, inputs)
