"""Library of sorting networks and other circuits built from the circuit algebra."""

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations
from enum import Enum
from typing import Any, Final, Literal, TypeAlias, get_args

if __debug__:
    from typing_validation import validate

from ..circuits import Circuit, add, compare_swap, const, identity, par, seq
from ..circuits.recipes import CircuitRecipe, circuit_recipe


class SortDirection(Enum):
    """Direction in which a sorting network orders its outputs."""

    ASCENDING = 0
    """Outputs increase from the first wire to the last."""

    DESCENDING = 1
    """Outputs decrease from the first wire to the last."""

    @property
    def label(self) -> str:
        """Label for the direction, as used in circuit labels."""
        return self.name.capitalize()


def _label(*parts: Any) -> str:
    return " ".join(map(str, parts))


def _check_size(n: int) -> None:
    assert validate(n, int)
    if n <= 0:
        raise ValueError(f"Number of wires must be positive, got {n}.")


def _check_pow2(n: int) -> None:
    _check_size(n)
    if n & (n - 1):
        raise ValueError(f"Number of wires must be a power of two, got {n}.")


def next_pow2(n: int) -> int:
    """Smallest power of two which is greater than or equal to ``n``."""
    assert validate(n, int)
    p = 1
    while p < n:
        p *= 2
    return p


bitonic_compare_swap: CircuitRecipe[Any, str]
"""
Recipe for the layer of compare-swap gates of a bitonic merge on ``n`` wires,
comparing each wire in the first half with the matching wire in the second half.
"""


@circuit_recipe  # type: ignore[no-redef]
def bitonic_compare_swap(n: int, direction: SortDirection) -> Circuit[str]:
    _check_pow2(n)
    half = n // 2
    c: Circuit[str] = identity(n)
    for i in range(half):
        if direction is SortDirection.DESCENDING:
            c = seq(c, compare_swap(n, i, i + half))
        else:
            c = seq(c, compare_swap(n, i + half, i))
    return c.amend(_label("bitonicCompareSwap", n, direction.label))


bitonic_merge: CircuitRecipe[Any, str]
"""
Recipe for the bitonic merge network on ``n`` wires, sorting bitonic sequences.
See `Bitonic sorter <https://en.wikipedia.org/wiki/Bitonic_sorter>`_.
"""


@circuit_recipe  # type: ignore[no-redef]
def bitonic_merge(n: int, direction: SortDirection) -> Circuit[str]:
    _check_pow2(n)
    if n == 1:
        c: Circuit[str] = identity(1)
    else:
        half = bitonic_merge(n // 2, direction)
        c = seq(bitonic_compare_swap(n, direction), par(half, half))
    return c.amend(_label("bitonicMerge", n, direction.label))


bitonic_sort: CircuitRecipe[Any, str]
"""
Recipe for the bitonic sorting network on ``n`` wires, for ``n`` a power of two.
See `Bitonic sorter <https://en.wikipedia.org/wiki/Bitonic_sorter>`_.
"""


@circuit_recipe  # type: ignore[no-redef]
def bitonic_sort(
    n: int, direction: SortDirection = SortDirection.ASCENDING
) -> Circuit[str]:
    _check_pow2(n)
    if n == 1:
        c: Circuit[str] = identity(1)
    else:
        c = seq(
            par(
                bitonic_sort(n // 2, SortDirection.DESCENDING),
                bitonic_sort(n // 2, SortDirection.ASCENDING),
            ),
            bitonic_merge(n, direction),
        )
    return c.amend(_label("bitonicSort", n, direction.label))


bubble_emplace: CircuitRecipe[Any, str]
"""
Recipe for a single bubble sort pass on ``n`` wires,
moving the smallest value to the last wire.
"""


@circuit_recipe  # type: ignore[no-redef]
def bubble_emplace(n: int) -> Circuit[str]:
    _check_size(n)
    if n == 1:
        c: Circuit[str] = identity(1)
    else:
        c = seq(par(bubble_emplace(n - 1), identity(1)), compare_swap(n, n - 2, n - 1))
    return c.amend(_label("bubbleEmplace", n))


bubble_sort: CircuitRecipe[Any, str]
"""
Recipe for the bubble sort network on ``n`` wires, with decreasing outputs.
See `Bubble sort <https://en.wikipedia.org/wiki/Bubble_sort>`_.
"""


@circuit_recipe  # type: ignore[no-redef]
def bubble_sort(n: int) -> Circuit[str]:
    _check_size(n)
    if n == 1:
        c: Circuit[str] = identity(1)
    else:
        c = seq(bubble_emplace(n), par(bubble_sort(n - 1), identity(1)))
    return c.amend(_label("bubbleSort", n))


insertion_emplace: CircuitRecipe[Any, str]
"""
Recipe for the insertion of the value on the last of ``n`` wires into the
(decreasing) sorted values on the other wires.
"""


@circuit_recipe  # type: ignore[no-redef]
def insertion_emplace(n: int) -> Circuit[str]:
    _check_size(n)
    if n == 1:
        c: Circuit[str] = identity(1)
    else:
        c = seq(
            compare_swap(n, n - 2, n - 1), par(insertion_emplace(n - 1), identity(1))
        )
    return c.amend(_label("insertionEmplace", n))


insertion_sort: CircuitRecipe[Any, str]
"""
Recipe for the insertion sort network on ``n`` wires, with decreasing outputs.
See `Insertion sort <https://en.wikipedia.org/wiki/Insertion_sort>`_.
"""


@circuit_recipe  # type: ignore[no-redef]
def insertion_sort(n: int) -> Circuit[str]:
    _check_size(n)
    if n == 1:
        c: Circuit[str] = identity(1)
    else:
        c = seq(par(insertion_sort(n - 1), identity(1)), insertion_emplace(n))
    return c.amend(_label("insertionSort", n))


alternating_compare_swap: CircuitRecipe[Any, str]
"""
Recipe for a layer of compare-swap gates on disjoint pairs of adjacent wires,
pairing the wires from the last one up (the first wire is left alone if ``n``
is odd).
"""


@circuit_recipe  # type: ignore[no-redef]
def alternating_compare_swap(n: int) -> Circuit[str]:
    _check_size(n)
    if n == 1:
        return identity(1)
    if n == 2:
        return compare_swap(2, 0, 1)
    return par(alternating_compare_swap(n - 2), compare_swap(2, 0, 1))


def _insert_bubble_left(k: int) -> Circuit[str]:
    if k == 1:
        return identity(1)
    return seq(par(_insert_bubble_left(k - 1), identity(1)), alternating_compare_swap(k))


def _insert_bubble_right(k: int) -> Circuit[str]:
    if k == 1:
        return identity(1)
    return seq(alternating_compare_swap(k), par(_insert_bubble_right(k - 1), identity(1)))


insert_bubble_sort: CircuitRecipe[Any, str]
"""
Recipe for the sorting network on ``n`` wires obtained by laying out the
comparisons of insertion sort (equivalently, bubble sort) in parallel layers,
with decreasing outputs.
"""


@circuit_recipe  # type: ignore[no-redef]
def insert_bubble_sort(n: int) -> Circuit[str]:
    _check_size(n)
    if n == 1:
        c: Circuit[str] = identity(1)
    else:
        c = seq(_insert_bubble_left(n), par(_insert_bubble_right(n - 1), identity(1)))
    return c.amend(_label("insertBubbleSort", n))


add_reduce: CircuitRecipe[Any, str]
"""
Recipe for a balanced tree of addition gates summing ``n`` inputs into a single
output. For ``n = 0``, the circuit outputs the constant 0.
"""


@circuit_recipe  # type: ignore[no-redef]
def add_reduce(n: int) -> Circuit[str]:
    assert validate(n, int)
    if n < 0:
        raise ValueError(f"Number of inputs must be non-negative, got {n}.")
    if n == 0:
        c: Circuit[str] = const(0.0)
    elif n == 1:
        c = identity(1)
    else:
        k = n // 2
        c = seq(par(add_reduce(k), add_reduce(n - k)), add())
    return c.amend(_label("addReduce", n))


SortingNetworkKind: TypeAlias = Literal[
    "bubble", "insertion", "insert_bubble", "bitonic"
]
"""Type alias for the kinds of sorting networks which can be built by name."""

SORTING_NETWORK_KINDS: Final[tuple[SortingNetworkKind, ...]] = get_args(
    SortingNetworkKind
)
"""Possible kinds of sorting networks, in display order."""


def sorting_network(kind: SortingNetworkKind, n: int) -> Circuit[str]:
    """
    The sorting network of given kind for ``n`` inputs, with decreasing outputs.

    Bitonic networks need a power of two wires, so the bitonic network returned
    has :func:`next_pow2` of ``n`` wires: surplus inputs are absent by default,
    and end up on the last outputs.
    """
    _check_size(n)
    match kind:
        case "bubble":
            return bubble_sort(n)
        case "insertion":
            return insertion_sort(n)
        case "insert_bubble":
            return insert_bubble_sort(n)
        case "bitonic":
            return bitonic_sort(next_pow2(n), SortDirection.DESCENDING)
    raise ValueError(
        f"Unknown sorting network kind {kind!r}, "
        f"expected one of {", ".join(map(repr, SORTING_NETWORK_KINDS))}."
    )
