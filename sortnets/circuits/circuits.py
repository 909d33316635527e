"""
Implementation of circuits and their combinators for the :mod:`sortnets.circuits`
module.
"""

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
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from typing import Any, ClassVar, Generic, Self, TypeVar, final

if __debug__:
    from typing_validation import validate

from .gates import Add, CompareSwap, Const, Gate, Identity

DataT_co = TypeVar("DataT_co", covariant=True, default=Any)
"""Covariant type variable for the annotation data attached to circuit nodes."""


class Circuit(Generic[DataT_co], ABC):
    """
    Abstract base class for circuits, as binary trees of gates composed in parallel
    (cf. :class:`Par`) or in sequence (cf. :class:`Seq`).

    Every node of the tree carries annotation data, which is transformed
    homomorphically by :meth:`Circuit.map` without affecting the shape of the tree.
    Circuits are immutable: all operations return new circuits, sharing unchanged
    sub-circuits with the original.
    """

    __final__: ClassVar[bool] = False

    __slots__ = ("__weakref__", "__hash_cache")

    def __new__(cls) -> Self:
        """
        Constructs a new circuit node.

        :meta public:
        """
        if not cls.__final__:
            raise TypeError("Only final subclasses of Circuit can be instantiated.")
        return super().__new__(cls)

    @property
    @abstractmethod
    def data(self) -> DataT_co:
        """Annotation data for the node at the root of this circuit."""

    @property
    @abstractmethod
    def fan_in(self) -> int:
        """Number of input wires of the circuit."""

    @property
    @abstractmethod
    def fan_out(self) -> int:
        """Number of output wires of the circuit."""

    @property
    @abstractmethod
    def children(self) -> tuple[Circuit[DataT_co], ...]:
        """Immediate sub-circuits, left to right."""

    @abstractmethod
    def map[_B](self, f: Callable[[DataT_co], _B]) -> Circuit[_B]:
        """
        Returns the circuit with the same shape and gates as this one, obtained by
        applying ``f`` to the annotation data of every node.
        """

    @abstractmethod
    def amend[_B](self, data: _B) -> Circuit[_B | DataT_co]:
        """
        Returns the circuit with the annotation data of its root node replaced by
        the given data, leaving all sub-circuits untouched.
        """

    @final
    def nodes(self) -> Iterator[Circuit[DataT_co]]:
        """Iterates over all nodes of the circuit in pre-order."""
        stack: list[Circuit[DataT_co]] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @final
    @property
    def size(self) -> int:
        """Number of nodes in the circuit."""
        return sum(1 for _ in self.nodes())

    @property
    def depth(self) -> int:
        """Nesting depth of the circuit, zero for primitives."""
        children = self.children
        if not children:
            return 0
        return 1 + max(child.depth for child in children)

    @abstractmethod
    def _key(self) -> tuple[Any, ...]:
        """Tuple of the data determining equality and hashing for this node."""

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        if self is other:
            return True
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        try:
            return self.__hash_cache
        except AttributeError:
            self.__hash_cache = h = hash((type(self), self._key()))
            return h


@final
class Primitive(Circuit[DataT_co]):
    """A circuit consisting of a single gate."""

    __match_args__ = ("data", "gate")

    @classmethod
    def _new(cls, data: DataT_co, gate: Gate) -> Self:
        """Protected constructor."""
        self = super().__new__(cls)
        self.__data = data
        self.__gate = gate
        return self

    __data: DataT_co
    __gate: Gate

    __slots__ = ("__data", "__gate")

    def __new__(cls, data: DataT_co, gate: Gate) -> Self:
        """
        Constructs a primitive circuit wrapping the given gate.

        :meta public:
        """
        assert validate(gate, Gate)
        return cls._new(data, gate)

    @property
    def data(self) -> DataT_co:
        return self.__data

    @property
    def gate(self) -> Gate:
        """The gate wrapped by this circuit."""
        return self.__gate

    @property
    def fan_in(self) -> int:
        return self.__gate.fan_in

    @property
    def fan_out(self) -> int:
        return self.__gate.fan_out

    @property
    def children(self) -> tuple[()]:
        return ()

    def map[_B](self, f: Callable[[DataT_co], _B]) -> Primitive[_B]:
        return Primitive._new(f(self.__data), self.__gate)

    def amend[_B](self, data: _B) -> Primitive[_B]:
        return Primitive._new(data, self.__gate)

    def _key(self) -> tuple[Any, ...]:
        return (self.__data, self.__gate)

    def __repr__(self) -> str:
        return f"Primitive({self.__data!r}, {self.__gate!r})"


class Composite(Circuit[DataT_co]):
    """Abstract base class for circuits obtained by composing two sub-circuits."""

    __match_args__ = ("data", "left", "right")

    @classmethod
    def _new(
        cls, data: DataT_co, left: Circuit[DataT_co], right: Circuit[DataT_co]
    ) -> Self:
        """Protected constructor, which does not check fan compatibility."""
        self = super().__new__(cls)
        self.__data = data
        self.__left = left
        self.__right = right
        self.__fan_in, self.__fan_out = cls._fans(left, right)
        return self

    @staticmethod
    @abstractmethod
    def _fans(left: Circuit[Any], right: Circuit[Any]) -> tuple[int, int]:
        """Fan-in and fan-out of the composite of the given sub-circuits."""

    __data: DataT_co
    __left: Circuit[DataT_co]
    __right: Circuit[DataT_co]
    __fan_in: int
    __fan_out: int

    __slots__ = ("__data", "__left", "__right", "__fan_in", "__fan_out")

    def __new__(
        cls, data: DataT_co, left: Circuit[DataT_co], right: Circuit[DataT_co]
    ) -> Self:
        """
        Composes the given circuits.

        :meta public:
        """
        assert validate(left, Circuit)
        assert validate(right, Circuit)
        return cls._new(data, left, right)

    @property
    def data(self) -> DataT_co:
        return self.__data

    @property
    def left(self) -> Circuit[DataT_co]:
        """The first sub-circuit."""
        return self.__left

    @property
    def right(self) -> Circuit[DataT_co]:
        """The second sub-circuit."""
        return self.__right

    @property
    def fan_in(self) -> int:
        return self.__fan_in

    @property
    def fan_out(self) -> int:
        return self.__fan_out

    @property
    def children(self) -> tuple[Circuit[DataT_co], Circuit[DataT_co]]:
        return (self.__left, self.__right)

    def map[_B](self, f: Callable[[DataT_co], _B]) -> Composite[_B]:
        return type(self)._new(
            f(self.__data), self.__left.map(f), self.__right.map(f)
        )

    def amend[_B](self, data: _B) -> Composite[_B | DataT_co]:
        return type(self)._new(data, self.__left, self.__right)

    def _key(self) -> tuple[Any, ...]:
        return (self.__data, self.__left, self.__right)

    def __repr__(self) -> str:
        cls_name = type(self).__name__
        return f"{cls_name}({self.__data!r}, {self.__left!r}, {self.__right!r})"


@final
class Par(Composite[DataT_co]):
    """
    Parallel composition of two circuits, stacking the wires of the first circuit
    above the wires of the second.
    """

    __slots__ = ()

    @staticmethod
    def _fans(left: Circuit[Any], right: Circuit[Any]) -> tuple[int, int]:
        return (left.fan_in + right.fan_in, left.fan_out + right.fan_out)


@final
class Seq(Composite[DataT_co]):
    """
    Sequential composition of two circuits, feeding the outputs of the first
    circuit into the inputs of the second.
    """

    __slots__ = ()

    def __new__(
        cls, data: DataT_co, left: Circuit[DataT_co], right: Circuit[DataT_co]
    ) -> Self:
        """
        Composes the given circuits in sequence.
        Raises :class:`ValueError` if the fan-out of ``left`` does not match the
        fan-in of ``right``.

        :meta public:
        """
        assert validate(left, Circuit)
        assert validate(right, Circuit)
        if left.fan_out != right.fan_in:
            raise ValueError(
                f"Cannot compose in sequence: fan-out of first circuit"
                f" ({left.fan_out}) does not match fan-in of second circuit"
                f" ({right.fan_in})."
            )
        return cls._new(data, left, right)

    @staticmethod
    def _fans(left: Circuit[Any], right: Circuit[Any]) -> tuple[int, int]:
        return (left.fan_in, right.fan_out)


def primitive(gate: Gate, label: str = "") -> Primitive[str]:
    """A labelled circuit consisting of the given gate."""
    return Primitive(label, gate)


def identity(n: int) -> Primitive[str]:
    """The identity circuit on ``n`` wires."""
    return Primitive("", Identity(n))


def compare_swap(n: int, i: int, j: int) -> Primitive[str]:
    """The compare-swap circuit for positions ``i`` and ``j`` on ``n`` wires."""
    return Primitive("", CompareSwap(n, i, j))


def add() -> Primitive[str]:
    """The addition circuit, with two inputs and one output."""
    return Primitive("", Add())


def const(value: float | int) -> Primitive[str]:
    """The circuit outputting the given constant value."""
    return Primitive("", Const(value))


def par(x: Circuit[str], y: Circuit[str]) -> Par[str]:
    """Parallel composition of two labelled circuits, with an empty label."""
    return Par("", x, y)


def seq(x: Circuit[str], y: Circuit[str]) -> Seq[str]:
    """Sequential composition of two labelled circuits, with an empty label."""
    return Seq("", x, y)


def par_all(circuits: Iterable[Circuit[str]]) -> Circuit[str]:
    """Parallel composition of one or more circuits, associating to the left."""
    circuits = tuple(circuits)
    if not circuits:
        raise ValueError("At least one circuit must be given.")
    result = circuits[0]
    for circuit in circuits[1:]:
        result = par(result, circuit)
    return result


def seq_all(circuits: Iterable[Circuit[str]]) -> Circuit[str]:
    """Sequential composition of one or more circuits, associating to the left."""
    circuits = tuple(circuits)
    if not circuits:
        raise ValueError("At least one circuit must be given.")
    result = circuits[0]
    for circuit in circuits[1:]:
        result = seq(result, circuit)
    return result
