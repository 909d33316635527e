"""
Implementation of gates for the :mod:`sortnets.circuits` module.
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
from collections.abc import Iterable, Sequence
from typing import Any, ClassVar, Self, TypeAlias, final
from hashcons import InstanceStore

if __debug__:
    from typing_validation import validate


Value: TypeAlias = float | None
"""
Type alias for the value carried by a wire, where :obj:`None` signals that the
value is absent.
"""

Values: TypeAlias = tuple[Value, ...]
"""Type alias for a vector of wire values."""


def values(inputs: Iterable[float | int | None], length: int | None = None) -> Values:
    """
    Converts the given inputs to a vector of wire values.
    If ``length`` is given, the vector is truncated or padded with :obj:`None`
    to have exactly that length.
    """
    vals = tuple(None if x is None else float(x) for x in inputs)
    if length is None:
        return vals
    if len(vals) >= length:
        return vals[:length]
    return vals + (None,) * (length - len(vals))


def value_lt(x: Value, y: Value) -> bool:
    """
    Strict ordering of wire values used by compare-swap gates, where an absent
    value is smaller than any present value.
    """
    if y is None:
        return False
    if x is None:
        return True
    return x < y


class Gate(ABC):
    """
    Abstract base class for gates, the primitive operations of circuits.

    Gates are immutable and hash-consed: constructing the same gate twice returns
    the same instance.
    """

    __final__: ClassVar[bool] = False

    _store: ClassVar[InstanceStore] = InstanceStore()

    __slots__ = ("__weakref__",)

    def __new__(cls) -> Self:
        """
        Constructs a new gate.

        :meta public:
        """
        if not cls.__final__:
            raise TypeError("Only final subclasses of Gate can be instantiated.")
        return super().__new__(cls)

    @property
    @abstractmethod
    def fan_in(self) -> int:
        """Number of input wires of the gate."""

    @property
    @abstractmethod
    def fan_out(self) -> int:
        """Number of output wires of the gate."""

    @final
    def run(self, inputs: Sequence[float | int | None]) -> Values:
        """Evaluates the gate on the given input values."""
        assert validate(inputs, Sequence[float | int | None])
        return self._run(values(inputs))

    @abstractmethod
    def _run(self, inputs: Values) -> Values:
        """
        Protected version of :meth:`Gate.run`, to be implemented by subclasses.
        No guarantee is made on the length of ``inputs``: missing positions must be
        treated as absent values.
        """

    @property
    @abstractmethod
    def params(self) -> tuple[Any, ...]:
        """Parameters of the gate, as passed to its constructor."""

    def __repr__(self) -> str:
        cls_name = type(self).__name__
        return f"{cls_name}({", ".join(map(repr, self.params))})"


@final
class Identity(Gate):
    """The identity gate on a bundle of wires, passing values through unchanged."""

    @classmethod
    def _new(cls, size: int) -> Self:
        """Protected constructor."""
        with Gate._store.instance(cls, size) as self:
            if self is None:
                self = super().__new__(cls)
                self.__size = size
                Gate._store.register(self)
            return self

    __size: int

    __slots__ = ("__size",)

    def __new__(cls, size: int) -> Self:
        """
        Constructs the identity gate on the given number of wires.

        :meta public:
        """
        assert validate(size, int)
        if size < 0:
            raise ValueError(f"Number of wires must be non-negative, got {size}.")
        return cls._new(size)

    @property
    def size(self) -> int:
        """Number of wires passed through by the gate."""
        return self.__size

    @property
    def fan_in(self) -> int:
        return self.__size

    @property
    def fan_out(self) -> int:
        return self.__size

    @property
    def params(self) -> tuple[int]:
        return (self.__size,)

    def _run(self, inputs: Values) -> Values:
        return inputs


@final
class CompareSwap(Gate):
    """
    The compare-swap gate on a bundle of ``size`` wires, exchanging the values at
    positions ``i`` and ``j`` whenever the value at ``i`` is smaller than the value
    at ``j`` (see :func:`value_lt`).
    """

    @classmethod
    def _new(cls, size: int, i: int, j: int) -> Self:
        """Protected constructor."""
        with Gate._store.instance(cls, (size, i, j)) as self:
            if self is None:
                self = super().__new__(cls)
                self.__size = size
                self.__i = i
                self.__j = j
                Gate._store.register(self)
            return self

    __size: int
    __i: int
    __j: int

    __slots__ = ("__size", "__i", "__j")

    def __new__(cls, size: int, i: int, j: int) -> Self:
        """
        Constructs the compare-swap gate for positions ``i`` and ``j``
        on the given number of wires.

        :meta public:
        """
        assert validate(size, int)
        assert validate(i, int)
        assert validate(j, int)
        if not 0 <= i < size:
            raise ValueError(f"Position {i = } is out of range for {size} wires.")
        if not 0 <= j < size:
            raise ValueError(f"Position {j = } is out of range for {size} wires.")
        if i == j:
            raise ValueError("Compare-swap positions must be distinct.")
        return cls._new(size, i, j)

    @property
    def size(self) -> int:
        """Number of wires for the gate."""
        return self.__size

    @property
    def i(self) -> int:
        """Position receiving the larger of the two compared values."""
        return self.__i

    @property
    def j(self) -> int:
        """Position receiving the smaller of the two compared values."""
        return self.__j

    @property
    def fan_in(self) -> int:
        return self.__size

    @property
    def fan_out(self) -> int:
        return self.__size

    @property
    def params(self) -> tuple[int, int, int]:
        return (self.__size, self.__i, self.__j)

    def _run(self, inputs: Values) -> Values:
        i, j = self.__i, self.__j
        num_inputs = len(inputs)
        x = inputs[i] if i < num_inputs else None
        y = inputs[j] if j < num_inputs else None
        if not value_lt(x, y) or i >= num_inputs or j >= num_inputs:
            return inputs
        swapped = list(inputs)
        swapped[i], swapped[j] = y, x
        return tuple(swapped)


@final
class Add(Gate):
    """The binary addition gate, absent if either of its summands is absent."""

    @classmethod
    def _new(cls) -> Self:
        """Protected constructor."""
        with Gate._store.instance(cls, ()) as self:
            if self is None:
                self = super().__new__(cls)
                Gate._store.register(self)
            return self

    __slots__ = ()

    def __new__(cls) -> Self:
        """
        Returns the addition gate.

        :meta public:
        """
        return cls._new()

    @property
    def fan_in(self) -> int:
        return 2

    @property
    def fan_out(self) -> int:
        return 1

    @property
    def params(self) -> tuple[()]:
        return ()

    def _run(self, inputs: Values) -> Values:
        x = inputs[0] if len(inputs) > 0 else None
        y = inputs[1] if len(inputs) > 1 else None
        if x is None or y is None:
            return (None,)
        return (x + y,)


@final
class Const(Gate):
    """The constant gate, with no inputs and a single output."""

    @classmethod
    def _new(cls, value: float) -> Self:
        """Protected constructor."""
        with Gate._store.instance(cls, value) as self:
            if self is None:
                self = super().__new__(cls)
                self.__value = value
                Gate._store.register(self)
            return self

    __value: float

    __slots__ = ("__value",)

    def __new__(cls, value: float | int) -> Self:
        """
        Constructs the constant gate for the given value.

        :meta public:
        """
        assert validate(value, float | int)
        return cls._new(float(value))

    @property
    def value(self) -> float:
        """The constant value output by the gate."""
        return self.__value

    @property
    def fan_in(self) -> int:
        return 0

    @property
    def fan_out(self) -> int:
        return 1

    @property
    def params(self) -> tuple[float]:
        return (self.__value,)

    def _run(self, inputs: Values) -> Values:
        return (self.__value,)
