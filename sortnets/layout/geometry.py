"""
Points and layout records for the :mod:`sortnets.layout` module.
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
from collections.abc import Iterable
from typing import Any, Self, TypeAlias, final

if __debug__:
    from typing_validation import validate

Point: TypeAlias = tuple[float, float]
"""Type alias for points in the plane, as ``(x, y)`` pairs."""

NodeId: TypeAlias = int
"""Type alias for the ids assigned to circuit nodes by layout."""


def point_add(p: Point, q: Point) -> Point:
    """Sum of two points."""
    return (p[0] + q[0], p[1] + q[1])


def point_scale(a: float, p: Point) -> Point:
    """Point scaled by the given factor."""
    return (a * p[0], a * p[1])


def terminal_posns(n: int, start: Point, height: float) -> tuple[Point, ...]:
    """
    Positions of ``n`` terminals evenly spaced along the vertical segment of given
    height starting at ``start``, each at the centre of its slot.
    """
    x, y = start
    return tuple((x, y + (i + 0.5) * height / n) for i in range(n))


@final
class Layout:
    """
    Geometry assigned to a circuit node by layout: the node's id, its bounding box
    and the positions of its input and output terminals.

    The ``unit`` tracks the overall scaling factor applied to the geometry, for use
    by gate-specific decorations.
    """

    @classmethod
    def _new(
        cls,
        id: NodeId,
        unit: float,
        position: Point,
        size: Point,
        terminals_in: tuple[Point, ...],
        terminals_out: tuple[Point, ...],
    ) -> Self:
        """Protected constructor."""
        self = super().__new__(cls)
        self.__id = id
        self.__unit = unit
        self.__position = position
        self.__size = size
        self.__terminals_in = terminals_in
        self.__terminals_out = terminals_out
        return self

    __id: NodeId
    __unit: float
    __position: Point
    __size: Point
    __terminals_in: tuple[Point, ...]
    __terminals_out: tuple[Point, ...]

    __slots__ = (
        "__weakref__",
        "__id",
        "__unit",
        "__position",
        "__size",
        "__terminals_in",
        "__terminals_out",
    )

    def __new__(
        cls,
        id: NodeId,
        position: Point,
        size: Point,
        terminals_in: Iterable[Point] = (),
        terminals_out: Iterable[Point] = (),
        unit: float = 1.0,
    ) -> Self:
        """
        Constructs a layout record.

        :meta public:
        """
        terminals_in = tuple(terminals_in)
        terminals_out = tuple(terminals_out)
        assert validate(id, NodeId)
        assert validate(position, tuple[float | int, float | int])
        assert validate(size, tuple[float | int, float | int])
        assert validate(terminals_in, tuple[tuple[float | int, float | int], ...])
        assert validate(terminals_out, tuple[tuple[float | int, float | int], ...])
        return cls._new(id, unit, position, size, terminals_in, terminals_out)

    @property
    def id(self) -> NodeId:
        """Id of the node, unique within the laid out circuit."""
        return self.__id

    @property
    def unit(self) -> float:
        """Scaling factor applied to the geometry since layout."""
        return self.__unit

    @property
    def position(self) -> Point:
        """Top-left corner of the node's bounding box."""
        return self.__position

    @property
    def size(self) -> Point:
        """Width and height of the node's bounding box."""
        return self.__size

    @property
    def width(self) -> float:
        """Width of the node's bounding box."""
        return self.__size[0]

    @property
    def height(self) -> float:
        """Height of the node's bounding box."""
        return self.__size[1]

    @property
    def terminals_in(self) -> tuple[Point, ...]:
        """Positions of the input terminals, in wire order."""
        return self.__terminals_in

    @property
    def terminals_out(self) -> tuple[Point, ...]:
        """Positions of the output terminals, in wire order."""
        return self.__terminals_out

    def translate(self, offset: Point) -> Layout:
        """Layout translated by the given offset."""
        return Layout._new(
            self.__id,
            self.__unit,
            point_add(offset, self.__position),
            self.__size,
            tuple(point_add(offset, p) for p in self.__terminals_in),
            tuple(point_add(offset, p) for p in self.__terminals_out),
        )

    def scale(self, factor: float) -> Layout:
        """Layout scaled by the given factor, about the origin."""
        return Layout._new(
            self.__id,
            factor * self.__unit,
            point_scale(factor, self.__position),
            point_scale(factor, self.__size),
            tuple(point_scale(factor, p) for p in self.__terminals_in),
            tuple(point_scale(factor, p) for p in self.__terminals_out),
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return (
            self.__id == other.__id
            and self.__unit == other.__unit
            and self.__position == other.__position
            and self.__size == other.__size
            and self.__terminals_in == other.__terminals_in
            and self.__terminals_out == other.__terminals_out
        )

    def __hash__(self) -> int:
        return hash((Layout, self.__id, self.__position, self.__size))

    def __repr__(self) -> str:
        x, y = self.__position
        w, h = self.__size
        return (
            f"<Layout {self.__id}: {w:g}x{h:g} at ({x:g}, {y:g}),"
            f" {len(self.__terminals_in)} in, {len(self.__terminals_out)} out>"
        )
