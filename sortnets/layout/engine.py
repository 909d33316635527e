"""
Layout of circuits, assigning geometry and pre-order ids to their nodes.

.. warning::

    The default gate widths and paddings are tuned for sorting networks, and are
    subject to change.

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
from collections.abc import Callable
import logging
from typing import (
    Any,
    Final,
    Protocol,
    Self,
    TypedDict,
    Unpack,
    runtime_checkable,
)

from ..circuits import Circuit, Composite, Gate, Par, Primitive, Seq
from ..utils import (
    ValueSetter as OptionSetter,
    apply_setter_first,
    dict_deep_copy,
    dict_deep_update,
)
from .geometry import Layout, NodeId, Point, point_add, terminal_posns

if __debug__:
    from typing_validation import validate

logger = logging.getLogger(__name__)


@runtime_checkable
class HasLayout(Protocol):
    """
    Protocol for annotation data carrying a layout record, as an alternative to
    using :class:`Layout` instances directly as annotation data.
    """

    @property
    def layout(self) -> Layout: ...

    def with_layout(self, layout: Layout) -> Self: ...


def get_layout(circuit: Circuit[Any]) -> Layout:
    """
    Layout record for the root node of a laid out circuit.
    The annotation data must be a :class:`Layout` or satisfy :class:`HasLayout`.
    """
    data = circuit.data
    if isinstance(data, Layout):
        return data
    if isinstance(data, HasLayout) and isinstance(data.layout, Layout):
        return data.layout
    raise TypeError(f"Annotation data {data!r} does not carry a layout.")


def _map_layout_data[_A](f: Callable[[Layout], Layout], data: _A) -> _A:
    if isinstance(data, Layout):
        return f(data)  # type: ignore[return-value]
    if isinstance(data, HasLayout) and isinstance(data.layout, Layout):
        return data.with_layout(f(data.layout))  # type: ignore[return-value]
    raise TypeError(f"Annotation data {data!r} does not carry a layout.")


def map_layout[_A](f: Callable[[Layout], Layout], circuit: Circuit[_A]) -> Circuit[_A]:
    """
    Applies ``f`` to the layout record of every node in a laid out circuit,
    leaving the rest of the annotation data unchanged.
    """
    return circuit.map(lambda data: _map_layout_data(f, data))


def translate[_A](offset: Point, circuit: Circuit[_A]) -> Circuit[_A]:
    """Translates the geometry of a laid out circuit by the given offset."""
    return map_layout(lambda layout: layout.translate(offset), circuit)


def scale[_A](factor: float, circuit: Circuit[_A]) -> Circuit[_A]:
    """Scales the geometry of a laid out circuit by the given factor."""
    return map_layout(lambda layout: layout.scale(factor), circuit)


def width(circuit: Circuit[Any]) -> float:
    """Width of the bounding box of a laid out circuit."""
    return get_layout(circuit).width


def height(circuit: Circuit[Any]) -> float:
    """Height of the bounding box of a laid out circuit."""
    return get_layout(circuit).height


def get_circuit_by_id[_A](circuit: Circuit[_A], id: NodeId) -> Circuit[_A] | None:
    """
    Returns the node with the given id in a laid out circuit, or :obj:`None` if no
    such node exists.

    Relies on ids being assigned in pre-order, so that the id of a node is the
    smallest in its sub-tree and all ids in its right sub-tree are larger than all
    ids in its left sub-tree: only the nodes on the path to the target are visited.
    """
    node = circuit
    while True:
        node_id = get_layout(node).id
        if id < node_id:
            return None
        if id == node_id:
            return node
        match node:
            case Composite(_, u, v):
                node = u if id < get_layout(v).id else v
            case _:
                return None


def gather_wires[_A, _W](
    f: Callable[[Circuit[_A], Circuit[_A], int, Point, Point], _W],
    circuit: Circuit[_A],
) -> list[_W]:
    """
    Collects the wires joining the sub-circuits of sequential compositions in a laid
    out circuit.
    For each sequential composition ``Seq(_, u, v)``, the value ``f(u, v, i, p, q)``
    is collected for every output wire ``i`` of ``u``, where ``p`` is the position
    of the output terminal of ``u`` and ``q`` that of the matching input terminal
    of ``v``. Wires of sub-circuits are collected before those of their parent.
    """
    match circuit:
        case Seq(_, u, v):
            u_terminals = get_layout(u).terminals_out
            v_terminals = get_layout(v).terminals_in
            wires = [
                f(u, v, i, p, q)
                for i, (p, q) in enumerate(zip(u_terminals, v_terminals))
            ]
            return gather_wires(f, u) + gather_wires(f, v) + wires
        case Par(_, u, v):
            return gather_wires(f, u) + gather_wires(f, v)
    return []


class LayoutOptions(TypedDict, total=False):
    """Options for circuit layout."""

    gate_width: OptionSetter[Gate | str, float]
    """
    Width of primitive gates, set by gate or by name of the gate class.
    """

    default_gate_width: float
    """Width of primitive gates for which ``gate_width`` sets no value."""

    par_pad: float
    """Horizontal padding on each side of parallel compositions."""

    seq_pad: float
    """Horizontal padding around and between sequential compositions."""


class CircuitLayouter:
    """
    A circuit layout function, with additional logic to handle default option
    values.
    """

    __defaults: LayoutOptions

    def __new__(cls) -> Self:
        """Instantiates a new circuit layouter, with default values for options."""
        self = super().__new__(cls)
        self.__defaults = {
            "gate_width": {
                "Identity": 0.2,
                "CompareSwap": 0.3,
                "Const": 0.1,
            },
            "default_gate_width": 1.6,
            "par_pad": 0.1,
            "seq_pad": 0.15,
        }
        return self

    @property
    def defaults(self) -> LayoutOptions:
        """Current default options."""
        return dict_deep_copy(self.__defaults)

    def clone(self) -> CircuitLayouter:
        """Clones the current circuit layouter."""
        instance = CircuitLayouter()
        instance.set_defaults(**dict_deep_copy(self.__defaults))
        return instance

    def set_defaults(self, **defaults: Unpack[LayoutOptions]) -> None:
        """Sets new values for default options."""
        dict_deep_update(self.__defaults, defaults)

    def with_defaults(self, **defaults: Unpack[LayoutOptions]) -> CircuitLayouter:
        """Returns a clone of this circuit layouter, with new defaults."""
        instance = self.clone()
        instance.set_defaults(**defaults)
        return instance

    def __call__[_A, _B](
        self,
        collect: Callable[[_A, Layout], _B],
        circuit: Circuit[_A],
        **options: Unpack[LayoutOptions],
    ) -> Circuit[_B]:
        """
        Lays out the given circuit with its top-left corner at the origin,
        assigning ids in pre-order starting from 0.
        The annotation data of each node is obtained by calling ``collect`` on the
        node's original data and its :class:`Layout`.
        """
        laid_out, next_id = self.__layout((0.0, 0.0), 0, circuit, options)
        root = laid_out.data[1]
        logger.debug(
            "Laid out circuit with %d nodes in a %gx%g box.",
            next_id,
            root.width,
            root.height,
        )
        return laid_out.map(lambda data: collect(*data))

    def layout_helper[_A, _B](
        self,
        start: Point,
        start_id: NodeId,
        collect: Callable[[_A, Layout], _B],
        circuit: Circuit[_A],
        **options: Unpack[LayoutOptions],
    ) -> tuple[Circuit[_B], NodeId]:
        """
        Lays out the given circuit with its top-left corner at ``start``, assigning
        ids in pre-order starting from ``start_id``.
        Returns the laid out circuit, together with the next available id.
        """
        laid_out, next_id = self.__layout(start, start_id, circuit, options)
        return laid_out.map(lambda data: collect(*data)), next_id

    def __layout[_A](
        self,
        start: Point,
        start_id: NodeId,
        circuit: Circuit[_A],
        options: LayoutOptions,
    ) -> tuple[Circuit[tuple[_A, Layout]], NodeId]:
        assert validate(circuit, Circuit)
        assert validate(start_id, NodeId)
        _options: LayoutOptions = dict_deep_update(
            dict_deep_copy(self.__defaults), dict_deep_copy(options)
        )
        return _layout(_options, start, start_id, circuit)


layout: Final[CircuitLayouter] = CircuitLayouter()
"""Circuit layout function, with default options."""


def _gate_width(options: LayoutOptions, gate: Gate) -> float:
    gate_width = apply_setter_first(
        options["gate_width"], (gate, type(gate).__name__)
    )
    if gate_width is None:
        return options["default_gate_width"]
    return gate_width


def _shift[_A](
    offset: Point, circuit: Circuit[tuple[_A, Layout]]
) -> Circuit[tuple[_A, Layout]]:
    if offset == (0.0, 0.0):
        return circuit
    return circuit.map(lambda data: (data[0], data[1].translate(offset)))


def _layout[_A](
    options: LayoutOptions, start: Point, start_id: NodeId, circuit: Circuit[_A]
) -> tuple[Circuit[tuple[_A, Layout]], NodeId]:
    """
    Lays out a circuit, pairing the original annotation data of each node with its
    layout record.
    """
    match circuit:
        case Primitive(data, gate):
            w = _gate_width(options, gate)
            h = float(max(gate.fan_in, gate.fan_out))
            layout_data = Layout._new(
                start_id,
                1.0,
                start,
                (w, h),
                terminal_posns(gate.fan_in, start, h),
                terminal_posns(gate.fan_out, point_add(start, (w, 0.0)), h),
            )
            return Primitive._new((data, layout_data), gate), start_id + 1
        case Par(data, u, v):
            pad = options["par_pad"]
            u_pos = point_add((pad, 0.0), start)
            u1, next_id = _layout(options, u_pos, start_id + 1, u)
            u1_layout = u1.data[1]
            v_pos = point_add((0.0, u1_layout.height), u_pos)
            v1, next_id = _layout(options, v_pos, next_id, v)
            v1_layout = v1.data[1]
            w = max(u1_layout.width, v1_layout.width)
            h = u1_layout.height + v1_layout.height
            u2 = _shift((0.5 * (w - u1_layout.width), 0.0), u1)
            v2 = _shift((0.5 * (w - v1_layout.width), 0.0), v1)
            u2_layout, v2_layout = u2.data[1], v2.data[1]
            layout_data = Layout._new(
                start_id,
                1.0,
                start,
                (w + 2.0 * pad, h),
                u2_layout.terminals_in + v2_layout.terminals_in,
                u2_layout.terminals_out + v2_layout.terminals_out,
            )
            return Par._new((data, layout_data), u2, v2), next_id
        case Seq(data, u, v):
            pad = options["seq_pad"]
            u_pos = point_add((pad, 0.0), start)
            u1, next_id = _layout(options, u_pos, start_id + 1, u)
            u1_layout = u1.data[1]
            v_pos = point_add((u1_layout.width + pad, 0.0), u_pos)
            v1, next_id = _layout(options, v_pos, next_id, v)
            v1_layout = v1.data[1]
            h = max(u1_layout.height, v1_layout.height)
            u2 = _shift((0.0, 0.5 * (h - u1_layout.height)), u1)
            v2 = _shift((0.0, 0.5 * (h - v1_layout.height)), v1)
            w = u1_layout.width + v1_layout.width
            layout_data = Layout._new(
                start_id,
                1.0,
                start,
                (w + 3.0 * pad, h),
                u2.data[1].terminals_in,
                v2.data[1].terminals_out,
            )
            return Seq._new((data, layout_data), u2, v2), next_id
    raise TypeError(f"Unsupported circuit node {circuit!r}.")
