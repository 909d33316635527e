"""
Preparation of circuits for display: simplification, evaluation and layout,
with the results collected into the annotation data of each node.
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
from typing import Any, Self, final

if __debug__:
    from typing_validation import validate

from ..circuits import Circuit, RunData, Seq, identity, run_annotate, simplify
from ..layout import (
    CircuitLayouter,
    Layout,
    NodeId,
    Point,
    get_circuit_by_id,
    layout,
    scale,
    translate,
)


@final
class NodeData:
    """
    Annotation data for circuits prepared for display, combining the label of a
    node with its run data and its layout, once available.
    """

    @classmethod
    def _new(cls, label: str, run: RunData | None, layout: Layout | None) -> Self:
        """Protected constructor."""
        self = super().__new__(cls)
        self.__label = label
        self.__run = run
        self.__layout = layout
        return self

    __label: str
    __run: RunData | None
    __layout: Layout | None

    __slots__ = ("__weakref__", "__label", "__run", "__layout")

    def __new__(
        cls,
        label: str,
        run: RunData | None = None,
        layout: Layout | None = None,
    ) -> Self:
        """
        Constructs node data from the given label, run data and layout.

        :meta public:
        """
        assert validate(label, str)
        assert validate(run, RunData | None)
        assert validate(layout, Layout | None)
        return cls._new(label, run, layout)

    @property
    def label(self) -> str:
        """Label of the node."""
        return self.__label

    @property
    def run(self) -> RunData | None:
        """Run data for the node, if the circuit was evaluated."""
        return self.__run

    @property
    def layout(self) -> Layout | None:
        """Layout of the node, if the circuit was laid out."""
        return self.__layout

    def with_run(self, run: RunData) -> NodeData:
        """Node data with the given run data."""
        return NodeData._new(self.__label, run, self.__layout)

    def with_layout(self, layout: Layout) -> NodeData:
        """Node data with the given layout."""
        return NodeData._new(self.__label, self.__run, layout)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, NodeData):
            return NotImplemented
        return (
            self.__label == other.__label
            and self.__run == other.__run
            and self.__layout == other.__layout
        )

    def __hash__(self) -> int:
        return hash((NodeData, self.__label, self.__run, self.__layout))

    def __repr__(self) -> str:
        attrs = [repr(self.__label)]
        if self.__run is not None:
            attrs.append(f"run={self.__run!r}")
        if self.__layout is not None:
            attrs.append(f"layout={self.__layout!r}")
        return f"NodeData({", ".join(attrs)})"


def collect_run_data(label: str, run: RunData) -> NodeData:
    """Collects the run data of a labelled node."""
    return NodeData._new(label, run, None)


def collect_layout_data(data: NodeData, layout: Layout) -> NodeData:
    """Collects the layout of a node into its existing node data."""
    return data.with_layout(layout)


def append_io_gates(circuit: Circuit[str]) -> Circuit[str]:
    """
    Composes the circuit in sequence between identities labelled ``"Input"`` and
    ``"Output"``, which are displayed as the terminals of the whole circuit.
    """
    inputs = identity(circuit.fan_in).amend("Input")
    outputs = identity(circuit.fan_out).amend("Output")
    return Seq._new("", Seq._new("", inputs, circuit), outputs)


def prepare_diagram(
    circuit: Circuit[str],
    inputs: Iterable[float | int | None] | None = None,
    *,
    with_io_gates: bool = True,
    zoom: float = 60.0,
    origin: Point = (10.0, 10.0),
    layouter: CircuitLayouter = layout,
) -> Circuit[NodeData]:
    """
    Prepares a labelled circuit for display:

    1. simplifies the circuit (cf. :func:`~sortnets.circuits.simplify`);
    2. if ``with_io_gates`` is set, adds the input and output identities
       (cf. :func:`append_io_gates`);
    3. evaluates the circuit on the given inputs, absent by default;
    4. lays out the circuit with the given layouter;
    5. scales the geometry by ``zoom`` and translates it to ``origin``.

    """
    assert validate(circuit, Circuit)
    assert validate(zoom, float | int)
    c = simplify(circuit)
    if with_io_gates:
        c = append_io_gates(c)
    run_circuit = run_annotate(
        collect_run_data, c, inputs if inputs is not None else ()
    )
    laid_out = layouter(collect_layout_data, run_circuit)
    return translate(origin, scale(zoom, laid_out))


def describe(circuit: Circuit[NodeData], id: NodeId) -> str | None:
    """
    Label of the node with given id in a prepared circuit, or :obj:`None` if no
    node has that id.
    """
    node = get_circuit_by_id(circuit, id)
    if node is None:
        return None
    return node.data.label
