"""
Evaluation of circuits on vectors of wire values, for the :mod:`sortnets.circuits`
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
from collections.abc import Callable, Iterable
from typing import Any, Self, final

if __debug__:
    from typing_validation import validate

from .gates import Value, Values, values
from .circuits import Circuit, Par, Primitive, Seq


@final
class RunData:
    """Values received and produced by a circuit node during evaluation."""

    @classmethod
    def _new(cls, inputs: Values, outputs: Values) -> Self:
        """Protected constructor."""
        self = super().__new__(cls)
        self.__inputs = inputs
        self.__outputs = outputs
        return self

    __inputs: Values
    __outputs: Values

    __slots__ = ("__weakref__", "__inputs", "__outputs")

    def __new__(
        cls,
        inputs: Iterable[float | int | None],
        outputs: Iterable[float | int | None],
    ) -> Self:
        """
        Constructs run data from the given input and output values.

        :meta public:
        """
        return cls._new(values(inputs), values(outputs))

    @property
    def inputs(self) -> Values:
        """Values on the input wires of the node."""
        return self.__inputs

    @property
    def outputs(self) -> Values:
        """Values on the output wires of the node."""
        return self.__outputs

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RunData):
            return NotImplemented
        return (
            self.__inputs == other.__inputs and self.__outputs == other.__outputs
        )

    def __hash__(self) -> int:
        return hash((RunData, self.__inputs, self.__outputs))

    def __repr__(self) -> str:
        return f"RunData({self.__inputs!r}, {self.__outputs!r})"


def _slice(inputs: Values, start: int, stop: int) -> Values:
    """Slice of the inputs, padded with absent values up to length ``stop-start``."""
    chunk = inputs[start:stop]
    return chunk + (None,) * (stop - start - len(chunk))


def run(circuit: Circuit[Any], inputs: Iterable[float | int | None]) -> Values:
    """
    Evaluates the circuit on the given inputs.
    Inputs are padded with absent values (or truncated) to the circuit's fan-in.
    """
    assert validate(circuit, Circuit)
    return _run(circuit, values(inputs, circuit.fan_in))


def _run(circuit: Circuit[Any], inputs: Values) -> Values:
    match circuit:
        case Primitive(_, gate):
            return gate._run(inputs)
        case Par(_, u, v):
            k = u.fan_in
            return _run(u, _slice(inputs, 0, k)) + _run(
                v, _slice(inputs, k, k + v.fan_in)
            )
        case Seq(_, u, v):
            return _run(v, _run(u, inputs))
    raise TypeError(f"Unsupported circuit node {circuit!r}.")


def run_annotate[_A, _B](
    collect: Callable[[_A, RunData], _B],
    circuit: Circuit[_A],
    inputs: Iterable[float | int | None],
) -> Circuit[_B]:
    """
    Evaluates the circuit on the given inputs, returning the circuit annotated with
    the values received and produced by each one of its nodes.
    The annotation data of each node is obtained by calling ``collect`` on the
    node's original data and its :class:`RunData`.

    The outputs recorded at the root are the same as those returned by :func:`run`.
    """
    assert validate(circuit, Circuit)
    annotated, _ = _run_annotate(collect, circuit, values(inputs, circuit.fan_in))
    return annotated


def _run_annotate[_A, _B](
    collect: Callable[[_A, RunData], _B], circuit: Circuit[_A], inputs: Values
) -> tuple[Circuit[_B], Values]:
    """Annotated circuit, together with its outputs."""
    match circuit:
        case Primitive(a, gate):
            outputs = gate._run(inputs)
            annotated: Circuit[_B] = Primitive._new(
                collect(a, RunData._new(inputs, outputs)), gate
            )
            return annotated, outputs
        case Par(a, u, v):
            k = u.fan_in
            ua, u_outputs = _run_annotate(collect, u, _slice(inputs, 0, k))
            va, v_outputs = _run_annotate(
                collect, v, _slice(inputs, k, k + v.fan_in)
            )
            outputs = u_outputs + v_outputs
            annotated = Par._new(collect(a, RunData._new(inputs, outputs)), ua, va)
            return annotated, outputs
        case Seq(a, u, v):
            ua, u_outputs = _run_annotate(collect, u, inputs)
            va, outputs = _run_annotate(collect, v, u_outputs)
            annotated = Seq._new(collect(a, RunData._new(inputs, outputs)), ua, va)
            return annotated, outputs
    raise TypeError(f"Unsupported circuit node {circuit!r}.")


def get_run_data(circuit: Circuit[Any]) -> RunData | None:
    """
    Run data for the root node of the circuit, if available.
    The annotation data must either be a :class:`RunData` instance or expose one as
    its ``run`` attribute.
    """
    data = circuit.data
    if isinstance(data, RunData):
        return data
    run_data = getattr(data, "run", None)
    if isinstance(run_data, RunData):
        return run_data
    return None


def output_value(circuit: Circuit[Any], idx: int) -> Value:
    """
    The value recorded on the output wire of given index for the root node of an
    evaluated circuit, or :obj:`None` if not available.
    """
    run_data = get_run_data(circuit)
    if run_data is None or not 0 <= idx < len(run_data.outputs):
        return None
    return run_data.outputs[idx]
