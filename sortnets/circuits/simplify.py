"""
Simplification of circuits, removing redundant identity wiring introduced by
composition.
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
import logging

if __debug__:
    from typing_validation import validate

from .gates import Identity
from .circuits import Circuit, Composite, Par, Primitive, Seq

logger = logging.getLogger(__name__)


def simplify[_A](circuit: Circuit[_A]) -> Circuit[_A]:
    """
    Simplifies the given circuit, by repeatedly applying the following rewrites
    until none applies:

    - an identity primitive composed in sequence with a circuit is dropped,
      and its annotation data is carried over to the remaining circuit;
    - two identity primitives composed in parallel are fused into a single
      identity primitive, carrying the annotation data of the composite.

    The simplified circuit has the same fan-in, fan-out and evaluation results as
    the original one.
    """
    assert validate(circuit, Circuit)
    rounds = 0
    finished = False
    while not finished:
        circuit, finished = _simplify(circuit)
        rounds += 1
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Simplified circuit to %d nodes in %d rounds.", circuit.size, rounds
        )
    return circuit


def _simplify[_A](circuit: Circuit[_A]) -> tuple[Circuit[_A], bool]:
    """
    Simplification step, returning the rewritten circuit together with a flag
    indicating whether it is fully simplified.
    """
    while True:
        match circuit:
            case Primitive():
                return circuit, True
            case Seq(a, Primitive(_, Identity()), v):
                v, finished = _simplify(v)
                return v.amend(a), finished
            case Seq(a, u, Primitive(_, Identity())):
                u, finished = _simplify(u)
                return u.amend(a), finished
            case Par(a, Primitive(_, Identity(size=m)), Primitive(_, Identity(size=n))):
                return Primitive._new(a, Identity(m + n)), False
            case Composite(a, u, v):
                u, u_finished = _simplify(u)
                v, v_finished = _simplify(v)
                circuit = type(circuit)._new(a, u, v)
                if u_finished and v_finished:
                    return circuit, True
            case _:
                raise TypeError(f"Unsupported circuit node {circuit!r}.")
