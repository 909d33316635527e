"""
Circuits built from gates composed in parallel and in sequence.

Circuits (cf. :class:`Circuit`) are binary trees whose leaves are gates
(cf. :class:`Gate`) and whose internal nodes are parallel (cf. :class:`Par`) or
sequential (cf. :class:`Seq`) compositions. Every node carries annotation data,
which is threaded through evaluation (cf. :func:`run_annotate`) and layout without
changing the shape of the tree.
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

from .gates import Value, Values, values, value_lt, Gate, Identity, CompareSwap, Add, Const
from .circuits import (
    DataT_co,
    Circuit,
    Primitive,
    Composite,
    Par,
    Seq,
    primitive,
    identity,
    compare_swap,
    add,
    const,
    par,
    seq,
    par_all,
    seq_all,
)
from .evaluation import RunData, run, run_annotate, get_run_data, output_value
from .simplify import simplify
from .recipes import CircuitRecipe, circuit_recipe

__all__ = (
    "Value",
    "Values",
    "values",
    "value_lt",
    "Gate",
    "Identity",
    "CompareSwap",
    "Add",
    "Const",
    "DataT_co",
    "Circuit",
    "Primitive",
    "Composite",
    "Par",
    "Seq",
    "primitive",
    "identity",
    "compare_swap",
    "add",
    "const",
    "par",
    "seq",
    "par_all",
    "seq_all",
    "RunData",
    "run",
    "run_annotate",
    "get_run_data",
    "output_value",
    "simplify",
    "CircuitRecipe",
    "circuit_recipe",
)
