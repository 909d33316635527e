"""
Layout of circuits for display.

Layout (cf. :obj:`layout`) assigns to every node of a circuit a bounding box,
the positions of its input and output terminals, and an id (cf. :class:`Layout`).
Ids are assigned in pre-order, which allows nodes to be looked up by id by
descending a single path of the tree (cf. :func:`get_circuit_by_id`).
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

from .geometry import Point, NodeId, Layout, point_add, point_scale, terminal_posns
from .engine import (
    HasLayout,
    LayoutOptions,
    CircuitLayouter,
    layout,
    get_layout,
    map_layout,
    translate,
    scale,
    width,
    height,
    get_circuit_by_id,
    gather_wires,
)

__all__ = (
    "Point",
    "NodeId",
    "Layout",
    "point_add",
    "point_scale",
    "terminal_posns",
    "HasLayout",
    "LayoutOptions",
    "CircuitLayouter",
    "layout",
    "get_layout",
    "map_layout",
    "translate",
    "scale",
    "width",
    "height",
    "get_circuit_by_id",
    "gather_wires",
)
