"""
Recipes for parametric families of circuits, for the :mod:`sortnets.circuits`
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
from collections.abc import Callable
from typing import Any, Generic, ParamSpec, Self, final
from weakref import WeakValueDictionary

from .circuits import Circuit, DataT_co

RecipeParams = ParamSpec("RecipeParams")
"""Parameter specification variable for the parameters of a recipe."""


@final
class CircuitRecipe(Generic[RecipeParams, DataT_co]):
    """
    A recipe to produce circuits from given parameters.

    The results of calls to recipes are cached for as long as they are alive,
    so that recursive recipes share sub-circuits. Parameters must be hashable.
    """

    __circuits: WeakValueDictionary[Any, Circuit[DataT_co]]
    __recipe: Callable[RecipeParams, Circuit[DataT_co]]

    __slots__ = ("__weakref__", "__circuits", "__recipe")

    def __new__(cls, recipe: Callable[RecipeParams, Circuit[DataT_co]]) -> Self:
        self = super().__new__(cls)
        self.__recipe = recipe
        self.__circuits = WeakValueDictionary()
        return self

    @property
    def name(self) -> str:
        """The name of this recipe."""
        return self.__recipe.__name__

    def __call__(
        self, *args: RecipeParams.args, **kwargs: RecipeParams.kwargs
    ) -> Circuit[DataT_co]:
        """
        Returns the circuit constructed by the recipe on given arguments.

        :meta public:
        """
        key = (args, frozenset(kwargs.items()))
        if (circuit := self.__circuits.get(key)) is not None:
            return circuit
        circuit = self.__recipe(*args, **kwargs)
        self.__circuits[key] = circuit
        return circuit

    def __repr__(self) -> str:
        """Representation of the recipe."""
        recipe = self.__recipe
        mod = recipe.__module__
        name = recipe.__name__
        return f"circuit_recipe({mod}.{name})"


def circuit_recipe[**_P, _A](
    recipe: Callable[_P, Circuit[_A]],
) -> CircuitRecipe[_P, _A]:
    """
    A function decorator to create a cached, parametric circuit factory.

    For example, the snippet below creates a function returning a circuit which
    sums ``n`` inputs:

    .. code-block:: python

        @circuit_recipe
        def sum_all(n: int) -> Circuit[str]:
            if n == 1:
                return identity(1)
            return seq(par(sum_all(n - 1), identity(1)), add())

    """
    return CircuitRecipe(recipe)
