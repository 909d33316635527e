"""Assorted utility functions, classes and types for sortnets."""

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
from typing import Any, Mapping


type ValueSetter[K, V] = V | Callable[[K], V] | Mapping[K, V]
"""
A value setter, which can be one of:

- a constant value
- a callable, producing a value from a key
- a mapping of keys to values

A callable setter can raise :class:`KeyError` to signal that a value cannot be
produced on some given key.
"""


def apply_setter[_K, _V](setter: ValueSetter[_K, _V], k: _K) -> _V | None:
    """
    Applies a setter to the given key.
    Returns :obj:`None` if the setter could not produce a value on the given key.
    """
    if callable(setter):
        try:
            return setter(k)
        except KeyError:
            return None
    if isinstance(setter, Mapping):
        return setter.get(k)
    return setter


def apply_setter_first[_K, _V](
    setter: ValueSetter[_K, _V], keys: Iterable[_K]
) -> _V | None:
    """
    Applies a setter to the given keys in order, returning the first value produced,
    or :obj:`None` if the setter could not produce a value on any of the keys.
    """
    for k in keys:
        if (value := apply_setter(setter, k)) is not None:
            return value
    return None


def dict_deep_copy[_T](val: _T) -> _T:
    """Utility function for deep copy of nested dictionaries."""
    if type(val) != dict:  # noqa: E721
        # T != dict[K, V] => return == T
        return val
    # T == dict[K, V] => return == dict[K, V] (by induction)
    return {k: dict_deep_copy(v) for k, v in val.items()}  # type: ignore[return-value]


def dict_deep_update(to_update: Any, new: Any) -> Any:
    """
    Utility function for deep update of nested dictionaries.
    Behaviour depends on the types of the arguments:

    - if ``type(to_update) == dict`` and ``type(new) == dict``,
      the function recursively deep updates ``to_update`` and returns it,
      adding the keys of ``new`` missing from ``to_update``;
    - otherwise, the function makes no change and returns ``new``.
    """
    if type(to_update) != dict or type(new) != dict:  # noqa: E721
        return new
    to_update.update(
        {k: dict_deep_update(to_update.get(k), v) for k, v in new.items()}
    )
    return to_update
