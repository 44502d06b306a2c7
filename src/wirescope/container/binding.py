# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Binding descriptors stored in a scope's registry."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .keys import TypeKey
from .protocols import InstanceResolver

type Factory[T] = Callable[[InstanceResolver], T]
"""Explicit constructor for a lazy binding; receives the resolving scope."""


@dataclass(slots=True, frozen=True)
class InstanceBinding:
    """A ready instance, supplied eagerly or cached after lazy construction."""

    instance: object


@dataclass(slots=True, frozen=True, eq=False)
class LazyBinding[T]:
    """Deferred construction of ``implementation``.

    The descriptor is registered under the implementation type and every
    interface key. The first resolution of any of those keys constructs the
    instance, which then replaces the descriptor under all of them.

    Example::

        LazyBinding(UdpTransport, (Transport, StatsSource))
        LazyBinding(Matchmaker, factory=lambda r: Matchmaker(r.resolve(Lobby), seed=7))

    Args:
        implementation: The concrete type to construct.
        interfaces: Additional keys the instance is registered under.
        factory: Optional explicit constructor. When omitted the type's
            ``@inject`` constructor is used, or a no-argument call.
    """

    implementation: type[T]
    interfaces: tuple[TypeKey, ...] = ()
    factory: Factory[T] | None = None

    @property
    def keys(self) -> tuple[TypeKey, ...]:
        """Implementation key followed by each distinct interface key."""
        keys: list[TypeKey] = [self.implementation]
        for key in self.interfaces:
            if key not in keys:
                keys.append(key)
        return tuple(keys)


type Binding = InstanceBinding | LazyBinding[object]


__all__ = ["Binding", "Factory", "InstanceBinding", "LazyBinding"]
