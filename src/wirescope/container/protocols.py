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

"""Protocols for instance resolution and resource release."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class InstanceResolver(Protocol):
    """Resolves bound instances and injects dependencies into objects.

    Every scope binds itself under this key, so a component can ask for the
    resolver that built it::

        class SpawnDirector:
            @inject
            def __init__(self, resolver: InstanceResolver) -> None:
                self._resolver = resolver
    """

    def resolve[T](self, key: type[T]) -> T:
        """Return the instance bound to ``key``.

        Raises:
            NoInstanceToInjectError: No binding exists in the scope chain.
            CircularDependencyError: Lazy construction looped back on itself.
        """
        ...

    def resolve_optional[T](self, key: type[T]) -> T | None:
        """Return the instance bound to ``key``, or ``None`` if unbound."""
        ...

    def inject(self, obj: object) -> None:
        """Supply dependencies to ``obj``'s injection method, if it has one."""
        ...


@runtime_checkable
class Disposable(Protocol):
    """Object holding resources that must be released explicitly.

    Lazily constructed instances implementing this protocol are tracked by the
    scope that built them and disposed, in construction order, with it.
    """

    def dispose(self) -> None: ...


@runtime_checkable
class ComponentTree(Protocol):
    """Object exposing sub-components for ``inject_children``."""

    def children(self) -> Iterable[object]: ...


__all__ = ["ComponentTree", "Disposable", "InstanceResolver"]
