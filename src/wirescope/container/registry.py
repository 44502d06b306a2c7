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

"""Per-scope mapping from type keys to bindings."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .binding import InstanceBinding, LazyBinding
from .keys import TypeKey


class BindingRegistry:
    """Mutable binding table owned by a single scope.

    Binding a key replaces whatever was bound to it before, instance or lazy.
    Lazy descriptors are consumed by :meth:`complete`, which swaps each key
    still pointing at the descriptor for an :class:`InstanceBinding`.
    """

    __slots__ = ("_bindings",)

    def __init__(self) -> None:
        super().__init__()
        self._bindings: dict[TypeKey, InstanceBinding | LazyBinding[object]] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[TypeKey]:
        yield from self._bindings

    def bind_instance(self, key: TypeKey, instance: object) -> None:
        self._bindings[key] = InstanceBinding(instance)

    def bind_lazy(self, binding: LazyBinding[object]) -> None:
        for key in binding.keys:
            self._bindings[key] = binding

    def lookup(self, key: TypeKey) -> InstanceBinding | LazyBinding[object] | None:
        return self._bindings.get(key)

    def complete(
        self, binding: LazyBinding[object], instance: object
    ) -> tuple[TypeKey, ...]:
        """Replace ``binding`` with ``instance`` under each key it still owns.

        Keys re-bound to something else since ``binding`` was registered keep
        their newer binding. Returns the keys that now hold ``instance``.
        """
        cached = InstanceBinding(instance)
        completed: list[TypeKey] = []
        for key in binding.keys:
            if self._bindings.get(key) is binding:
                self._bindings[key] = cached
                completed.append(key)
        return tuple(completed)

    def instances(self) -> Sequence[object]:
        """Distinct bound instances in registration order.

        An instance bound under several keys is listed once.
        """
        seen: set[int] = set()
        result: list[object] = []
        for binding in self._bindings.values():
            if not isinstance(binding, InstanceBinding):
                continue
            if id(binding.instance) not in seen:
                seen.add(id(binding.instance))
                result.append(binding.instance)
        return result

    def pending(self) -> Sequence[LazyBinding[object]]:
        """Distinct lazy descriptors not yet constructed."""
        result: list[LazyBinding[object]] = []
        for binding in self._bindings.values():
            if isinstance(binding, LazyBinding) and binding not in result:
                result.append(binding)
        return result

    def clear(self) -> None:
        self._bindings.clear()


__all__ = ["BindingRegistry"]
