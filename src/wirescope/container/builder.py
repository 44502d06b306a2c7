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

"""Scope module protocol and builder for accumulating bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, cast, runtime_checkable

from .binding import Factory, LazyBinding
from .errors import DuplicateBindingError
from .keys import TypeKey
from .scope import Scope


@runtime_checkable
class ScopeModule(Protocol):
    """A reusable unit of configuration that contributes bindings.

    Example::

        class NetworkModule:
            def __init__(self, transport: Transport) -> None:
                self._transport = transport

            def configure(self, builder: ScopeBuilder) -> None:
                builder.bind_instance(Transport, self._transport)
                builder.bind_lazy(Matchmaker)

        class MessagingModule:
            def configure(self, builder: ScopeBuilder) -> None:
                builder.bind_instance(
                    MessageChannel[PlayerJoined], MessageChannel[PlayerJoined]()
                )

        scope = ScopeBuilder.from_modules(NetworkModule(udp), MessagingModule())
    """

    def configure(self, builder: ScopeBuilder) -> None: ...


@dataclass(slots=True, frozen=True)
class _InstanceEntry:
    keys: tuple[TypeKey, ...]
    instance: object


class ScopeBuilder:
    """Accumulates bindings and produces a finalized :class:`Scope`.

    The produced scope rejects further bindings, so composition happens in one
    explicit phase instead of relying on finalize-on-first-use. Later bindings
    for the same key override earlier ones unless ``strict`` is set.

    Example::

        builder = ScopeBuilder(parent=root)
        builder.bind_instance(GameClock, clock)
        builder.bind_lazy(UdpTransport, Transport)
        builder.install(MessagingModule())
        scope = builder.build()
    """

    __slots__ = ("_bound", "_entries", "_parent", "_strict")

    def __init__(self, *, parent: Scope | None = None, strict: bool = False) -> None:
        """Initialize builder.

        Args:
            parent: Parent of the scope produced by :meth:`build`.
            strict: If True, raise ``DuplicateBindingError`` when the same key
                is bound more than once.
        """
        super().__init__()
        self._parent = parent
        self._strict = strict
        self._entries: list[_InstanceEntry | LazyBinding[object]] = []
        self._bound: set[TypeKey] = set()

    def bind_instance[T](self, key: type[T], instance: T, *also: TypeKey) -> None:
        entry = _InstanceEntry((key, *also), instance)
        self._claim(entry.keys)
        self._entries.append(entry)

    def bind_lazy[T](
        self,
        implementation: type[T],
        *interfaces: TypeKey,
        factory: Factory[T] | None = None,
    ) -> None:
        binding = cast(
            LazyBinding[object], LazyBinding(implementation, tuple(interfaces), factory)
        )
        self._claim(binding.keys)
        self._entries.append(binding)

    def install(self, module: ScopeModule) -> None:
        """Let ``module`` contribute its bindings to this builder."""
        module.configure(self)

    def build(self) -> Scope:
        """Create the scope, replay every binding, and finalize it."""
        scope = Scope(parent=self._parent)
        for entry in self._entries:
            if isinstance(entry, _InstanceEntry):
                scope.bind_instance(entry.keys[0], entry.instance, *entry.keys[1:])  # pyright: ignore[reportArgumentType]
            else:
                scope.bind_lazy(
                    entry.implementation, *entry.interfaces, factory=entry.factory
                )
        scope.finalize_construction()
        return scope

    @staticmethod
    def from_modules(*modules: ScopeModule, parent: Scope | None = None) -> Scope:
        """Build a finalized scope from one or more modules."""
        builder = ScopeBuilder(parent=parent)
        for module in modules:
            builder.install(module)
        return builder.build()

    def _claim(self, keys: tuple[TypeKey, ...]) -> None:
        if self._strict:
            for key in keys:
                if key in self._bound:
                    raise DuplicateBindingError(key)
        self._bound.update(keys)


__all__ = ["ScopeBuilder", "ScopeModule"]
