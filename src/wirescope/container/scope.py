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

"""Hierarchical resolution scopes."""

from __future__ import annotations

import weakref
from types import TracebackType
from typing import Self, cast, override

from ..dbc import ContractResult, require
from ..runtime.logging import StructuredLogger, get_logger
from .binding import Factory, InstanceBinding, LazyBinding
from .disposal import DisposableGroup
from .errors import (
    CircularDependencyError,
    NoInstanceToInjectError,
    ProviderError,
    ScopeError,
)
from .injector import Injector
from .keys import TypeKey, describe_key
from .protocols import Disposable, InstanceResolver
from .registry import BindingRegistry

logger: StructuredLogger = get_logger(__name__, context={"component": "scope"})


def _accepts_bindings(self: Scope, *_: object, **__: object) -> ContractResult:
    if self.disposed:
        return False, "Trying to bind dependencies to a disposed scope"
    return (
        not self.finalized,
        "Trying to bind dependencies to a scope after it has been finalized "
        "by either being accessed or by an explicit finalize_construction() call",
    )


class Scope:
    """A resolution unit owning bindings and the resources it constructed.

    Bindings are registered first; the first ``resolve``/``inject`` call (or
    an explicit :meth:`finalize_construction`) finalizes the scope, injecting
    every eagerly bound instance. After that no further bindings are accepted.

    Scopes nest: a key missing here is looked up in the parent. The parent is
    held weakly and is not disposed with its children.

    Example::

        root = Scope()
        root.bind_instance(MessageChannel[PlayerJoined], MessageChannel[PlayerJoined]())
        root.bind_lazy(UdpTransport, Transport)

        with Scope(parent=root) as match:
            match.bind_lazy(MatchDirector)
            director = match.resolve(MatchDirector)  # Transport from root
        # disposables built by ``match`` released here

    Resolution order for ``resolve(key)``:

    1. A pending lazy binding for ``key`` is constructed, cached and returned.
    2. A cached or eager instance for ``key`` is returned.
    3. The parent scope resolves ``key``.
    4. ``NoInstanceToInjectError`` is raised.
    """

    __slots__ = (
        "__weakref__",
        "_disposal",
        "_disposed",
        "_finalized",
        "_injector",
        "_parent",
        "_registry",
        "_resolving",
    )

    def __init__(self, parent: Scope | None = None) -> None:
        super().__init__()
        self._parent: weakref.ref[Scope] | None = (
            weakref.ref(parent) if parent is not None else None
        )
        self._registry = BindingRegistry()
        self._injector = Injector(self)
        self._disposal = DisposableGroup()
        self._resolving: list[TypeKey] = []
        self._finalized = False
        self._disposed = False
        self.bind_instance(InstanceResolver, self)

    # === State ===

    @property
    def parent(self) -> Scope | None:
        """The parent scope, or ``None`` for a root or a collected parent."""
        return self._parent() if self._parent is not None else None

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __contains__(self, key: object) -> bool:
        """Check whether ``key`` is bound in this scope (parents excluded)."""
        return key in self._registry

    def create_child(self) -> Scope:
        """Return a new scope falling back to this one."""
        return Scope(parent=self)

    # === Binding ===

    @require(_accepts_bindings)
    def bind_instance[T](self, key: type[T], instance: T, *also: TypeKey) -> None:
        """Bind a ready instance under ``key`` and every key in ``also``.

        ``scope.bind_instance(Transport, udp, UdpTransport)`` registers the
        same object under the interface and the concrete type.
        """
        self._registry.bind_instance(key, instance)
        for alias in also:
            self._registry.bind_instance(alias, instance)

    @require(_accepts_bindings)
    def bind_lazy[T](
        self,
        implementation: type[T],
        *interfaces: TypeKey,
        factory: Factory[T] | None = None,
    ) -> None:
        """Bind ``implementation`` for construction on first resolution.

        The instance is built once, on the first ``resolve`` of the
        implementation type or any of ``interfaces``, and cached under all of
        them.
        """
        binding = LazyBinding(implementation, tuple(interfaces), factory)
        self._registry.bind_lazy(cast(LazyBinding[object], binding))

    @require(_accepts_bindings)
    def bind_as_single[T](self, interface: type[T], implementation: type[T]) -> None:
        """Construct ``implementation`` now and bind it under ``interface``.

        The type is called without arguments; an ``@inject`` method on it runs
        when the scope is finalized, like any eager instance. A disposable
        result is released with the scope.
        """
        instance = implementation()
        if isinstance(instance, Disposable):
            self._disposal.add(instance)
        self._registry.bind_instance(interface, instance)

    # === Resolution ===

    def finalize_construction(self) -> None:
        """Inject every eagerly bound instance and close the scope to bindings.

        Idempotent; called implicitly by the first ``resolve`` or ``inject``.
        """
        if self._finalized:
            return
        self._finalized = True
        instances = self._registry.instances()
        logger.debug(
            "scope.finalize",
            event="scope.finalize",
            context={
                "eager_instances": len(instances),
                "lazy_bindings": len(self._registry.pending()),
            },
        )
        for instance in instances:
            _ = self._injector.inject(instance)

    def resolve[T](self, key: type[T]) -> T:
        self.finalize_construction()
        binding = self._registry.lookup(key)
        if isinstance(binding, LazyBinding):
            return cast(T, self._construct(binding))
        if isinstance(binding, InstanceBinding):
            return cast(T, binding.instance)
        parent = self.parent
        if parent is not None:
            return parent.resolve(key)
        raise NoInstanceToInjectError(key)

    def resolve_optional[T](self, key: type[T]) -> T | None:
        """Resolve ``key`` if bound anywhere in the chain, else ``None``.

        Failures while constructing a bound key still propagate.
        """
        self.finalize_construction()
        if key in self._registry:
            return self.resolve(key)
        parent = self.parent
        if parent is not None:
            return parent.resolve_optional(key)
        return None

    def inject(self, obj: object) -> None:
        self.finalize_construction()
        _ = self._injector.inject(obj)

    def inject_children(self, root: object) -> None:
        """Inject ``root`` and every component reachable through ``children()``."""
        self.finalize_construction()
        injected = self._injector.inject_children(root)
        logger.debug(
            "scope.inject_children",
            event="scope.inject_children",
            context={"root": type(root).__qualname__, "injected": injected},
        )

    def _construct(self, binding: LazyBinding[object]) -> object:
        implementation = binding.implementation
        if implementation in self._resolving:
            start = self._resolving.index(implementation)
            raise CircularDependencyError((*self._resolving[start:], implementation))

        self._resolving.append(implementation)
        try:
            instance = self._invoke(binding)
        finally:
            _ = self._resolving.pop()

        if isinstance(instance, Disposable):
            self._disposal.add(instance)
        keys = self._registry.complete(binding, instance)
        logger.debug(
            "scope.lazy.constructed",
            event="scope.lazy.constructed",
            context={
                "implementation": implementation.__qualname__,
                "keys": [describe_key(key) for key in keys],
            },
        )
        return instance

    def _invoke(self, binding: LazyBinding[object]) -> object:
        try:
            if binding.factory is not None:
                return binding.factory(self)
            return self._injector.construct(binding.implementation)
        except (ScopeError, AssertionError):
            raise
        except Exception as e:
            raise ProviderError(binding.implementation, e) from e

    # === Teardown ===

    def dispose(self) -> None:
        """Drop all bindings and release what this scope constructed.

        Disposables are released in the order they were constructed. Calling
        ``dispose()`` again does nothing.
        """
        if self._disposed:
            return
        self._disposed = True
        logger.debug(
            "scope.dispose",
            event="scope.dispose",
            context={"tracked_disposables": len(self._disposal)},
        )
        self._registry.clear()
        self._disposal.dispose()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    @override
    def __repr__(self) -> str:
        state = (
            "disposed"
            if self._disposed
            else "finalized"
            if self._finalized
            else "building"
        )
        return f"Scope({state}, bindings={len(self._registry)})"


__all__ = ["Scope"]
