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

"""Hierarchical dependency container.

Quick Start::

    from wirescope.container import Scope, inject

    class Matchmaker:
        @inject
        def __init__(self, transport: Transport, lobby: Lobby) -> None:
            ...

    root = Scope()
    root.bind_instance(Transport, udp_transport)
    root.bind_lazy(Lobby)

    session = Scope(parent=root)
    session.bind_lazy(Matchmaker)
    matchmaker = session.resolve(Matchmaker)  # Lobby built lazily in root
    session.dispose()

Bindings
--------

- ``bind_instance``: a ready object, optionally under several keys
- ``bind_lazy``: a type constructed on first resolution, then cached
- ``bind_as_single``: a type constructed immediately with no arguments

Injection sites
---------------

Decorate ``__init__`` (used when the scope constructs the type) or one
instance method (used by ``Scope.inject``) with :func:`inject`. Parameters are
resolved by their annotations.
"""

from __future__ import annotations

from .binding import Factory, InstanceBinding, LazyBinding
from .builder import ScopeBuilder, ScopeModule
from .disposal import DisposableGroup
from .errors import (
    CircularDependencyError,
    DuplicateBindingError,
    InjectionSiteError,
    NoInstanceToInjectError,
    ProviderError,
    ScopeError,
)
from .injector import (
    InjectionParameter,
    InjectionSite,
    Injector,
    clear_injection_cache,
    discover_injection_site,
    inject,
)
from .keys import TypeKey, describe_key
from .protocols import ComponentTree, Disposable, InstanceResolver
from .registry import BindingRegistry
from .scope import Scope

__all__ = [
    "BindingRegistry",
    "CircularDependencyError",
    "ComponentTree",
    "Disposable",
    "DisposableGroup",
    "DuplicateBindingError",
    "Factory",
    "InjectionParameter",
    "InjectionSite",
    "InjectionSiteError",
    "Injector",
    "InstanceBinding",
    "InstanceResolver",
    "LazyBinding",
    "NoInstanceToInjectError",
    "ProviderError",
    "Scope",
    "ScopeBuilder",
    "ScopeError",
    "ScopeModule",
    "TypeKey",
    "clear_injection_cache",
    "describe_key",
    "discover_injection_site",
    "inject",
]
