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

"""Container error hierarchy."""

from __future__ import annotations

from ..errors import WirescopeError
from .keys import describe_key


class ScopeError(WirescopeError, RuntimeError):
    """Base class for binding and resolution errors."""


class NoInstanceToInjectError(ScopeError, LookupError):
    """No binding exists for the requested key anywhere in the scope chain.

    Raised by ``Scope.resolve`` and, transitively, by every injection or lazy
    construction that needs the missing key. It is never retried.
    """

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Injection of type {describe_key(key)} failed: no binding")


class CircularDependencyError(ScopeError):
    """Lazy construction re-entered a type that is still being constructed.

    The ``cycle`` attribute lists the implementation types involved, starting
    and ending with the type that closed the loop.
    """

    def __init__(self, cycle: tuple[object, ...]) -> None:
        self.cycle = cycle
        path = " -> ".join(describe_key(key) for key in cycle)
        super().__init__(f"Circular dependency: {path}")


class DuplicateBindingError(ScopeError, ValueError):
    """Same key bound twice in a strict ``ScopeBuilder``."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Duplicate binding for {describe_key(key)}")


class ProviderError(ScopeError):
    """Constructing a lazily bound type raised an exception.

    Wraps the original exception so callers can tell which binding failed.
    Resolution errors raised while resolving dependencies are not wrapped.
    """

    def __init__(self, key: object, cause: BaseException) -> None:
        self.key = key
        self.cause = cause
        super().__init__(
            f"Constructing {describe_key(key)} raised {type(cause).__name__}: {cause}"
        )


class InjectionSiteError(ScopeError, TypeError):
    """An ``@inject``-marked callable cannot be used as an injection site."""

    def __init__(self, owner: type[object], reason: str) -> None:
        self.owner = owner
        self.reason = reason
        super().__init__(f"Invalid injection site on {owner.__qualname__}: {reason}")


__all__ = [
    "CircularDependencyError",
    "DuplicateBindingError",
    "InjectionSiteError",
    "NoInstanceToInjectError",
    "ProviderError",
    "ScopeError",
]
