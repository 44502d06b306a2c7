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

"""Composition root primitives: scopes, injection, disposal and channels."""

from __future__ import annotations

from .container import (
    CircularDependencyError,
    ComponentTree,
    Disposable,
    DisposableGroup,
    DuplicateBindingError,
    InjectionSite,
    InjectionSiteError,
    InstanceResolver,
    NoInstanceToInjectError,
    ProviderError,
    Scope,
    ScopeBuilder,
    ScopeError,
    ScopeModule,
    discover_injection_site,
    inject,
)
from .errors import WirescopeError
from .runtime.channels import (
    MessageChannel,
    PublishResult,
    Publisher,
    Subscriber,
    Subscription,
)
from .runtime.logging import configure_logging, get_logger

__all__ = [
    "CircularDependencyError",
    "ComponentTree",
    "Disposable",
    "DisposableGroup",
    "DuplicateBindingError",
    "InjectionSite",
    "InjectionSiteError",
    "InstanceResolver",
    "MessageChannel",
    "NoInstanceToInjectError",
    "ProviderError",
    "PublishResult",
    "Publisher",
    "Scope",
    "ScopeBuilder",
    "ScopeError",
    "ScopeModule",
    "Subscriber",
    "Subscription",
    "WirescopeError",
    "configure_logging",
    "discover_injection_site",
    "get_logger",
    "inject",
]
