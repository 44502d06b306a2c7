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

"""Injection site discovery and dependency supply."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast, get_type_hints

from ..runtime.logging import StructuredLogger, get_logger
from .errors import InjectionSiteError
from .keys import TypeKey
from .protocols import ComponentTree, InstanceResolver

logger: StructuredLogger = get_logger(__name__, context={"component": "injector"})

_INJECT_MARKER = "__wirescope_inject__"


def inject[F: Callable[..., object]](func: F) -> F:
    """Mark ``__init__`` or an instance method as the type's injection site.

    Parameters after ``self`` are resolved by their type annotations::

        class Scoreboard:
            @inject
            def __init__(self, scores: MessageChannel[ScoreChanged]) -> None:
                self._subscription = scores.subscribe(self.on_score_changed)

        class HudPanel:
            @inject
            def _wire(self, resolver: InstanceResolver, clock: GameClock) -> None:
                ...

    A marked ``__init__`` is used when the scope constructs the type; a marked
    method is called by ``Scope.inject`` on an existing instance.
    """
    setattr(func, _INJECT_MARKER, True)
    return func


@dataclass(slots=True, frozen=True)
class InjectionParameter:
    """One parameter of an injection site."""

    name: str
    key: TypeKey
    keyword_only: bool = False


@dataclass(slots=True, frozen=True)
class InjectionSite:
    """The designated constructor or method of a type."""

    owner: type[object]
    name: str
    function: Callable[..., object]
    parameters: tuple[InjectionParameter, ...]

    @property
    def is_constructor(self) -> bool:
        return self.name == "__init__"

    def resolve_arguments(
        self, resolver: InstanceResolver
    ) -> tuple[list[object], dict[str, object]]:
        """Resolve every parameter key, in declaration order."""
        args: list[object] = []
        kwargs: dict[str, object] = {}
        for parameter in self.parameters:
            value = resolver.resolve(parameter.key)  # pyright: ignore[reportArgumentType]
            if parameter.keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return args, kwargs


_site_cache: dict[type[object], InjectionSite | None] = {}


def discover_injection_site(cls: type[object]) -> InjectionSite | None:
    """Return the injection site of ``cls``, or ``None`` if it has none.

    A marked ``__init__`` wins over marked methods; otherwise the first marked
    instance method found walking the MRO in definition order is used. The
    result, including a negative one, is memoized per type.

    Raises:
        InjectionSiteError: The marked callable has unannotated, unresolvable
            or variadic parameters. Invalid sites are not memoized.
    """
    try:
        return _site_cache[cls]
    except KeyError:
        pass

    site = _find_site(cls)
    _site_cache[cls] = site
    logger.debug(
        "injector.discover",
        event="injector.discover",
        context={
            "type": cls.__qualname__,
            "site": site.name if site is not None else None,
        },
    )
    return site


def clear_injection_cache() -> None:
    """Forget every memoized discovery result."""
    _site_cache.clear()


def _is_marked(attribute: object) -> bool:
    return getattr(attribute, _INJECT_MARKER, False) is True


def _find_site(cls: type[object]) -> InjectionSite | None:
    init = inspect.getattr_static(cls, "__init__", None)
    if _is_marked(init):
        return _build_site(cls, "__init__", init)

    seen: set[str] = {"__init__"}
    for klass in cls.__mro__:
        for name, attribute in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if inspect.isfunction(attribute) and _is_marked(attribute):
                return _build_site(cls, name, attribute)
    return None


def _build_site(cls: type[object], name: str, function: Any) -> InjectionSite:  # noqa: ANN401
    if not inspect.isfunction(function):
        raise InjectionSiteError(cls, f"{name} is not a plain function")
    try:
        hints = get_type_hints(function)
    except NameError as exc:
        raise InjectionSiteError(
            cls, f"cannot resolve annotations of {name}(): {exc}"
        ) from exc

    parameters: list[InjectionParameter] = []
    for parameter in list(inspect.signature(function).parameters.values())[1:]:
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            raise InjectionSiteError(
                cls, f"{name}() declares variadic parameter {parameter.name!r}"
            )
        key = hints.get(parameter.name)
        if key is None:
            raise InjectionSiteError(
                cls, f"parameter {parameter.name!r} of {name}() has no annotation"
            )
        parameters.append(
            InjectionParameter(
                name=parameter.name,
                key=key,
                keyword_only=parameter.kind is parameter.KEYWORD_ONLY,
            )
        )
    return InjectionSite(
        owner=cls, name=name, function=function, parameters=tuple(parameters)
    )


class Injector:
    """Supplies resolved dependencies to injection sites.

    Discovery results are shared process-wide; the injector itself only binds
    them to the resolver that owns it.
    """

    __slots__ = ("_resolver",)

    def __init__(self, resolver: InstanceResolver) -> None:
        super().__init__()
        self._resolver = resolver

    def construct[T](self, cls: type[T]) -> T:
        """Build ``cls`` through its injection site.

        A constructor site receives resolved arguments. Without one the type
        is called with no arguments and then method injection runs on the
        new instance.
        """
        site = discover_injection_site(cls)
        if site is not None and site.is_constructor:
            args, kwargs = site.resolve_arguments(self._resolver)
            return cls(*args, **kwargs)
        instance = cls()
        self.inject(instance)
        return instance

    def inject(self, obj: object) -> bool:
        """Call ``obj``'s injection method with resolved arguments.

        Returns ``True`` when a method site was invoked. Constructor sites are
        ignored; they only apply while the scope constructs the type.
        """
        site = discover_injection_site(type(obj))
        if site is None or site.is_constructor:
            return False
        args, kwargs = site.resolve_arguments(self._resolver)
        _ = site.function(obj, *args, **kwargs)
        return True

    def inject_children(self, root: object) -> int:
        """Inject ``root`` and every component reachable from it.

        Components are visited depth-first, parents before children, each at
        most once even when reachable along several paths. A node is expanded
        through its ``children()`` method; a non-callable ``children``
        attribute marks a leaf. Returns the number of components whose
        injection method ran.
        """
        visited: dict[int, object] = {}
        stack: list[object] = [root]
        injected = 0
        while stack:
            node = stack.pop()
            if id(node) in visited:
                continue
            visited[id(node)] = node
            if self.inject(node):
                injected += 1
            children = getattr(node, "children", None)
            if callable(children):
                stack.extend(reversed(tuple(cast(ComponentTree, node).children())))
        return injected


__all__ = [
    "InjectionParameter",
    "InjectionSite",
    "Injector",
    "clear_injection_cache",
    "discover_injection_site",
    "inject",
]
