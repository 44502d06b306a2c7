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

"""Precondition checks for :mod:`wirescope`.

Preconditions guard the composition graph against programmer errors such as
binding into a finalized scope or subscribing the same handler twice. They are
enforced by default; set ``WIRESCOPE_DBC=0`` to strip the checks (for example
in a release build that has already been validated).
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps

type ContractResult = bool | tuple[bool, str]
"""Predicate outcome: a bool, or ``(bool, detail)`` to explain a failure."""

type Predicate = Callable[..., ContractResult]

_ENV_FLAG = "WIRESCOPE_DBC"
_DISABLED_VALUES = frozenset({"0", "false", "off", "no"})

_forced_state: bool | None = None


def dbc_active() -> bool:
    """Return ``True`` when precondition checks should run.

    An override installed by :func:`dbc_enabled` wins over the environment.
    """
    if _forced_state is not None:
        return _forced_state
    value = os.getenv(_ENV_FLAG)
    return value is None or value.strip().lower() not in _DISABLED_VALUES


@contextmanager
def dbc_enabled(*, active: bool = True) -> Iterator[None]:
    """Override the environment flag inside a ``with`` block."""
    global _forced_state
    previous = _forced_state
    _forced_state = active
    try:
        yield
    finally:
        _forced_state = previous


def _check(
    func: Callable[..., object],
    predicate: Predicate,
    args: tuple[object, ...],
    kwargs: dict[str, object],
) -> None:
    try:
        result = predicate(*args, **kwargs)
    except AssertionError:
        raise
    except Exception as exc:
        raise AssertionError(
            f"Precondition of {func.__qualname__} raised {type(exc).__name__}: {exc}"
        ) from exc

    passed, detail = result if isinstance(result, tuple) else (result, None)
    if passed:
        return
    name = getattr(predicate, "__name__", repr(predicate))
    message = f"Precondition of {func.__qualname__} failed: {name}"
    if detail:
        message = f"{message}. {detail}"
    raise AssertionError(message)


def require[**P, R](
    *predicates: Predicate,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Check ``predicates`` before every call of the decorated callable.

    Each predicate receives the call's arguments and returns a bool or a
    ``(bool, detail)`` tuple. Predicates run in order; the first failure
    raises ``AssertionError``::

        def _channel_is_active(self, *_):
            return not self.disposed, "Attempting to subscribe to a disposed channel"

        @require(_channel_is_active)
        def subscribe(self, handler): ...
    """
    if not predicates:
        raise ValueError("@require expects at least one predicate")

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
            if dbc_active():
                for predicate in predicates:
                    _check(func, predicate, args, kwargs)
            return func(*args, **kwargs)

        return wrapped

    return decorator


__all__ = ["ContractResult", "Predicate", "dbc_active", "dbc_enabled", "require"]
