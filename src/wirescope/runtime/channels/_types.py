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

"""Shared typing primitives for message channels."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, cast, override, runtime_checkable

type MessageHandler[T] = Callable[[T], None]
"""Callable invoked with each published message."""


@runtime_checkable
class Publisher[T](Protocol):
    """Publishing side of a channel.

    Depend on this when a component only emits messages::

        class DoorSwitch:
            def __init__(self, opened: Publisher[DoorOpened]) -> None:
                self._opened = opened
    """

    def publish(self, message: T) -> PublishResult: ...


@runtime_checkable
class Subscriber[T](Protocol):
    """Subscribing side of a channel."""

    def subscribe(self, handler: MessageHandler[T]) -> SubscriptionHandle: ...


@runtime_checkable
class SubscriptionHandle(Protocol):
    """Revocable registration returned by :meth:`Subscriber.subscribe`."""

    @property
    def disposed(self) -> bool: ...

    def dispose(self) -> None: ...


@dataclass(slots=True, frozen=True)
class HandlerFailure:
    """Container describing a handler error captured during publish."""

    handler: MessageHandler[object]
    error: BaseException

    @override
    def __str__(self) -> str:
        return f"{self.handler!r} -> {self.error!r}"


@dataclass(slots=True, frozen=True)
class PublishResult:
    """Summary of a :meth:`MessageChannel.publish` call."""

    message: object
    handlers_invoked: tuple[MessageHandler[object], ...]
    errors: tuple[HandlerFailure, ...]
    handled_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "handled_count", len(self.handlers_invoked))

    @property
    def ok(self) -> bool:
        """Return ``True`` when no handler failures were recorded."""

        return not self.errors

    def raise_if_errors(self) -> None:
        """Raise an ``ExceptionGroup`` if any handlers failed."""

        if not self.errors:
            return

        failures = ", ".join(str(failure) for failure in self.errors)
        message = f"Errors while publishing {type(self.message).__name__}: {failures}"
        raise ExceptionGroup(
            message,
            tuple(cast(Exception, failure.error) for failure in self.errors),
        )


__all__ = [
    "HandlerFailure",
    "MessageHandler",
    "PublishResult",
    "Publisher",
    "Subscriber",
    "SubscriptionHandle",
]
