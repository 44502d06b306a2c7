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

"""Typed in-process publish/subscribe channel."""

from __future__ import annotations

from types import TracebackType
from typing import Self, cast, override
from uuid import UUID, uuid4

from ...dbc import ContractResult, require
from ..logging import StructuredLogger, get_logger
from ._types import HandlerFailure, MessageHandler, PublishResult

logger: StructuredLogger = get_logger(
    __name__, context={"component": "message_channel"}
)


def _describe_handler(handler: object) -> str:
    module_name = getattr(handler, "__module__", None)
    qualname = getattr(handler, "__qualname__", None)
    if isinstance(qualname, str):
        prefix = f"{module_name}." if isinstance(module_name, str) else ""
        return f"{prefix}{qualname}"
    return repr(handler)


class Subscription[T]:
    """Revocable registration of one handler on one channel.

    The token owns the removal right for its handler: ``dispose()`` removes the
    handler from the channel and drops the back-reference. Disposing twice, or
    after the channel itself was disposed, does nothing. Subscriptions are
    context managers::

        with channel.subscribe(on_player_joined):
            run_lobby()
        # handler removed here
    """

    __slots__ = ("_channel", "_disposed", "_handler", "_subscription_id")

    def __init__(
        self,
        channel: MessageChannel[T],
        handler: MessageHandler[T],
        subscription_id: UUID,
    ) -> None:
        super().__init__()
        self._channel: MessageChannel[T] | None = channel
        self._handler: MessageHandler[T] | None = handler
        self._subscription_id = subscription_id
        self._disposed = False

    @property
    def subscription_id(self) -> UUID:
        """Opaque identifier issued when the handler was subscribed."""
        return self._subscription_id

    @property
    def handler(self) -> MessageHandler[T] | None:
        """The subscribed handler, or ``None`` once disposed."""
        return self._handler

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        channel = self._channel
        if channel is not None and not channel.disposed:
            channel._remove(self._subscription_id)  # pyright: ignore[reportPrivateUsage]
        self._release()

    def _release(self) -> None:
        self._disposed = True
        self._channel = None
        self._handler = None

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
        state = "disposed" if self._disposed else "active"
        return f"Subscription({self._subscription_id}, {state})"


def _channel_is_active(self: MessageChannel[object], *_: object) -> ContractResult:
    return not self.disposed, "Attempting to subscribe to a disposed channel"


def _handler_not_subscribed(
    self: MessageChannel[object], handler: MessageHandler[object]
) -> ContractResult:
    return (
        not self.is_subscribed(handler),
        "Attempting to subscribe with the same handler more than once",
    )


class MessageChannel[T]:
    """Process-local channel delivering messages of one type synchronously.

    Handlers run in subscription order on the publishing thread. A handler
    that raises is isolated: the error is logged, recorded on the returned
    :class:`PublishResult`, and the remaining handlers still receive the
    message.

    Example::

        joined = MessageChannel[PlayerJoined]()
        subscription = joined.subscribe(hud.on_player_joined)
        joined.publish(PlayerJoined(client_id=7, name="Ana"))
        subscription.dispose()

    Channels are usually shared through a scope, keyed by the parameterised
    type::

        scope.bind_instance(MessageChannel[PlayerJoined], joined)
    """

    def __init__(self) -> None:
        super().__init__()
        self._subscriptions: dict[UUID, Subscription[T]] = {}
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __len__(self) -> int:
        return len(self._subscriptions)

    def is_subscribed(self, handler: MessageHandler[T]) -> bool:
        """Return ``True`` when an equal handler is already registered.

        Equality rather than identity is used so that two accesses of the same
        bound method (``obj.on_message``) count as one handler.
        """
        return any(sub.handler == handler for sub in self._subscriptions.values())

    def publish(self, message: T) -> PublishResult:
        """Deliver ``message`` to the handlers registered when the call starts.

        A subscription disposed by an earlier handler during the same call is
        skipped; one added during the call first sees the next message.
        """
        subscriptions = tuple(self._subscriptions.values())
        invoked: list[MessageHandler[object]] = []
        failures: list[HandlerFailure] = []
        for subscription in subscriptions:
            handler = subscription.handler
            if handler is None:
                continue
            erased = cast(MessageHandler[object], handler)
            invoked.append(erased)
            try:
                handler(message)
            except Exception as error:
                logger.exception(
                    "Error delivering message.",
                    event="channel.handler_failed",
                    context={
                        "handler": _describe_handler(handler),
                        "message_type": type(message).__name__,
                    },
                )
                failures.append(HandlerFailure(handler=erased, error=error))

        return PublishResult(
            message=message,
            handlers_invoked=tuple(invoked),
            errors=tuple(failures),
        )

    @require(_channel_is_active, _handler_not_subscribed)
    def subscribe(self, handler: MessageHandler[T]) -> Subscription[T]:
        subscription = Subscription(self, handler, uuid4())
        self._subscriptions[subscription.subscription_id] = subscription
        return subscription

    def dispose(self) -> None:
        """Drop every handler and make the channel inert.

        Outstanding subscriptions transition to disposed as well, so none of
        them keeps a reference back to this channel.
        """
        if self._disposed:
            return
        self._disposed = True
        subscriptions = tuple(self._subscriptions.values())
        self._subscriptions.clear()
        for subscription in subscriptions:
            subscription._release()  # pyright: ignore[reportPrivateUsage]
        logger.debug(
            "channel.dispose",
            event="channel.dispose",
            context={"released_subscriptions": len(subscriptions)},
        )

    def _remove(self, subscription_id: UUID) -> None:
        _ = self._subscriptions.pop(subscription_id, None)


__all__ = ["MessageChannel", "Subscription"]
