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

"""Typed publish/subscribe channels for decoupled in-process messaging.

Quick Start::

    from wirescope.runtime.channels import MessageChannel

    channel = MessageChannel[ScoreChanged]()
    with channel.subscribe(scoreboard.on_score_changed):
        result = channel.publish(ScoreChanged(team="red", score=3))
        result.raise_if_errors()

Channels are independent of the container; share one by binding it into a
scope under its parameterised type.
"""

from __future__ import annotations

from ._types import (
    HandlerFailure,
    MessageHandler,
    PublishResult,
    Publisher,
    Subscriber,
    SubscriptionHandle,
)
from .channel import MessageChannel, Subscription

__all__ = [
    "HandlerFailure",
    "MessageChannel",
    "MessageHandler",
    "PublishResult",
    "Publisher",
    "Subscriber",
    "Subscription",
    "SubscriptionHandle",
]
