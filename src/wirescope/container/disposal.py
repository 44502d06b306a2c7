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

"""Ordered release of disposable resources."""

from __future__ import annotations

from types import TracebackType
from typing import Self

from ..runtime.logging import StructuredLogger, get_logger
from .protocols import Disposable

logger: StructuredLogger = get_logger(__name__, context={"component": "disposal"})


class DisposableGroup:
    """Collects disposables and releases them together, in insertion order.

    Example::

        group = DisposableGroup()
        group.add(channel.subscribe(on_hit))
        group.add(channel.subscribe(on_heal))
        ...
        group.dispose()  # both subscriptions revoked, in that order

    ``dispose()`` empties the group, so calling it again does nothing. An item
    whose ``dispose()`` raises is logged and the remaining items are still
    released.
    """

    __slots__ = ("_disposables",)

    def __init__(self) -> None:
        super().__init__()
        self._disposables: list[Disposable] = []

    def __len__(self) -> int:
        return len(self._disposables)

    def add(self, disposable: Disposable) -> None:
        self._disposables.append(disposable)

    def dispose(self) -> None:
        disposables = self._disposables
        self._disposables = []
        for disposable in disposables:
            try:
                disposable.dispose()
            except Exception:
                logger.exception(
                    "Error disposing resource",
                    event="disposal.dispose_error",
                    context={"resource_type": type(disposable).__qualname__},
                )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()


__all__ = ["DisposableGroup"]
