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

"""Type keys used to index bindings."""

from __future__ import annotations

from collections.abc import Hashable

type TypeKey = Hashable
"""A class, protocol, or parameterised generic such as ``MessageChannel[Ping]``."""


def describe_key(key: object) -> str:
    """Return a readable name for a type key."""
    if isinstance(key, type):
        return key.__qualname__
    return repr(key)


__all__ = ["TypeKey", "describe_key"]
