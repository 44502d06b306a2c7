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

"""Base exception hierarchy for :mod:`wirescope`."""

from __future__ import annotations


class WirescopeError(Exception):
    """Base class for all wirescope exceptions.

    Catch this to handle any library-specific failure while letting standard
    Python exceptions propagate normally::

        try:
            scope.resolve(AudioMixer)
        except WirescopeError as e:
            logger.error("Composition failed: %s", e)
            raise

    Note:
        Subclasses may also inherit from standard exception types (e.g.,
        ``LookupError``, ``TypeError``) to enable more specific handling.
        Precondition violations are not part of this hierarchy; they surface
        as ``AssertionError`` from :mod:`wirescope.dbc`.
    """


__all__ = ["WirescopeError"]
