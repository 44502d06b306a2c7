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

from __future__ import annotations

from collections.abc import Iterator

import pytest

from wirescope.container import clear_injection_cache
from wirescope.dbc import dbc_enabled


@pytest.fixture(autouse=True)
def contracts_enabled() -> Iterator[None]:
    """Run every test with precondition checks enforced."""
    with dbc_enabled(active=True):
        yield


@pytest.fixture(autouse=True)
def fresh_injection_cache() -> Iterator[None]:
    """Isolate memoized injection sites between tests."""
    clear_injection_cache()
    yield
    clear_injection_cache()
