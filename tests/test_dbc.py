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

"""Tests for the precondition helpers."""

from __future__ import annotations

import pytest

import wirescope.dbc as dbc_module
from wirescope.dbc import dbc_active, dbc_enabled, require

pytestmark = pytest.mark.core


def test_require_allows_valid_inputs() -> None:
    @require(lambda value: value > 0)
    def square(value: int) -> int:
        return value * value

    assert square(4) == 16


def test_require_rejects_invalid_inputs() -> None:
    def positive(value: int) -> tuple[bool, str]:
        return value > 0, "value must be positive"

    @require(positive)
    def cube(value: int) -> int:
        return value**3

    with pytest.raises(AssertionError) as exc:
        _ = cube(-1)

    message = str(exc.value)
    assert "cube" in message
    assert "positive" in message
    assert message.endswith("value must be positive")


def test_require_stops_at_first_failing_predicate() -> None:
    calls: list[str] = []

    def first(value: int) -> tuple[bool, str]:
        calls.append("first")
        return False, "first failed"

    def second(value: int) -> bool:
        calls.append("second")
        return True

    @require(first, second)
    def identity(value: int) -> int:
        return value

    with pytest.raises(AssertionError, match="first failed"):
        _ = identity(1)
    assert calls == ["first"]


def test_require_receives_keyword_arguments() -> None:
    @require(lambda value, *, limit: value <= limit)
    def clamp(value: int, *, limit: int) -> int:
        return value

    assert clamp(1, limit=2) == 1
    with pytest.raises(AssertionError):
        _ = clamp(3, limit=2)


def test_predicate_exception_becomes_assertion() -> None:
    def explode(value: int) -> bool:
        raise KeyError(value)

    @require(explode)
    def identity(value: int) -> int:
        return value

    with pytest.raises(AssertionError, match="raised KeyError") as exc:
        _ = identity(1)
    assert isinstance(exc.value.__cause__, KeyError)


def test_require_needs_a_predicate() -> None:
    with pytest.raises(ValueError, match="at least one predicate"):
        _ = require()


def test_disabled_checks_are_skipped() -> None:
    @require(lambda value: value > 0)
    def passthrough(value: int) -> int:
        return value

    with dbc_enabled(active=False):
        assert passthrough(-1) == -1
    with pytest.raises(AssertionError):
        _ = passthrough(-1)


def test_dbc_enabled_restores_previous_state() -> None:
    with dbc_enabled(active=False):
        assert not dbc_active()
        with dbc_enabled(active=True):
            assert dbc_active()
        assert not dbc_active()
    assert dbc_active()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, True),
        ("1", True),
        ("yes", True),
        ("0", False),
        ("false", False),
        (" OFF ", False),
        ("no", False),
    ],
)
def test_environment_flag(
    monkeypatch: pytest.MonkeyPatch, value: str | None, expected: bool
) -> None:
    monkeypatch.setattr(dbc_module, "_forced_state", None)
    if value is None:
        monkeypatch.delenv("WIRESCOPE_DBC", raising=False)
    else:
        monkeypatch.setenv("WIRESCOPE_DBC", value)

    assert dbc_active() is expected
