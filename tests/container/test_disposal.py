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

"""Tests for DisposableGroup."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given, strategies as st

from tests.helpers.components import RecordingDisposable
from wirescope.container import DisposableGroup


class _FailingDisposable:
    def dispose(self) -> None:
        raise RuntimeError("release failed")


class TestDisposableGroup:
    def test_disposes_in_insertion_order(self) -> None:
        log: list[str] = []
        group = DisposableGroup()
        for name in ("a", "b", "c"):
            group.add(RecordingDisposable(name, log))

        group.dispose()

        assert log == ["a", "b", "c"]
        assert len(group) == 0

    def test_second_dispose_is_noop(self) -> None:
        log: list[str] = []
        group = DisposableGroup()
        group.add(RecordingDisposable("a", log))

        group.dispose()
        group.dispose()

        assert log == ["a"]

    def test_empty_group_dispose(self) -> None:
        DisposableGroup().dispose()

    def test_add_does_not_deduplicate(self) -> None:
        log: list[str] = []
        item = RecordingDisposable("a", log)
        group = DisposableGroup()
        group.add(item)
        group.add(item)

        group.dispose()

        assert log == ["a", "a"]

    def test_failure_does_not_stop_release(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        log: list[str] = []
        group = DisposableGroup()
        group.add(RecordingDisposable("a", log))
        group.add(_FailingDisposable())
        group.add(RecordingDisposable("c", log))

        with caplog.at_level(logging.ERROR, logger="wirescope"):
            group.dispose()

        assert log == ["a", "c"]
        assert any(
            getattr(record, "event", None) == "disposal.dispose_error"
            for record in caplog.records
        )

    def test_context_manager_disposes(self) -> None:
        log: list[str] = []
        with DisposableGroup() as group:
            group.add(RecordingDisposable("a", log))

        assert log == ["a"]


@given(st.lists(st.text(min_size=1, max_size=8), max_size=30))
def test_release_order_matches_registration_order(names: list[str]) -> None:
    log: list[str] = []
    group = DisposableGroup()
    for name in names:
        group.add(RecordingDisposable(name, log))

    group.dispose()
    group.dispose()

    assert log == names
