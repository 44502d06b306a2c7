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

"""Tests for the structured logging helpers."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from wirescope.runtime.logging import configure_logging, get_logger

pytestmark = pytest.mark.core


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


class TestStructuredLogger:
    def test_records_carry_event_and_context(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger = get_logger("wirescope.tests", context={"component": "tests"})

        with caplog.at_level(logging.INFO, logger="wirescope.tests"):
            logger.info("hello", event="tests.hello", context={"attempt": 1})

        record = caplog.records[-1]
        assert getattr(record, "event") == "tests.hello"
        assert getattr(record, "context") == {"component": "tests", "attempt": 1}

    def test_extra_is_folded_into_context(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger = get_logger("wirescope.tests")

        with caplog.at_level(logging.INFO, logger="wirescope.tests"):
            logger.info("extra", extra={"event": "tests.extra", "key": "value"})

        record = caplog.records[-1]
        assert getattr(record, "event") == "tests.extra"
        assert getattr(record, "context") == {"key": "value"}

    def test_missing_event_rejected(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("wirescope.tests")

        with caplog.at_level(logging.INFO, logger="wirescope.tests"):
            with pytest.raises(TypeError, match="event"):
                logger.info("no event")

    def test_non_mapping_context_rejected(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger = get_logger("wirescope.tests")

        with caplog.at_level(logging.INFO, logger="wirescope.tests"):
            with pytest.raises(TypeError, match="context"):
                logger.info("bad", event="tests.bad", context=["not", "a", "map"])


class TestConfigureLogging:
    def test_json_mode_writes_structured_lines(
        self,
        restore_root_logger: logging.Logger,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        configure_logging(level="INFO", json_mode=True, force=True)
        logger = get_logger("wirescope.tests")

        logger.info("hello", event="tests.json", context={"scope": "root"})

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "tests.json"
        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["context"] == {"scope": "root"}

    def test_text_mode_tolerates_plain_records(
        self,
        restore_root_logger: logging.Logger,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        configure_logging(level="WARNING", json_mode=False, force=True)

        logging.getLogger("plain").warning("unstructured")

        assert "WARNING plain - unstructured" in capsys.readouterr().err

    def test_environment_selects_level_and_format(
        self,
        restore_root_logger: logging.Logger,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        configure_logging(
            env={"WIRESCOPE_LOG_LEVEL": "warning", "WIRESCOPE_LOG_FORMAT": "JSON"},
            force=True,
        )
        logger = get_logger("wirescope.tests")

        logger.info("dropped", event="tests.dropped")
        logger.warning("kept", event="tests.kept")

        assert restore_root_logger.level == logging.WARNING
        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["tests.kept"]

    def test_existing_handlers_only_adjust_level(
        self, restore_root_logger: logging.Logger
    ) -> None:
        marker = logging.NullHandler()
        restore_root_logger.addHandler(marker)

        configure_logging(level=logging.DEBUG)

        assert marker in restore_root_logger.handlers
        assert restore_root_logger.level == logging.DEBUG

    def test_unknown_level_rejected(self, restore_root_logger: logging.Logger) -> None:
        with pytest.raises(TypeError, match="Unknown log level"):
            configure_logging(level="LOUD", force=True)
