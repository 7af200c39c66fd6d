"""Unit tests for logging utilities."""

import io
import json
import logging
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from gitstage.config import LoggingConfig
from gitstage.enums import LogFormat, LogLevel
from gitstage.utils._logging import (
    _create_logger,
    _library_logger,
    _log_level_from_string,
    create_logger,
    get_logger,
)


class TestLogLevelFromString:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_maps_names(self, name: str, expected: int) -> None:
        assert _log_level_from_string(name) == expected

    def test_unknown_name_falls_back_to_info(self) -> None:
        assert _log_level_from_string("chatty") == logging.INFO


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        log_path = Path("/logs/gitstage.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_json_format(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_format="json")

        logger.warning("test_event", key="value")

        entry = json.loads(Path("/logs/test.log").read_text().splitlines()[0])
        assert entry["event"] == "test_event"
        assert entry["key"] == "value"
        assert entry["level"] == "warning"
        assert "timestamp" in entry

    def test_text_format(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_format="text")

        logger.warning("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert "test_event" in log_content
        assert "key=value" in log_content

    def test_appends_to_existing_file(self, fs: FakeFilesystem) -> None:
        _ = fs.create_file("/logs/test.log", contents="previous\n")  # pyright: ignore[reportUnknownMemberType]
        logger = _create_logger("/logs/test.log")

        logger.error("next_event")

        log_content = Path("/logs/test.log").read_text()
        assert log_content.startswith("previous\n")
        assert "next_event" in log_content

    def test_filters_below_level(self) -> None:
        stream = io.StringIO()
        logger = _create_logger(log_level=logging.WARNING, stream=stream)

        logger.debug("hidden_event")
        logger.info("hidden_event")
        logger.warning("shown_event")

        output = stream.getvalue()
        assert "hidden_event" not in output
        assert "shown_event" in output

    def test_writes_to_stream_without_file(self) -> None:
        stream = io.StringIO()
        logger = _create_logger(stream=stream)

        logger.error("stream_event")

        assert "stream_event" in stream.getvalue()

    def test_writes_to_stderr_by_default(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = _create_logger()

        logger.error("stderr_event")

        assert "stderr_event" in capsys.readouterr().err


class TestCreateLoggerRotation:
    def test_rotates_when_both_params_set(self, fs: FakeFilesystem) -> None:
        logger = _create_logger(
            "/logs/test.log",
            log_level=logging.DEBUG,
            max_bytes=200,
            backup_count=2,
        )

        for i in range(20):
            logger.info("rotation_event", index=i, padding="x" * 40)

        assert Path("/logs/test.log").exists()
        assert Path("/logs/test.log.1").exists()
        assert not Path("/logs/test.log.3").exists()

    def test_rotation_requires_both_params(self, fs: FakeFilesystem) -> None:
        logger = _create_logger(
            "/logs/test.log", log_level=logging.DEBUG, max_bytes=200
        )

        for i in range(20):
            logger.info("rotation_event", index=i, padding="x" * 40)

        assert not Path("/logs/test.log.1").exists()


class TestCreateLoggerFromConfig:
    def test_uses_config_values(self, fs: FakeFilesystem) -> None:
        config = LoggingConfig(
            level=LogLevel.DEBUG, format=LogFormat.JSON, file="/logs/config.log"
        )
        logger = create_logger(config)

        logger.debug("config_event")

        entry = json.loads(Path("/logs/config.log").read_text())
        assert entry["event"] == "config_event"
        assert entry["level"] == "debug"

    def test_loads_environment_when_config_missing(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITSTAGE_LOGGING__LEVEL", "debug")
        stream = io.StringIO()

        logger = create_logger(stream=stream)
        logger.debug("env_event")

        assert "env_event" in stream.getvalue()


class TestGetLogger:
    def test_binds_component(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("GITSTAGE_LOGGING__LEVEL", "debug")
        _library_logger.cache_clear()

        get_logger("staging").debug("component_event")

        err = capsys.readouterr().err
        assert "component_event" in err
        assert "component=staging" in err

    def test_silent_at_default_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        get_logger("staging").debug("quiet_event")

        assert "quiet_event" not in capsys.readouterr().err

    def test_reuses_library_logger(self) -> None:
        _ = get_logger("a")
        _ = get_logger("b")

        assert _library_logger.cache_info().currsize == 1

    def test_invalid_settings_fall_back_with_warning(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("GITSTAGE_LOGGING__LEVEL", "verbose")
        _library_logger.cache_clear()

        _ = get_logger("handle")

        err = capsys.readouterr().err
        assert "invalid_logging_config" in err
        assert "logging.level" in err
