"""Tests for structured logging setup."""

import json
from io import StringIO

from layoffs_cleaning.config.settings import LoggingConfig
from layoffs_cleaning.utils.logging import (
    configure_from_config,
    configure_logging,
    get_logger,
    log_context,
)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_lines_carry_context(self) -> None:
        """Test that bound context appears in JSON output."""
        stream = StringIO()
        configure_logging("DEBUG", json_output=True, stream=stream)

        with log_context(project="layoffs-2022", step="deduplicate"):
            get_logger("test").info("Removed duplicate rows", n_dropped=2)

        record = json.loads(stream.getvalue().strip())
        assert record["event"] == "Removed duplicate rows"
        assert record["level"] == "info"
        assert record["project"] == "layoffs-2022"
        assert record["step"] == "deduplicate"
        assert record["n_dropped"] == 2

    def test_level_filters(self) -> None:
        """Test that messages below the configured level are dropped."""
        stream = StringIO()
        configure_logging("warning", json_output=True, stream=stream)

        log = get_logger("test")
        log.info("hidden")
        log.warning("shown")

        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "shown"

    def test_console_output(self) -> None:
        """Test the human-readable renderer."""
        stream = StringIO()
        configure_logging("INFO", stream=stream)

        get_logger("test").info("Parsed dates", n_parsed=3)

        text = stream.getvalue()
        assert "Parsed dates" in text
        assert "n_parsed" in text

    def test_from_config(self) -> None:
        """Test applying a LoggingConfig section."""
        stream = StringIO()
        configure_from_config(LoggingConfig(level="ERROR", json_output=True), stream)

        log = get_logger("test")
        log.warning("hidden")
        log.error("Date parsing failed")

        assert "hidden" not in stream.getvalue()
        assert "Date parsing failed" in stream.getvalue()
