"""Tests that typed text and clipboard payloads never reach log output."""

from __future__ import annotations

import logging

from byhand.core.logging import SanitizingFilter, install_sanitizing_filter, redact_message


class TestLogSanitization:
    def test_redacts_content_value(self) -> None:
        msg = 'Buffer updated content="Dear committee, I am writing"'
        result = redact_message(msg)
        assert "Dear committee" not in result
        assert "content=[REDACTED]" in result

    def test_redacts_clipboard_content(self) -> None:
        msg = "clipboard_content='secret paragraph' captured"
        result = redact_message(msg)
        assert "secret paragraph" not in result
        assert "clipboard_content=[REDACTED]" in result

    def test_redacts_colon_form(self) -> None:
        result = redact_message("selection: hunter2 copied")
        assert "hunter2" not in result
        assert "selection=[REDACTED]" in result

    def test_redacts_typed_text(self) -> None:
        result = redact_message("typed_text=asdfghjkl")
        assert "asdfghjkl" not in result

    def test_preserves_safe_messages(self) -> None:
        msg = "Session abc finalized: 42 events, 10 words, 3700 ms, score=100"
        assert redact_message(msg) == msg

    def test_filter_formats_args_before_redacting(self) -> None:
        record = logging.LogRecord(
            "byhand.test", logging.INFO, "", 0,
            "clipboard=%s pasted", ("my essay text",), None,
        )
        SanitizingFilter().filter(record)
        assert "my essay text" not in record.getMessage()
        assert record.args is None

    def test_filter_on_real_logger(self) -> None:
        logger = logging.getLogger("byhand.test.sanitize")
        filt = install_sanitizing_filter(logger)
        try:
            assert filt in logger.filters
            record = logger.makeRecord(
                "byhand.test", logging.INFO, "", 0,
                'Event content="Top Secret" processed', (), None,
            )
            filt.filter(record)
            assert "Top Secret" not in record.getMessage()
        finally:
            logger.removeFilter(filt)

    def test_handler_level_install(self) -> None:
        logger = logging.getLogger("byhand.test.handlers")
        handler = logging.NullHandler()
        logger.addHandler(handler)
        try:
            filt = install_sanitizing_filter(logger, handler_level=True)
            assert filt in handler.filters
            assert filt not in logger.filters
        finally:
            logger.removeHandler(handler)


class TestRecorderLogging:
    def test_clipboard_value_redacted(self, clock, caplog) -> None:
        from byhand.capture.recorder import SessionRecorder
        from byhand.capture.signals import Copy, Selection

        recorder = SessionRecorder.start(clock=clock)
        recorder.on_content_change("private draft sentence")
        with caplog.at_level(logging.DEBUG, logger="byhand.capture.recorder"):
            recorder.handle(Copy(selection=Selection(start=0, end=13)))
        assert "clipboard=[REDACTED]" in caplog.text
        assert "private draft" not in caplog.text
