"""Unit tests for debug logging."""

import pytest

from ccline.utils.debug import debug_log


@pytest.mark.unit
class TestDebugLog:
    """Test env-gated debug logging."""

    def test_silent_without_env(self, isolated_home):
        debug_log("hello", session_id="s1")

        assert not (isolated_home / ".config" / "ccline" / "logs").exists()

    def test_writes_session_log(self, monkeypatch, isolated_home):
        monkeypatch.setenv("CCLINE_DEBUG", "1")

        debug_log("hello", transcript_path="/x/abc-123.jsonl")

        log_file = isolated_home / ".config" / "ccline" / "logs" / "ccline_debug_abc-123.log"
        assert "hello" in log_file.read_text()

    def test_unknown_session(self, monkeypatch, isolated_home):
        monkeypatch.setenv("CCLINE_DEBUG", "1")

        debug_log("first")
        debug_log("second")

        log_file = isolated_home / ".config" / "ccline" / "logs" / "ccline_debug_unknown.log"
        lines = log_file.read_text().splitlines()
        assert len(lines) == 2
        assert lines[1].endswith("second")
