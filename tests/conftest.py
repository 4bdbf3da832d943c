import json

from pathlib import Path

import pytest

from ccline.utils.models import reset_model_registry


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line("markers", "unit: Unit tests that do not perform real I/O")
    config.addinivalue_line("markers", "integration: Integration tests with mocked I/O")
    config.addinivalue_line("markers", "performance: Performance benchmarks")


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path):
    """Point HOME and XDG_CONFIG_HOME at a temp dir and reset cached models."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("USERPROFILE", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.delenv("CCLINE_DEBUG", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_model_registry()
    yield home
    reset_model_registry()


@pytest.fixture
def mock_stdin(monkeypatch):
    """Factory fixture to mock stdin with custom content."""
    import io
    import sys

    def _mock_stdin(content: str):
        monkeypatch.setattr(sys, "stdin", io.StringIO(content))

    return _mock_stdin


@pytest.fixture
def sample_input_payload():
    """Sample statusline input payload."""
    return {
        "session_id": "abc123-def456",
        "workspace": {"current_dir": "/path/to/project"},
        "transcript_path": "/path/to/transcript.jsonl",
        "model": {"id": "claude-sonnet-4-5-20250929", "display_name": "Sonnet 4.5"},
        "cost": {
            "total_cost_usd": 1.50,
            "total_duration_ms": 330000,
            "total_lines_added": 100,
            "total_lines_removed": 25,
        },
        "output_style": {"name": "default"},
        "version": "2.0.53",
    }


@pytest.fixture
def write_transcript():
    """Factory fixture writing transcript entries as JSONL."""

    def _write(path: Path, entries: list) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [e if isinstance(e, str) else json.dumps(e) for e in entries]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


def assistant_entry(uuid: str, usage: dict, parent_uuid=None) -> dict:
    """Build an assistant transcript entry carrying usage."""
    entry = {
        "type": "assistant",
        "uuid": uuid,
        "message": {"role": "assistant", "usage": usage},
    }
    if parent_uuid:
        entry["parentUuid"] = parent_uuid
    return entry


def user_entry(uuid: str, parent_uuid=None) -> dict:
    entry = {"type": "user", "uuid": uuid, "message": {"role": "user", "content": "hi"}}
    if parent_uuid:
        entry["parentUuid"] = parent_uuid
    return entry


def summary_entry(leaf_uuid: str) -> dict:
    return {"type": "summary", "summary": "Earlier work", "leafUuid": leaf_uuid}


@pytest.fixture
def entries():
    """Builders for transcript entries."""
    from types import SimpleNamespace

    return SimpleNamespace(assistant=assistant_entry, user=user_entry, summary=summary_entry)
