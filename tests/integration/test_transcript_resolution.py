"""Integration tests for locating usage in transcript files."""

import json
import os

import pytest

from ccline.parsers.transcript import (
    find_latest_usage,
    find_summary_leaf_uuid,
    find_usage_by_uuid,
    parse_entry,
    resolve_transcript_usage,
)
from ccline.segments.builtin.usage import UsageSegment
from ccline.types import InputData


def dumps(entries):
    return [json.dumps(e) for e in entries]


@pytest.mark.integration
class TestLineHelpers:
    """Test the pure line-level helpers."""

    def test_parse_entry_skips_malformed(self):
        assert parse_entry("") is None
        assert parse_entry("{not json") is None
        assert parse_entry('{"type": "assistant", "message": "text"}') is None
        assert parse_entry('{"type": "user"}').type == "user"

    def test_latest_usage_scans_backwards(self, entries):
        lines = dumps(
            [
                entries.assistant("a1", {"input_tokens": 100}),
                entries.user("u1", "a1"),
                entries.assistant("a2", {"input_tokens": 200, "output_tokens": 5}),
                entries.user("u2", "a2"),
            ]
        )

        usage = find_latest_usage(lines + ["garbage"])

        assert usage.display_tokens() == 205

    def test_latest_usage_ignores_entries_without_usage(self, entries):
        lines = dumps(
            [
                entries.assistant("a1", {"input_tokens": 100}),
                {"type": "assistant", "uuid": "a2", "message": {"role": "assistant"}},
            ]
        )

        assert find_latest_usage(lines).display_tokens() == 100

    def test_no_usage(self, entries):
        assert find_latest_usage(dumps([entries.user("u1")])) is None

    def test_summary_leaf_uuid(self, entries):
        lines = dumps([entries.user("u1"), entries.summary("leaf-1")]) + ["", "  "]

        assert find_summary_leaf_uuid(lines) == "leaf-1"

    def test_summary_must_be_last(self, entries):
        lines = dumps([entries.summary("leaf-1"), entries.user("u1")])

        assert find_summary_leaf_uuid(lines) is None

    def test_uuid_lookup_on_assistant(self, entries):
        lines = dumps([entries.assistant("a1", {"total_tokens": 1234})])

        assert find_usage_by_uuid(lines, "a1").display_tokens() == 1234

    def test_uuid_lookup_through_user_parent(self, entries):
        lines = dumps(
            [
                entries.assistant("a1", {"input_tokens": 300}),
                entries.user("u1", "a1"),
            ]
        )

        assert find_usage_by_uuid(lines, "u1").display_tokens() == 300

    def test_uuid_not_found(self, entries):
        lines = dumps([entries.assistant("a1", {"input_tokens": 300})])

        assert find_usage_by_uuid(lines, "zzz") is None


@pytest.mark.integration
class TestResolution:
    """Test the resolution strategies against files on disk."""

    def test_empty_path(self):
        assert resolve_transcript_usage("") is None

    def test_primary_file(self, tmp_path, write_transcript, entries):
        path = write_transcript(
            tmp_path / "project" / "session.jsonl",
            [entries.assistant("a1", {"input_tokens": 1000, "output_tokens": 500})],
        )

        resolution = resolve_transcript_usage(str(path))

        assert resolution.strategy == "primary"
        assert resolution.source_path == path
        assert resolution.usage.display_tokens() == 1500

    def test_summary_resolved_in_sibling_file(self, tmp_path, write_transcript, entries):
        project = tmp_path / "project"
        write_transcript(
            project / "older.jsonl",
            [
                entries.assistant("a1", {"input_tokens": 40_000}),
                entries.user("u1", "a1"),
            ],
        )
        current = write_transcript(
            project / "current.jsonl",
            [entries.summary("u1")],
        )

        resolution = resolve_transcript_usage(str(current))

        assert resolution.usage.display_tokens() == 40_000

    def test_summary_with_unknown_leaf(self, tmp_path, write_transcript, entries):
        current = write_transcript(
            tmp_path / "project" / "current.jsonl",
            [entries.assistant("a1", {"input_tokens": 10}), entries.summary("missing")],
        )

        assert resolve_transcript_usage(str(current)) is None

    def test_undecodable_line_skipped(self, tmp_path, entries):
        path = tmp_path / "project" / "session.jsonl"
        path.parent.mkdir()
        valid = json.dumps(entries.assistant("a1", {"input_tokens": 5000}))
        path.write_bytes(
            b'{"type":"user","message":{"content":"\xff\xfe"}}\n' + valid.encode() + b"\n"
        )

        resolution = resolve_transcript_usage(str(path))

        assert resolution is not None
        assert resolution.usage.input_tokens == 5000

    def test_existing_file_without_usage(self, tmp_path, write_transcript, entries):
        project = tmp_path / "project"
        write_transcript(project / "other.jsonl", [entries.assistant("a1", {"input_tokens": 10})])
        current = write_transcript(project / "current.jsonl", [entries.user("u1")])

        assert resolve_transcript_usage(str(current)) is None

    def test_missing_file_uses_most_recent_sibling(self, tmp_path, write_transcript, entries):
        project = tmp_path / "project"
        old = write_transcript(
            project / "old.jsonl", [entries.assistant("a1", {"input_tokens": 1})]
        )
        new = write_transcript(
            project / "new.jsonl", [entries.assistant("a2", {"input_tokens": 2})]
        )
        os.utime(old, (1_000_000, 1_000_000))
        os.utime(new, (2_000_000, 2_000_000))

        resolution = resolve_transcript_usage(str(project / "gone.jsonl"))

        assert resolution.strategy == "most_recent_sibling"
        assert resolution.source_path == new
        assert resolution.usage.display_tokens() == 2

    def test_missing_directory(self, tmp_path):
        assert resolve_transcript_usage(str(tmp_path / "nope" / "gone.jsonl")) is None


@pytest.mark.integration
class TestUsageSegment:
    """Test the usage segment reading real transcript files."""

    def make_input(self, transcript_path, model_id="claude-sonnet-4-5-20250929"):
        return InputData.model_validate(
            {
                "model": {"id": model_id, "display_name": "Sonnet 4.5"},
                "workspace": {"current_dir": "/repo"},
                "transcript_path": str(transcript_path),
            }
        )

    def test_default_format(self, tmp_path, write_transcript, entries):
        path = write_transcript(
            tmp_path / "s.jsonl",
            [
                entries.assistant(
                    "a1",
                    {
                        "input_tokens": 5_000,
                        "cache_read_input_tokens": 20_000,
                        "output_tokens": 0,
                    },
                )
            ],
        )

        data = UsageSegment().collect(self.make_input(path))

        assert data.primary == "12.5% · 25k tokens"
        assert data.metadata["level"] == "Normal"
        assert data.metadata["limit"] == "200000"
        assert data.metadata["calculation_source"] == "total_from_components"

    def test_one_m_context(self, tmp_path, write_transcript, entries):
        path = write_transcript(
            tmp_path / "s.jsonl", [entries.assistant("a1", {"input_tokens": 500_000})]
        )

        data = UsageSegment({"display_format": "percentage"}).collect(
            self.make_input(path, "claude-sonnet-4-5[1m]")
        )

        assert data.primary == "50%"
        assert data.metadata["limit"] == "1000000"

    def test_critical_level(self, tmp_path, write_transcript, entries):
        path = write_transcript(
            tmp_path / "s.jsonl", [entries.assistant("a1", {"input_tokens": 195_000})]
        )

        data = UsageSegment().collect(self.make_input(path))

        assert data.metadata["level"] == "Critical"

    def test_no_usage_omits_segment(self, tmp_path, write_transcript, entries):
        path = write_transcript(tmp_path / "s.jsonl", [entries.user("u1")])

        assert UsageSegment().collect(self.make_input(path)) is None
