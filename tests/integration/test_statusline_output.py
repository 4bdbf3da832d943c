import json

import pytest

from ccline.config.defaults import get_default_config
from ccline.config.schema import Config, SegmentConfig, SegmentId, StyleConfig, StyleMode
from ccline.segments.collector import collect_all
from ccline.statusline import InputError, main, parse_input_data


def plain_config(*segments):
    return Config(style=StyleConfig(mode=StyleMode.PLAIN, separator=" | "), segments=list(segments))


@pytest.mark.integration
class TestPayloadParsing:
    """Test stdin payload parsing."""

    def test_parses_payload(self, mock_stdin, sample_input_payload):
        mock_stdin(json.dumps(sample_input_payload))

        data = parse_input_data()

        assert data.model.id == "claude-sonnet-4-5-20250929"
        assert data.workspace.current_dir == "/path/to/project"
        assert data.cost.total_cost_usd == 1.50
        assert data.output_style.name == "default"

    def test_unknown_keys_ignored(self, sample_input_payload):
        sample_input_payload["context_window"] = {"context_window_size": 1}

        data = parse_input_data(json.dumps(sample_input_payload))

        assert not hasattr(data, "context_window")

    def test_optional_sections(self):
        payload = {
            "model": {"id": "m", "display_name": "M"},
            "workspace": {"current_dir": "/w"},
            "transcript_path": "",
        }

        data = parse_input_data(json.dumps(payload))

        assert data.cost is None
        assert data.output_style is None

    def test_invalid_json(self, mock_stdin):
        mock_stdin("not valid json")

        with pytest.raises(InputError):
            parse_input_data()

    def test_missing_required_fields(self):
        with pytest.raises(InputError):
            parse_input_data(json.dumps({"workspace": {"current_dir": "/test"}}))


@pytest.mark.integration
class TestCollectAll:
    """Test segment collection order and omission."""

    def test_preserves_config_order(self, sample_input_payload):
        input_data = parse_input_data(json.dumps(sample_input_payload))
        config = plain_config(
            SegmentConfig(id=SegmentId.DIRECTORY),
            SegmentConfig(id=SegmentId.MODEL),
            SegmentConfig(id=SegmentId.COST),
        )

        pairs = collect_all(config, input_data)

        assert [c.id for c, _ in pairs] == [SegmentId.DIRECTORY, SegmentId.MODEL, SegmentId.COST]
        assert [d.primary for _, d in pairs] == ["project", "Sonnet 4.5", "$1.50"]

    def test_disabled_segment_not_collected(self, sample_input_payload, monkeypatch):
        from ccline.segments.builtin.cost import CostSegment

        def fail(self, input_data):
            raise AssertionError("disabled segment collected")

        monkeypatch.setattr(CostSegment, "collect", fail)
        input_data = parse_input_data(json.dumps(sample_input_payload))
        config = plain_config(
            SegmentConfig(id=SegmentId.MODEL),
            SegmentConfig(id=SegmentId.COST, enabled=False),
        )

        pairs = collect_all(config, input_data)

        assert [c.id for c, _ in pairs] == [SegmentId.MODEL]

    def test_segments_without_data_dropped(self, sample_input_payload):
        del sample_input_payload["cost"]
        input_data = parse_input_data(json.dumps(sample_input_payload))
        config = plain_config(
            SegmentConfig(id=SegmentId.COST),
            SegmentConfig(id=SegmentId.SESSION),
            SegmentConfig(id=SegmentId.UPDATE),
            SegmentConfig(id=SegmentId.USAGE),
            SegmentConfig(id=SegmentId.MODEL),
        )

        pairs = collect_all(config, input_data)

        assert [c.id for c, _ in pairs] == [SegmentId.MODEL]


@pytest.mark.integration
class TestMain:
    """Test the command-line entry point end to end."""

    def test_renders_line(self, mock_stdin, capsys, tmp_path, sample_input_payload, write_transcript, entries):
        transcript = write_transcript(
            tmp_path / "project" / "session.jsonl",
            [entries.assistant("a1", {"input_tokens": 50_000})],
        )
        sample_input_payload["transcript_path"] = str(transcript)
        sample_input_payload["workspace"]["current_dir"] = str(tmp_path / "not-a-repo")
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "style:\n  mode: plain\n  separator: ' | '\n"
            "segments:\n"
            "  - id: model\n    icon: {plain: M}\n"
            "  - id: git\n"
            "  - id: usage\n    icon: {plain: U}\n"
            "  - id: cost\n    enabled: false\n"
        )
        mock_stdin(json.dumps(sample_input_payload))

        main(["--config", str(config_file)])

        out = capsys.readouterr().out
        assert out == "M Sonnet 4.5\x1b[37m | \x1b[0mU 25% · 50k tokens\n"

    def test_default_config_written(self, mock_stdin, capsys, sample_input_payload, isolated_home):
        mock_stdin(json.dumps(sample_input_payload))

        main([])

        out = capsys.readouterr().out
        assert "Sonnet 4.5" in out
        assert out.endswith("\n")
        assert (isolated_home / ".config" / "ccline" / "config.yaml").exists()

    def test_invalid_input_exits_with_error(self, mock_stdin, capsys):
        mock_stdin("{broken")

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("Error: ")

    def test_print_config(self, capsys):
        main(["--print-config"])

        out = capsys.readouterr().out
        assert "segments:" in out
        assert "id: model" in out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "ccline 1.0.0" in capsys.readouterr().out

    def test_default_config_renders_enabled_segments_only(self, sample_input_payload):
        input_data = parse_input_data(json.dumps(sample_input_payload))

        pairs = collect_all(get_default_config(), input_data)

        ids = [c.id for c, _ in pairs]
        assert SegmentId.COST not in ids
        assert ids[0] == SegmentId.MODEL
