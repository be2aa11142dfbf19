"""
Test module for the command line entry point.
"""

import json

import pytest

import timetable_engine.__main__ as cli


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the test run's logging configuration untouched."""
    monkeypatch.setattr(cli, "setup_logging", lambda log_level: None)


@pytest.fixture
def timetable_file(tmp_path):
    """A plain text timetable on disk."""
    path = tmp_path / "week.txt"
    path.write_text("Mon 09:00-10:00 Registration\nTue 10:00-11:00 Maths\n", encoding="utf-8")
    return path


class TestMain:
    """Test cases for main function."""

    def test_prints_timetable_json(self, timetable_file, capsys):
        """Test JSON output on stdout with report on stderr."""
        code = cli.main([str(timetable_file), "--week-start", "2024-09-02", "--timezone", "Europe/London"])

        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert code == 0
        assert data['week_start_date'] == "2024-09-02"
        assert data['timezone'] == "Europe/London"
        assert data['inferred_days'] == ["Mon", "Tue"]
        assert [b['normalized_title'] for b in data['timeblocks']] == ["Registration", "Maths"]
        assert "Confidence Report:" in captured.err

    def test_writes_output_file(self, timetable_file, tmp_path, capsys):
        """Test writing the result to --output."""
        output = tmp_path / "result.json"

        code = cli.main([str(timetable_file), "--output", str(output)])

        assert code == 0
        assert json.loads(output.read_text(encoding="utf-8"))['inferred_days'] == ["Mon", "Tue"]
        assert capsys.readouterr().out == ""

    def test_warnings_reported(self, tmp_path, capsys):
        """Test that validation warnings go to stderr."""
        path = tmp_path / "notes.txt"
        path.write_text("Notes: bring ID\n", encoding="utf-8")

        code = cli.main([str(path)])

        captured = capsys.readouterr()
        assert code == 0
        assert json.loads(captured.out)['timeblocks'] == []
        assert "No timeblocks were extracted" in captured.err

    def test_invalid_input_exit_code(self, tmp_path, capsys):
        """Test that a validation error exits with 1."""
        code = cli.main([str(tmp_path / "missing.txt")])

        assert code == 1
        assert "File not found" in capsys.readouterr().err

    def test_nearest_flag(self, tmp_path, capsys):
        """Test that --nearest switches the line assignment policy."""
        path = tmp_path / "words.json"
        path.write_text(json.dumps({'words': [
            {'text': "Mon", 'left': 0, 'top': 0, 'width': 18, 'height': 10},
            {'text': "Tue", 'left': 0, 'top': 10, 'width': 18, 'height': 10},
            {'text': "9-10", 'left': 50, 'top': 7, 'width': 24, 'height': 10},
        ]}), encoding="utf-8")

        cli.main([str(path), "--nearest"])

        data = json.loads(capsys.readouterr().out)
        assert [b['day_of_week'] for b in data['timeblocks']] == ["Tue"]

    def test_parse_args_defaults(self):
        """Test default argument values."""
        args = cli.parse_args(["week.txt"])

        assert args.week_start is None
        assert args.timezone == "UTC"
        assert args.output is None
        assert args.nearest is False
        assert args.log_level == "WARNING"
