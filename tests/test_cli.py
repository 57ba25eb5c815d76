"""
Command-line interface tests
"""
import json

import pytest

from humanize_diff.cli import main


@pytest.fixture(autouse=True)
def no_interjections(monkeypatch):
    for name in ("LIGHT", "BALANCED", "HEAVY"):
        monkeypatch.setenv(f"HUMANIZE_{name}_PROBABILITY", "0")


class TestCli:
    """humanize-diff subcommands"""

    def test_humanize_text_argument(self, capsys):
        main(["humanize", "We utilize tools."])

        assert capsys.readouterr().out == "We use tools."

    def test_humanize_json(self, capsys):
        main(["humanize", "We utilize tools.", "--json", "--seed", "1"])

        data = json.loads(capsys.readouterr().out)
        assert data["finalText"] == "We use tools."
        assert data["coverage"]["matchedPhraseCount"] == 1

    def test_humanize_inline_diff(self, capsys):
        main(["humanize", "We utilize tools.", "--diff"])

        assert capsys.readouterr().out == "We [-utilize -]{+use +}tools.\n"

    def test_file_input_and_output(self, tmp_path):
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        source.write_text("We utilize tools.", encoding="utf-8")

        main(["humanize", "-f", str(source), "-o", str(target)])

        assert target.read_text(encoding="utf-8") == "We use tools."

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["humanize", "-f", str(tmp_path / "missing.txt")])

        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_blank_text(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["humanize", "   "])

        assert exc.value.code == 1
        assert "cannot be empty" in capsys.readouterr().err

    def test_missing_rule_bundle(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["humanize", "We utilize tools.", "--rules", str(tmp_path / "none.parquet")])

        assert exc.value.code == 1
        assert "Rule bundle not found" in capsys.readouterr().err

    def test_version(self, capsys):
        main(["version"])

        assert "humanize-diff version" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])

        assert exc.value.code == 0
        assert "usage" in capsys.readouterr().out
