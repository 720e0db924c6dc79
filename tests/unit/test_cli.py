"""Tests for the famlyeml command-line interface."""

import json

import pytest
from loguru import logger

from famlyeml.cli import cli_main


@pytest.fixture(autouse=True)
def drop_log_sinks():
    """The CLI installs a stderr sink bound to the captured stream."""
    yield
    logger.remove()


@pytest.fixture
def eml_file(tmp_path, sample_eml):
    path = tmp_path / "enrollment.eml"
    path.write_text(sample_eml, encoding="utf-8")
    return path


class TestCommands:
    """Tests for command dispatch."""

    def test_help(self, capsys) -> None:
        """Test help prints usage and the command list."""
        assert cli_main(["help"]) == 0

        out = capsys.readouterr().out
        assert "Usage: famlyeml [COMMAND] [FILE] [OPTIONS]" in out
        assert "parse FILE" in out

    def test_no_args_prints_help(self, capsys) -> None:
        """Test running without arguments prints help."""
        assert cli_main([]) == 0
        assert "Commands:" in capsys.readouterr().out

    def test_version(self, capsys) -> None:
        """Test the version command prints the banner."""
        assert cli_main(["version"]) == 0
        assert capsys.readouterr().out.startswith("famlyeml v")

    def test_unknown_command(self, capsys) -> None:
        """Test an unknown command fails with a message."""
        assert cli_main(["frobnicate"]) == 1
        assert "✗ Unknown command: frobnicate" in capsys.readouterr().out

    def test_missing_file_argument(self, capsys) -> None:
        """Test file commands require a file."""
        assert cli_main(["parse"]) == 1
        assert "✗ Missing EML file for parse" in capsys.readouterr().out


class TestParse:
    """Tests for the parse command."""

    def test_prints_record_json(self, capsys, eml_file) -> None:
        """Test parse prints the resolved record as JSON."""
        assert cli_main(["parse", str(eml_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["child"]["name"] == "Aoibhín Stafford"
        assert data["parents"][1]["address"] == "123 Main Street, Dublin"

    def test_section_option(self, capsys, eml_file) -> None:
        """Test --section limits the output."""
        assert cli_main(["parse", str(eml_file), "--section", "health"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert set(data) == {"doctor", "immunisations", "special_needs"}

    def test_unknown_section(self, capsys, eml_file) -> None:
        """Test an unknown section fails before parsing."""
        assert cli_main(["parse", str(eml_file), "-s", "billing"]) == 1
        assert "✗ Unknown section: billing" in capsys.readouterr().out

    def test_output_file(self, capsys, eml_file, tmp_path) -> None:
        """Test -o writes the JSON to a file."""
        output = tmp_path / "out.json"

        assert cli_main(["parse", str(eml_file), "-o", str(output)]) == 0

        assert json.loads(output.read_text(encoding="utf-8"))["notes"] == "Collects on Fridays"
        assert "✓ EML file parsed successfully" in capsys.readouterr().err

    def test_rejects_non_eml_extension(self, capsys, tmp_path) -> None:
        """Test files without the .eml extension are refused."""
        path = tmp_path / "enrollment.txt"
        path.write_text("x")

        assert cli_main(["parse", str(path)]) == 1
        assert "✗ Please select a valid EML file." in capsys.readouterr().out

    def test_parse_failure(self, capsys, tmp_path) -> None:
        """Test a parse error is reported with its reason."""
        path = tmp_path / "broken.eml"
        path.write_text("Content-Type: text/plain\n\nHello\n")

        assert cli_main(["parse", str(path)]) == 1
        assert "✗ Failed to parse EML file: No HTML part found in EML file" in capsys.readouterr().out

    def test_missing_file(self, capsys, tmp_path) -> None:
        """Test a missing file is reported as a parse failure."""
        assert cli_main(["parse", str(tmp_path / "missing.eml")]) == 1
        assert "✗ Failed to parse EML file" in capsys.readouterr().out


class TestExport:
    """Tests for the export command."""

    def test_writes_to_export_folder(self, monkeypatch, eml_file, tmp_path) -> None:
        """Test export writes to the configured export folder."""
        export_dir = tmp_path / "exports"
        monkeypatch.setenv("FAMLYEML_EXPORT_DIR", str(export_dir))

        assert cli_main(["export", str(eml_file)]) == 0

        data = json.loads((export_dir / "famly-parsed-data.json").read_text(encoding="utf-8"))
        assert data["doctor"]["name"] == "Dr. Ó Briain"


class TestFields:
    """Tests for the fields command."""

    def test_prints_raw_table(self, capsys, eml_file) -> None:
        """Test fields prints the raw and ordered rows."""
        assert cli_main(["fields", str(eml_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["raw"]["Mobile"][0] == "0871111111"
        assert data["flat"][0] == ["Please choose from the list below", "Little Acorns Creche"]
