# tests/test_cli.py

from pathlib import Path

import pytest
from typer.testing import CliRunner

import publist.cli as cli_module
from publist.cli import app as cli_app
from publist.dblp_client import DblpClientError
from publist.render.latex_table import LATEX_TABLE_FOOTER, LATEX_TABLE_HEADER

runner = CliRunner()

URL = "https://dblp.org/pid/12/3456.html"


@pytest.fixture
def fake_dblp(monkeypatch, person_xml):
    """Replace the HTTP client with one serving `person_xml`."""
    fetched = []

    class FakeClient:
        def fetch(self, address: str) -> str:
            fetched.append(address)
            return person_xml

    monkeypatch.setattr(cli_module, "DblpClient", FakeClient)
    return fetched


def test_cli_bibtex_to_stdout(fake_dblp):
    result = runner.invoke(cli_app, ["bibtex", URL])

    assert result.exit_code == 0
    assert fake_dblp == [URL]

    out = result.stdout
    assert "@article{doe2020deep," in out
    assert "@inproceedings{doe2019shallow," in out
    assert out.index("doe2020deep") < out.index("doe2019shallow")


def test_cli_year_filter(fake_dblp):
    result = runner.invoke(cli_app, ["bibtex", URL, "--year", "2020-2020"])

    assert result.exit_code == 0
    assert "doe2020deep" in result.stdout
    assert "doe2019shallow" not in result.stdout


def test_cli_latex_table(fake_dblp):
    result = runner.invoke(cli_app, ["latex-table", URL])

    assert result.exit_code == 0
    out = result.stdout
    assert LATEX_TABLE_HEADER in out
    assert LATEX_TABLE_FOOTER in out
    assert "1 & Jane Doe & Deep Learning. & Nature & 1-10 & 2020 \\\\ \\hline" in out
    assert "2 & Jane Doe & Shallow Nets & ICML &  & 2019 \\\\ \\hline" in out


def test_cli_options_before_positionals(fake_dblp):
    result = runner.invoke(cli_app, ["-j", "/icml/i", "latex-table", URL])

    assert result.exit_code == 0
    assert "Shallow Nets" in result.stdout
    assert "Deep Learning" not in result.stdout


def test_cli_no_match_table_is_header_and_footer(fake_dblp):
    result = runner.invoke(cli_app, ["latex-table", URL, "-a", "Nobody"])

    assert result.exit_code == 0
    assert LATEX_TABLE_HEADER + LATEX_TABLE_FOOTER in result.stdout
    assert " & Jane Doe & " not in result.stdout


def test_cli_no_match_bibtex_is_empty(fake_dblp):
    result = runner.invoke(cli_app, ["bibtex", URL, "-a", "Nobody"])

    assert result.exit_code == 0
    assert "@" not in result.stdout


def test_cli_unknown_mode_falls_back_to_table(fake_dblp):
    result = runner.invoke(cli_app, ["html", URL])

    assert result.exit_code == 0
    assert LATEX_TABLE_HEADER in result.stdout


def test_cli_writes_output_file(fake_dblp, tmp_path: Path):
    out_file = tmp_path / "nested" / "pubs.bib"

    result = runner.invoke(cli_app, ["bibtex", URL, "-o", str(out_file), "-t", "Deep"])

    assert result.exit_code == 0
    text = out_file.read_text(encoding="utf-8")
    assert text.startswith("@article{doe2020deep,")
    assert "shallow" not in text
    assert "@article" not in result.stdout


def test_cli_missing_address_is_usage_error(fake_dblp):
    result = runner.invoke(cli_app, ["bibtex"])

    assert result.exit_code == 2
    assert fake_dblp == []


def test_cli_unknown_flag_is_usage_error(fake_dblp):
    result = runner.invoke(cli_app, ["bibtex", URL, "--frobnicate"])

    assert result.exit_code == 2
    assert fake_dblp == []


def test_cli_help():
    result = runner.invoke(cli_app, ["-h"])

    assert result.exit_code == 0
    assert "--journal" in result.output


def test_cli_bad_year_range(fake_dblp):
    result = runner.invoke(cli_app, ["bibtex", URL, "-y", "2021-2019"])

    assert result.exit_code == 2
    assert fake_dblp == []


def test_cli_transfer_error_exits_1(monkeypatch):
    class FailingClient:
        def fetch(self, address: str) -> str:
            raise DblpClientError("DBLP returned HTTP 500", status_code=500, url=address)

    monkeypatch.setattr(cli_module, "DblpClient", FailingClient)

    result = runner.invoke(cli_app, ["bibtex", URL])

    assert result.exit_code == 1
    assert "ERROR:" in result.output
    assert "HTTP 500" in result.output


def test_cli_malformed_document_exits_1(monkeypatch):
    class HtmlClient:
        def fetch(self, address: str) -> str:
            return "<html><body>Not found</body></html>"

    monkeypatch.setattr(cli_module, "DblpClient", HtmlClient)

    result = runner.invoke(cli_app, ["latex-table", URL])

    assert result.exit_code == 1
    assert "dblpperson" in result.output


def test_cli_malformed_record_exits_1_without_output(monkeypatch, tmp_path: Path):
    class BadRecordClient:
        def fetch(self, address: str) -> str:
            return '<dblpperson name="X"><r><article key="a/b"><title>T</title><year>2000</year></article></r></dblpperson>'

    monkeypatch.setattr(cli_module, "DblpClient", BadRecordClient)
    out_file = tmp_path / "pubs.tex"

    result = runner.invoke(cli_app, ["latex-table", URL, "-o", str(out_file)])

    assert result.exit_code == 1
    assert "a/b" in result.output
    assert not out_file.exists()


def test_cli_unwritable_output_exits_1(fake_dblp, tmp_path: Path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("occupied", encoding="utf-8")

    result = runner.invoke(cli_app, ["bibtex", URL, "-o", str(blocker / "pubs.bib")])

    assert result.exit_code == 1
    assert "ERROR:" in result.output
    assert "cannot write" in result.output
    assert not isinstance(result.exception, OSError)


def test_cli_invalid_log_level_exits_1(fake_dblp, monkeypatch):
    import publist.config.settings as settings_module

    monkeypatch.setenv("PUBLIST_LOG_LEVEL", "LOUD")
    monkeypatch.setattr(settings_module, "_settings", None)

    result = runner.invoke(cli_app, ["bibtex", URL])

    assert result.exit_code == 1
    assert "ERROR:" in result.output
    assert "LOG_LEVEL" in result.output
    assert fake_dblp == []
