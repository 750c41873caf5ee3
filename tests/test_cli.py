import pytest
from pathlib import Path
from click.testing import CliRunner

from hbswriter.cli.interface import main_cli

def _write_site(root: Path):
    (root / "pages" / "blog").mkdir(parents=True)
    (root / "partials").mkdir()
    (root / "helpers").mkdir()
    (root / "pages" / "index.hbs").write_text("{{> header}}<p>{{shout greeting}}</p>")
    (root / "pages" / "blog" / "post.hbs").write_text("{{title}} in {{lang}}")
    (root / "partials" / "header.hbs").write_text("<h1>{{title}}</h1>")
    (root / "helpers" / "shout.py").write_text("def helper(this, s):\n    return s.upper()\n")
    (root / "data.json").write_text('{"title": "Site", "lang": "en", "greeting": "hi"}')

def test_cli_renders_site_end_to_end():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        root = Path(td)
        _write_site(root)

        result = runner.invoke(
            main_cli,
            ["pages", "public", "-p", "partials", "-H", "helpers", "-d", "data.json", "--var", "lang=fr"],
            catch_exceptions=False,
        )

        assert result.exit_code == 0
        assert (root / "public" / "index.html").read_text() == "<h1>Site</h1><p>HI</p>"
        assert (root / "public" / "blog" / "post.html").read_text() == "Site in fr"

def test_cli_uses_config_file_and_extension():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        root = Path(td)
        _write_site(root)
        (root / "hbswriter.toml").write_text(
            'source = "pages"\n'
            'destination = "out"\n'
            'files = "blog/*.hbs"\n'
            'data_files = ["data.json"]\n'
            'extension = "txt"\n'
        )

        result = runner.invoke(main_cli, ["--quiet"], catch_exceptions=False)

        assert result.exit_code == 0
        assert (root / "out" / "blog" / "post.txt").read_text() == "Site in en"
        assert not (root / "out" / "index.txt").exists()

def test_cli_reports_errors():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        root = Path(td)
        _write_site(root)

        result = runner.invoke(main_cli, ["pages", "public", "-f", "*.missing"])

        assert result.exit_code == 1
        assert "did not match any files" in result.output

def test_cli_requires_source_and_destination():
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(main_cli, [])
        assert result.exit_code == 1
        assert "SOURCE and DESTINATION are required" in result.output

@pytest.mark.parametrize("bad_var", ["novalue", "=value"])
def test_cli_rejects_malformed_vars(bad_var):
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        _write_site(Path(td))
        result = runner.invoke(main_cli, ["pages", "public", "--var", bad_var])
        assert result.exit_code == 1
        assert "expected KEY=VALUE" in result.output

def test_cli_reports_non_table_context_as_config_error():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        root = Path(td)
        _write_site(root)
        (root / "hbswriter.toml").write_text('context = "x"\n')

        result = runner.invoke(main_cli, ["pages", "public"])

        assert result.exit_code == 1
        assert "must be a table" in result.output
        assert "Unexpected error" not in result.output
