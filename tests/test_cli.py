from pathlib import Path

from typer.testing import CliRunner

from mdx_link_check import __version__
from mdx_link_check.cli import app

runner = CliRunner()


def test_clean_corpus_exits_zero(corpus: Path):
    result = runner.invoke(app, [str(corpus), str(corpus)])
    assert result.exit_code == 0, result.output
    assert "No broken links found" in result.output


def test_broken_links_exit_one(corpus: Path, write_doc):
    page = write_doc(corpus / "page.md", "[a](./gone.md) [b](./faq.md#nope)\n")
    result = runner.invoke(app, [str(corpus), str(corpus)])

    assert result.exit_code == 1
    assert f"Link is broken: '{corpus / 'gone.md'}' in file {page}" in result.output
    assert f"Anchor of link is broken: './faq.md#nope' in file {page}" in result.output


def test_ignore_pattern_argument(corpus: Path, write_doc):
    write_doc(corpus / "page.md", "[a](/books/gone)\n")
    result = runner.invoke(app, [str(corpus), str(corpus), "/books/**"])
    assert result.exit_code == 0, result.output
    assert "books" not in result.output


def test_ignore_pattern_from_environment(corpus: Path, write_doc):
    write_doc(corpus / "page.md", "[a](/books/gone)\n")
    result = runner.invoke(
        app,
        [str(corpus), str(corpus)],
        env={"MDX_LINK_CHECK_IGNORE": "/books/**"},
    )
    assert result.exit_code == 0, result.output


def test_extension_option(tmp_path: Path, write_doc):
    write_doc(tmp_path / "index.md", "[a](./missing/)\n")
    result = runner.invoke(app, [str(tmp_path), str(tmp_path), "--extension", "md", "-q"])
    assert result.exit_code == 1
    assert f"'{tmp_path / 'missing' / 'index.md'}'" in result.output
    assert "Summary" not in result.output


def test_unparseable_document_aborts(corpus: Path):
    (corpus / "bad.md").write_bytes(b"\xff\xfe\xfd")
    result = runner.invoke(app, [str(corpus), str(corpus)])
    assert result.exit_code == 1
    assert f"Unable to parse document: {corpus / 'bad.md'}" in result.output
    assert "Link is broken" not in result.output


def test_missing_directory(tmp_path: Path):
    result = runner.invoke(app, [str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "Directory not found" in result.output


def test_help_shows_version_and_examples():
    for flag in ("--help", "-h"):
        result = runner.invoke(app, [flag])
        assert result.exit_code == 0
        assert __version__ in result.output
        assert "Usage" in result.output
        assert "Examples" in result.output
        assert "written" in result.output


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"mdx-local-link-checker {__version__}"


def test_repeated_runs_are_identical(corpus: Path, write_doc):
    write_doc(corpus / "page.md", "[a](./gone.md) [b](#nope)\n")
    first = runner.invoke(app, [str(corpus), str(corpus)])
    second = runner.invoke(app, [str(corpus), str(corpus)])
    assert first.exit_code == second.exit_code == 1
    assert first.output == second.output
