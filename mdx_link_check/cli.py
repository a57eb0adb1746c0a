"""Command-line entry point: ``mdx-local-link-checker [dir] [basepath] [ignorePattern]``."""

import logging
from enum import Enum
from pathlib import Path

import typer

from . import __version__
from .checker import check_links
from .graph import LinkGraph
from .loader import DocumentParseError

PROG_NAME = "mdx-local-link-checker"

EXAMPLES = f"""Examples:

Check the current directory with no ignore patterns: {PROG_NAME}

Check the src/pages folder, ignoring anything in a folder called "books" (at any depth): {PROG_NAME} src/pages src/pages "/books/**"

Check only the docs folder with src/pages as the base path for root-relative links such as "/docs/router": {PROG_NAME} src/pages/docs src/pages

Broken-file messages show the resolved path; broken-anchor messages show the link as written.
"""

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


class Extension(str, Enum):
    mdx = "mdx"
    md = "md"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


@app.command(
    help=f"{PROG_NAME} {__version__}\n\nCheck that local links and anchors in md/mdx documents resolve.",
    epilog=EXAMPLES,
)
def main(
    directory: str = typer.Argument(".", help="Directory to scan for documents."),
    basepath: str = typer.Argument(".", help="Root used to resolve root-relative links (/...)."),
    ignore_pattern: str | None = typer.Argument(
        None,
        envvar="MDX_LINK_CHECK_IGNORE",
        help="Glob pattern; links matching it are not checked.",
        show_default=False,
    ),
    extension: Extension = typer.Option(
        Extension.mdx,
        "--extension",
        help="Extension assumed for directory and extensionless links.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every scanned file."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print broken links."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)-8s %(message)s",
    )

    if not Path(directory).is_dir():
        typer.echo(f"Error: Directory not found: {directory}", err=True)
        raise typer.Exit(1)

    graph = LinkGraph(basepath, extension=extension.value)
    try:
        graph.scan(directory)
        result = check_links(graph, ignore_pattern)
    except DocumentParseError as e:
        typer.echo(str(e), err=True)
        if e.__cause__ is not None:
            typer.echo(f"  {e.__cause__}", err=True)
        raise typer.Exit(1) from e

    for message in result.messages:
        typer.echo(message, err=True)

    if not quiet:
        if result.ok:
            typer.echo(f"No broken links found ({result.links_checked} links in {result.documents} documents).")
        else:
            typer.echo(
                f"Summary: {len(result.findings)} broken link(s) "
                f"in {result.documents} documents ({result.links_ignored} ignored)"
            )

    if not result.ok:
        raise typer.Exit(1)
