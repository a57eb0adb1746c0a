"""Read a document and produce the two text forms links are extracted from."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from mdit_py_plugins.anchors import anchors_plugin

logger = logging.getLogger(__name__)

DOC_EXTENSIONS = ("md", "mdx")
DEFAULT_EXTENSION = "mdx"

CODE_BLOCK_PATTERN = re.compile(r"(```|~~~)[\s\S]+?\1")
VERBATIM_TOKENS = frozenset({"fence", "code_block"})


class DocumentParseError(Exception):
    """A document could not be rendered, so its links cannot be trusted."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Unable to parse document: {path}")
        self.path = path


@dataclass
class LoadedDocument:
    path: Path
    source: str
    rendered: str


def is_document(path: str | Path) -> bool:
    """Return True for files whose extension marks them as documents."""
    return Path(path).suffix.lstrip(".") in DOC_EXTENSIONS


def strip_code_blocks(text: str) -> str:
    """Remove fenced code regions so their contents never count as links."""
    return CODE_BLOCK_PATTERN.sub("", text)


def _strip_verbatim(state: StateCore) -> None:
    state.tokens = [token for token in state.tokens if token.type not in VERBATIM_TOKENS]


def _build_renderer() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": True})
    md.use(anchors_plugin, min_level=1, max_level=6)
    md.core.ruler.push("strip_verbatim", _strip_verbatim)
    # Keep link destinations as authored instead of percent-encoding them.
    md.normalizeLink = lambda url: url
    return md


_renderer = _build_renderer()


def render_document(text: str, path: Path) -> str:
    """Render ``text`` to HTML with slugged heading ids.

    Any failure is raised as ``DocumentParseError`` naming ``path``.
    """
    try:
        return _renderer.render(text)
    except Exception as e:
        raise DocumentParseError(path) from e


def load_document(path: str | Path) -> LoadedDocument | None:
    """Return both text forms of a document, or ``None`` for other files."""
    path = Path(path)
    if not is_document(path):
        return None

    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentParseError(path) from e

    source = strip_code_blocks(text)
    logger.debug("rendering %s", path)
    return LoadedDocument(path=path, source=source, rendered=render_document(source, path))
