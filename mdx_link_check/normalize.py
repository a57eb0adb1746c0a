"""Turn a raw link string into an absolute local target."""

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

from .loader import DEFAULT_EXTENSION, DOC_EXTENSIONS

EXTERNAL_PATTERN = re.compile(r"^https?://")
SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


class LinkKind(Enum):
    EXTERNAL = "external"
    IGNORED_SCHEME = "ignored-scheme"
    INTERNAL = "internal"


@dataclass(frozen=True)
class NormalizedLink:
    """A link as written plus where it points.

    ``path`` is ``None`` for external and ignored-scheme links. ``alternates``
    are further candidates for an extensionless or directory link, tried in
    order when ``path`` does not exist.
    """

    kind: LinkKind
    original: str
    path: Path | None = None
    anchor: str | None = None
    alternates: tuple[Path, ...] = ()

    @property
    def absolute(self) -> str:
        """The resolved target with its fragment, e.g. ``/docs/a.mdx#intro``."""
        if self.path is None:
            return self.original
        if self.anchor is None:
            return str(self.path)
        return f"{self.path}#{self.anchor}"

    @property
    def candidates(self) -> tuple[Path, ...]:
        if self.path is None:
            return ()
        return (self.path, *self.alternates)


def classify(raw: str) -> LinkKind:
    """Tell external, ignored-scheme and internal links apart."""
    if EXTERNAL_PATTERN.match(raw):
        return LinkKind.EXTERNAL
    if SCHEME_PATTERN.match(raw):
        # mailto:, javascript:, tel: ...
        return LinkKind.IGNORED_SCHEME
    return LinkKind.INTERNAL


def _expand_path(path_part: str, extension: str) -> list[str]:
    """Apply the directory-index and extensionless-document rules.

    Returns the primary path followed by its alternates.
    """
    others = [ext for ext in DOC_EXTENSIONS if ext != extension]
    suffix = PurePosixPath(path_part).suffix.lstrip(".")

    if suffix in DOC_EXTENSIONS:
        return [path_part]

    last_segment = path_part.rstrip("/").rsplit("/", 1)[-1]
    if path_part.endswith("/") or last_segment in (".", ".."):
        directory = path_part if path_part.endswith("/") else path_part + "/"
        return [f"{directory}index.{ext}" for ext in (extension, *others)]

    if not suffix:
        return [f"{path_part}.{ext}" for ext in (extension, *others)] + [path_part]

    return [path_part]


def _canonical(path: str | Path) -> Path:
    return Path(os.path.abspath(path))


def normalize_link(
    raw: str,
    source_path: str | Path,
    base_path: str | Path,
    *,
    extension: str = DEFAULT_EXTENSION,
) -> NormalizedLink:
    """Resolve ``raw`` as found in ``source_path``.

    Root-relative links (``/guide``) are joined to ``base_path``, anchor-only
    links (``#intro``) point back into ``source_path`` and everything else is
    relative to the directory of ``source_path``. Never touches the filesystem
    and never fails: a nonsensical link just yields a path that does not exist.
    """
    kind = classify(raw)
    if kind is not LinkKind.INTERNAL:
        return NormalizedLink(kind=kind, original=raw)

    path_part, has_fragment, fragment = raw.partition("#")
    anchor = fragment if has_fragment else None

    if not path_part:
        return NormalizedLink(
            kind=kind,
            original=raw,
            path=_canonical(source_path),
            anchor=anchor,
        )

    if path_part.startswith("/"):
        root = Path(base_path)
        path_part = path_part.lstrip("/") or "./"
    else:
        root = Path(source_path).parent

    primary, *alternates = (
        _canonical(root / candidate) for candidate in _expand_path(path_part, extension)
    )
    return NormalizedLink(
        kind=kind,
        original=raw,
        path=primary,
        anchor=anchor,
        alternates=tuple(alternates),
    )
