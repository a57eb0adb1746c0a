"""Cache of scanned documents, keyed by absolute path and grown lazily."""

import html
import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .extract import find_identifiers, find_links
from .loader import DEFAULT_EXTENSION, load_document
from .normalize import LinkKind, NormalizedLink, normalize_link

logger = logging.getLogger(__name__)

LinkOccurrence = NormalizedLink


@dataclass
class DocumentRecord:
    """Everything extracted from one document."""

    source_path: Path
    absolute_path: Path
    identifiers: set[str] = field(default_factory=set)
    internal_links: list[LinkOccurrence] = field(default_factory=list)
    external_links: list[str] = field(default_factory=list)

    def fill(self, text: str, base_path: Path, extension: str, *, escaped: bool = False) -> None:
        """Add the ids and links found in ``text``.

        Pass ``escaped=True`` for rendered HTML so that attribute values are
        unescaped back to what the author wrote (``&amp;`` becomes ``&``).
        """
        decode = html.unescape if escaped else str
        self.identifiers.update(decode(value) for value in find_identifiers(text))

        for raw in map(decode, find_links(text)):
            link = normalize_link(raw, self.source_path, base_path, extension=extension)
            if link.kind is LinkKind.EXTERNAL:
                self.external_links.append(raw)
            elif link.kind is LinkKind.INTERNAL:
                self.internal_links.append(link)


class LinkGraph:
    """Maps absolute file paths to their ``DocumentRecord``.

    Records are only ever added, in discovery order: first from the directory
    scan, later from links that point at files nobody has scanned yet.
    """

    def __init__(self, base_path: str | Path = ".", extension: str = DEFAULT_EXTENSION) -> None:
        self.base_path = Path(base_path)
        self.extension = extension
        self._records: dict[Path, DocumentRecord] = {}

    def __contains__(self, path: object) -> bool:
        return path in self._records

    def __getitem__(self, path: Path) -> DocumentRecord:
        return self._records[path]

    def __iter__(self) -> Iterator[DocumentRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def get(self, path: Path) -> DocumentRecord | None:
        return self._records.get(path)

    def load(self, path: str | Path) -> DocumentRecord | None:
        """Scan ``path`` into the graph.

        Returns the new record, or ``None`` if the path was already cached or
        is not a document.
        """
        absolute = Path(os.path.abspath(path))
        if absolute in self._records:
            return None

        document = load_document(path)
        if document is None:
            return None

        record = DocumentRecord(source_path=Path(path), absolute_path=absolute)
        record.fill(document.rendered, self.base_path, self.extension, escaped=True)
        record.fill(document.source, self.base_path, self.extension)
        self._records[absolute] = record
        logger.debug(
            "scanned %s: %d ids, %d internal links",
            path,
            len(record.identifiers),
            len(record.internal_links),
        )
        return record

    def scan(self, directory: str | Path) -> int:
        """Load every file under ``directory``. Returns the number of new records."""
        root = Path(directory)
        files = sorted(p for p in root.rglob("*") if p.is_file())
        logger.debug("found %d files under %s", len(files), root)
        return sum(1 for file_path in files if self.load(file_path) is not None)
