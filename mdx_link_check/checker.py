"""Resolve every internal link in a ``LinkGraph`` and collect what is broken."""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from wcmatch.glob import BRACE, EXTGLOB, GLOBSTAR, globmatch

from .graph import DocumentRecord, LinkGraph, LinkOccurrence

logger = logging.getLogger(__name__)

IGNORE_FLAGS = GLOBSTAR | BRACE | EXTGLOB


class FindingKind(Enum):
    BROKEN_FILE = "broken-file"
    BROKEN_ANCHOR = "broken-anchor"


@dataclass(frozen=True)
class Finding:
    """A broken link or anchor found in a document."""

    kind: FindingKind
    link: LinkOccurrence
    source: Path

    @property
    def message(self) -> str:
        if self.kind is FindingKind.BROKEN_FILE:
            return f"Link is broken: '{self.link.absolute}' in file {self.source}"
        return f"Anchor of link is broken: '{self.link.original}' in file {self.source}"


@dataclass
class CheckResult:
    findings: list[Finding] = field(default_factory=list)
    documents: int = 0
    links_checked: int = 0
    links_ignored: int = 0

    @property
    def ok(self) -> bool:
        return not self.findings

    @property
    def messages(self) -> list[str]:
        return [finding.message for finding in self.findings]


def is_ignored(original: str, pattern: str | None) -> bool:
    """Return True if the link as written matches the ignore glob."""
    return bool(pattern) and globmatch(original, pattern, flags=IGNORE_FLAGS)


def _locate(graph: LinkGraph, link: LinkOccurrence) -> Path | None:
    """Return the first candidate target that is cached or exists on disk."""
    for candidate in link.candidates:
        if candidate in graph or candidate.exists():
            return candidate
    return None


def check_links(graph: LinkGraph, ignore_pattern: str | None = None) -> CheckResult:
    """Check all links reachable from the documents already in ``graph``.

    Targets that exist but were never scanned are loaded on the spot and their
    own links are checked too, until no new document turns up.
    """
    result = CheckResult()
    reported: set[str] = set()
    pending: deque[DocumentRecord] = deque(graph)

    while pending:
        record = pending.popleft()
        result.documents += 1

        for link in record.internal_links:
            if is_ignored(link.original, ignore_pattern):
                result.links_ignored += 1
                continue
            result.links_checked += 1

            target = _locate(graph, link)
            if target is None:
                finding = Finding(FindingKind.BROKEN_FILE, link, record.absolute_path)
                if finding.message not in reported:
                    reported.add(finding.message)
                    result.findings.append(finding)
                continue

            if target not in graph:
                discovered = graph.load(target)
                if discovered is not None:
                    logger.debug("discovered %s via %s", target, record.absolute_path)
                    pending.append(discovered)

            if link.anchor:
                target_record = graph.get(target)
                if target_record is None or link.anchor not in target_record.identifiers:
                    result.findings.append(
                        Finding(FindingKind.BROKEN_ANCHOR, link, record.absolute_path)
                    )

    return result
