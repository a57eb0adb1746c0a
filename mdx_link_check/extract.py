"""Find identifier declarations and link occurrences in markup text.

Both the raw document source and its rendered form are scanned with the same
patterns. Rendered output may carry attributes as markup (``href="..."``) or as
object-literal keys (``"href": "..."``), so each kind of occurrence has one
pattern per dialect.
"""

import re

# Attribute dialect: <a href="x">, <Anchor id="x" />
ATTRIBUTE_ID_PATTERN = re.compile(r'\s+(?:id|name)="([^"]+)"')
ATTRIBUTE_LINK_PATTERN = re.compile(r'\s+(?:href|to|src)="([^"]+)"')

# JSON-key dialect: {"href": "x"}, {"id": "x"}
JSON_KEY_ID_PATTERN = re.compile(r'\s+"(?:id|name)":\s*"([^"]+)"')
JSON_KEY_LINK_PATTERN = re.compile(r'\s+"(?:href|to|src)":\s*"([^"]+)"')


def _scan(text: str, *patterns: re.Pattern[str]) -> list[str]:
    """Run each pattern over text and merge the captured values by position."""
    matches: list[tuple[int, str]] = []
    for pattern in patterns:
        matches.extend((m.start(), m.group(1)) for m in pattern.finditer(text))
    matches.sort(key=lambda item: item[0])
    return [value for _, value in matches]


def find_identifiers(text: str) -> list[str]:
    """Return every declared ``id``/``name`` value in text order."""
    return _scan(text, ATTRIBUTE_ID_PATTERN, JSON_KEY_ID_PATTERN)


def find_links(text: str) -> list[str]:
    """Return every ``href``/``to``/``src`` value in text order."""
    return _scan(text, ATTRIBUTE_LINK_PATTERN, JSON_KEY_LINK_PATTERN)
