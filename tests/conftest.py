from pathlib import Path

import pytest


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write_doc():
    """Write a UTF-8 file, creating parent directories."""
    return _write


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """A small docs tree in which every link resolves."""
    docs = tmp_path / "docs"
    _write(
        docs / "index.md",
        "# Welcome\n\n"
        "See [the guide](./guide/) and [intro](./guide/intro.md#getting-started).\n\n"
        "Jump [below](#section-two) or read [the FAQ](/faq).\n\n"
        "[Example](https://example.com/x) and [mail](mailto:a@b.com).\n\n"
        "![logo](./logo.png)\n\n"
        "## Section Two\n",
    )
    _write(docs / "faq.md", "# FAQ\n\nBack [home](./index.md#welcome).\n")
    _write(docs / "guide" / "index.md", "# Guide\n")
    _write(docs / "guide" / "intro.md", "# Getting Started\n\nUp [one](../#section-two).\n")
    (docs / "logo.png").write_bytes(b"\x89PNG")
    return docs
