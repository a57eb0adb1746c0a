"""Check that local links and anchors in Markdown/MDX documents resolve."""

__version__ = "0.1.0"
