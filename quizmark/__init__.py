"""Extract and validate quiz blocks embedded in instructional Markdown."""

__version__ = "0.1.0"
