"""denotepub: publish denote notes as Markdown with YAML front matter."""

__version__ = "0.3.0"
