"""HTML and inline-CSS readers used by the generator."""

from html_numbering.parsers.css import Length, Margin, Unit, list_style_type, margin_left, parse_style

__all__ = ["Length", "Margin", "Unit", "list_style_type", "margin_left", "parse_style"]
