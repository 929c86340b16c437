"""Exception hierarchy for the HTML numbering converter."""


class HtmlNumberingError(Exception):
    """Base exception for all html-numbering errors."""


class ParseError(HtmlNumberingError):
    """Raised when an input file cannot be read."""


class ConfigError(HtmlNumberingError):
    """Raised when configuration is invalid or missing."""


class NumberingError(HtmlNumberingError):
    """Raised when the numbering catalog cannot satisfy a request."""


class UnbalancedListError(NumberingError):
    """Raised when list begin/end events are not well nested."""


class GenerationError(HtmlNumberingError):
    """Raised when Word document generation fails."""
