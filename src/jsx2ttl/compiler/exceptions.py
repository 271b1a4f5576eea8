"""Errors raised by the jsx2ttl pass."""

from typing import Optional

from jsx2ttl.compiler.ast_nodes import Node, SourceSpan


class Jsx2TtlError(Exception):
    """Raised when an element cannot be lowered.

    Carries the offending node. The tree rewriter fills in the location fields
    before re-raising so callers can report ``file:line:column``.
    """

    def __init__(self, message: str, node: Optional[Node] = None):
        super().__init__(message)
        self.message = message
        self.node = node
        self.file_path: Optional[str] = None
        self.span: Optional[SourceSpan] = None
        self.source_text: str = ""

    @property
    def line(self) -> Optional[int]:
        return self.span.start.line if self.span else None

    @property
    def column(self) -> Optional[int]:
        return self.span.start.column if self.span else None

    @property
    def end_line(self) -> Optional[int]:
        return self.span.end.line if self.span else None

    @property
    def end_column(self) -> Optional[int]:
        return self.span.end.column if self.span else None

    def with_location(
        self,
        span: Optional[SourceSpan],
        source: Optional[str] = None,
        file_path: Optional[str] = None,
    ) -> "Jsx2TtlError":
        self.span = span
        self.file_path = file_path
        if span is not None and source:
            self.source_text = span.slice(source)
        return self

    def diagnostic(self) -> str:
        """Human readable location plus offending source text."""
        where = str(self.span) if self.span else "unknown location"
        if self.file_path:
            where = f"{self.file_path}:{where}"
        text = f"Error processing JSXElement at {where}"
        if self.source_text:
            text += f"\n\t{self.source_text}"
        return f"{text}\n\t{type(self).__name__}: {self.message}"


class UnsupportedAttributeValueKind(Jsx2TtlError):
    """Component attribute value that cannot become a property."""


class UnhandledAttributeValueKind(Jsx2TtlError):
    """Plain element attribute value that cannot become a tag fragment."""


class UnexpectedChildKind(Jsx2TtlError):
    pass


class InternalOrderingError(Jsx2TtlError):
    """An element reached its parent before being lowered."""


class TemplateInvariantViolation(Jsx2TtlError):
    """Statics and dynamics fell out of step; a bug in the pass itself."""


class UnresolvedComponentContext(Jsx2TtlError):
    """Component used outside any function or class."""


class MalformedTagName(Jsx2TtlError):
    pass


class InvalidOptionsError(ValueError):
    pass


class TreeFormatError(ValueError):
    """Interchange input that does not describe a known node."""
