"""State-machine tree builder for arena XML parsing.

This module walks whitespace-delimited tokens character by character and
builds the node arena. The first character of every token is flagged as a
token boundary; the builder uses that flag to put back a single space where
whitespace matters (text runs and attribute text) and to tell a tag name from
the attributes that follow it.

Malformed markup is handled according to the configured :class:`ErrorPolicy`:
either recorded as a warning diagnostic with a defined recovery, or raised as
a :class:`ParseError`.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Union

from arena_xml_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParserConfig,
    PerformanceMetrics,
    get_logger,
)
from arena_xml_parser.tokenization import TokenizationResult

from .attributes import parse_attributes
from .document import (
    DECLARATION_PREFIXES,
    ROOT_INDEX,
    TEXT_TAG,
    Document,
    Node,
)

COMPONENT = "tree_builder"
MS_PER_SECOND = 1000


class ParserState(Enum):
    """States of the tree-building state machine."""

    TAG_CONTENT = auto()              # Ordinary text between tags
    TAG_OPEN_OR_CLOSE_BEGIN = auto()  # Just saw <
    TAG_OPEN_BEGIN = auto()           # Reading a tag name
    TAG_ATTRIBUTES = auto()           # Reading raw attribute text
    TAG_ATTRIBUTE_VALUE = auto()      # Inside a double-quoted attribute value
    TAG_SELF_CLOSING = auto()         # Tag will not open a scope
    TAG_CLOSE_BEGIN = auto()          # Inside </...>


# States in which > completes an opening tag
_FINALIZING_STATES = (
    ParserState.TAG_OPEN_BEGIN,
    ParserState.TAG_ATTRIBUTES,
    ParserState.TAG_SELF_CLOSING,
)


class ParseErrorKind(Enum):
    """Malformed constructs the tree builder reports."""

    UNMATCHED_CLOSE_TAG = "unmatched_close_tag"
    STRAY_TAG_END = "stray_tag_end"
    UNTERMINATED_QUOTE = "unterminated_quote"
    UNTERMINATED_TAG = "unterminated_tag"


class ParseError(Exception):
    """Raised in strict mode when the builder meets malformed markup."""

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        position: Optional[Dict[str, int]] = None,
        result: Optional["ParseResult"] = None
    ) -> None:
        self.kind = kind
        self.message = message
        self.position = position
        # Partial result up to the failure, success=False
        self.result = result
        if position:
            message = (
                f"{message} (token {position['token']}, column {position['column']})"
            )
        super().__init__(message)


@dataclass
class _PendingTag:
    """Tag name and raw attribute text gathered between < and >."""

    name: str
    attribute_chars: List[str] = field(default_factory=list)

    def append_attribute_char(self, char: str, boundary: bool) -> None:
        if boundary:
            self.attribute_chars.append(" ")
        self.attribute_chars.append(char)

    @property
    def attribute_text(self) -> str:
        return "".join(self.attribute_chars)

    @property
    def is_declaration(self) -> bool:
        return self.name.startswith(DECLARATION_PREFIXES)


@dataclass
class ParseResult:
    """Outcome of building one document.

    Contains the node arena, diagnostics about recovered input, and basic
    performance metrics.
    """

    document: Document = field(default_factory=Document)
    success: bool = True
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    # Scope bookkeeping
    final_head: int = ROOT_INDEX
    descents: int = 0
    ascents: int = 0

    @property
    def node_count(self) -> int:
        """Get the number of nodes in the arena, root included."""
        return len(self.document)

    @property
    def element_count(self) -> int:
        """Get the number of tag nodes, declarations included."""
        return sum(
            1 for index, node in enumerate(self.document)
            if not self.document.is_root(index) and not node.is_text
        )

    @property
    def text_count(self) -> int:
        return sum(1 for node in self.document if node.is_text)

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    @property
    def has_warnings(self) -> bool:
        return any(
            diag.severity == DiagnosticSeverity.WARNING for diag in self.diagnostics
        )

    def summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary of the parse."""
        return {
            "success": self.success,
            "node_count": self.node_count,
            "element_count": self.element_count,
            "text_count": self.text_count,
            "warning_count": len(
                self.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)
            ),
            "processing_time_ms": self.performance.processing_time_ms,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }


class TreeBuilder:
    """Builds a node arena from whitespace-delimited tokens.

    The builder keeps the current state, the index of the node accepting new
    children (``head``), the pending tag, and the pending text run. It is
    reusable: every call to :meth:`build` starts from a fresh document.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Parser configuration (defaults to lenient)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, COMPONENT)
        self._reset_state(ParseResult(correlation_id=self.correlation_id))

    def build(
        self, tokens: Union[TokenizationResult, Iterable[str]]
    ) -> ParseResult:
        """Build a document from a token sequence.

        Args:
            tokens: TokenizationResult or any iterable of tokens, in order

        Returns:
            ParseResult containing the document and diagnostics

        Raises:
            ParseError: In strict mode, on the first malformed construct
        """
        start_time = time.time()
        if isinstance(tokens, TokenizationResult):
            tokens = tokens.tokens

        result = ParseResult(correlation_id=self.correlation_id)
        self._reset_state(result)

        self.logger.info("Starting tree building")

        token_count = 0
        character_count = 0
        for token_index, token in enumerate(tokens):
            token_count += 1
            character_count += len(token)
            for column, char in enumerate(token):
                self._position = {"token": token_index, "column": column}
                self._process_char(char, column == 0)

        self._finish(token_count)

        result.final_head = self._head
        result.performance.processing_time_ms = (
            (time.time() - start_time) * MS_PER_SECOND
        )
        result.performance.tokens_generated = token_count
        result.performance.characters_processed = character_count
        result.performance.nodes_created = len(result.document) - 1

        self.logger.info(
            "Tree building completed",
            extra={
                "node_count": result.node_count,
                "token_count": token_count,
                "warning_count": len(
                    result.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)
                ),
            }
        )
        return result

    def _reset_state(self, result: ParseResult) -> None:
        """Reset internal state for a new build."""
        self._result = result
        self._document = result.document
        self._state = ParserState.TAG_CONTENT
        self._head = ROOT_INDEX
        self._tag: Optional[_PendingTag] = None
        self._text: List[str] = []
        self._position: Optional[Dict[str, int]] = None

    def _process_char(self, char: str, boundary: bool) -> None:
        if char == ">":
            self._handle_tag_end(char, boundary)
        elif char == '"':
            self._handle_quote(char, boundary)
        elif char == "<":
            self._handle_tag_start(char, boundary)
        elif char == "/":
            self._handle_slash(char, boundary)
        else:
            self._handle_other(char, boundary)

    def _handle_tag_end(self, char: str, boundary: bool) -> None:
        if self._tag is not None and self._tag.is_declaration:
            # Declarations end at the first >, quoted or not
            self._state = ParserState.TAG_SELF_CLOSING
        elif self._state is ParserState.TAG_ATTRIBUTE_VALUE:
            self._tag.append_attribute_char(char, boundary)
            return

        if self._state in _FINALIZING_STATES:
            self._finalize_tag()
        elif self._state is ParserState.TAG_CLOSE_BEGIN:
            self._close_scope()
        else:
            self._report(
                ParseErrorKind.STRAY_TAG_END,
                "Ignored '>' outside of a tag",
            )
            self._state = ParserState.TAG_CONTENT

    def _handle_quote(self, char: str, boundary: bool) -> None:
        if self._state is ParserState.TAG_ATTRIBUTES:
            self._tag.append_attribute_char(char, boundary)
            self._state = ParserState.TAG_ATTRIBUTE_VALUE
        elif self._state is ParserState.TAG_ATTRIBUTE_VALUE:
            self._tag.append_attribute_char(char, boundary)
            self._state = ParserState.TAG_ATTRIBUTES
        elif self._state is ParserState.TAG_CONTENT:
            self._append_text(char, boundary)

    def _handle_tag_start(self, char: str, boundary: bool) -> None:
        if self._state is ParserState.TAG_CONTENT:
            self._flush_text()
            self._state = ParserState.TAG_OPEN_OR_CLOSE_BEGIN
        elif self._state is ParserState.TAG_ATTRIBUTE_VALUE:
            self._tag.append_attribute_char(char, boundary)

    def _handle_slash(self, char: str, boundary: bool) -> None:
        if self._state is ParserState.TAG_OPEN_OR_CLOSE_BEGIN:
            self._state = ParserState.TAG_CLOSE_BEGIN
        elif self._state in (ParserState.TAG_OPEN_BEGIN, ParserState.TAG_ATTRIBUTES):
            self._state = ParserState.TAG_SELF_CLOSING
        elif self._state is ParserState.TAG_ATTRIBUTE_VALUE:
            self._tag.append_attribute_char(char, boundary)
        elif self._state is ParserState.TAG_CONTENT:
            self._append_text(char, boundary)

    def _handle_other(self, char: str, boundary: bool) -> None:
        state = self._state
        if state is ParserState.TAG_CONTENT:
            self._append_text(char, boundary)
        elif state is ParserState.TAG_OPEN_OR_CLOSE_BEGIN:
            self._tag = _PendingTag(name=char)
            self._state = ParserState.TAG_OPEN_BEGIN
        elif state is ParserState.TAG_OPEN_BEGIN:
            if boundary:
                # A new token after the name starts the attributes
                self._tag.attribute_chars.append(char)
                self._state = ParserState.TAG_ATTRIBUTES
            else:
                self._tag.name += char
        elif state in (ParserState.TAG_ATTRIBUTES, ParserState.TAG_ATTRIBUTE_VALUE):
            self._tag.append_attribute_char(char, boundary)

    def _append_text(self, char: str, boundary: bool) -> None:
        if boundary and self._text:
            self._text.append(" ")
        self._text.append(char)

    def _flush_text(self) -> None:
        """Attach the pending text run to head, if there is one."""
        if self._text:
            self._document.append(
                Node(tag=TEXT_TAG, parent=self._head, value="".join(self._text))
            )
            self._text = []

    def _finalize_tag(self) -> None:
        tag = self._tag
        index = self._document.append(
            Node(
                tag=tag.name,
                parent=self._head,
                attributes=parse_attributes(tag.attribute_text),
            )
        )
        if self._state is not ParserState.TAG_SELF_CLOSING:
            self._head = index
            self._result.descents += 1
        self._tag = None
        self._state = ParserState.TAG_CONTENT

    def _close_scope(self) -> None:
        self._state = ParserState.TAG_CONTENT
        if self._head == ROOT_INDEX:
            self._report(
                ParseErrorKind.UNMATCHED_CLOSE_TAG,
                "Closing tag with no open element",
            )
            return
        self._head = self._document[self._head].parent
        self._result.ascents += 1

    def _finish(self, token_count: int) -> None:
        """Apply end-of-input rules once every token is consumed."""
        if token_count == 0:
            self._note("Empty document", {"token_count": 0})

        if self._state is ParserState.TAG_CONTENT:
            if self._text:
                self._note(
                    "Discarded trailing text not followed by a tag",
                    {"text": "".join(self._text)},
                )
        elif self._state is ParserState.TAG_ATTRIBUTE_VALUE:
            self._report(
                ParseErrorKind.UNTERMINATED_QUOTE,
                "Input ended inside a quoted attribute value",
            )
        else:
            self._report(
                ParseErrorKind.UNTERMINATED_TAG,
                "Input ended inside a tag",
            )

        if self._head != ROOT_INDEX:
            self._note(
                "Elements left open at end of input",
                {
                    "open_count": self._document.depth_of(self._head),
                    "innermost": self._document[self._head].tag,
                },
            )

        self._tag = None
        self._text = []
        self._state = ParserState.TAG_CONTENT

    def _report(self, kind: ParseErrorKind, message: str) -> None:
        """Raise or record a malformed construct according to the error policy.

        In strict mode the result gets an ERROR diagnostic, is marked failed,
        and travels on the raised :class:`ParseError`.
        """
        extra = {"kind": kind.value, "position": self._position}
        severity = (
            DiagnosticSeverity.ERROR if self.config.strict
            else DiagnosticSeverity.WARNING
        )
        self._result.add_diagnostic(
            severity,
            message,
            COMPONENT,
            position=self._position,
            details={"kind": kind.value},
        )

        if self.config.strict:
            self.logger.debug("Raising parse error", extra=extra)
            self._result.success = False
            self._result.final_head = self._head
            raise ParseError(kind, message, self._position, self._result)

        self.logger.warning(message, extra=extra)

    def _note(self, message: str, details: Dict[str, Any]) -> None:
        if self.config.enable_diagnostics:
            self._result.add_diagnostic(
                DiagnosticSeverity.INFO,
                message,
                COMPONENT,
                position=self._position,
                details=details,
            )
