"""Recursive-descent parser for LOLHTML documents.

The parser pulls tokens from the lexer one at a time and keeps a single token of
lookahead. Each grammar rule is one method. Nested blocks (HEAD, PARAGRAF, LIST)
collect their children in a stack of scope accumulators: opening a block pushes
an empty list, closing it pops the list and wraps it in the block's node, which
then lands in the enclosing scope (or the document root).

There is no error recovery. The first token that does not fit the grammar
raises ParseError and no partial tree is returned.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

from common.base.logging_config import get_logger
from lol_parser.errors import ParseError
from lol_parser.lexer import LolLexer
from lol_parser.tokens import Keyword, Token, TokenType

logger = get_logger(__name__)


class NodeType(Enum):
    """Types of nodes in the Abstract Syntax Tree."""
    DOCUMENT = auto()    # Root node containing all content
    COMMENT = auto()     # #OBTW ... #TLDR
    HEAD = auto()        # #MAEK HEAD ... #OIC
    TITLE = auto()       # #GIMMEH TITLE ... #MKAY, only inside HEAD
    BODY = auto()        # Reserved; no grammar rule builds it
    PARAGRAPH = auto()   # #MAEK PARAGRAF ... #OIC
    BOLD = auto()
    ITALICS = auto()
    LIST = auto()        # #MAEK LIST ... #OIC
    LIST_ITEM = auto()   # #GIMMEH ITEM ... #MKAY, only inside LIST
    NEWLINE = auto()
    AUDIO = auto()       # #GIMMEH SOUNDZ url #MKAY
    VIDEO = auto()       # #GIMMEH VIDZ url #MKAY
    TEXT = auto()
    VAR_DEF = auto()     # #I HAZ name IT IZ value #MKAY
    VAR_USE = auto()     # #LEMME SEE name #MKAY


@dataclass(frozen=True)
class Node:
    """
    A node of the tree. Text-like nodes keep their content in value; containers
    keep children. VAR_DEF uses name and value, VAR_USE uses name.
    """
    type: NodeType
    value: Optional[str] = None
    children: Tuple['Node', ...] = ()
    name: Optional[str] = None

    def __post_init__(self):
        # Any sequence is accepted; it is stored as a tuple
        object.__setattr__(self, 'children', tuple(self.children))


INLINE_KEYWORDS = "BOLD/ITALICS/NEWLINE/SOUNDZ/VIDZ"


class LolParser:
    """Parser for LOLHTML documents that creates an AST."""

    def __init__(self, source: str):
        """Initialize parser and read the first token."""
        self.lexer = LolLexer(source)
        self.look: Token = self.lexer.next_token()
        self.roots: List[Node] = []
        self.scopes: List[List[Node]] = []

    # Token handling

    def advance(self) -> None:
        """Move to the next token."""
        self.look = self.lexer.next_token()

    def error(self, expected: str, found: Optional[str] = None) -> ParseError:
        return ParseError(
            expected,
            found if found is not None else self.look.lexeme,
            self.look.line,
            self.look.column,
        )

    def skip_ws(self) -> None:
        """Skip whitespace-only text tokens."""
        while self.look.is_blank():
            self.advance()

    def expect_keyword(self, keyword: Keyword) -> None:
        """Consume the given keyword, skipping whitespace in front of it."""
        self.skip_ws()
        if not self.look.is_keyword(keyword):
            raise self.error(keyword.value)
        self.advance()

    def expect_annotation(self, keyword: Keyword) -> None:
        """Consume '#' followed by the given keyword, e.g. the #MKAY closer."""
        self.skip_ws()
        expected = f"#{keyword.value}"
        if self.look.type != TokenType.HASH:
            raise self.error(expected)
        self.advance()
        self.skip_ws()
        if not self.look.is_keyword(keyword):
            raise self.error(expected)
        self.advance()

    def read_text_until_hash(self) -> str:
        """Concatenate TEXT/WORD tokens up to the next '#', keyword or EOF."""
        parts = []
        while self.look.type in (TokenType.TEXT, TokenType.WORD):
            parts.append(self.look.value)
            self.advance()
        return "".join(parts).strip()

    def read_variable_name(self) -> str:
        self.skip_ws()
        if self.look.type == TokenType.WORD:
            name = self.look.value
        elif self.look.type == TokenType.TEXT:
            pieces = self.look.value.split()
            name = pieces[0] if pieces else ""
        else:
            raise self.error("variable name")
        self.advance()
        return name

    # Scope handling

    def push_node(self, node: Node) -> None:
        """Add a node to the innermost open block, or to the document root."""
        if self.scopes:
            self.scopes[-1].append(node)
        else:
            self.roots.append(node)

    def open_scope(self) -> None:
        self.scopes.append([])

    def close_scope(self) -> List[Node]:
        return self.scopes.pop()

    # Grammar rules

    def parse_document(self) -> Node:
        """
        Parse the whole program: #HAI (top-level item)* #KTHXBYE.

        :return: DOCUMENT node whose children are the root-level nodes in order
        """
        self.expect_annotation(Keyword.HAI)

        while True:
            self.skip_ws()
            token = self.look

            if token.type == TokenType.HASH:
                self.advance()
                self.skip_ws()
                if self.look.is_keyword(Keyword.KTHXBYE):
                    self.advance()
                    break
                self.parse_top_level_annotation()

            elif token.type in (TokenType.TEXT, TokenType.WORD):
                self.parse_text()

            elif token.type == TokenType.EOF:
                raise self.error("#KTHXBYE", "<EOF>")

            else:
                raise self.error("text or # annotation")

        logger.debug(f"Parsed document with {len(self.roots)} top-level nodes")
        return Node(NodeType.DOCUMENT, children=tuple(self.roots))

    def parse_top_level_annotation(self) -> None:
        """Dispatch on the keyword following a top-level '#'."""
        token = self.look
        if token.is_keyword(Keyword.OBTW):
            self.parse_comment()
        elif token.is_keyword(Keyword.MAEK):
            self.advance()
            self.skip_ws()
            if self.look.is_keyword(Keyword.HEAD):
                self.parse_head()
            elif self.look.is_keyword(Keyword.PARAGRAF):
                self.parse_paragraph()
            elif self.look.is_keyword(Keyword.LIST):
                self.parse_list()
            else:
                raise self.error("HEAD/PARAGRAF/LIST")
        elif token.is_keyword(Keyword.GIMMEH):
            self.parse_body()
        elif token.is_keyword(Keyword.LEMME):
            self.parse_variable_use()
        elif token.is_keyword(Keyword.I):
            self.parse_variable_define()
        elif token.is_keyword(Keyword.HEAD):
            # HEAD written without MAEK in front of it
            raise self.error("Use #MAEK HEAD ... #OIC", "HEAD")
        else:
            raise self.error("valid top-level annotation")

    def parse_head(self) -> None:
        """HEAD (comment | GIMMEH TITLE ...)* OIC"""
        self.expect_keyword(Keyword.HEAD)
        self.open_scope()

        while True:
            self.skip_ws()
            if self.look.type == TokenType.HASH:
                self.advance()
                self.skip_ws()
                if self.look.is_keyword(Keyword.GIMMEH):
                    self.advance()
                    self.parse_title()
                elif self.look.is_keyword(Keyword.OBTW):
                    self.parse_comment()
                elif self.look.is_keyword(Keyword.OIC):
                    self.advance()
                    break
                else:
                    raise self.error("GIMMEH TITLE or OBTW or OIC")
            elif self.look.type == TokenType.EOF:
                raise self.error("#OIC", "<EOF>")
            else:
                raise self.error("# in HEAD")

        self.push_node(Node(NodeType.HEAD, children=tuple(self.close_scope())))

    def parse_title(self) -> None:
        self.expect_keyword(Keyword.TITLE)
        text = self.read_text_until_hash()
        self.expect_annotation(Keyword.MKAY)
        self.push_node(Node(NodeType.TITLE, value=text))

    def parse_comment(self) -> None:
        """
        OBTW ... #TLDR. Everything in between is kept as comment text, including
        keywords and '#' signs that are not followed by TLDR.
        """
        self.expect_keyword(Keyword.OBTW)
        parts = []
        while True:
            token = self.look
            if token.type == TokenType.HASH:
                self.advance()
                skipped = []
                while self.look.is_blank():
                    skipped.append(self.look.value)
                    self.advance()
                if self.look.is_keyword(Keyword.TLDR):
                    self.advance()
                    break
                parts.append("#")
                parts.extend(skipped)
            elif token.type == TokenType.EOF:
                raise self.error("#TLDR", "<EOF>")
            else:
                parts.append(token.value)
                self.advance()

        self.push_node(Node(NodeType.COMMENT, value="".join(parts).strip()))

    def parse_paragraph(self) -> None:
        """PARAGRAF (text | comment | GIMMEH inline | variable define/use)* OIC"""
        self.expect_keyword(Keyword.PARAGRAF)
        self.open_scope()

        while True:
            self.skip_ws()
            token = self.look
            if token.type == TokenType.HASH:
                self.advance()
                self.skip_ws()
                if self.look.is_keyword(Keyword.GIMMEH):
                    self.advance()
                    self.parse_inline_element()
                elif self.look.is_keyword(Keyword.LEMME):
                    self.parse_variable_use()
                elif self.look.is_keyword(Keyword.I):
                    self.parse_variable_define()
                elif self.look.is_keyword(Keyword.OBTW):
                    self.parse_comment()
                elif self.look.is_keyword(Keyword.OIC):
                    self.advance()
                    break
                else:
                    raise self.error("GIMMEH/LEMME/I/OBTW/OIC")
            elif token.type in (TokenType.TEXT, TokenType.WORD):
                self.parse_text()
            elif token.type == TokenType.EOF:
                raise self.error("#OIC", "<EOF>")
            else:
                raise self.error("content in PARAGRAF")

        self.push_node(Node(NodeType.PARAGRAPH, children=tuple(self.close_scope())))

    def parse_body(self) -> None:
        """GIMMEH followed by an inline element, outside of any block."""
        self.expect_keyword(Keyword.GIMMEH)
        self.parse_inline_element()

    def parse_inline_element(self) -> None:
        """Dispatch on the keyword following GIMMEH inside body content."""
        self.skip_ws()
        token = self.look
        if token.is_keyword(Keyword.BOLD):
            self.parse_bold()
        elif token.is_keyword(Keyword.ITALICS):
            self.parse_italics()
        elif token.is_keyword(Keyword.NEWLINE):
            self.parse_newline()
        elif token.is_keyword(Keyword.SOUNDZ):
            self.parse_audio()
        elif token.is_keyword(Keyword.VIDZ):
            self.parse_video()
        else:
            raise self.error(INLINE_KEYWORDS)

    def parse_variable_define(self) -> None:
        """I HAZ name IT IZ value #MKAY"""
        self.expect_keyword(Keyword.I)
        self.expect_keyword(Keyword.HAZ)
        name = self.read_variable_name()
        self.expect_keyword(Keyword.IT)
        self.expect_keyword(Keyword.IZ)
        value = self.read_text_until_hash()
        self.expect_annotation(Keyword.MKAY)
        self.push_node(Node(NodeType.VAR_DEF, value=value, name=name))

    def parse_variable_use(self) -> None:
        """LEMME SEE name #MKAY"""
        self.expect_keyword(Keyword.LEMME)
        self.expect_keyword(Keyword.SEE)
        name = self.read_variable_name()
        self.expect_annotation(Keyword.MKAY)
        self.push_node(Node(NodeType.VAR_USE, name=name))

    def _parse_text_element(self, keyword: Keyword, node_type: NodeType) -> None:
        """keyword text-until-hash #MKAY"""
        self.expect_keyword(keyword)
        text = self.read_text_until_hash()
        self.expect_annotation(Keyword.MKAY)
        self.push_node(Node(node_type, value=text))

    def parse_bold(self) -> None:
        self._parse_text_element(Keyword.BOLD, NodeType.BOLD)

    def parse_italics(self) -> None:
        self._parse_text_element(Keyword.ITALICS, NodeType.ITALICS)

    def parse_audio(self) -> None:
        self._parse_text_element(Keyword.SOUNDZ, NodeType.AUDIO)

    def parse_video(self) -> None:
        self._parse_text_element(Keyword.VIDZ, NodeType.VIDEO)

    def parse_newline(self) -> None:
        self.expect_keyword(Keyword.NEWLINE)
        self.push_node(Node(NodeType.NEWLINE))

    def parse_list(self) -> None:
        """LIST (GIMMEH ITEM ... | comment)* OIC"""
        self.expect_keyword(Keyword.LIST)
        self.open_scope()

        while True:
            self.skip_ws()
            if self.look.type == TokenType.HASH:
                self.advance()
                self.skip_ws()
                if self.look.is_keyword(Keyword.GIMMEH):
                    self.advance()
                    self.parse_list_item()
                elif self.look.is_keyword(Keyword.OBTW):
                    self.parse_comment()
                elif self.look.is_keyword(Keyword.OIC):
                    self.advance()
                    break
                else:
                    raise self.error("GIMMEH ITEM or OBTW or OIC")
            elif self.look.type == TokenType.EOF:
                raise self.error("#OIC", "<EOF>")
            else:
                raise self.error("# in LIST")

        self.push_node(Node(NodeType.LIST, children=tuple(self.close_scope())))

    def parse_list_item(self) -> None:
        self.expect_keyword(Keyword.ITEM)
        text = self.read_text_until_hash()
        self.expect_annotation(Keyword.MKAY)
        self.push_node(Node(NodeType.LIST_ITEM, children=(Node(NodeType.TEXT, value=text),)))

    def parse_text(self) -> None:
        """Read a run of plain text tokens. Whitespace-only runs add nothing."""
        parts = []
        while self.look.type in (TokenType.TEXT, TokenType.WORD):
            parts.append(self.look.value)
            self.advance()
        text = "".join(parts).strip()
        if text:
            self.push_node(Node(NodeType.TEXT, value=text))


def parse(source: str) -> Node:
    """
    Parse LOLHTML source into an AST.

    :param source: Complete document text
    :return: DOCUMENT node
    :raises ParseError: on the first grammar mismatch
    """
    parser = LolParser(source)
    return parser.parse_document()


def display_ast(node: Node, return_string: bool = False, indent: int = 0) -> Optional[str]:
    """
    Display or return a text representation of an AST node and its children.

    :param node: Root node of the AST to display
    :param return_string: If True, return the display string instead of printing
    :param indent: Current indentation level (used recursively)
    :return: String representation if return_string=True, None otherwise
    """
    prefix = "  " * indent
    line = f"{prefix}{node.type.name}"
    if node.name is not None:
        line += f" (name={node.name})"
    if node.value is not None:
        line += f": {node.value!r}"

    parts = [line]
    for child in node.children:
        parts.append(display_ast(child, return_string=True, indent=indent + 1))

    result = "\n".join(parts)
    if return_string:
        return result
    print(result)
    return None
