"""Token and keyword definitions for the LOLHTML lexer."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, FrozenSet, Optional


class Keyword(Enum):
    """Reserved words of the markup language. Values are the canonical spellings."""
    # Program delimiters
    HAI = "HAI"
    KTHXBYE = "KTHXBYE"

    # Comments
    OBTW = "OBTW"
    TLDR = "TLDR"

    # Structural tags
    MAEK = "MAEK"
    GIMMEH = "GIMMEH"
    HEAD = "HEAD"
    TITLE = "TITLE"
    PARAGRAF = "PARAGRAF"
    OIC = "OIC"

    # Formatting and media
    BOLD = "BOLD"
    ITALICS = "ITALICS"
    NEWLINE = "NEWLINE"
    SOUNDZ = "SOUNDZ"
    VIDZ = "VIDZ"

    # Lists
    LIST = "LIST"
    ITEM = "ITEM"

    # Variable use: LEMME SEE name
    LEMME = "LEMME"
    SEE = "SEE"

    # Variable definition: I HAZ name IT IZ value
    I = "I"
    HAZ = "HAZ"
    IT = "IT"
    IZ = "IZ"

    # Closer
    MKAY = "MKAY"

    @classmethod
    def lookup(cls, text: str) -> Optional['Keyword']:
        """Return the keyword spelled by text (case-insensitive), or None."""
        return _SPELLINGS.get(text.upper())


_SPELLINGS: Dict[str, Keyword] = {kw.value: kw for kw in Keyword}

# Keywords whose next word must also be read as a keyword: MAEK HEAD, GIMMEH BOLD,
# LEMME SEE, I HAZ, IT IZ.
KEYWORD_LEADERS: FrozenSet[Keyword] = frozenset({
    Keyword.MAEK, Keyword.GIMMEH, Keyword.LEMME, Keyword.I, Keyword.IT,
})


class TokenType(Enum):
    """Lexical categories."""
    HASH = auto()     # '#' annotation marker
    WORD = auto()     # letters, digits, underscore
    TEXT = auto()     # whitespace or punctuation runs
    KEYWORD = auto()  # recognized reserved word
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A lexical token with position information."""
    type: TokenType
    value: str
    line: int
    column: int
    keyword: Optional[Keyword] = None

    @property
    def lexeme(self) -> str:
        """Text form of the token used in error messages."""
        if self.type == TokenType.KEYWORD:
            return self.keyword.value
        if self.type == TokenType.EOF:
            return "<EOF>"
        return self.value

    def is_keyword(self, keyword: Keyword) -> bool:
        return self.type == TokenType.KEYWORD and self.keyword is keyword

    def is_blank(self) -> bool:
        """True for whitespace-only TEXT tokens."""
        return self.type == TokenType.TEXT and not self.value.strip()

    def __repr__(self) -> str:
        """Readable representation for debugging."""
        keyword_info = f", keyword={self.keyword.name}" if self.keyword else ""
        return f"Token({self.type.name}, {self.value!r}, line={self.line}, col={self.column}{keyword_info})"
