"""Character-level lexer for LOLHTML documents.

Keywords are recognized by position rather than by spelling alone: a word is a
keyword only right after '#', right after a keyword that must be followed by
another one (MAEK HEAD, GIMMEH BOLD, LEMME SEE, I HAZ, IT IZ), or right after
the variable name of an I HAZ definition. Everywhere else words like "list" or
"bold" stay plain words, so prose can use them freely.
"""

from typing import List, Optional

from common.base.logging_config import get_logger
from lol_parser.tokens import KEYWORD_LEADERS, Keyword, Token, TokenType

logger = get_logger(__name__)

TEXT_PUNCTUATION = frozenset(',.":?!%/')


def is_word_char(ch: str) -> bool:
    """Letters, digits and underscore (ASCII only) form words."""
    return ch.isascii() and (ch.isalnum() or ch == '_')


class LolLexer:
    """
    Pull-based lexer: each call to next_token() produces one token.
    Once the input is exhausted, EOF is returned on every call.
    """

    def __init__(self, text: str = ""):
        self.init(text)

    def init(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 0
        # Disambiguation context, only ever touched by next_token()
        self.after_hash = False
        self.prev_keyword: Optional[Keyword] = None
        self.after_var_name = False
        self.current_char = self.text[self.pos] if self.pos < len(self.text) else None

    def _advance(self) -> str:
        ch = self.current_char
        if ch == '\n':
            self.line += 1
            self.column = 0
        else:
            self.column += 1

        self.pos += 1
        self.current_char = self.text[self.pos] if self.pos < len(self.text) else None
        return ch

    def _take_while(self, predicate) -> str:
        start_idx = self.pos
        while self.current_char is not None and predicate(self.current_char):
            self._advance()
        return self.text[start_idx:self.pos]

    def _keyword_licensed(self) -> bool:
        return self.after_hash or self.prev_keyword in KEYWORD_LEADERS or self.after_var_name

    def _handle_word(self, tok_line: int, tok_col: int) -> Token:
        word = self._take_while(is_word_char)

        if self._keyword_licensed():
            keyword = Keyword.lookup(word)
            if keyword is not None:
                self.after_hash = False
                self.after_var_name = False
                self.prev_keyword = keyword
                return Token(TokenType.KEYWORD, word, tok_line, tok_col, keyword=keyword)

        self._clear_context()
        return Token(TokenType.WORD, word, tok_line, tok_col)

    def _clear_context(self) -> None:
        """Plain text ends any keyword context."""
        # The text after HAZ is a variable name; the word after that may be IT.
        self.after_var_name = self.prev_keyword is Keyword.HAZ
        self.after_hash = False
        self.prev_keyword = None

    def next_token(self) -> Token:
        """Return the next token from the input."""
        tok_line, tok_col = self.line, self.column

        if self.current_char is None:
            return Token(TokenType.EOF, "", tok_line, tok_col)

        ch = self.current_char

        if ch == '#':
            self._advance()
            self.after_hash = True
            self.prev_keyword = None
            self.after_var_name = False
            return Token(TokenType.HASH, '#', tok_line, tok_col)

        # Whitespace leaves the context flags alone; the parser discards it.
        if ch.isspace():
            return Token(TokenType.TEXT, self._take_while(str.isspace), tok_line, tok_col)

        if is_word_char(ch):
            return self._handle_word(tok_line, tok_col)

        if ch in TEXT_PUNCTUATION:
            value = self._take_while(lambda c: c in TEXT_PUNCTUATION)
        else:
            value = self._advance()
        self._clear_context()
        return Token(TokenType.TEXT, value, tok_line, tok_col)

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize a whole document. The returned list always ends with EOF."""
        self.init(text)
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        logger.debug(f"Tokenized {len(text)} characters into {len(tokens)} tokens")
        return tokens


def tokenize(text: str) -> List[Token]:
    """Convenience function returning every token of text, ending with EOF."""
    lexer = LolLexer()
    return lexer.tokenize(text)
