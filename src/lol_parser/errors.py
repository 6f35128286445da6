"""Error types raised while compiling LOLHTML documents.

Errors are grouped by the phase that produced them:
- LexerError: malformed low-level tokens
- ParseError: token does not match the grammar
- SemanticError: validation failures such as undefined variables

Every error is fatal to the current compilation.
"""

from typing import Optional


class LolError(Exception):
    """Base exception for all compilation errors."""
    pass


class LexerError(LolError):
    """Exception raised for lexical analysis errors."""
    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Lexical error at line {line}, col {column}: {message}")


class ParseError(LolError):
    """Exception raised when the lookahead does not match the expected grammar symbol."""
    def __init__(self, expected: str, found: str,
                 line: Optional[int] = None, column: Optional[int] = None):
        self.expected = expected
        self.found = found
        self.line = line
        self.column = column
        message = f"Syntax error: expected {expected}, found {found}"
        if line is not None:
            message += f" at line {line}, col {column}"
        super().__init__(message)


class SemanticError(LolError):
    """Exception raised by the semantic checking stage."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Static semantic error: {message}")
