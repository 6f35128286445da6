"""LOL Parser - compiler from LOLHTML markup to HTML."""

from .errors import LolError, LexerError, ParseError, SemanticError
from .lexer import tokenize
from .parser import parse
from .semantic import analyze
from .html_generator import generate_html

def compile_document(text, strict_variables=False, **kwargs):
    """Main entry point: parse, check and render a document."""
    ast = parse(text)
    checked = analyze(ast, strict_variables=strict_variables)
    return generate_html(checked, **kwargs)

__all__ = [
    'tokenize', 'parse', 'analyze', 'generate_html', 'compile_document',
    'LolError', 'LexerError', 'ParseError', 'SemanticError',
]
