"""Blueprint serving a live preview of one source file."""

from pathlib import Path

from flask import Blueprint, Response, abort, current_app, jsonify
from flask.typing import ResponseReturnValue

from common.base.logging_config import get_logger
from lol_parser.driver import compile_source
from lol_parser.errors import LolError
from lol_parser.parser import display_ast, parse

logger = get_logger(__name__)

preview_bp = Blueprint('preview', __name__)


def _read_source() -> str:
    """
    Read the source file configured for this app.

    :return: Source text
    :raises: werkzeug.exceptions.NotFound if the file is missing
    """
    source_path = Path(current_app.config['SOURCE_PATH'])
    try:
        return source_path.read_text(encoding='utf-8')
    except FileNotFoundError:
        logger.warning(f"Preview source {source_path} not found")
        abort(404, description=f"Source file {source_path} not found")


@preview_bp.route('/')
def preview_page() -> ResponseReturnValue:
    """Recompile the source on every request and return the page."""
    html = compile_source(_read_source(), current_app.config['COMPILER_CONFIG'])
    return Response(html, mimetype='text/html')


@preview_bp.route('/ast')
def preview_ast() -> ResponseReturnValue:
    """Return the parsed tree as indented text."""
    tree = display_ast(parse(_read_source()), return_string=True)
    return Response(tree + "\n", mimetype='text/plain')


@preview_bp.route('/healthz')
def healthz() -> ResponseReturnValue:
    return jsonify({'status': 'ok', 'source': str(current_app.config['SOURCE_PATH'])})


@preview_bp.app_errorhandler(LolError)
def handle_compile_error(error: LolError) -> ResponseReturnValue:
    """Compilation errors become a plain-text 422 page."""
    logger.info(f"Preview compile failed: {error}")
    return Response(f"Compilation failed\n\n{error}\n", status=422, mimetype='text/plain')
