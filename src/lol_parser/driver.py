"""Compilation driver: source files in, HTML files out.

1) Read the .lol input file
2) Lex + parse into an AST
3) Run the semantic checks
4) Generate HTML
5) Write the page next to the input (or into the configured directory) and
   optionally open it in a browser
"""

import webbrowser
from pathlib import Path
from typing import Optional, Union

import constants
from common.atomic_file import atomic_write_text
from common.base.logging_config import get_logger
from common.config.compiler_config import CompilerConfig
from lol_parser.html_generator import generate_html
from lol_parser.parser import parse
from lol_parser.semantic import analyze

logger = get_logger(__name__)

PathLike = Union[str, Path]


def compile_source(source: str, config: Optional[CompilerConfig] = None) -> str:
    """
    Compile document text to HTML.

    :param source: LOLHTML source text
    :param config: Compiler configuration (default settings if omitted)
    :return: Generated HTML page
    :raises LolError: on the first lexical, syntax or semantic error
    """
    config = config or CompilerConfig()
    ast = parse(source)
    checked = analyze(ast, strict_variables=config.semantic.strict_variables)
    return generate_html(checked, indent=config.output.indent)


def output_path_for(input_path: PathLike, output_dir: Optional[PathLike] = None) -> Path:
    """
    Derive the HTML path for a source file: same name with a .html extension,
    placed in output_dir when given.
    """
    path = Path(input_path).with_suffix(constants.OUTPUT_EXTENSION)
    if output_dir:
        return Path(output_dir) / path.name
    return path


def compile_file(input_path: PathLike,
                 output_path: Optional[PathLike] = None,
                 config: Optional[CompilerConfig] = None) -> Path:
    """
    Compile a source file and write the resulting page.

    Nothing is written when compilation fails.

    :param input_path: Path to the .lol source
    :param output_path: Explicit output path (default: derived from input_path)
    :param config: Compiler configuration
    :return: Path of the written HTML file
    :raises LolError: on compilation errors
    :raises OSError: if the source cannot be read
    :raises AtomicWriteError: if the output cannot be written
    :raises ValueError: if the output path is the source file itself
    """
    config = config or CompilerConfig()
    input_path = Path(input_path)
    if input_path.suffix != constants.SOURCE_EXTENSION:
        logger.warning(f"Input {input_path} does not have the {constants.SOURCE_EXTENSION} extension")

    target = Path(output_path) if output_path else output_path_for(input_path, config.output.directory)
    if target.resolve() == input_path.resolve():
        raise ValueError(f"Output path {target} would overwrite the source file")

    source = input_path.read_text(encoding='utf-8')
    html = compile_source(source, config)

    atomic_write_text(str(target), html)
    logger.info(f"Compiled {input_path} -> {target}")
    return target


def file_url(path: PathLike) -> str:
    """Convert a filesystem path to a file:// URL (browsers require this form)."""
    return Path(path).resolve().as_uri()


def open_in_browser(path: PathLike, browser: Optional[str] = None) -> bool:
    """
    Open a generated page in a web browser.

    :param path: Path to the HTML file
    :param browser: webbrowser controller name, or None for the system default
    :return: True if a browser was launched
    """
    url = file_url(path)
    try:
        controller = webbrowser.get(browser) if browser else webbrowser.get()
    except webbrowser.Error as e:
        logger.warning(f"No usable browser found: {e}")
        return False

    launched = controller.open(url)
    if launched:
        logger.info(f"Opened {url} in browser")
    else:
        logger.warning(f"Browser did not open {url}")
    return launched
