#!/usr/bin/env python3

"""LOLHTML compiler launch script."""

import os
import sys
import argparse
import datetime
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

import constants
from common.base.logging_config import configure_logging, get_logger
from common.config.compiler_config import init_compiler_config
from lol_parser.errors import LolError

def get_log_filename():
    """
    Generate a log filename including PID and datetime.

    :return: Formatted log filename string
    """
    pid = os.getpid()
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"lolhtml_{timestamp}_pid{pid}.log"

def init_system(config_path=None, log_level=None):
    """Load configuration and initialize logging."""
    config = init_compiler_config(config_path)
    constants.init_production(log_dir=config.logging.directory)

    configure_logging(
        log_level=log_level or config.logging.level,
        log_dir=config.logging.directory,
        log_filename=get_log_filename() if config.logging.directory else None
    )
    return config

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Compile a LOLHTML document to HTML.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog='launch.py'
    )

    parser.add_argument('input', help='Source file (.lol)')
    parser.add_argument('--output', '-o',
                       help='Output file (default: input with .html extension)')
    parser.add_argument('--output-dir',
                       help='Directory for the output file (overrides config)')

    # Actions after compiling
    parser.add_argument('--open', action='store_true',
                       help='Open the generated page in a browser')
    parser.add_argument('--ast', action='store_true',
                       help='Print the parsed tree instead of writing HTML')
    parser.add_argument('--serve', action='store_true',
                       help='Serve a live preview of the input instead of writing HTML')

    # Server configuration
    parser.add_argument('--host', help='Host for the preview server')
    parser.add_argument('--port', type=int, help='Port for the preview server')
    parser.add_argument('--dev', action='store_true',
                       help='Use the Flask development server with auto-reload')

    # Configuration and logging
    parser.add_argument('--config', help='Path to TOML configuration file')
    parser.add_argument('--log-level',
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                       help='Set the logging level (default: from config, INFO)')
    parser.add_argument('--quiet', '-q', action='store_true',
                       help='Suppress non-essential output')

    parser.epilog = """
Examples:
  %(prog)s page.lol                  # Write page.html next to page.lol
  %(prog)s page.lol -o out.html      # Write to out.html
  %(prog)s page.lol --open           # Compile and open in the default browser
  %(prog)s page.lol --ast            # Show the parse tree
  %(prog)s page.lol --serve          # Live preview on http://127.0.0.1:5050
    """ % {'prog': parser.prog}

    return parser.parse_args(argv)

def main(argv=None):
    """Main entry point."""
    try:
        args = parse_args(argv)

        log_level = 'WARNING' if args.quiet else args.log_level
        config = init_system(config_path=args.config, log_level=log_level)
        if args.output_dir:
            config.output.directory = args.output_dir

        logger = get_logger(__name__)

        if args.ast:
            from lol_parser.parser import parse, display_ast
            source = Path(args.input).read_text(encoding='utf-8')
            display_ast(parse(source))
            return 0

        if args.serve:
            from web.server import run_server
            host = args.host or config.server.host
            port = args.port or config.server.port
            if not args.quiet:
                print(f"Serving preview of {args.input} on http://{host}:{port}")
            run_server(args.input, host=host, port=port, debug=args.dev, config=config)
            return 0

        from lol_parser.driver import compile_file, open_in_browser
        out_path = compile_file(args.input, output_path=args.output, config=config)
        if not args.quiet:
            print(f"Generated: {out_path}")

        if args.open or config.browser.open:
            if not open_in_browser(out_path, browser=config.browser.name):
                logger.warning("Could not open a browser for the generated page")

        return 0

    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT
    except LolError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if '--log-level' in sys.argv and 'DEBUG' in sys.argv:
            import traceback
            traceback.print_exc()
        return 1

if __name__ == '__main__':
    sys.exit(main())
