#!/usr/bin/python3

""" Preview server for compiled LOLHTML pages. """

from pathlib import Path
from typing import Optional

from flask import Flask
from waitress import serve

import constants
from common.base.logging_config import get_logger
from common.config.compiler_config import CompilerConfig
logger = get_logger(__name__)

def create_app(source_path: str, config: Optional[CompilerConfig] = None, testing: bool = False) -> Flask:
    """
    Create and configure Flask application instance.

    :param source_path: The .lol file to compile on each request
    :param config: Compiler configuration (defaults if omitted)
    :param testing: Whether to configure app for testing
    :return: Configured Flask app
    """
    if testing:
        constants.init_testing()

    app = Flask(__name__)
    app.config['TESTING'] = testing
    app.config['SOURCE_PATH'] = str(Path(source_path).resolve())
    app.config['COMPILER_CONFIG'] = config or CompilerConfig()

    from web.blueprints.preview import preview_bp
    app.register_blueprint(preview_bp)

    logger.info(f"Preview app created for {app.config['SOURCE_PATH']}")
    return app

def run_server(source_path: str, host: str = constants.DEFAULT_HOST, port: int = constants.DEFAULT_PORT,
               debug: bool = False, config: Optional[CompilerConfig] = None) -> None:
    """Run the preview server until interrupted."""
    app = create_app(source_path, config=config)
    logger.info(f"Starting preview server on {host}:{port}")

    if debug:
        # Flask's development server reloads on code changes
        app.config['DEBUG'] = True
        app.run(host=host, port=port, debug=True)
    else:
        serve(app, host=host, port=port)
