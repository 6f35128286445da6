"""Compiler configuration management.

Settings are read from a TOML file:

    [output]
    directory = ""        # empty: write next to the input file
    indent = "    "

    [browser]
    open = false
    name = ""             # webbrowser name; empty: system default

    [server]
    host = "127.0.0.1"
    port = 5050

    [semantic]
    strict_variables = false

    [logging]
    level = "INFO"
    directory = ""        # empty: console only

Every key is optional. A missing file gives the defaults.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import tomli

import constants
from common.base.logging_config import get_logger
logger = get_logger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

@dataclass
class OutputConfig:
    """Where and how generated HTML is written."""
    directory: Optional[str] = None
    indent: str = "    "

@dataclass
class BrowserConfig:
    """Browser launch after a successful compile."""
    open: bool = False
    name: Optional[str] = None

@dataclass
class ServerConfig:
    """Preview server binding."""
    host: str = constants.DEFAULT_HOST
    port: int = constants.DEFAULT_PORT

@dataclass
class SemanticConfig:
    """Optional semantic checks."""
    strict_variables: bool = False

@dataclass
class LoggingConfig:
    """Logging level and optional file output."""
    level: str = "INFO"
    directory: Optional[str] = None

@dataclass
class CompilerConfig:
    """Complete compiler configuration."""
    output: OutputConfig = field(default_factory=OutputConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    semantic: SemanticConfig = field(default_factory=SemanticConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source_path: Optional[str] = None

def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"[{name}] must be a table")
    return section

def _typed(section: Dict[str, Any], key: str, expected: type, default: Any) -> Any:
    if key not in section:
        return default
    value = section[key]
    # bool is an int subclass; a port of `true` is still wrong
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ValueError(f"'{key}' must be of type {expected.__name__}, got {value!r}")
    return value

def _optional_str(section: Dict[str, Any], key: str) -> Optional[str]:
    return _typed(section, key, str, "") or None

def config_from_dict(config: Dict[str, Any], source_path: Optional[str] = None) -> CompilerConfig:
    """
    Build a CompilerConfig from parsed TOML data.

    :param config: Dictionary as returned by tomli
    :param source_path: Path the data was read from, for reference
    :return: Validated configuration
    :raises ValueError: if a value has the wrong type or is out of range
    """
    output = _section(config, 'output')
    browser = _section(config, 'browser')
    server = _section(config, 'server')
    semantic = _section(config, 'semantic')
    logging_section = _section(config, 'logging')

    result = CompilerConfig(
        output=OutputConfig(
            directory=_optional_str(output, 'directory'),
            indent=_typed(output, 'indent', str, "    ")
        ),
        browser=BrowserConfig(
            open=_typed(browser, 'open', bool, False),
            name=_optional_str(browser, 'name')
        ),
        server=ServerConfig(
            host=_typed(server, 'host', str, constants.DEFAULT_HOST),
            port=_typed(server, 'port', int, constants.DEFAULT_PORT)
        ),
        semantic=SemanticConfig(
            strict_variables=_typed(semantic, 'strict_variables', bool, False)
        ),
        logging=LoggingConfig(
            level=_typed(logging_section, 'level', str, "INFO").upper(),
            directory=_optional_str(logging_section, 'directory')
        ),
        source_path=source_path
    )

    if not 0 < result.server.port < 65536:
        raise ValueError(f"Server port {result.server.port} is out of range")
    if result.logging.level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{result.logging.level}'")
    if result.output.indent.strip():
        raise ValueError("Output indent must contain only whitespace")

    return result

def load_compiler_config(config_path: Optional[str] = None) -> CompilerConfig:
    """
    Load configuration from a TOML file.

    :param config_path: Path to the TOML file (default: config/lolhtml.toml)
    :return: Loaded configuration, or defaults when the file does not exist
    :raises ValueError: if the file is not valid TOML or has invalid values
    """
    path = Path(config_path or constants.DEFAULT_CONFIG_FILE)
    if not path.exists():
        logger.info(f"No configuration file at {path}, using defaults")
        return CompilerConfig()

    try:
        logger.info(f"Loading compiler configuration from {path}")
        with open(path, 'rb') as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        logger.error(f"Error loading compiler configuration: {str(e)}")
        raise ValueError(f"Invalid TOML in {path}: {e}") from e

    return config_from_dict(data, source_path=str(path))

# Global configuration instance
_compiler_config = None

def init_compiler_config(config_path: Optional[str] = None) -> CompilerConfig:
    """
    Initialize the global configuration instance.

    :param config_path: Path to configuration file
    :return: Configuration instance
    """
    global _compiler_config
    _compiler_config = load_compiler_config(config_path)
    return _compiler_config

def get_compiler_config() -> CompilerConfig:
    """
    Get the global configuration instance, loading defaults on first use.

    :return: Configuration instance
    """
    global _compiler_config
    if _compiler_config is None:
        logger.info("Compiler configuration not initialized, loading default config")
        _compiler_config = load_compiler_config()
    return _compiler_config

def reset_compiler_config() -> None:
    """Forget the global configuration (primarily for testing)."""
    global _compiler_config
    _compiler_config = None
