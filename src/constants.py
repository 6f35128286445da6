import os
from typing import Optional

# System state
TESTING: bool = False
INITIALIZED: bool = False

def is_development_mode() -> bool:
    """
    Check if the compiler is running in development mode.

    :return: True if FLASK_ENV is set to 'development', False otherwise
    """
    flask_env = os.getenv('FLASK_ENV', 'production').lower()
    return flask_env == 'development'

# Get the src directory
SRC_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SRC_DIR)

CONFIG_DIR = os.path.join(PROJECT_ROOT, "config")
DEFAULT_CONFIG_FILE = os.path.join(CONFIG_DIR, "lolhtml.toml")

# Source and output file conventions
SOURCE_EXTENSION = ".lol"
OUTPUT_EXTENSION = ".html"

# Preview server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5050

def get_log_dir() -> str:
    """
    Get the default log directory path.

    :return: Path to the log directory
    """
    return os.path.join(PROJECT_ROOT, "logs")

LOG_DIR = get_log_dir()

def init_testing() -> None:
    """Initialize system for testing mode."""
    global TESTING, INITIALIZED
    TESTING = True
    INITIALIZED = True

def init_production(log_dir: Optional[str] = None) -> None:
    """
    Initialize system for normal command-line use.

    :param log_dir: Optional override for the log directory
    """
    global TESTING, INITIALIZED, LOG_DIR
    TESTING = False
    INITIALIZED = True
    LOG_DIR = log_dir or get_log_dir()

def reset() -> None:
    """Reset to uninitialized state (primarily for testing)."""
    global TESTING, INITIALIZED, LOG_DIR
    TESTING = False
    INITIALIZED = False
    LOG_DIR = get_log_dir()
