"""Configuration management for the compiler."""

from .compiler_config import (
    OutputConfig,
    BrowserConfig,
    ServerConfig,
    SemanticConfig,
    LoggingConfig,
    CompilerConfig,
    config_from_dict,
    load_compiler_config,
    init_compiler_config,
    get_compiler_config,
    reset_compiler_config
)

__all__ = [
    'OutputConfig', 'BrowserConfig', 'ServerConfig', 'SemanticConfig', 'LoggingConfig',
    'CompilerConfig', 'config_from_dict', 'load_compiler_config',
    'init_compiler_config', 'get_compiler_config', 'reset_compiler_config'
]
