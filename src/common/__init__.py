"""Common - Shared functionality for the compiler driver and preview server."""

# Import key subpackages for easy access
from . import base
from . import config

__all__ = ["base", "config"]
