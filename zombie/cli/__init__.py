"""
Command-line interface module for the zombie command.

This package contains modules for parsing command-line arguments,
managing configuration and setting up logging.
"""

from .argument_parser import create_parser, parse_args
from .config import Configuration, load_config, save_config
from .log import setup_logging

__all__ = ["create_parser", "parse_args", "Configuration", "load_config", "save_config", "setup_logging"]
