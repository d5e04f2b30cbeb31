#!/usr/bin/env python3
"""
Command-line argument parsing module.

This module provides functions for setting up and parsing command-line
arguments for the zombie command.
"""

import argparse

from ..browser.common.interface import DEFAULT_TIMEOUT_SECONDS, EngineFactory
from ..content.elements import ELEMENT_TYPES
from ..content.search import SearchType
from ..utils.url import is_valid_url

SEARCH_KINDS = ("id", "name", "text", "class", "attribute", "contains", "query")


def create_parser():
    """
    Create the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog='zombie',
        description='Open a web page with a headless engine, search it and print the results'
    )

    parser.add_argument('url', type=str, nargs='?', default=None,
                        help='URL to open (optional when --config provides one)')

    # Engine options
    engine_group = parser.add_argument_group('Engine Options')
    engine_group.add_argument('--engine', type=str, default='headless', choices=EngineFactory.ENGINES,
                              help='Rendering engine to use (default: headless)')
    engine_group.add_argument('--browser-type', type=str, default='chromium',
                              choices=['chromium', 'chrome', 'firefox', 'webkit'],
                              help='Browser launched by the playwright engine (default: chromium)')
    engine_group.add_argument('--visible', action='store_true',
                              help='Show the browser window instead of running headless')
    engine_group.add_argument('--user-agent', type=str, default=None,
                              help="User agent: a built-in name (e.g. chrome_mac), 'random', "
                                   "'desktop', 'mobile' or a literal string")
    engine_group.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT_SECONDS,
                              help=f'Engine timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS})')
    engine_group.add_argument('--webdriver-path', type=str, default=None,
                              help='Path to the chromedriver executable (selenium engine)')
    engine_group.add_argument('--stealth', action='store_true',
                              help='Apply selenium-stealth patches (selenium engine)')
    engine_group.add_argument('--undetected', action='store_true',
                              help='Use undetected-chromedriver (selenium engine)')

    # Post-navigation policy
    wait_group = parser.add_mutually_exclusive_group()
    wait_group.add_argument('--wait', type=float, default=None,
                            help='Seconds to wait after the page loads')
    wait_group.add_argument('--validate', type=str, default=None,
                            help='Script polled after loading until it returns true')

    # Page actions
    action_group = parser.add_argument_group('Page Actions')
    action_group.add_argument('--search', type=str, nargs='+', default=None, metavar='ARG',
                              help=f"Search the page: KIND ARG... where KIND is one of {', '.join(SEARCH_KINDS)}")
    action_group.add_argument('--element', type=str, default='element', choices=sorted(ELEMENT_TYPES),
                              help='Element kind to search for (default: element)')
    action_group.add_argument('--attribute', type=str, default=None,
                              help='Print this attribute of each match instead of its markup')
    action_group.add_argument('--execute', type=str, default=None,
                              help='Run a script in the loaded page and print its result')

    # Output
    output_group = parser.add_argument_group('Output Options')
    output_group.add_argument('--markdown', action='store_true',
                              help='Print the page (or matches) as markdown')
    output_group.add_argument('--json', dest='json_mode', action='store_true',
                              help='Parse the page as JSON and pretty-print it')
    output_group.add_argument('--debug', action='store_true',
                              help='Enable debug logging')

    # Configuration file options
    config_group = parser.add_argument_group('Configuration Options')
    config_group.add_argument('--config', type=str, default=None,
                              help='Path to configuration file (JSON)')
    config_group.add_argument('--save-config', type=str, default=None,
                              help='Save current settings to configuration file')

    return parser


def parse_args(args=None):
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments to parse (uses sys.argv if None)

    Returns:
        argparse.Namespace: Parsed arguments

    Raises:
        SystemExit: If required arguments are missing or invalid
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.url is None and not parsed_args.config:
        parser.error("A URL is required unless --config is given")

    if parsed_args.url is not None and not is_valid_url(parsed_args.url):
        parser.error("Invalid URL. Please provide a valid URL (e.g., https://example.com)")

    if parsed_args.search:
        try:
            SearchType.from_args(parsed_args.search[0], *parsed_args.search[1:])
        except ValueError as e:
            parser.error(str(e))

    if parsed_args.json_mode and parsed_args.search:
        parser.error("--json cannot be combined with --search")

    return parsed_args
