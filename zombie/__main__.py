#!/usr/bin/env python3
"""
Main entry point for the zombie command.

This module opens a page with the configured engine, optionally runs a
script and a search against it, and prints the result.
"""

import asyncio
import json
import sys

from .cli.argument_parser import parse_args
from .cli.config import load_config_from_args, save_config
from .cli.log import setup_logging
from .content.markdown import element_to_markdown
from .content.page import HTMLPage, JSONPage
from .core.automation import Zombie
from .core.errors import ActionFailure


def format_element(element, config):
    """Render one search match for output."""
    if config.attribute:
        value = element.attribute(config.attribute)
        return "" if value is None else value
    if config.markdown:
        return element_to_markdown(element)
    return element.inner_content


async def run(config):
    """
    Carry out a configured run and print its output.

    Raises:
        ActionFailure: If any step fails
    """
    async with Zombie(engine=config.create_engine()) as zombie:
        post_action = config.post_action()

        if config.json_mode:
            page = await zombie.open(config.url, JSONPage, post_action).execute()
            print(json.dumps(page.content(), indent=2, ensure_ascii=False))
            return

        page = await zombie.open(config.url, HTMLPage, post_action).execute()

        if config.execute:
            print(await zombie.execute(config.execute).execute())
            page = await zombie.inspect().execute()

        search_type = config.search_type
        if search_type is not None:
            elements = await zombie.find_all(page, search_type, config.element_type).execute()
            for element in elements:
                print(format_element(element, config))
        elif not config.execute:
            print(page.to_markdown() if config.markdown else page.html)


def main(argv=None):
    """Main entry point for the zombie command."""
    args = parse_args(argv)
    setup_logging(args.debug)

    try:
        config = load_config_from_args(args)
    except (FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 2

    if args.save_config:
        save_config(config, args.save_config)
        print(f"Configuration saved to {args.save_config}")

    if args.debug:
        config.print_summary()

    try:
        asyncio.run(run(config))
    except ActionFailure as failure:
        print(f"Error: {failure.error.description}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
