#!/usr/bin/env python3
"""
Configuration management module.

This module provides functionality for loading and saving configuration
files, and for turning a configuration into an engine and navigation policy.
"""

import json
import os
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from ..browser.common.interface import DEFAULT_TIMEOUT_SECONDS, EngineFactory, PostAction
from ..content.elements import ELEMENT_TYPES
from ..content.search import SearchType
from ..utils.url import is_valid_url


@dataclass
class Configuration:
    """
    Settings for a single command-line run.

    This dataclass holds every parameter the CLI accepts so runs can be
    saved to and replayed from JSON files.
    """
    # Target
    url: str

    # Engine configuration
    engine: str = "headless"
    browser_type: str = "chromium"
    headless: bool = True
    user_agent: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    webdriver_path: Optional[str] = None
    stealth: bool = False
    undetected: bool = False

    # Post-navigation policy
    wait: Optional[float] = None
    validate: Optional[str] = None

    # What to do with the page
    search: Optional[str] = None
    search_args: List[str] = field(default_factory=list)
    element: str = "element"
    attribute: Optional[str] = None
    execute: Optional[str] = None

    # Output
    markdown: bool = False
    json_mode: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not is_valid_url(self.url):
            raise ValueError(f"Invalid URL: {self.url}")

        self.engine = self.engine.lower()
        if self.engine not in EngineFactory.ENGINES:
            raise ValueError(f"Unknown engine: {self.engine}")

        if self.element not in ELEMENT_TYPES:
            raise ValueError(f"Unknown element kind: {self.element}")

        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        if self.wait is not None and self.validate is not None:
            raise ValueError("Use either wait or validate, not both")

        if self.search is not None:
            # Raises ValueError for an unknown variant or wrong arity
            SearchType.from_args(self.search, *self.search_args)

    @classmethod
    def from_args(cls, args):
        """
        Create a Configuration instance from parsed command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            Configuration: Configuration instance
        """
        search = args.search or []
        return cls(
            url=args.url,
            engine=args.engine,
            browser_type=args.browser_type,
            headless=not args.visible,
            user_agent=args.user_agent,
            timeout_seconds=args.timeout,
            webdriver_path=args.webdriver_path,
            stealth=args.stealth,
            undetected=args.undetected,
            wait=args.wait,
            validate=args.validate,
            search=search[0] if search else None,
            search_args=list(search[1:]),
            element=args.element,
            attribute=args.attribute,
            execute=args.execute,
            markdown=args.markdown,
            json_mode=args.json_mode,
        )

    def to_dict(self):
        """
        Convert configuration to a dictionary.

        Returns:
            dict: Dictionary representation of the configuration
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict):
        """
        Create a Configuration instance from a dictionary.

        Unknown keys are ignored so files written by newer versions still load.

        Args:
            config_dict: Dictionary containing configuration parameters

        Returns:
            Configuration: Configuration instance
        """
        known = {name for name in cls.__dataclass_fields__}
        return cls(**{key: value for key, value in config_dict.items() if key in known})

    @property
    def search_type(self) -> Optional[SearchType]:
        if self.search is None:
            return None
        return SearchType.from_args(self.search, *self.search_args)

    @property
    def element_type(self):
        return ELEMENT_TYPES[self.element]

    def post_action(self) -> PostAction:
        """The PostAction applied after opening the page."""
        if self.validate is not None:
            return PostAction.validate(self.validate)
        if self.wait is not None:
            return PostAction.wait(self.wait)
        return PostAction.none()

    def engine_options(self) -> dict:
        """Engine-specific options for EngineFactory.create."""
        if self.engine == "selenium":
            return {
                "headless": self.headless,
                "webdriver_path": self.webdriver_path,
                "stealth": self.stealth,
                "undetected": self.undetected,
            }
        if self.engine == "playwright":
            return {"headless": self.headless, "browser_type": self.browser_type}
        return {}

    def create_engine(self):
        """Build the configured engine."""
        return EngineFactory.create(
            self.engine,
            user_agent=self.user_agent,
            timeout_seconds=self.timeout_seconds,
            **self.engine_options()
        )

    def print_summary(self):
        """Print a summary of the configuration."""
        print("\nZombie configuration:")
        print(f"- URL: {self.url}")
        print(f"- Engine: {self.engine}" + (f" ({self.browser_type})" if self.engine == "playwright" else ""))
        print(f"- Browser mode: {'Headless' if self.headless else 'Visible'}")
        print(f"- Timeout: {self.timeout_seconds}s")
        if self.search:
            print(f"- Search: {self.search} {' '.join(self.search_args)} ({self.element})")
        if self.execute:
            print(f"- Script: {self.execute}")
        print()


def load_config(config_file: str) -> Configuration:
    """
    Load configuration from a JSON file.

    Args:
        config_file: Path to the configuration file

    Returns:
        Configuration: Configuration instance

    Raises:
        FileNotFoundError: If the configuration file does not exist
        json.JSONDecodeError: If the configuration file is not valid JSON
        KeyError: If the configuration file is missing required fields
    """
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    with open(config_file, 'r') as f:
        config_dict = json.load(f)

    if 'url' not in config_dict:
        raise KeyError("Missing required field in configuration: url")

    return Configuration.from_dict(config_dict)


def save_config(config: Configuration, config_file: str) -> None:
    """
    Save configuration to a JSON file.

    Args:
        config: Configuration instance
        config_file: Path to the configuration file
    """
    directory = os.path.dirname(os.path.abspath(config_file))
    if directory and not os.path.exists(directory):
        os.makedirs(directory)

    with open(config_file, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)


def load_config_from_args(args):
    """
    Load configuration from command-line arguments or a config file.

    Explicitly given command-line flags override values from the file.

    Args:
        args: Parsed command-line arguments

    Returns:
        Configuration: Configuration instance
    """
    if args.config:
        config = load_config(args.config)
        return _override_config_from_args(config, args)
    return Configuration.from_args(args)


def _override_config_from_args(config, args):
    """
    Override configuration with explicitly specified command-line arguments.

    Args:
        config: Existing configuration
        args: Parsed command-line arguments

    Returns:
        Configuration: A new, validated configuration
    """
    defaults = vars(create_parser().parse_args([config.url]))
    values = config.to_dict()

    for key, value in vars(args).items():
        if key in ("config", "save_config", "debug") or value == defaults.get(key):
            continue
        if key == "url":
            if value:
                values["url"] = value
        elif key == "visible":
            values["headless"] = not value
        elif key == "timeout":
            values["timeout_seconds"] = value
        elif key == "search":
            values["search"] = value[0]
            values["search_args"] = list(value[1:])
        elif key in values:
            values[key] = value

    return Configuration.from_dict(values)


# Import here to avoid circular imports
from .argument_parser import create_parser  # noqa: E402
