#!/usr/bin/env python3
"""
Page navigation support module.

This module contains the engine-independent pieces of navigation: carrying
out post-actions, polling predicate scripts, building the helper scripts the
automation layer sends to engines, and hashing page content.
"""

import asyncio
import hashlib
import json
import logging
import re

from ..core.errors import ActionError, ActionFailure

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.5


def hash_page_content(html_content):
    """
    Generate a hash of the page content to detect changes.

    Args:
        html_content: HTML content to hash

    Returns:
        str: MD5 hash of the normalized content
    """
    normalized_content = re.sub(r"\s+", " ", html_content).strip()
    return hashlib.md5(normalized_content.encode("utf-8")).hexdigest()


def stringify_script_result(result):
    """Render a script result the way a JavaScript engine prints it."""
    if result is None:
        return ""
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, (dict, list)):
        return json.dumps(result)
    return str(result)


def is_true_result(result):
    return str(result).strip().lower() == "true"


def terminate(script):
    """Ensure a script ends with a statement terminator."""
    trimmed = script.strip()
    if not trimmed.endswith(";"):
        trimmed += ";"
    return trimmed


def selector_present_script(selector):
    """Predicate script that is true once ``selector`` matches a node."""
    return f"document.querySelector({json.dumps(selector)}) !== null"


def set_attribute_script(query, key, value):
    """Script setting attribute ``key`` on the first node matched by ``query``."""
    return (
        f"document.querySelector({json.dumps(query)})"
        f".setAttribute({json.dumps(key)}, {json.dumps(value)});"
    )


async def wait_until(engine, script, timeout=None, interval=POLL_INTERVAL_SECONDS):
    """
    Poll a predicate script until it reports true.

    Script failures while polling (for example while a page is still
    navigating) count as "not yet"; an engine that cannot run scripts at all
    fails immediately with notSupported.

    Args:
        engine: BrowserEngine to run the script on
        script: Predicate script
        timeout: Seconds to keep polling (defaults to the engine timeout)
        interval: Seconds between polls

    Raises:
        ActionFailure: timeout if the predicate never became true
    """
    timeout = engine.timeout_seconds if timeout is None else timeout
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    while True:
        try:
            if is_true_result(await engine.run(script)):
                return
        except ActionFailure as failure:
            if failure.error is ActionError.NOT_SUPPORTED:
                raise
            logger.debug("Predicate %r failed while polling: %s", script, failure)

        if loop.time() + interval > deadline:
            logger.debug("Predicate %r not satisfied within %ss", script, timeout)
            raise ActionFailure(ActionError.TIMEOUT)
        await asyncio.sleep(interval)


async def apply_post_action(engine, post_action):
    """
    Carry out a PostAction after a navigation or script step.

    Raises:
        ActionFailure: timeout from a validate policy that never succeeded
    """
    if post_action is None or post_action.kind == "none":
        return
    if post_action.kind == "wait":
        await asyncio.sleep(post_action.duration)
    elif post_action.kind == "validate":
        await wait_until(engine, post_action.script)
    else:
        raise ValueError(f"Unknown post action: {post_action.kind}")


async def wait_for_change(snapshot, before, timeout, interval=POLL_INTERVAL_SECONDS):
    """
    Poll ``snapshot`` until the page URL or content differs from ``before``.

    Args:
        snapshot: Coroutine function returning (url, html, ready)
        before: (url, content hash) captured before the script ran
        timeout: Seconds to keep polling
        interval: Seconds between polls

    Returns:
        bool: True if the page changed and finished loading, False if the
        time ran out first
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    before_url, before_hash = before

    while True:
        url, html, ready = await snapshot()
        if ready and (url != before_url or hash_page_content(html) != before_hash):
            return True
        if loop.time() + interval > deadline:
            return False
        await asyncio.sleep(interval)
