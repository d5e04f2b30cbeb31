"""Shared fixtures: an in-memory engine and sample documents."""

import pytest

from zombie.browser.common.interface import BrowserEngine, PostAction
from zombie.browser.navigator import apply_post_action
from zombie.core.errors import ActionError, ActionFailure

ITEMS_HTML = b"""<html><head><title>Items</title></head><body>
<ul>
  <li class="item" id="first">One</li>
  <li class="item">Two</li>
  <li class="other">Three</li>
</ul>
</body></html>"""

LOGIN_HTML = b"""<html><body>
<form id="f" name="login" action="/login"><input name="u" value="bob"></form>
</body></html>"""

LINKS_HTML = b"""<html><body>
<a href="/next" class="nav">Next page</a>
<a class="nav">Dead link</a>
<button onclick="document.login.submit();">Go</button>
<img src="/logo.png" alt="Logo">
<iframe src="https://frames.example.com/inner"></iframe>
</body></html>"""


class StubEngine(BrowserEngine):
    """
    Engine serving canned pages.

    Args:
        pages: URL to HTML bytes
        scripts: Script to result; None makes run() unsupported
        navigations: Script to the URL it navigates to
    """

    def __init__(self, pages=None, scripts=None, navigations=None, **kwargs):
        super().__init__(**kwargs)
        self.pages = dict(pages or {})
        self.scripts = scripts
        self.navigations = dict(navigations or {})
        self.opened = []
        self.ran = []
        self.closed = False

    def _load(self, url):
        if url not in self.pages:
            raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)
        data = self.pages[url]
        self._slot.store(data, url)
        return data, url

    async def open(self, url, post_action=PostAction()):
        self.opened.append(url)
        with self._loading():
            content = self._load(url)
        await apply_post_action(self, post_action)
        return content

    async def run(self, script):
        if self.scripts is None:
            raise ActionFailure(ActionError.NOT_SUPPORTED)
        self.ran.append(script)
        result = self.scripts.get(script, "")
        if isinstance(result, Exception):
            raise result
        if callable(result):
            result = result()
        return result

    async def open_and_run(self, script, post_action=PostAction()):
        if self.scripts is None:
            raise ActionFailure(ActionError.NOT_SUPPORTED)
        self.ran.append(script)
        if script not in self.navigations:
            raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)
        content = self._load(self.navigations[script])
        await apply_post_action(self, post_action)
        return content

    async def close(self):
        self.closed = True


@pytest.fixture
def items_html():
    return ITEMS_HTML


@pytest.fixture
def login_html():
    return LOGIN_HTML


@pytest.fixture
def links_html():
    return LINKS_HTML


@pytest.fixture
def stub_engine():
    return StubEngine(
        pages={
            "https://example.com/": ITEMS_HTML,
            "https://example.com/login": LOGIN_HTML,
            "https://example.com/links": LINKS_HTML,
            "https://example.com/next": ITEMS_HTML,
        },
        scripts={},
        navigations={
            "window.location.href='/next';": "https://example.com/next",
            "document.login.submit();": "https://example.com/",
        },
        timeout_seconds=1.0,
    )
