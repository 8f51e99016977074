from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

from playwright.sync_api import Error as PlaywrightError
import pytest

from pagesmith.core.exceptions import EngineLaunchError


FAKE_PDF = b"%PDF-1.7\n% pagesmith test document\n%%EOF\n"


class FakePage:
    """Stand-in for a Playwright page that records every call."""

    def __init__(self, *, fail_on: str | None = None, pdf_bytes: bytes = FAKE_PDF) -> None:
        self.fail_on = fail_on
        self.pdf_bytes = pdf_bytes
        self.calls: list[str] = []
        self.url: str | None = None
        self.wait_until: str | None = None
        self.loaded_html: str | None = None
        self.pdf_options: dict[str, Any] | None = None
        self.closed = False

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise PlaywrightError(f"{name} boom")

    def goto(self, url: str, wait_until: str | None = None) -> None:
        self.calls.append("goto")
        self._maybe_fail("goto")
        self.url = url
        self.wait_until = wait_until
        self.loaded_html = Path(url2pathname(urlparse(url).path)).read_text(encoding="utf-8")

    def wait_for_load_state(self, state: str = "load") -> None:
        self.calls.append(f"wait_for_load_state:{state}")
        self._maybe_fail("wait_for_load_state")

    def pdf(self, **options: Any) -> bytes:
        self.calls.append("pdf")
        self.pdf_options = options
        self._maybe_fail("pdf")
        return self.pdf_bytes

    def close(self) -> None:
        self.closed = True
        self._maybe_fail("close")


class FakeBrowser:
    version = "120.0.6099.28"

    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.closed = False

    def new_page(self) -> FakePage:
        if self.page.fail_on == "new_page":
            raise PlaywrightError("new_page boom")
        return self.page

    def close(self) -> None:
        self.closed = True


class FakeLauncher:
    """Callable matching ``BrowserLauncher`` that hands out a fake browser."""

    def __init__(self, page: FakePage | None = None, *, fail_launch: bool = False) -> None:
        self.page = page or FakePage()
        self.browser = FakeBrowser(self.page)
        self.fail_launch = fail_launch
        self.launches = 0

    @contextmanager
    def __call__(self) -> Iterator[FakeBrowser]:
        self.launches += 1
        if self.fail_launch:
            raise EngineLaunchError("Unable to launch headless Chromium: launch boom")
        try:
            yield self.browser
        finally:
            self.browser.close()


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Any) -> None:
        self.events.append((name, dict(payload)))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


@pytest.fixture
def launcher_factory() -> Callable[..., FakeLauncher]:
    def _factory(*, fail_on: str | None = None, fail_launch: bool = False) -> FakeLauncher:
        return FakeLauncher(FakePage(fail_on=fail_on), fail_launch=fail_launch)

    return _factory


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def recording_emitter() -> RecordingEmitter:
    return RecordingEmitter()
