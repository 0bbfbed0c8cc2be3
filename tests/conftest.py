"""Shared fakes for the update check tests."""

import json

import pytest

from relcheck.branding import AppBranding
from relcheck.config.settings import UpdaterSettings
from relcheck.core.models import HttpResponse
from relcheck.network.retrieval import ReleaseFetcher
from relcheck.network.transport import TransportError

REPO_URL = AppBranding.REPO_URL
RELEASE_PATH = AppBranding.latest_release_path()


def release_json(tag_name="9.9.9", html_url=None, body="Change log\r\n- fix\r\n\r\nbye",
                 **extra) -> str:
    data = {
        'tag_name': tag_name,
        'html_url': html_url if html_url is not None else f"{REPO_URL}/releases/tag/{tag_name}",
        'body': body,
    }
    data.update(extra)
    return json.dumps(data)


class FakeTransport:
    """Scripted transport: one reply per host, each a response or exception."""

    def __init__(self, replies: dict):
        self.replies = replies
        self.calls = []

    def request(self, method, host, path, headers, body=None):
        self.calls.append({'method': method, 'host': host, 'path': path,
                           'headers': dict(headers), 'body': body})
        reply = self.replies.get(host, TransportError(f"no route to {host}"))
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def hosts(self):
        return [c['host'] for c in self.calls]


class FakePrompt:
    def __init__(self, accept: bool):
        self.accept = accept
        self.confirmed = []
        self.opened = []

    def confirm(self, title, message):
        self.confirmed.append((title, message))
        return self.accept

    def open_in_browser(self, url):
        self.opened.append(url)


@pytest.fixture
def settings(tmp_path):
    return UpdaterSettings(data_dir=str(tmp_path))


@pytest.fixture
def make_fetcher(settings):
    def _make(bridge=None, direct=None):
        replies = {}
        if bridge is not None:
            replies[settings.bridge_host] = bridge
        if direct is not None:
            replies[settings.direct_host] = direct
        transport = FakeTransport(replies)
        return ReleaseFetcher(transport, settings, RELEASE_PATH), transport
    return _make


def ok(body: str) -> HttpResponse:
    return HttpResponse(status=200, body=body)
