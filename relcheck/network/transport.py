"""HTTP transport used by the update check.

Timeout policy lives here; callers above only see an HttpResponse or a
TransportError.
"""

import logging
from http.client import HTTPException
from typing import Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from relcheck.branding import AppBranding
from relcheck.core.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class TransportError(OSError):
    """Network-level failure: DNS, connect, TLS, timeout, reset."""


class Transport(Protocol):
    def request(self, method: str, host: str, path: str,
                headers: dict[str, str], body: str | None = None) -> HttpResponse:
        ...


def send(transport: Transport, req: HttpRequest) -> HttpResponse:
    """Issue a prepared request descriptor through a transport."""
    return transport.request(req.method, req.host, req.path, req.headers, req.body)


class UrllibTransport:
    """HTTPS transport on urllib — any status code is a response, not an error."""

    def __init__(self, timeout: float = 30.0, user_agent: str | None = None):
        self.timeout = timeout
        self.user_agent = user_agent or AppBranding.user_agent()

    def request(self, method: str, host: str, path: str,
                headers: dict[str, str], body: str | None = None) -> HttpResponse:
        url = f"https://{host}{path}"
        all_headers = dict(headers)
        # GitHub rejects API requests without a User-Agent
        all_headers.setdefault('User-Agent', self.user_agent)
        data = body.encode('utf-8') if body is not None else None
        req = Request(url, data=data, headers=all_headers, method=method)

        try:
            with urlopen(req, timeout=self.timeout) as resp:
                return HttpResponse(status=resp.status,
                                    body=resp.read().decode('utf-8', errors='replace'))
        except HTTPError as e:
            # Non-2xx: still a response; the caller decides what the status means
            try:
                payload = e.read().decode('utf-8', errors='replace')
            except (HTTPException, OSError):
                payload = ""
            finally:
                e.close()
            return HttpResponse(status=e.code, body=payload)
        # http.client errors (IncompleteRead, BadStatusLine) are not OSErrors
        except (URLError, HTTPException, OSError) as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {url} failed: {e}") from e
