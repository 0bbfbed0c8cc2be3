"""Release data retrieval — bridge first, GitHub API directly second.

GitHub limits unauthenticated REST requests to 60 per hour, so the first
attempt goes through a Google Apps Script ("bridge") that forwards the
request with authentication. If the bridge fails in any way, the public API
is queried directly.
"""

import json
import logging
from collections.abc import Iterator

from relcheck.config.settings import UpdaterSettings
from relcheck.core.models import AttemptResult, FailureReason, HttpRequest
from relcheck.core.release_parser import PayloadError, excerpt, load_json_object
from relcheck.network.transport import Transport, TransportError, send

logger = logging.getLogger(__name__)

HTTP_STATUS_OK = 200

BY_BRIDGE = "ByBridge"
DIRECTLY = "Directly"


class ReleaseFetcher:
    """Obtains the raw latest-release JSON, one blocking attempt at a time."""

    def __init__(self, transport: Transport, settings: UpdaterSettings,
                 release_path: str):
        self.transport = transport
        self.settings = settings
        self.release_path = release_path

    # ── Requests ─────────────────────────────────────────────────────

    def bridge_request(self) -> HttpRequest:
        return HttpRequest(
            method="POST",
            host=self.settings.bridge_host,
            path=self.settings.bridge_path,
            headers={
                'Accept': 'application/json',
                'Content-Type': 'application/json',
            },
            body=json.dumps({'forward_request': self.release_path}),
        )

    def direct_request(self) -> HttpRequest:
        return HttpRequest(
            method="GET",
            host=self.settings.direct_host,
            path=self.release_path,
            headers={'Accept': self.settings.api_accept},
        )

    # ── Attempts ─────────────────────────────────────────────────────

    def fetch_via_bridge(self) -> AttemptResult:
        """Bridge attempt. Never raises: the bridge is third-party code."""
        try:
            return self._fetch_via_bridge()
        except Exception as e:
            logger.warning("An exception was caught. %s: %s (%s)",
                           type(e).__name__, e, BY_BRIDGE, exc_info=True)
            return AttemptResult(BY_BRIDGE, failure=FailureReason.RUNTIME_FAULT,
                                 detail=f"{type(e).__name__}: {e}")

    def _fetch_via_bridge(self) -> AttemptResult:
        result = self._exchange(self.bridge_request(), BY_BRIDGE)
        if not result.ok:
            return result

        try:
            envelope = load_json_object(result.body)
        except PayloadError as e:
            logger.warning("Parse response failed. %s Response: %s (%s)",
                           e.detail, excerpt(result.body), BY_BRIDGE)
            return AttemptResult(BY_BRIDGE, failure=e.reason, detail=e.detail)

        bridge_error = envelope.get('bridge_error_message')
        if bridge_error is not None:
            logger.warning("bridge_error_message: %s (%s)", bridge_error, BY_BRIDGE)
            return AttemptResult(BY_BRIDGE, failure=FailureReason.BRIDGE_REJECTED,
                                 detail=str(bridge_error))

        logger.info("Get data by bridge succeeded.")
        return result

    def fetch_direct(self) -> AttemptResult:
        """Direct GitHub API attempt (rate-limited)."""
        result = self._exchange(self.direct_request(), DIRECTLY)
        if result.ok:
            logger.info("Get data directly succeeded.")
        return result

    def _exchange(self, req: HttpRequest, source: str) -> AttemptResult:
        try:
            resp = send(self.transport, req)
        except TransportError as e:
            logger.warning("HTTP request failed: %s (%s)", e, source)
            return AttemptResult(source, failure=FailureReason.TRANSPORT_FAILURE,
                                 detail=str(e))

        if resp.status != HTTP_STATUS_OK:
            logger.warning("Response status is not 200. Status: %d Response: %s (%s)",
                           resp.status, excerpt(resp.body), source)
            return AttemptResult(source, failure=FailureReason.UNEXPECTED_STATUS,
                                 detail=f"HTTP {resp.status}")

        return AttemptResult(source, body=resp.body)

    # ── Strategy ─────────────────────────────────────────────────────

    def attempts(self) -> Iterator[AttemptResult]:
        """Yield bridge then direct results; the direct request is only sent
        if the consumer asks for it."""
        yield self.fetch_via_bridge()
        yield self.fetch_direct()

    def fetch(self) -> str | None:
        """First raw release document any source delivers, or None."""
        for attempt in self.attempts():
            if attempt.ok:
                return attempt.body
            logger.warning("No data from %s: %s", attempt.source,
                           attempt.failure.value if attempt.failure else "unknown")
        return None
