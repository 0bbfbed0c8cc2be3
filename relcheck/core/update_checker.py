"""Update check — retrieval, parsing, and the operator prompt.

Architecture:
  UpdateChecker — pure Python logic (no Qt dependency), blocking methods
  UpdateWorker  — QThread wrapper in relcheck.ui.update_prompt
"""

import logging
from typing import Protocol

from relcheck.branding import AppBranding
from relcheck.core.models import CheckOutcome, FailureReason
from relcheck.core.release_parser import evaluate_release
from relcheck.network.retrieval import ReleaseFetcher

logger = logging.getLogger(__name__)


class UpdatePrompt(Protocol):
    """Operator-facing collaborator: a blocking yes/no box and a browser launch."""

    def confirm(self, title: str, message: str) -> bool:
        ...

    def open_in_browser(self, url: str) -> None:
        ...


class UpdateChecker:
    """Checks GitHub for a newer release and offers it to the operator.

    Construct one per process and pass it around. Without a prompt,
    available updates are only logged.
    """

    def __init__(self, fetcher: ReleaseFetcher, prompt: UpdatePrompt | None = None,
                 local_version: str = AppBranding.VERSION,
                 repo_url: str = AppBranding.REPO_URL,
                 title: str = AppBranding.APP_NAME):
        self.fetcher = fetcher
        self.prompt = prompt
        self.local_version = local_version
        self.repo_url = repo_url
        self.title = title

    # ── Check ────────────────────────────────────────────────────────

    def check(self) -> CheckOutcome:
        """Fetch and evaluate the latest release. Shows nothing.

        A body that fails evaluation moves on to the next source, so a bad
        bridge payload still gets a direct attempt. That is why this walks
        fetcher.attempts() rather than taking the single body from fetch().
        """
        outcome = CheckOutcome.failed(FailureReason.NO_DATA, "no source attempted")

        for attempt in self.fetcher.attempts():
            if not attempt.ok:
                logger.warning("No data from %s, trying next source.", attempt.source)
                outcome = CheckOutcome.failed(attempt.failure, attempt.detail)
                continue

            outcome = evaluate_release(attempt.body, self.local_version, self.repo_url)
            if outcome.is_conclusive:
                logger.info("Release check succeeded. (%s)", attempt.source)
                return outcome
            logger.warning("Release payload rejected (%s): %s (%s)",
                           outcome.reason.value, outcome.detail, attempt.source)

        logger.warning("Update check failed: %s", outcome.reason.value)
        return outcome

    # ── Notify ───────────────────────────────────────────────────────

    def notify(self, outcome: CheckOutcome) -> bool:
        """Ask the operator about an available update.

        Returns True if they accepted and the release page was opened.
        """
        if not outcome.has_update:
            return False
        if self.prompt is None:
            logger.info("Update %s available at %s (no prompt attached)",
                        outcome.tag, outcome.url)
            return False

        if not self.prompt.confirm(self.title, outcome.message):
            logger.info("Update %s declined", outcome.tag)
            return False

        logger.info("Opening release page %s", outcome.url)
        self.prompt.open_in_browser(outcome.url)
        return True

    def check_for_update(self) -> bool:
        """Run a full check. True when the result is definitive (up to date,
        or update available and offered); False on any failure."""
        outcome = self.check()
        if not outcome.is_conclusive:
            return False
        self.notify(outcome)
        return True
