"""Release payload parsing — GitHub "latest release" JSON to a CheckOutcome.

No I/O happens here; the caller shows the prompt and opens the release page.
"""

import json
import logging

from relcheck.core.changelog import extract_changelog
from relcheck.core.models import (
    CheckOutcome, FailureReason, ReleaseInfo, VersionOrder,
)
from relcheck.core.version import (
    InvalidVersionFormat, compare_versions, parse_version_triple,
)

logger = logging.getLogger(__name__)

# Raw bodies are logged for remote diagnosis, but never unbounded
LOG_EXCERPT_CHARS = 512


def excerpt(text: str, limit: int = LOG_EXCERPT_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + f"... ({len(text)} chars)"


class PayloadError(ValueError):
    """Release document is unusable; `reason` says why."""

    def __init__(self, reason: FailureReason, detail: str):
        super().__init__(detail)
        self.reason = reason
        self.detail = detail


def load_json_object(raw: str) -> dict:
    """Decode a JSON object, raising PayloadError(MALFORMED_PAYLOAD) otherwise."""
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise PayloadError(FailureReason.MALFORMED_PAYLOAD, f"JsonError: {e}") from e
    if not isinstance(data, dict):
        raise PayloadError(FailureReason.MALFORMED_PAYLOAD,
                           f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_release(raw: str) -> ReleaseInfo:
    """Decode and validate the required release fields."""
    try:
        data = load_json_object(raw)
    except PayloadError as e:
        logger.warning("Parse response failed. %s Response: %s", e.detail, excerpt(raw))
        raise

    message = data.get('message')
    if isinstance(message, str):
        # e.g. "API rate limit exceeded" or "Not Found"; the fields decide
        logger.warning("Response has a message. message: %s", message)
    else:
        message = None

    tag_name = data.get('tag_name')
    html_url = data.get('html_url')
    body = data.get('body')
    if not (isinstance(tag_name, str) and isinstance(html_url, str)
            and isinstance(body, str)):
        logger.warning("Response fields invalid. tag_name=%r html_url=%r body type=%s",
                       tag_name, html_url, type(body).__name__)
        raise PayloadError(FailureReason.MISSING_FIELDS,
                           "tag_name, html_url and body must all be strings")

    return ReleaseInfo(tag_name=tag_name, html_url=html_url, body=body,
                       message=message)


def format_update_message(local_version: str, tag_name: str, changelog: str) -> str:
    """Prompt text shown to the operator when a newer release exists."""
    return (
        "A new version has been released.\n"
        "\n"
        f"Current version: {local_version}\n"
        f"Latest version: {tag_name}\n"
        "\n"
        f"{changelog}"
        "Do you want to go to GitHub to download the latest version?\n"
    )


def evaluate_release(raw: str, local_version: str, repo_url: str) -> CheckOutcome:
    """Turn a raw release document into UpToDate / UpdateAvailable / Failed."""
    try:
        release = parse_release(raw)
    except PayloadError as e:
        return CheckOutcome.failed(e.reason, e.detail)

    # Guards against a misrouted or tampered bridge response
    if not release.html_url.startswith(repo_url):
        logger.warning("html_url field invalid. html_url: %s", release.html_url)
        return CheckOutcome.failed(FailureReason.UNTRUSTED_URL,
                                   f"html_url outside {repo_url}: {release.html_url}")

    try:
        order = compare_versions(local_version, release.tag_name)
    except InvalidVersionFormat as e:
        logger.warning("%s", e)
        return CheckOutcome.failed(FailureReason.INVALID_VERSION_FORMAT, str(e))

    local_padded = parse_version_triple(local_version).padded()
    latest_padded = parse_version_triple(release.tag_name).padded()

    if order is not VersionOrder.NEWER:
        logger.info("No need to update. Local: %s Latest: %s", local_padded, latest_padded)
        return CheckOutcome.up_to_date(release.tag_name)

    logger.info("Need to update. Local: %s Latest: %s", local_padded, latest_padded)

    changelog = extract_changelog(release.body)
    message = format_update_message(local_version, release.tag_name, changelog)
    return CheckOutcome.update_available(
        tag=release.tag_name,
        url=release.html_url,
        changelog=changelog,
        message=message,
    )
