"""Release payload parsing and evaluation."""

import json
import logging

import pytest

from relcheck.core.models import CheckStatus, FailureReason
from relcheck.core.release_parser import (
    PayloadError, evaluate_release, excerpt, format_update_message, parse_release,
)

from conftest import REPO_URL, release_json


class TestParseRelease:

    def test_required_fields(self):
        info = parse_release(release_json(tag_name="1.2.3", body="notes"))
        assert info.tag_name == "1.2.3"
        assert info.html_url == f"{REPO_URL}/releases/tag/1.2.3"
        assert info.body == "notes"
        assert info.message is None

    @pytest.mark.parametrize("raw", ["", "{", "not json", "{'tag_name': 1}"])
    def test_syntax_error_is_malformed(self, raw):
        with pytest.raises(PayloadError) as exc:
            parse_release(raw)
        assert exc.value.reason is FailureReason.MALFORMED_PAYLOAD
        assert "JsonError" in exc.value.detail

    @pytest.mark.parametrize("raw", ["[]", "42", '"text"', "null"])
    def test_non_object_is_malformed(self, raw):
        with pytest.raises(PayloadError) as exc:
            parse_release(raw)
        assert exc.value.reason is FailureReason.MALFORMED_PAYLOAD

    @pytest.mark.parametrize("missing", ["tag_name", "html_url", "body"])
    def test_missing_field(self, missing):
        data = json.loads(release_json())
        del data[missing]
        with pytest.raises(PayloadError) as exc:
            parse_release(json.dumps(data))
        assert exc.value.reason is FailureReason.MISSING_FIELDS

    @pytest.mark.parametrize("field,value", [
        ("tag_name", 123), ("html_url", None), ("body", ["a"]),
    ])
    def test_non_string_field(self, field, value):
        data = json.loads(release_json())
        data[field] = value
        with pytest.raises(PayloadError) as exc:
            parse_release(json.dumps(data))
        assert exc.value.reason is FailureReason.MISSING_FIELDS

    def test_message_is_logged_not_fatal(self, caplog):
        caplog.set_level(logging.WARNING)
        info = parse_release(release_json(message="Moved Permanently"))
        assert info.message == "Moved Permanently"
        assert "Moved Permanently" in caplog.text

    def test_message_alone_fails_on_fields(self):
        raw = json.dumps({'message': "API rate limit exceeded"})
        with pytest.raises(PayloadError) as exc:
            parse_release(raw)
        assert exc.value.reason is FailureReason.MISSING_FIELDS

    def test_non_string_message_ignored(self):
        assert parse_release(release_json(message=5)).message is None


class TestEvaluateRelease:

    def test_newer_tag_is_update_available(self):
        outcome = evaluate_release(release_json(tag_name="9.9.9"), "1.0.0", REPO_URL)
        assert outcome.status is CheckStatus.UPDATE_AVAILABLE
        assert outcome.tag == "9.9.9"
        assert outcome.url == f"{REPO_URL}/releases/tag/9.9.9"
        assert outcome.changelog == "Change log\r\n- fix\n\n"
        assert "Current version: 1.0.0\n" in outcome.message
        assert "Latest version: 9.9.9\n" in outcome.message
        assert outcome.is_conclusive

    def test_same_version_is_up_to_date(self):
        outcome = evaluate_release(release_json(tag_name="1.0.0"), "1.0.0", REPO_URL)
        assert outcome.status is CheckStatus.UP_TO_DATE
        assert outcome.message == ""
        assert outcome.is_conclusive

    def test_local_ahead_is_up_to_date(self):
        outcome = evaluate_release(release_json(tag_name="0.9.0"), "1.0.0", REPO_URL)
        assert outcome.status is CheckStatus.UP_TO_DATE

    def test_untrusted_url(self):
        raw = release_json(tag_name="9.9.9", html_url="https://evil.example/releases/9.9.9")
        outcome = evaluate_release(raw, "1.0.0", REPO_URL)
        assert outcome.status is CheckStatus.FAILED
        assert outcome.reason is FailureReason.UNTRUSTED_URL

    def test_prefix_must_be_at_start(self):
        raw = release_json(html_url=f"https://evil.example/?r={REPO_URL}")
        outcome = evaluate_release(raw, "1.0.0", REPO_URL)
        assert outcome.reason is FailureReason.UNTRUSTED_URL

    def test_invalid_remote_version(self):
        outcome = evaluate_release(release_json(tag_name="v2.0.0"), "1.0.0", REPO_URL)
        assert outcome.reason is FailureReason.INVALID_VERSION_FORMAT

    def test_invalid_local_version(self):
        outcome = evaluate_release(release_json(tag_name="2.0.0"), "1.0", REPO_URL)
        assert outcome.reason is FailureReason.INVALID_VERSION_FORMAT

    def test_malformed_payload(self):
        outcome = evaluate_release("<html>502</html>", "1.0.0", REPO_URL)
        assert outcome.reason is FailureReason.MALFORMED_PAYLOAD
        assert not outcome.is_conclusive

    def test_update_without_changelog(self):
        raw = release_json(tag_name="2.0.0", body="Just bug fixes.")
        outcome = evaluate_release(raw, "1.0.0", REPO_URL)
        assert outcome.changelog == ""
        assert "\n\nDo you want to go to GitHub" in outcome.message


class TestFormatting:

    def test_update_message_layout(self):
        msg = format_update_message("1.0.0", "1.1.0", "Change log\r\n- x\n\n")
        assert msg == (
            "A new version has been released.\n"
            "\n"
            "Current version: 1.0.0\n"
            "Latest version: 1.1.0\n"
            "\n"
            "Change log\r\n- x\n\n"
            "Do you want to go to GitHub to download the latest version?\n"
        )

    def test_excerpt_truncates(self):
        assert excerpt("abc", limit=5) == "abc"
        cut = excerpt("x" * 20, limit=5)
        assert cut.startswith("xxxxx...")
        assert "(20 chars)" in cut
