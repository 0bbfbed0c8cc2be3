"""Changelog excerpt for the update prompt."""

CHANGELOG_MARKER = "Change log"
SECTION_BREAK = "\r\n\r\n"   # GitHub stores release bodies with CRLF line endings


def extract_changelog(body: str) -> str:
    """Slice the "Change log" section out of release notes.

    The section runs from the marker to the next blank line (or the end of
    the text) and is returned with a trailing blank line so it can be
    dropped straight into the prompt text. Returns "" without a marker.
    """
    begin = body.find(CHANGELOG_MARKER)
    if begin == -1:
        return ""

    end = body.find(SECTION_BREAK, begin)
    if end == -1:
        return body[begin:] + "\n\n"
    return body[begin:end] + "\n\n"
