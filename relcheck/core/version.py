"""Three-part version comparison.

Versions are compared by encoding each (major, minor, patch) triple into one
integer: every part is zero-padded to 3 digits and the parts concatenated.
A part of 1000 or more overflows into its neighbour and the ordering breaks;
tags in that range are not expected.
"""

from packaging.version import InvalidVersion

from relcheck.core.models import VersionOrder, VersionTriple


class InvalidVersionFormat(InvalidVersion):
    """A version string is not exactly three dot-separated integers."""


def parse_version_triple(text: str) -> VersionTriple:
    parts = text.split('.')
    if len(parts) != 3:
        raise InvalidVersionFormat(f"Expected 3 components, got {len(parts)}: {text!r}")
    # ASCII digits only: int() would also take signs, spaces, '_' and other scripts
    for part in parts:
        if not (part.isascii() and part.isdigit()):
            raise InvalidVersionFormat(f"Non-numeric component {part!r} in {text!r}")
    major, minor, patch = (int(p) for p in parts)
    return VersionTriple(major, minor, patch)


def compare_versions(local: str, remote: str) -> VersionOrder:
    """Order the remote tag relative to the local version.

    Raises InvalidVersionFormat if either side does not parse.
    """
    try:
        local_number = parse_version_triple(local).encoded()
        remote_number = parse_version_triple(remote).encoded()
    except InvalidVersionFormat as e:
        raise InvalidVersionFormat(
            f"Version format invalid. Local: {local} Latest: {remote} ({e})"
        ) from e

    if remote_number > local_number:
        return VersionOrder.NEWER
    if remote_number == local_number:
        return VersionOrder.EQUAL
    return VersionOrder.OLDER


def is_newer(local: str, remote: str) -> bool:
    return compare_versions(local, remote) is VersionOrder.NEWER
