"""Update check data models.

Everything here is built fresh for each check and thrown away afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum


class VersionOrder(Enum):
    """Remote release relative to the local version."""
    OLDER = "older"
    EQUAL = "equal"
    NEWER = "newer"


class FailureReason(Enum):
    TRANSPORT_FAILURE = "transport_failure"
    UNEXPECTED_STATUS = "unexpected_status"
    BRIDGE_REJECTED = "bridge_rejected"
    MALFORMED_PAYLOAD = "malformed_payload"
    MISSING_FIELDS = "missing_fields"
    UNTRUSTED_URL = "untrusted_url"
    INVALID_VERSION_FORMAT = "invalid_version_format"
    RUNTIME_FAULT = "runtime_fault"
    NO_DATA = "no_data"


class CheckStatus(Enum):
    UP_TO_DATE = "up_to_date"
    UPDATE_AVAILABLE = "update_available"
    FAILED = "failed"


@dataclass(frozen=True)
class VersionTriple:
    """(major, minor, patch) decomposition of a version string."""

    major: int
    minor: int
    patch: int

    def encoded(self) -> int:
        """Zero-pad each part to 3 digits and concatenate: 1.2.3 -> 1002003.

        Parts >= 1000 overflow their slot and mis-order.
        """
        return int(self.padded())

    def padded(self) -> str:
        return f"{self.major:03d}{self.minor:03d}{self.patch:03d}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass
class ReleaseInfo:
    """Fields of a GitHub release document the checker relies on."""

    tag_name: str
    html_url: str           # Link to GitHub release page
    body: str               # Free-form release notes (markdown)
    message: str | None = None  # GitHub API diagnostic, informational only


@dataclass
class CheckOutcome:
    """Disposition of one update check."""

    status: CheckStatus
    tag: str = ""
    url: str = ""
    changelog: str = ""
    message: str = ""       # Composed notification text
    reason: FailureReason | None = None
    detail: str = ""

    @classmethod
    def up_to_date(cls, tag: str = "") -> 'CheckOutcome':
        return cls(CheckStatus.UP_TO_DATE, tag=tag)

    @classmethod
    def update_available(cls, tag: str, url: str, changelog: str,
                         message: str) -> 'CheckOutcome':
        return cls(CheckStatus.UPDATE_AVAILABLE, tag=tag, url=url,
                   changelog=changelog, message=message)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str = "") -> 'CheckOutcome':
        return cls(CheckStatus.FAILED, reason=reason, detail=detail)

    @property
    def is_conclusive(self) -> bool:
        return self.status is not CheckStatus.FAILED

    @property
    def has_update(self) -> bool:
        return self.status is CheckStatus.UPDATE_AVAILABLE


@dataclass
class HttpRequest:
    """Request descriptor, built per attempt (bridge or direct)."""

    method: str
    host: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None


@dataclass
class HttpResponse:
    status: int
    body: str


@dataclass
class AttemptResult:
    """Result of a single retrieval attempt."""

    source: str             # 'ByBridge' or 'Directly'
    body: str | None = None
    failure: FailureReason | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.body is not None
