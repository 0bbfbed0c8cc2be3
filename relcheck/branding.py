"""Centralized branding constants — single source of truth for version and repo.

The update checker compares against VERSION and only trusts release pages
that live under REPO_URL.
"""


class AppBranding:
    """Application identity constants."""

    APP_NAME = "RelCheck"
    PUBLISHER = "RelCheck"
    VERSION = "1.0.0"
    GITHUB_REPO = "relcheck/relcheck"
    REPO_URL = f"https://github.com/{GITHUB_REPO}"

    @classmethod
    def latest_release_path(cls) -> str:
        """GitHub REST path of the latest published release."""
        return f"/repos/{cls.GITHUB_REPO}/releases/latest"

    @classmethod
    def user_agent(cls) -> str:
        return f"{cls.APP_NAME}/{cls.VERSION}"
