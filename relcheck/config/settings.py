"""Updater settings — compiled-in endpoints and transport policy.

There is no settings file; tests pass constructor arguments instead.
"""

import os
from dataclasses import dataclass

DEFAULT_DATA_DIR = os.path.join(os.environ.get('LOCALAPPDATA', '.'), 'RelCheck')


@dataclass(frozen=True)
class UpdaterSettings:
    """Endpoints and transport policy for the update check."""
    # Bridge (Google Apps Script that forwards to the GitHub API with a token)
    bridge_host: str = "script.google.com"
    bridge_path: str = "/macros/s/AKfycbxfGLfG3nXZOIE-t0zFIMGGylBbvj9dc1aiowtAvyh5YEZ69o0/exec"

    # Direct GitHub REST API (unauthenticated: 60 requests/hour)
    direct_host: str = "api.github.com"
    api_accept: str = "application/vnd.github.v3+json"

    # Transport
    timeout: float = 30.0               # seconds, per request

    # Log files
    data_dir: str = DEFAULT_DATA_DIR

    def ensure_dirs(self):
        """Create the data directory if it doesn't exist."""
        os.makedirs(self.data_dir, exist_ok=True)
