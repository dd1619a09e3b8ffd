"""External service integrations.

This subpackage wraps the HTTP services the pipeline talks to.

Key modules:
    - github: GhApi client and secret scanning listing endpoints
    - probe: Validation requests sent with a leaked secret
"""

from gh_secret_scanning.integrations.github import (
    DEFAULT_UA,
    api_base_url,
    get_github_client,
    alerts_api_path,
    fetch_page,
)
from gh_secret_scanning.integrations.probe import (
    ProbeSession,
    new_session,
    send_probe,
)

__all__ = [
    # github
    "DEFAULT_UA",
    "api_base_url",
    "get_github_client",
    "alerts_api_path",
    "fetch_page",
    # probe
    "ProbeSession",
    "new_session",
    "send_probe",
]
