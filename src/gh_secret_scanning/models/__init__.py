"""
gh-secret-scanning models.

This subpackage contains Pydantic models for configuration, alerts,
provider contracts and run parameters.

Key models:
    - Config: Application configuration loaded from environment
    - RunParams: Parameters for one invocation
    - Alert: Secret scanning alert plus validity fields
    - ProviderContract: How to probe one secret type
    - RemediationIssue: Issue grouping a repository's live secrets
    - VerifyOutcome: Result of a verification run
"""

from .alert import Alert, Repository, User
from .provider import ProviderContract
from .config import Config, load_env
from .run_params import RunParams
from .issue import RemediationIssue
from .outcome import VerifyOutcome

__all__ = [
    "Alert",
    "Repository",
    "User",
    "ProviderContract",
    "Config",
    "load_env",
    "RunParams",
    "RemediationIssue",
    "VerifyOutcome",
]
