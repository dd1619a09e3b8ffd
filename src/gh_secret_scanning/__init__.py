"""
gh-secret-scanning - list and verify GitHub Secret Scanning alerts.

Retrieves secret scanning alerts for an enterprise, organization or
repository and probes each leaked secret against its issuing provider
to find out whether it is still live.

Main entry points:
    - gh_secret_scanning.main: CLI entrypoint
    - gh_secret_scanning.core.runner: fetch_alerts() and run_verify()
    - gh_secret_scanning.models.config: Config and load_env()
"""
