"""
Exception hierarchy.

Configuration and retrieval errors are fatal for an invocation;
probe and issue errors are caught per item by their callers.
"""

from __future__ import annotations


class SecretScanningError(Exception):
	"""Base class for all gh-secret-scanning errors."""


class ConfigurationError(SecretScanningError):
	"""Invalid scope, provider or slug; raised before any network call."""


class RetrievalError(SecretScanningError):
	"""Listing secret scanning alerts failed; no partial result is kept."""

	def __init__(self, message: str, path: str | None = None,
	             status: int | None = None):
		self.path = path
		self.status = status
		if status:
			text = f"GitHub API error {status}: {message}"
		else:
			text = f"GitHub API error: {message}"
		if path:
			text = f"{text} (path: {path})"
		super().__init__(text)


class ValidationProbeError(SecretScanningError):
	"""A provider contract cannot be turned into a validation request."""


class IssueCreationError(SecretScanningError):
	"""A remediation issue could not be opened."""

	def __init__(self, repository: str, message: str):
		self.repository = repository
		super().__init__(f"issue creation failed for {repository}: {message}")


__all__ = [
    "SecretScanningError",
    "ConfigurationError",
    "RetrievalError",
    "ValidationProbeError",
    "IssueCreationError",
]
