"""
Remediation issue model.

One issue groups every confirmed-valid alert of a repository.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .alert import Alert


class RemediationIssue(BaseModel):
	"""Issue to open in a repository that leaks live secrets."""

	repository: str = Field(description="Host-qualified HOST/owner/repo")
	title: str
	body: str
	alerts: list[Alert] = Field(default_factory=list)


__all__ = ["RemediationIssue"]
