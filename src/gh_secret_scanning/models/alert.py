"""
Secret scanning alert model.

Defines the Alert Pydantic model parsed from the GitHub
``list secret scanning alerts`` endpoints, plus the validity
fields filled in by the verification engine.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gh_secret_scanning.utils.parsing import provider_prefix


class User(BaseModel):
	"""GitHub account that resolved or bypassed an alert."""

	model_config = ConfigDict(extra="ignore")

	login: str = ""


class Repository(BaseModel):
	"""Repository that owns an alert."""

	model_config = ConfigDict(extra="ignore")

	id: int = 0
	name: str = ""
	full_name: str = ""


class Alert(BaseModel):
	"""
	One secret scanning finding.

	``number`` is only unique within ``repository.full_name``. The
	``validity_*`` fields are never returned by GitHub; they start
	out as "not confirmed" and are set by the verification engine.
	"""

	model_config = ConfigDict(extra="ignore")

	number: int
	created_at: str = ""
	url: str = ""
	html_url: str = ""
	state: str = ""
	resolution: str | None = None
	resolved_at: str | None = None
	resolved_by: User | None = None
	secret_type: str = ""
	secret_type_display_name: str | None = None
	secret: str | None = None
	repository: Repository = Field(default_factory=Repository)
	push_protection_bypassed: bool | None = None
	push_protection_bypassed_at: str | None = None
	push_protection_bypassed_by: User | None = None

	validity_boolean: bool = False
	validity_response_code: str = ""
	validity_endpoint: str = ""

	@property
	def provider(self) -> str:
		"""Provider key derived from the secret type prefix."""
		return provider_prefix(self.secret_type)

	@property
	def sort_key(self) -> tuple[str, int]:
		"""Canonical ordering: repository full name, then alert number."""
		return (self.repository.full_name, self.number)


__all__ = ["Alert", "Repository", "User"]
