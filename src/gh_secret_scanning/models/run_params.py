"""
Run parameters model.

Defines validated per-invocation parameters: exactly one scope
selector (enterprise, organization or owner/repo), an optional
provider filter and optional host/limit overrides.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_core.core_schema import ValidationInfo

SLUG_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
ORG_REPO_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")

SCOPE_ENTERPRISE = "enterprise"
SCOPE_ORGANIZATION = "organization"
SCOPE_REPOSITORY = "repository"


class RunParams(BaseModel):
	"""Validated run parameters for the CLI and pipeline."""

	enterprise: Optional[str] = Field(default=None,
	                                  description="Enterprise slug")
	organization: Optional[str] = Field(default=None,
	                                    description="Organization slug")
	repository: Optional[str] = Field(default=None, description="owner/repo")
	provider: Optional[str] = Field(default=None,
	                                description="Provider filter")
	host: Optional[str] = Field(default=None, description="Override host")
	limit: Optional[int] = Field(default=None, description="Override limit")

	@field_validator("enterprise", "organization")
	@classmethod
	def validate_slug(cls, v: Optional[str],
	                  info: ValidationInfo) -> Optional[str]:
		if v is None or v == "":
			return None
		if not SLUG_RE.match(v):
			raise ValueError(f"{info.field_name} must be alnum/_.- only")
		return v

	@field_validator("repository")
	@classmethod
	def validate_repository(cls, v: Optional[str]) -> Optional[str]:
		if v is None or v == "":
			return None
		if not ORG_REPO_RE.match(v):
			raise ValueError(
			    "repository must be owner/repo with safe characters")
		return v

	@field_validator("provider")
	@classmethod
	def validate_provider(cls, v: Optional[str]) -> Optional[str]:
		# registry imports the models package; resolve it lazily
		from gh_secret_scanning.registry import match_provider, provider_names

		if v is None or v == "":
			return None
		key = match_provider(v)
		if key is None:
			raise ValueError(f"Invalid provider: {v}. Valid providers are: "
			                 f"{', '.join(provider_names())}")
		return key

	@field_validator("limit")
	@classmethod
	def validate_positive(cls, v: Optional[int]) -> Optional[int]:
		if v is None:
			return v
		if v <= 0:
			raise ValueError("limit must be > 0")
		return v

	@model_validator(mode="after")
	def validate_single_scope(self) -> "RunParams":
		selected = [
		    s for s in (self.enterprise, self.organization, self.repository)
		    if s
		]
		if not selected:
			raise ValueError(
			    "No enterprise/organization/repository specified.")
		if len(selected) > 1:
			raise ValueError("enterprise, organization and repository are "
			                 "mutually exclusive")
		return self

	@property
	def scope(self) -> str:
		if self.enterprise:
			return SCOPE_ENTERPRISE
		if self.organization:
			return SCOPE_ORGANIZATION
		return SCOPE_REPOSITORY

	@property
	def target(self) -> str:
		return self.enterprise or self.organization or self.repository or ""

	@property
	def owner(self) -> Optional[str]:
		return self.repository.split("/")[0] if self.repository else None

	@property
	def repo(self) -> Optional[str]:
		return self.repository.split("/")[1] if self.repository else None


__all__ = [
    "RunParams",
    "SCOPE_ENTERPRISE",
    "SCOPE_ORGANIZATION",
    "SCOPE_REPOSITORY",
]
