"""
Provider contract model.

A ProviderContract describes how to probe one secret type against
its issuing service.
"""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ProviderContract(BaseModel):
	"""Validation contract for a (provider, secret type) pair.

	When ``expected_body`` is set, a probe is successful if the JSON
	response holds ``value`` under ``key``; otherwise HTTP 200 means
	the secret is live.
	"""

	model_config = ConfigDict(frozen=True)

	provider: str
	secret_type: str
	validation_endpoint: str
	http_method: str = Field(default="GET", description="GET or POST")
	content_type: str = "application/json"
	expected_body: Optional[Tuple[str, str]] = Field(
	    default=None,
	    description="(key, value) pair that marks a successful probe",
	)


__all__ = ["ProviderContract"]
