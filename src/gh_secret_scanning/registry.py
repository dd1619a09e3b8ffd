"""
Provider registry.

Static, read-only lookup of validation contracts keyed by provider
name and then by secret type. Supporting a new secret type means
adding an entry here; the verification engine stays unchanged.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Optional

from gh_secret_scanning.models.provider import ProviderContract

GITHUB_PROVIDER = "github"
SLACK_PROVIDER = "slack"


def _registry(
    *contracts: ProviderContract
) -> Mapping[str, Mapping[str, ProviderContract]]:
	grouped: dict[str, dict[str, ProviderContract]] = {}
	for contract in contracts:
		grouped.setdefault(contract.provider,
		                   {})[contract.secret_type] = contract
	return MappingProxyType(
	    {name: MappingProxyType(types)
	     for name, types in grouped.items()})


SUPPORTED_PROVIDERS: Mapping[str, Mapping[str, ProviderContract]] = _registry(
    ProviderContract(
        provider=GITHUB_PROVIDER,
        secret_type="github_personal_access_token",
        validation_endpoint="https://api.github.com",
        http_method="GET",
        content_type="application/json",
    ),
    ProviderContract(
        provider=SLACK_PROVIDER,
        secret_type="slack_api_token",
        validation_endpoint="https://slack.com/api/auth.test",
        http_method="POST",
        content_type="application/json",
        # auth.test answers 200 for revoked tokens too
        expected_body=("ok", "true"),
    ),
)


def provider_names() -> List[str]:
	"""Return registered provider names in sorted order."""
	return sorted(SUPPORTED_PROVIDERS)


def match_provider(name: str) -> Optional[str]:
	"""Return the registry key matching ``name`` case-insensitively."""
	wanted = name.strip().lower()
	for key in SUPPORTED_PROVIDERS:
		if key.lower() == wanted:
			return key
	return None


def get_contract(provider: str, secret_type: str) -> Optional[ProviderContract]:
	"""Look up the contract for a (provider, secret type) pair."""
	return SUPPORTED_PROVIDERS.get(provider, {}).get(secret_type)


def secret_types_for(provider: str | None = None) -> List[str]:
	"""
	List the secret types to request from GitHub.

	Parameters:
		provider: Restrict to one provider; all providers when None.

	Returns:
		Secret type identifiers in registry order.
	"""
	if provider:
		key = match_provider(provider)
		if key is None:
			raise KeyError(provider)
		return list(SUPPORTED_PROVIDERS[key])
	return [
	    secret_type for types in SUPPORTED_PROVIDERS.values()
	    for secret_type in types
	]


__all__ = [
    "GITHUB_PROVIDER",
    "SLACK_PROVIDER",
    "SUPPORTED_PROVIDERS",
    "provider_names",
    "match_provider",
    "get_contract",
    "secret_types_for",
]
