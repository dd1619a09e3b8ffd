import pytest

from gh_secret_scanning.models.run_params import RunParams


def test_repository_scope():
	rp = RunParams(repository="octo/hello")
	assert rp.scope == "repository"
	assert rp.target == "octo/hello"
	assert rp.owner == "octo"
	assert rp.repo == "hello"


def test_enterprise_and_organization_scope():
	assert RunParams(enterprise="big-corp").scope == "enterprise"
	assert RunParams(organization="acme").scope == "organization"
	assert RunParams(organization="acme").owner is None


def test_no_scope_rejected():
	with pytest.raises(ValueError, match="No enterprise/organization"):
		RunParams()


def test_empty_strings_count_as_unset():
	with pytest.raises(ValueError):
		RunParams(enterprise="", organization="", repository="")


def test_scopes_mutually_exclusive():
	with pytest.raises(ValueError, match="mutually exclusive"):
		RunParams(organization="acme", repository="acme/app")


def test_invalid_repository_slug():
	with pytest.raises(ValueError):
		RunParams(repository="../evil/repo")
	with pytest.raises(ValueError):
		RunParams(repository="just-a-name")


def test_invalid_org_slug():
	with pytest.raises(ValueError):
		RunParams(organization="acme/../x")


def test_provider_case_insensitive():
	rp = RunParams(organization="acme", provider="SLACK")
	assert rp.provider == "slack"


def test_unknown_provider_rejected():
	with pytest.raises(ValueError, match="Invalid provider: aws"):
		RunParams(organization="acme", provider="aws")


def test_limit_positive():
	with pytest.raises(ValueError):
		RunParams(organization="acme", limit=0)
